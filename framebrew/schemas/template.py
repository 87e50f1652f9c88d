"""Template request and response schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from framebrew.schemas.base import CamelModel


class TemplateCreate(CamelModel):
    """Create or replace a template."""

    name: str = Field(min_length=1, max_length=100)
    prompt: str = Field(min_length=10, max_length=1000)
    style_preset: str | None = Field(default=None, max_length=100)
    style: dict[str, Any] = Field(default_factory=dict)


class TemplateRead(CamelModel):
    id: str
    org_id: str
    name: str
    prompt: str
    style_preset: str | None = None
    style: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
