"""Project request and response schemas."""

from datetime import datetime

from pydantic import Field

from framebrew.schemas.base import CamelModel


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class ProjectUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class ProjectRead(CamelModel):
    id: str
    name: str
    description: str | None = None
    org_id: str
    created_at: datetime
    updated_at: datetime
