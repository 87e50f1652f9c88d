"""Template ORM model."""

from typing import Any

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from framebrew.models.base import Base, IDMixin, TimestampMixin


class Template(Base, IDMixin, TimestampMixin):
    """Reusable generation prompt.

    Attributes:
        name: Template name
        prompt: Generation prompt
        style_preset: Optional style preset name
        style: Free-form style hints (music, captions, ...)
        org_id: Foreign key to organizations table
    """

    __tablename__ = "templates"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    style_preset: Mapped[str | None] = mapped_column(String(100))
    style: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    org_id: Mapped[str] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<Template(id={self.id}, name={self.name!r})>"


__all__ = ["Template"]
