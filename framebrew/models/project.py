"""Project ORM model."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from framebrew.models.base import Base, IDMixin, TimestampMixin

if TYPE_CHECKING:
    from framebrew.models.organization import Organization
    from framebrew.models.video import Video


class Project(Base, IDMixin, TimestampMixin):
    """Folder grouping videos inside an organization.

    A project cannot be deleted while videos reference it.

    Attributes:
        name: Project name
        description: Optional description
        org_id: Foreign key to organizations table
    """

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))
    org_id: Mapped[str] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(
        "Organization", back_populates="projects"
    )
    videos: Mapped[list["Video"]] = relationship(
        "Video", back_populates="project", passive_deletes=True
    )

    __table_args__ = (Index("idx_project_org_created", "org_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name!r})>"


__all__ = ["Project"]
