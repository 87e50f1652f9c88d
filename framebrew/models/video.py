"""Video ORM model.

This module defines the Video model for uploaded and generated videos with
their media URLs, quality scores and lifecycle status.
"""

import enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from framebrew.models.base import Base, IDMixin, TimestampMixin

if TYPE_CHECKING:
    from framebrew.models.generation_job import GenerationJob
    from framebrew.models.project import Project


class VideoStatus(str, enum.Enum):
    """Video lifecycle status."""

    QUEUED = "queued"  # Waiting for generation to start
    RUNNING = "running"  # Model is generating frames
    TRANSCODING = "transcoding"  # Encoding delivery formats
    SCORING = "scoring"  # Quality scoring in progress
    READY = "ready"  # Playable
    FAILED = "failed"  # Generation failed or was cancelled


class SourceType(str, enum.Enum):
    """Where a video came from."""

    UPLOADED = "uploaded"
    GENERATED = "generated"


class Video(Base, IDMixin, TimestampMixin):
    """Uploaded or generated video.

    Attributes:
        title: Display title; videos sharing a title are versions of each other
        description: Optional description
        status: Current lifecycle status
        source_type: uploaded or generated
        duration_sec: Duration in seconds
        aspect: Aspect ratio (e.g., "9:16")
        urls: URL bundle (hls, mp4, thumb, captions), fields may be absent
        score: Score bundle, null until scored
        feedback_summary: Reviewer feedback
        media_metadata: Upload metadata (JSON, column "metadata")
        version: Version counter, starts at 1
        project_id: Foreign key to projects table
        org_id: Foreign key to organizations table
    """

    __tablename__ = "videos"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[VideoStatus] = mapped_column(
        String(20), nullable=False, default=VideoStatus.QUEUED, index=True
    )
    source_type: Mapped[SourceType] = mapped_column(String(20), nullable=False)
    duration_sec: Mapped[float | None] = mapped_column(Float)
    aspect: Mapped[str] = mapped_column(String(10), nullable=False, default="9:16")

    urls: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    score: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    feedback_summary: Mapped[str | None] = mapped_column(String(1000))
    media_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Foreign Keys
    project_id: Mapped[str | None] = mapped_column(
        ForeignKey("projects.id"), nullable=True, index=True
    )
    org_id: Mapped[str] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    project: Mapped["Project | None"] = relationship("Project", back_populates="videos")
    jobs: Mapped[list["GenerationJob"]] = relationship(
        "GenerationJob", back_populates="video", passive_deletes=True
    )

    # Composite Indexes
    __table_args__ = (
        Index("idx_video_org_status", "org_id", "status"),
        Index("idx_video_org_title", "org_id", "title"),
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in (VideoStatus.READY, VideoStatus.FAILED)

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, title={self.title!r}, status={self.status})>"


__all__ = [
    "SourceType",
    "Video",
    "VideoStatus",
]
