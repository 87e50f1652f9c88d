"""GenerationJob ORM model.

One job tracks one generation request for one video. The job status
mirrors the video status while the job progresses; once the job reaches
ready or failed it is never modified again.
"""

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from framebrew.models.base import Base, IDMixin, TimestampMixin

if TYPE_CHECKING:
    from framebrew.models.video import Video


class JobStatus(str, enum.Enum):
    """Generation job status."""

    QUEUED = "queued"
    RUNNING = "running"
    TRANSCODING = "transcoding"
    SCORING = "scoring"
    READY = "ready"
    FAILED = "failed"


TERMINAL_JOB_STATUSES = frozenset({JobStatus.READY, JobStatus.FAILED})

# Partial index predicate selecting jobs that have not finished
ACTIVE_JOB_PREDICATE = "status NOT IN ('ready', 'failed')"


class GenerationJob(Base, IDMixin, TimestampMixin):
    """Asynchronous unit of work producing a generated video.

    Attributes:
        video_id: Foreign key to videos table
        prompt: Generation prompt
        style_preset: Optional style preset name
        negative_prompt: Things the model should avoid
        aspect_ratio: "16:9" or "9:16"
        resolution: "720p" or "1080p"
        model: "stable" or "fast"
        captions: Burn in captions
        watermark: Add a watermark
        status: Current job status
        progress: Progress percentage (0-100)
        error: Failure reason when status is failed
        completed_at: When the job reached a terminal status
    """

    __tablename__ = "generation_jobs"

    video_id: Mapped[str] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Request
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    style_preset: Mapped[str | None] = mapped_column(String(100))
    negative_prompt: Mapped[str | None] = mapped_column(Text)
    aspect_ratio: Mapped[str] = mapped_column(String(10), nullable=False, default="16:9")
    resolution: Mapped[str] = mapped_column(String(10), nullable=False, default="720p")
    model: Mapped[str] = mapped_column(String(20), nullable=False, default="fast")
    captions: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    watermark: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Progress
    status: Mapped[JobStatus] = mapped_column(
        String(20), nullable=False, default=JobStatus.QUEUED, index=True
    )
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error: Mapped[str | None] = mapped_column(Text)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    video: Mapped["Video"] = relationship("Video", back_populates="jobs")

    __table_args__ = (
        Index("idx_job_video_status", "video_id", "status"),
        # At most one unfinished job per video
        Index(
            "uq_job_active_video",
            "video_id",
            unique=True,
            postgresql_where=text(ACTIVE_JOB_PREDICATE),
            sqlite_where=text(ACTIVE_JOB_PREDICATE),
        ),
    )

    @property
    def is_terminal(self) -> bool:
        return JobStatus(self.status) in TERMINAL_JOB_STATUSES

    def __repr__(self) -> str:
        return f"<GenerationJob(id={self.id}, video_id={self.video_id}, status={self.status})>"


__all__ = [
    "ACTIVE_JOB_PREDICATE",
    "GenerationJob",
    "JobStatus",
    "TERMINAL_JOB_STATUSES",
]
