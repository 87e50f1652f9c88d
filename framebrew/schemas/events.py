"""Event payloads published on the event bus and streamed over SSE."""

from typing import Literal

from pydantic import Field

from framebrew.models.generation_job import JobStatus
from framebrew.schemas.base import CamelModel
from framebrew.schemas.video import VideoRead


class StatusEvent(CamelModel):
    """A generation job moved to a new status.

    ``video`` is attached only on the ready transition and ``error`` only on
    failure. ``org_id`` routes the event to the right streams and is never
    serialized.
    """

    type: Literal["status"] = "status"
    job_id: str
    video_id: str
    status: JobStatus
    video: VideoRead | None = None
    error: str | None = None
    org_id: str | None = Field(default=None, exclude=True)

    @property
    def is_terminal(self) -> bool:
        return self.status in (JobStatus.READY, JobStatus.FAILED)

    def to_wire(self) -> dict:
        """JSON payload without null optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
