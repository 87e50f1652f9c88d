"""Upload completion schemas."""

from pydantic import Field

from framebrew.schemas.base import CamelModel
from framebrew.schemas.video import VideoRead


class UploadCompleteRequest(CamelModel):
    """Sent by the client after the file landed in object storage."""

    filename: str = Field(min_length=1, max_length=255)
    project_id: str = Field(min_length=1)
    duration_sec: float = Field(gt=0)
    content_type: str | None = None
    size_bytes: int | None = Field(default=None, ge=0)


class UploadResponse(CamelModel):
    video: VideoRead
    upload_id: str
