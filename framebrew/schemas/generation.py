"""Generation request and response schemas."""

from datetime import datetime

from pydantic import Field

from framebrew.config.generation import AspectRatio, GenerationModel, Resolution
from framebrew.models.generation_job import JobStatus
from framebrew.schemas.base import CamelModel
from framebrew.schemas.video import VideoRead


class GenerationRequest(CamelModel):
    """Request to generate a new video.

    Structural checks happen here; prompt length and duration bounds are
    enforced by the generation service from GenerationConfig. Optional
    parameters left as None take the configured defaults.
    """

    project_id: str = Field(min_length=1)
    prompt: str
    style_preset: str | None = Field(default=None, max_length=100)
    duration_sec: int
    negative_prompt: str | None = None
    aspect_ratio: AspectRatio | None = None
    resolution: Resolution | None = None
    model: GenerationModel | None = None
    captions: bool | None = None
    watermark: bool | None = None


class GenerationJobRead(CamelModel):
    id: str
    video_id: str
    prompt: str
    style_preset: str | None = None
    negative_prompt: str | None = None
    aspect_ratio: str
    resolution: str
    model: str
    captions: bool
    watermark: bool
    status: JobStatus
    progress: int
    error: str | None = None
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None


class GenerationResponse(CamelModel):
    """A video and the job producing it."""

    video: VideoRead
    job: GenerationJobRead


class JobListResponse(CamelModel):
    jobs: list[GenerationResponse]
    total: int
