"""Video request and response schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, Field

from framebrew.models.video import SourceType, VideoStatus
from framebrew.schemas.base import CamelModel

SortKey = Literal["newest", "oldest", "score-high", "score-low", "title-az"]

SCORE_FIELDS = (
    "overall",
    "hook",
    "pacing",
    "clarity",
    "brand_safety",
    "duration_fit",
    "visual_qoe",
    "audio_qoe",
)


class VideoUrls(CamelModel):
    """Media URL bundle; every field is optional."""

    hls: str | None = None
    mp4: str | None = None
    thumb: str | None = None
    captions: str | None = None

    @property
    def is_empty(self) -> bool:
        return not any((self.hls, self.mp4, self.thumb, self.captions))


class Score(CamelModel):
    """Per-dimension quality scores of a video (0-100)."""

    overall: int = Field(ge=0, le=100)
    hook: int = Field(ge=0, le=100)
    pacing: int = Field(ge=0, le=100)
    clarity: int = Field(ge=0, le=100)
    brand_safety: int = Field(ge=0, le=100)
    duration_fit: int = Field(ge=0, le=100)
    visual_qoe: int = Field(ge=0, le=100)
    audio_qoe: int = Field(ge=0, le=100)


class VideoRead(CamelModel):
    """Video as returned by the API and attached to ready events."""

    id: str
    org_id: str
    project_id: str | None = None
    title: str
    description: str | None = None
    status: VideoStatus
    source_type: SourceType
    duration_sec: float | None = None
    aspect: str
    urls: VideoUrls = Field(default_factory=VideoUrls)
    score: Score | None = None
    feedback_summary: str | None = None
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("media_metadata", "metadata"),
    )
    version: int = 1
    created_at: datetime
    updated_at: datetime


class VideoCreate(CamelModel):
    """Directly registered video; uploaded videos start ready, others queued."""

    title: str = Field(min_length=1, max_length=200)
    project_id: str = Field(min_length=1)
    source_type: SourceType
    duration_sec: int = Field(ge=1, le=300)


class VideoUpdate(CamelModel):
    """Editable video fields; only fields present in the request are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status: VideoStatus | None = None
    score: Score | None = None
    feedback_summary: str | None = Field(default=None, max_length=1000)
    urls: VideoUrls | None = None


class VideoQuery(CamelModel):
    """Filters, sort order and page of a video listing."""

    query: str | None = None
    status: list[VideoStatus] = Field(default_factory=list)
    min_score: float | None = Field(default=None, ge=0, le=100)
    project_id: str | None = None
    source_type: SourceType | None = None
    sort_by: SortKey = "newest"
    cursor: str | None = None
    limit: int = Field(default=20, ge=1, le=100)


class VideoListResponse(CamelModel):
    items: list[VideoRead]
    total: int
    next_cursor: str | None = None


class VideoDetailResponse(CamelModel):
    video: VideoRead
    versions: list[VideoRead]


class RescoreResponse(CamelModel):
    video: VideoRead
