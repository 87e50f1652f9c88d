"""Pydantic request/response schemas for the HTTP API and event stream."""

from framebrew.schemas.base import CamelModel
from framebrew.schemas.events import StatusEvent
from framebrew.schemas.generation import (
    GenerationJobRead,
    GenerationRequest,
    GenerationResponse,
    JobListResponse,
)
from framebrew.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from framebrew.schemas.template import TemplateCreate, TemplateRead
from framebrew.schemas.upload import UploadCompleteRequest, UploadResponse
from framebrew.schemas.video import (
    SCORE_FIELDS,
    RescoreResponse,
    Score,
    SortKey,
    VideoCreate,
    VideoDetailResponse,
    VideoListResponse,
    VideoQuery,
    VideoRead,
    VideoUpdate,
    VideoUrls,
)

__all__ = [
    "CamelModel",
    "StatusEvent",
    "GenerationJobRead",
    "GenerationRequest",
    "GenerationResponse",
    "JobListResponse",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "TemplateCreate",
    "TemplateRead",
    "UploadCompleteRequest",
    "UploadResponse",
    "SCORE_FIELDS",
    "RescoreResponse",
    "Score",
    "SortKey",
    "VideoCreate",
    "VideoDetailResponse",
    "VideoListResponse",
    "VideoQuery",
    "VideoRead",
    "VideoUpdate",
    "VideoUrls",
]
