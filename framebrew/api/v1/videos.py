"""Video library endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from framebrew.api.deps import get_org_id, get_video_library
from framebrew.models.video import SourceType, VideoStatus
from framebrew.schemas.video import (
    SortKey,
    VideoCreate,
    VideoDetailResponse,
    VideoListResponse,
    VideoQuery,
    VideoRead,
    VideoUpdate,
)
from framebrew.services.library import VideoLibrary

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("", response_model=VideoListResponse)
async def list_videos(
    query: str | None = Query(default=None, max_length=200),
    video_status: list[VideoStatus] = Query(default=[], alias="status"),
    min_score: float | None = Query(default=None, ge=0, le=100, alias="minScore"),
    project_id: str | None = Query(default=None, alias="projectId"),
    source_type: SourceType | None = Query(default=None, alias="sourceType"),
    sort_by: SortKey = Query(default="newest", alias="sortBy"),
    cursor: str | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    org_id: str = Depends(get_org_id),
    library: VideoLibrary = Depends(get_video_library),
) -> VideoListResponse:
    """List videos with filters, sort order and cursor pagination."""
    return await library.list_videos(
        org_id,
        VideoQuery(
            query=query,
            status=video_status,
            min_score=min_score,
            project_id=project_id,
            source_type=source_type,
            sort_by=sort_by,
            cursor=cursor,
            limit=limit,
        ),
    )


@router.post("", response_model=VideoRead, status_code=status.HTTP_201_CREATED)
async def create_video(
    data: VideoCreate,
    org_id: str = Depends(get_org_id),
    library: VideoLibrary = Depends(get_video_library),
) -> VideoRead:
    """Register a video directly (uploaded: ready, generated: queued)."""
    return await library.create_video(org_id, data)


@router.get("/{video_id}", response_model=VideoDetailResponse)
async def get_video(
    video_id: str,
    org_id: str = Depends(get_org_id),
    library: VideoLibrary = Depends(get_video_library),
) -> VideoDetailResponse:
    """Get a video with its other versions."""
    return await library.get_video_detail(org_id, video_id)


@router.put("/{video_id}", response_model=VideoRead)
async def update_video(
    video_id: str,
    update: VideoUpdate,
    org_id: str = Depends(get_org_id),
    library: VideoLibrary = Depends(get_video_library),
) -> VideoRead:
    return await library.update_video(org_id, video_id, update)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video(
    video_id: str,
    org_id: str = Depends(get_org_id),
    library: VideoLibrary = Depends(get_video_library),
) -> Response:
    await library.delete_video(org_id, video_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
