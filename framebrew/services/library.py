"""Video library: listing, detail, create, edit and delete.

Listing supports free-text title search, status/score/project/source
filters and five sort orders. Pagination uses an opaque cursor that
currently encodes a row offset.
"""

from typing import Any

from sqlalchemy import ColumnElement, delete, func, select

from framebrew.core.exceptions import RequestValidationError
from framebrew.core.logging import get_logger
from framebrew.core.types import SessionFactory
from framebrew.models.base import new_id, utcnow
from framebrew.models.generation_job import GenerationJob
from framebrew.models.project import Project
from framebrew.models.video import SourceType, Video, VideoStatus
from framebrew.schemas.video import (
    SortKey,
    VideoCreate,
    VideoDetailResponse,
    VideoListResponse,
    VideoQuery,
    VideoRead,
    VideoUpdate,
)
from framebrew.services.ownership import get_owned

logger = get_logger(__name__)

# Fields that cannot be cleared through an update
_NON_NULLABLE_UPDATES = ("title", "status", "urls")


def _overall_score() -> ColumnElement:
    return Video.score["overall"].as_float()


def _filters(org_id: str, query: VideoQuery) -> list[ColumnElement]:
    conditions: list[ColumnElement] = [Video.org_id == org_id]
    if query.query:
        conditions.append(Video.title.icontains(query.query, autoescape=True))
    if query.status:
        conditions.append(Video.status.in_([status.value for status in query.status]))
    if query.min_score is not None:
        conditions.append(_overall_score() >= query.min_score)
    if query.project_id:
        conditions.append(Video.project_id == query.project_id)
    if query.source_type:
        conditions.append(Video.source_type == query.source_type.value)
    return conditions


def _ordering(sort_by: SortKey) -> list[Any]:
    if sort_by == "oldest":
        return [Video.created_at.asc(), Video.id.asc()]
    if sort_by == "score-high":
        return [_overall_score().desc().nulls_last(), Video.created_at.desc()]
    if sort_by == "score-low":
        return [_overall_score().asc().nulls_last(), Video.created_at.desc()]
    if sort_by == "title-az":
        return [Video.title.asc(), Video.created_at.desc()]
    return [Video.created_at.desc(), Video.id.desc()]


def decode_cursor(cursor: str | None) -> int:
    """Turn a listing cursor into a row offset."""
    if not cursor:
        return 0
    try:
        offset = int(cursor)
    except ValueError:
        raise RequestValidationError("Invalid cursor", field="cursor", value=cursor) from None
    if offset < 0:
        raise RequestValidationError("Invalid cursor", field="cursor", value=cursor)
    return offset


class VideoLibrary:
    """Read and edit the videos of an organization.

    Example:
        >>> library = VideoLibrary(db.session)
        >>> page = await library.list_videos("org-1", VideoQuery(sort_by="score-high"))
        >>> page.total
        42
    """

    def __init__(self, db_session_factory: SessionFactory) -> None:
        self.db_session_factory = db_session_factory

    async def list_videos(self, org_id: str, query: VideoQuery) -> VideoListResponse:
        """List videos matching the query.

        Args:
            org_id: Owning organization
            query: Filters, sort order, cursor and page size

        Returns:
            One page of videos, the total match count and the next cursor
            (None on the last page)
        """
        offset = decode_cursor(query.cursor)
        conditions = _filters(org_id, query)

        async with self.db_session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(Video).where(*conditions)
            )
            result = await session.execute(
                select(Video)
                .where(*conditions)
                .order_by(*_ordering(query.sort_by))
                .offset(offset)
                .limit(query.limit)
            )
            videos = result.scalars().all()

        total = total or 0
        next_offset = offset + query.limit
        return VideoListResponse(
            items=[VideoRead.model_validate(video) for video in videos],
            total=total,
            next_cursor=str(next_offset) if next_offset < total else None,
        )

    async def get_video_detail(self, org_id: str, video_id: str) -> VideoDetailResponse:
        """Get a video and its other versions.

        Versions are the organization's other videos with the same title,
        highest version first.

        Raises:
            RecordNotFoundError: If the video does not exist in the org
        """
        async with self.db_session_factory() as session:
            video = await get_owned(session, Video, org_id, video_id)
            result = await session.execute(
                select(Video)
                .where(
                    Video.org_id == org_id,
                    Video.title == video.title,
                    Video.id != video.id,
                )
                .order_by(Video.version.desc(), Video.created_at.desc())
            )
            versions = result.scalars().all()

        return VideoDetailResponse(
            video=VideoRead.model_validate(video),
            versions=[VideoRead.model_validate(v) for v in versions],
        )

    async def create_video(self, org_id: str, data: VideoCreate) -> VideoRead:
        """Register a video without going through upload or generation.

        Uploaded videos are ready immediately; generated ones start queued
        and wait for a generation job.

        Raises:
            RecordNotFoundError: If the project does not exist in the org
        """
        async with self.db_session_factory() as session:
            await get_owned(session, Project, org_id, data.project_id)

            video = Video(
                id=new_id(),
                title=data.title,
                status=(
                    VideoStatus.READY.value
                    if data.source_type is SourceType.UPLOADED
                    else VideoStatus.QUEUED.value
                ),
                source_type=data.source_type.value,
                duration_sec=float(data.duration_sec),
                urls={},
                media_metadata={},
                version=1,
                project_id=data.project_id,
                org_id=org_id,
            )
            session.add(video)
            await session.commit()

        logger.info(
            "Video created", video_id=video.id, org_id=org_id, source_type=video.source_type
        )
        return VideoRead.model_validate(video)

    async def update_video(self, org_id: str, video_id: str, update: VideoUpdate) -> VideoRead:
        """Apply the fields present in an update.

        Raises:
            RecordNotFoundError: If the video does not exist in the org
        """
        changes = update.model_dump(exclude_unset=True, mode="json")
        for key in _NON_NULLABLE_UPDATES:
            if key in changes and changes[key] is None:
                del changes[key]
        if "urls" in changes:
            changes["urls"] = {k: v for k, v in changes["urls"].items() if v is not None}

        async with self.db_session_factory() as session:
            video = await get_owned(session, Video, org_id, video_id)
            for key, value in changes.items():
                setattr(video, key, value)
            video.updated_at = utcnow()
            await session.commit()

        logger.info("Video updated", video_id=video_id, fields=sorted(changes))
        return VideoRead.model_validate(video)

    async def delete_video(self, org_id: str, video_id: str) -> None:
        """Delete a video and its generation jobs.

        A progression task still driving one of the jobs stops at its next
        step because the job no longer exists.

        Raises:
            RecordNotFoundError: If the video does not exist in the org
        """
        async with self.db_session_factory() as session:
            video = await get_owned(session, Video, org_id, video_id)
            await session.execute(delete(GenerationJob).where(GenerationJob.video_id == video_id))
            await session.delete(video)
            await session.commit()

        logger.info("Video deleted", video_id=video_id, org_id=org_id)


__all__ = [
    "VideoLibrary",
    "decode_cursor",
]
