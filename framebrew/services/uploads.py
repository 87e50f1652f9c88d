"""Upload completion.

The client uploads the file straight to object storage and then reports
completion here. The video is registered as ready right away with a
placeholder URL bundle; no transcoding happens in this service.
"""

import mimetypes
from pathlib import PurePath

from framebrew.config.upload import UploadConfig
from framebrew.core.exceptions import RequestValidationError
from framebrew.core.logging import get_logger
from framebrew.core.types import SessionFactory
from framebrew.models.base import new_id
from framebrew.models.project import Project
from framebrew.models.video import SourceType, Video, VideoStatus
from framebrew.schemas.upload import UploadCompleteRequest, UploadResponse
from framebrew.schemas.video import VideoRead
from framebrew.services.media import UPLOADED_ASSETS, MediaUrlBuilder
from framebrew.services.ownership import get_owned

logger = get_logger(__name__)


class UploadService:
    """Register finished uploads as videos.

    Example:
        >>> service = UploadService(db.session, MediaUrlBuilder("/media"))
        >>> response = await service.complete_upload(
        ...     "org-1",
        ...     UploadCompleteRequest(filename="launch.mp4", project_id=p.id, duration_sec=12),
        ... )
        >>> response.video.status
        <VideoStatus.READY: 'ready'>
    """

    def __init__(
        self,
        db_session_factory: SessionFactory,
        media: MediaUrlBuilder,
        config: UploadConfig | None = None,
    ) -> None:
        self.db_session_factory = db_session_factory
        self.media = media
        self.config = config or UploadConfig()

    def resolve_content_type(self, request: UploadCompleteRequest) -> str:
        """Validate the declared (or filename-derived) MIME type and size.

        Raises:
            RequestValidationError: If the type is not an allowed video type
                or the file is too large
        """
        content_type = request.content_type or mimetypes.guess_type(request.filename)[0]
        if content_type not in self.config.allowed_mime_types:
            raise RequestValidationError(
                "Invalid file type. Only video files are allowed.",
                field="contentType",
                value=content_type,
                context={"allowed": self.config.allowed_mime_types},
            )

        if request.size_bytes is not None and request.size_bytes > self.config.max_size_bytes:
            raise RequestValidationError(
                "File too large",
                field="sizeBytes",
                value=request.size_bytes,
                context={"max_size_bytes": self.config.max_size_bytes},
            )
        return content_type

    async def complete_upload(self, org_id: str, request: UploadCompleteRequest) -> UploadResponse:
        """Create a ready video for an uploaded file.

        Args:
            org_id: Owning organization
            request: Upload completion details

        Returns:
            The new video and the upload ID

        Raises:
            RequestValidationError: If the file type or size is rejected
            RecordNotFoundError: If the project does not exist in the org
        """
        content_type = self.resolve_content_type(request)
        upload_id = new_id()
        title = PurePath(request.filename).stem or request.filename

        async with self.db_session_factory() as session:
            await get_owned(session, Project, org_id, request.project_id)

            video = Video(
                id=new_id(),
                title=title[:200],
                status=VideoStatus.READY.value,
                source_type=SourceType.UPLOADED.value,
                duration_sec=request.duration_sec,
                aspect="9:16",
                project_id=request.project_id,
                org_id=org_id,
                version=1,
                media_metadata={
                    "originalName": request.filename,
                    "mimeType": content_type,
                    "fileSize": request.size_bytes,
                    "uploadId": upload_id,
                },
            )
            video.urls = self.media.urls_for(video.id, UPLOADED_ASSETS)
            session.add(video)
            await session.commit()

        logger.info(
            "Upload completed",
            video_id=video.id,
            upload_id=upload_id,
            content_type=content_type,
            size_bytes=request.size_bytes,
        )
        return UploadResponse(video=VideoRead.model_validate(video), upload_id=upload_id)


__all__ = ["UploadService"]
