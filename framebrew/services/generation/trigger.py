"""Generation trigger and job management.

Creating a generation persists a queued video and job, announces the
queued status and hands the job to the ProgressionDriver. The request
returns as soon as the records exist; everything after that is reported
through the event bus.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from framebrew.config.generation import GenerationConfig
from framebrew.core.events import EventBus
from framebrew.core.exceptions import (
    ActiveJobExistsError,
    InvalidJobStateError,
    InvalidVideoStateError,
    RecordNotFoundError,
    RequestValidationError,
)
from framebrew.core.logging import get_logger
from framebrew.core.types import SessionFactory
from framebrew.models.base import new_id, utcnow
from framebrew.models.generation_job import TERMINAL_JOB_STATUSES, GenerationJob, JobStatus
from framebrew.models.project import Project
from framebrew.models.template import Template
from framebrew.models.video import SourceType, Video, VideoStatus
from framebrew.schemas.events import StatusEvent
from framebrew.schemas.generation import (
    GenerationJobRead,
    GenerationRequest,
    GenerationResponse,
    JobListResponse,
)
from framebrew.schemas.template import TemplateRead
from framebrew.schemas.video import RescoreResponse, VideoRead
from framebrew.services.generation.progression import ProgressionDriver
from framebrew.services.ownership import get_owned
from framebrew.services.scoring import ScoreGenerator

logger = get_logger(__name__)

CANCELLED_ERROR = "Cancelled by user"
MAX_JOB_LIST_LIMIT = 200
TEMPLATE_NAME_MAX_LENGTH = 100
TEMPLATE_PROMPT_MAX_LENGTH = 1000

_ACTIVE_JOB_STATUSES = [status.value for status in JobStatus if status not in TERMINAL_JOB_STATUSES]


def _response(video: Video, job: GenerationJob) -> GenerationResponse:
    return GenerationResponse(
        video=VideoRead.model_validate(video),
        job=GenerationJobRead.model_validate(job),
    )


class GenerationService:
    """Start, inspect and manage video generations.

    Example:
        >>> service = GenerationService(db.session, bus, driver, ScoreGenerator())
        >>> created = await service.create_generation(
        ...     "org-1",
        ...     GenerationRequest(project_id=p.id, prompt="Create an engaging product demo", duration_sec=15),
        ... )
        >>> created.job.status
        <JobStatus.QUEUED: 'queued'>
    """

    def __init__(
        self,
        db_session_factory: SessionFactory,
        event_bus: EventBus,
        driver: ProgressionDriver,
        scorer: ScoreGenerator,
        config: GenerationConfig | None = None,
    ) -> None:
        """Initialize generation service.

        Args:
            db_session_factory: Database session factory
            event_bus: Bus receiving the queued events
            driver: Progression driver that runs the jobs
            scorer: Score generator used by rescoring
            config: Generation limits and defaults
        """
        self.db_session_factory = db_session_factory
        self.event_bus = event_bus
        self.driver = driver
        self.scorer = scorer
        self.config = config or GenerationConfig()

    # ============================================
    # Creation
    # ============================================

    def resolve_parameters(self, request: GenerationRequest) -> dict:
        """Check request bounds and fill in defaults.

        Args:
            request: Generation request

        Returns:
            Job column values for the optional parameters

        Raises:
            RequestValidationError: If the prompt, negative prompt or duration
                is out of range
        """
        limits = self.config.limits
        prompt_length = len(request.prompt)
        if not limits.prompt_min_length <= prompt_length <= limits.prompt_max_length:
            raise RequestValidationError(
                f"Prompt must be between {limits.prompt_min_length} and "
                f"{limits.prompt_max_length} characters",
                field="prompt",
                value=prompt_length,
            )

        if not limits.min_duration_sec <= request.duration_sec <= limits.max_duration_sec:
            raise RequestValidationError(
                f"Duration must be between {limits.min_duration_sec} and "
                f"{limits.max_duration_sec} seconds",
                field="durationSec",
                value=request.duration_sec,
            )

        negative_prompt = request.negative_prompt
        if negative_prompt and len(negative_prompt) > limits.negative_prompt_max_length:
            raise RequestValidationError(
                f"Negative prompt must be at most {limits.negative_prompt_max_length} characters",
                field="negativePrompt",
                value=len(negative_prompt),
            )

        defaults = self.config.defaults
        return {
            "style_preset": request.style_preset,
            "negative_prompt": negative_prompt,
            "aspect_ratio": request.aspect_ratio or defaults.aspect_ratio,
            "resolution": request.resolution or defaults.resolution,
            "model": request.model or defaults.model,
            "captions": defaults.captions if request.captions is None else request.captions,
            "watermark": defaults.watermark if request.watermark is None else request.watermark,
        }

    async def create_generation(self, org_id: str, request: GenerationRequest) -> GenerationResponse:
        """Create a queued video and job and start progression.

        Args:
            org_id: Owning organization
            request: Generation request

        Returns:
            The queued video and job

        Raises:
            RequestValidationError: If the request is out of range (no record
                is created)
            RecordNotFoundError: If the project does not exist in the org
        """
        params = self.resolve_parameters(request)

        async with self.db_session_factory() as session:
            await get_owned(session, Project, org_id, request.project_id)

            video = Video(
                id=new_id(),
                title=f"Generated: {request.prompt[: self.config.title_prompt_chars]}",
                status=VideoStatus.QUEUED.value,
                source_type=SourceType.GENERATED.value,
                duration_sec=float(request.duration_sec),
                aspect=params["aspect_ratio"],
                urls={},
                media_metadata={},
                version=1,
                project_id=request.project_id,
                org_id=org_id,
            )
            job = GenerationJob(
                id=new_id(),
                video_id=video.id,
                prompt=request.prompt,
                status=JobStatus.QUEUED.value,
                progress=0,
                **params,
            )
            session.add_all([video, job])
            await session.commit()

        logger.info(
            "Generation job created",
            job_id=job.id,
            video_id=video.id,
            org_id=org_id,
            model=job.model,
            duration_sec=request.duration_sec,
        )
        return self._launch(video, job)

    # ============================================
    # Jobs
    # ============================================

    async def get_job(self, org_id: str, job_id: str) -> GenerationResponse:
        """Get a job with its video.

        Raises:
            RecordNotFoundError: If the job does not exist in the org
        """
        async with self.db_session_factory() as session:
            job, video = await self._get_owned_job(session, org_id, job_id)
        return _response(video, job)

    async def list_jobs(
        self,
        org_id: str,
        status: JobStatus | None = None,
        limit: int = 50,
    ) -> JobListResponse:
        """List the organization's jobs, newest first.

        Args:
            org_id: Owning organization
            status: Only jobs in this status
            limit: Maximum number of jobs (1-200)

        Returns:
            Jobs with their videos and the total match count
        """
        if not 1 <= limit <= MAX_JOB_LIST_LIMIT:
            raise RequestValidationError(
                f"Limit must be between 1 and {MAX_JOB_LIST_LIMIT}", field="limit", value=limit
            )

        conditions = [Video.org_id == org_id]
        if status is not None:
            conditions.append(GenerationJob.status == JobStatus(status).value)

        async with self.db_session_factory() as session:
            total = await session.scalar(
                select(func.count())
                .select_from(GenerationJob)
                .join(Video, GenerationJob.video_id == Video.id)
                .where(*conditions)
            )
            result = await session.execute(
                select(GenerationJob, Video)
                .join(Video, GenerationJob.video_id == Video.id)
                .where(*conditions)
                .order_by(GenerationJob.created_at.desc(), GenerationJob.id.desc())
                .limit(limit)
            )
            rows = result.all()

        return JobListResponse(
            jobs=[_response(video, job) for job, video in rows],
            total=total or 0,
        )

    async def cancel_job(self, org_id: str, job_id: str) -> GenerationResponse:
        """Mark a running job as failed.

        The progression task notices at its next step and stops.

        Raises:
            RecordNotFoundError: If the job does not exist in the org
            InvalidTransitionError: If the job already finished
        """
        async with self.db_session_factory() as session:
            await self._get_owned_job(session, org_id, job_id)

        await self.driver.fail(job_id, CANCELLED_ERROR)
        logger.info("Generation job cancelled", job_id=job_id, org_id=org_id)
        return await self.get_job(org_id, job_id)

    async def retry_job(self, org_id: str, job_id: str) -> GenerationResponse:
        """Start a new job for the video of a failed job.

        The failed job is left untouched.

        Raises:
            RecordNotFoundError: If the job does not exist in the org
            InvalidJobStateError: If the job did not fail
            ActiveJobExistsError: If the video already has an active job
        """
        async with self.db_session_factory() as session:
            failed_job, video = await self._get_owned_job(session, org_id, job_id)
            if failed_job.status != JobStatus.FAILED.value:
                raise InvalidJobStateError(
                    job_id=job_id,
                    status=failed_job.status,
                    reason="Only failed jobs can be retried",
                )

            # Check and insert under one admission lock; the partial unique
            # index covers writers in other processes
            async with self.driver.admissions.hold(video.id):
                await self._ensure_no_active_job(session, video.id)

                job = self._copy_job(failed_job, video.id)
                video.status = VideoStatus.QUEUED.value
                video.updated_at = utcnow()
                session.add(job)
                try:
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    raise ActiveJobExistsError(video_id=video.id) from None

        logger.info("Generation job retried", job_id=job.id, retried_job_id=job_id, video_id=video.id)
        return self._launch(video, job)

    # ============================================
    # Video actions
    # ============================================

    async def rerender_video(self, org_id: str, video_id: str) -> GenerationResponse:
        """Generate a new version of a generated video.

        The new video keeps the title and bumps the version; its job copies
        the parameters of the latest job that did not fail.

        Raises:
            RecordNotFoundError: If the video does not exist in the org
            InvalidVideoStateError: If the video was uploaded or has no
                generation data
        """
        async with self.db_session_factory() as session:
            video = await get_owned(session, Video, org_id, video_id)
            last_job = await self._latest_generation(session, video, action="rerendered")

            new_video = Video(
                id=new_id(),
                title=video.title,
                status=VideoStatus.QUEUED.value,
                source_type=SourceType.GENERATED.value,
                duration_sec=video.duration_sec,
                aspect=video.aspect,
                urls={},
                media_metadata={},
                version=video.version + 1,
                project_id=video.project_id,
                org_id=org_id,
            )
            job = self._copy_job(last_job, new_video.id)
            session.add_all([new_video, job])
            await session.commit()

        logger.info(
            "Video rerendering started",
            original_video_id=video_id,
            video_id=new_video.id,
            version=new_video.version,
        )
        return self._launch(new_video, job)

    async def rescore_video(self, org_id: str, video_id: str) -> RescoreResponse:
        """Replace the score bundle of a ready video.

        Raises:
            RecordNotFoundError: If the video does not exist in the org
            InvalidVideoStateError: If the video is not ready
        """
        async with self.db_session_factory() as session:
            video = await get_owned(session, Video, org_id, video_id)
            if video.status != VideoStatus.READY.value:
                raise InvalidVideoStateError(
                    video_id=video_id,
                    reason="Video must be ready to rescore",
                    error_code="INVALID_VIDEO_STATUS",
                )

            video.score = self.scorer.generate().model_dump()
            video.updated_at = utcnow()
            await session.commit()

        logger.info("Video rescored", video_id=video_id, overall=video.score["overall"])
        return RescoreResponse(video=VideoRead.model_validate(video))

    async def save_as_template(self, org_id: str, video_id: str) -> TemplateRead:
        """Create a template from the generation parameters of a video.

        Raises:
            RecordNotFoundError: If the video does not exist in the org
            InvalidVideoStateError: If the video was uploaded or has no
                generation data
        """
        async with self.db_session_factory() as session:
            video = await get_owned(session, Video, org_id, video_id)
            last_job = await self._latest_generation(
                session, video, action="saved as templates"
            )

            suffix = " Template"
            template = Template(
                name=video.title[: TEMPLATE_NAME_MAX_LENGTH - len(suffix)] + suffix,
                prompt=last_job.prompt[:TEMPLATE_PROMPT_MAX_LENGTH],
                style_preset=last_job.style_preset,
                style={},
                org_id=org_id,
            )
            session.add(template)
            await session.commit()

        logger.info("Video saved as template", video_id=video_id, template_id=template.id)
        return TemplateRead.model_validate(template)

    # ============================================
    # Helpers
    # ============================================

    def _launch(self, video: Video, job: GenerationJob) -> GenerationResponse:
        response = _response(video, job)
        self.event_bus.publish(
            StatusEvent(
                job_id=job.id,
                video_id=video.id,
                status=JobStatus.QUEUED,
                org_id=video.org_id,
            )
        )
        self.driver.start(job.id)
        return response

    @staticmethod
    def _copy_job(source: GenerationJob, video_id: str) -> GenerationJob:
        return GenerationJob(
            id=new_id(),
            video_id=video_id,
            prompt=source.prompt,
            style_preset=source.style_preset,
            negative_prompt=source.negative_prompt,
            aspect_ratio=source.aspect_ratio,
            resolution=source.resolution,
            model=source.model,
            captions=source.captions,
            watermark=source.watermark,
            status=JobStatus.QUEUED.value,
            progress=0,
        )

    @staticmethod
    async def _get_owned_job(
        session: AsyncSession, org_id: str, job_id: str
    ) -> tuple[GenerationJob, Video]:
        job = await session.get(GenerationJob, job_id)
        video = await session.get(Video, job.video_id) if job is not None else None
        if job is None or video is None or video.org_id != org_id:
            raise RecordNotFoundError(model="GenerationJob", record_id=job_id)
        return job, video

    @staticmethod
    async def _ensure_no_active_job(session: AsyncSession, video_id: str) -> None:
        active = await session.scalar(
            select(GenerationJob)
            .where(
                GenerationJob.video_id == video_id,
                GenerationJob.status.in_(_ACTIVE_JOB_STATUSES),
            )
            .limit(1)
        )
        if active is not None:
            raise ActiveJobExistsError(video_id=video_id, job_id=active.id)

    @staticmethod
    async def _latest_generation(session: AsyncSession, video: Video, action: str) -> GenerationJob:
        if video.source_type != SourceType.GENERATED.value:
            raise InvalidVideoStateError(
                video_id=video.id,
                reason=f"Only generated videos can be {action}",
                error_code="INVALID_SOURCE_TYPE",
            )

        last_job = await session.scalar(
            select(GenerationJob)
            .where(
                GenerationJob.video_id == video.id,
                GenerationJob.status != JobStatus.FAILED.value,
            )
            .order_by(GenerationJob.created_at.desc())
            .limit(1)
        )
        if last_job is None:
            raise InvalidVideoStateError(
                video_id=video.id,
                reason="No generation data found for this video",
                error_code="NO_GENERATION_DATA",
            )
        return last_job


__all__ = [
    "CANCELLED_ERROR",
    "GenerationService",
]
