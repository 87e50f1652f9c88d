"""Status progression for generation jobs.

A job walks ``queued -> running -> transcoding -> scoring -> ready``; any
non-terminal status may instead be forced to ``failed``. Transition logic
lives in ``advance`` and ``fail``; ``run``/``start`` only decide when to call
``advance``, so tests can drive a job deterministically by injecting the
sleep function and delay policy.
"""

import asyncio
import random

from framebrew.config.generation import GenerationConfig
from framebrew.core.events import EventBus
from framebrew.core.exceptions import RecordNotFoundError
from framebrew.core.locks import KeyedLock
from framebrew.core.logging import get_logger
from framebrew.core.state_machine import create_job_state_machine
from framebrew.core.types import DelayPolicy, SessionFactory, SleepFunc
from framebrew.models.base import utcnow
from framebrew.models.generation_job import TERMINAL_JOB_STATUSES, GenerationJob, JobStatus
from framebrew.models.video import Video
from framebrew.schemas.events import StatusEvent
from framebrew.schemas.video import VideoRead
from framebrew.services.media import GENERATED_ASSETS, MediaUrlBuilder
from framebrew.services.scoring import ScoreGenerator

logger = get_logger(__name__)

JOB_SEQUENCE: tuple[JobStatus, ...] = (
    JobStatus.QUEUED,
    JobStatus.RUNNING,
    JobStatus.TRANSCODING,
    JobStatus.SCORING,
    JobStatus.READY,
)


def next_status(current: JobStatus) -> JobStatus | None:
    """Next status in the forward sequence, or None when there is none."""
    if current not in JOB_SEQUENCE:
        return None
    index = JOB_SEQUENCE.index(current)
    if index + 1 >= len(JOB_SEQUENCE):
        return None
    return JOB_SEQUENCE[index + 1]


def uniform_delay(low: float, high: float, rng: random.Random | None = None) -> DelayPolicy:
    """Delay policy drawing uniformly from ``[low, high]`` seconds."""
    source = rng or random.Random()

    def policy() -> float:
        return source.uniform(low, high)

    return policy


class ProgressionDriver:
    """Advance generation jobs and broadcast every transition.

    Each transition commits the job and its video in one session and then
    publishes exactly one StatusEvent. The ready event carries a snapshot of
    the finished video.

    Example:
        >>> driver = ProgressionDriver(db.session, bus, ScoreGenerator(), MediaUrlBuilder())
        >>> task = driver.start(job.id)
        >>> await task
    """

    def __init__(
        self,
        db_session_factory: SessionFactory,
        event_bus: EventBus,
        scorer: ScoreGenerator,
        media: MediaUrlBuilder,
        config: GenerationConfig | None = None,
        initial_delay: float = 1.0,
        delay_policy: DelayPolicy | None = None,
        sleep: SleepFunc | None = None,
    ) -> None:
        """Initialize progression driver.

        Args:
            db_session_factory: Database session factory
            event_bus: Bus receiving status events
            scorer: Score generator used on the ready transition
            media: URL builder used on the ready transition
            config: Generation configuration (progress percentages)
            initial_delay: Seconds before the first transition
            delay_policy: Seconds between later transitions (default 2-5s uniform)
            sleep: Awaitable pause (default asyncio.sleep)
        """
        self.db_session_factory = db_session_factory
        self.event_bus = event_bus
        self.scorer = scorer
        self.media = media
        self.config = config or GenerationConfig()
        self.initial_delay = initial_delay
        self.delay_policy = delay_policy or uniform_delay(2.0, 5.0)
        self._sleep = sleep or asyncio.sleep
        self._tasks: dict[str, asyncio.Task] = {}
        # Serializes advance/fail per job so a cancel never interleaves with a step
        self._locks = KeyedLock()
        # Serializes admission of new jobs per video
        self.admissions = KeyedLock()

    @property
    def active_jobs(self) -> list[str]:
        """Ids of jobs with a running progression task."""
        return [job_id for job_id, task in self._tasks.items() if not task.done()]

    # ============================================
    # Transitions
    # ============================================

    async def advance(self, job_id: str) -> JobStatus | None:
        """Move a job and its video one step forward.

        Args:
            job_id: Job to advance

        Returns:
            The new status, or None if the job is missing or already terminal
            (nothing is published in that case)
        """
        async with self._locks.hold(job_id):
            return await self._advance(job_id)

    async def _advance(self, job_id: str) -> JobStatus | None:
        async with self.db_session_factory() as session:
            job = await session.get(GenerationJob, job_id)
            if job is None:
                logger.warning("Generation job not found, stopping progression", job_id=job_id)
                return None

            machine = create_job_state_machine(job.status)
            target = next_status(machine.current)
            if target is None:
                return None
            machine.transition(target)

            video = await session.get(Video, job.video_id)
            now = utcnow()
            job.status = target.value
            job.progress = self.config.progress_by_status.get(target.value, job.progress)
            job.updated_at = now
            if target is JobStatus.READY:
                job.completed_at = now

            if video is not None:
                video.status = target.value
                video.updated_at = now
                if target is JobStatus.READY:
                    video.urls = self.media.urls_for(video.id, GENERATED_ASSETS)
                    video.score = self.scorer.generate().model_dump()

            await session.commit()

            snapshot = None
            if target is JobStatus.READY and video is not None:
                snapshot = VideoRead.model_validate(video)
            org_id = video.org_id if video is not None else None
            video_id = job.video_id

        logger.info("Generation job advanced", job_id=job_id, video_id=video_id, status=target.value)
        self.event_bus.publish(
            StatusEvent(
                job_id=job_id,
                video_id=video_id,
                status=target,
                video=snapshot,
                org_id=org_id,
            )
        )
        return target

    async def fail(self, job_id: str, error: str) -> GenerationJob:
        """Force a non-terminal job and its video to failed.

        Args:
            job_id: Job to fail
            error: Human readable reason stored on the job

        Returns:
            The failed job

        Raises:
            RecordNotFoundError: If the job does not exist
            InvalidTransitionError: If the job is already ready or failed
        """
        async with self._locks.hold(job_id):
            return await self._fail(job_id, error)

    async def _fail(self, job_id: str, error: str) -> GenerationJob:
        async with self.db_session_factory() as session:
            job = await session.get(GenerationJob, job_id)
            if job is None:
                raise RecordNotFoundError(model="GenerationJob", record_id=job_id)

            machine = create_job_state_machine(job.status)
            machine.transition(JobStatus.FAILED)

            video = await session.get(Video, job.video_id)
            now = utcnow()
            job.status = JobStatus.FAILED.value
            job.error = error
            job.completed_at = now
            job.updated_at = now
            if video is not None:
                video.status = JobStatus.FAILED.value
                video.updated_at = now

            await session.commit()
            org_id = video.org_id if video is not None else None

        logger.warning("Generation job failed", job_id=job_id, video_id=job.video_id, error=error)
        self.event_bus.publish(
            StatusEvent(
                job_id=job_id,
                video_id=job.video_id,
                status=JobStatus.FAILED,
                error=error,
                org_id=org_id,
            )
        )
        return job

    # ============================================
    # Scheduling
    # ============================================

    async def run(self, job_id: str) -> JobStatus | None:
        """Drive a job until it is terminal or disappears.

        Returns:
            Last status this loop moved the job to, None if it moved nothing
        """
        await self._sleep(self.initial_delay)
        last: JobStatus | None = None
        while True:
            status = await self.advance(job_id)
            if status is None:
                break
            last = status
            if status in TERMINAL_JOB_STATUSES:
                break
            await self._sleep(self.delay_policy())
        return last

    def start(self, job_id: str) -> asyncio.Task:
        """Schedule progression for a job.

        Only one task runs per job; starting a job that is already being
        driven returns the existing task.
        """
        existing = self._tasks.get(job_id)
        if existing is not None and not existing.done():
            return existing

        task = asyncio.get_running_loop().create_task(
            self._drive(job_id), name=f"progression:{job_id}"
        )
        self._tasks[job_id] = task

        def _forget(done: asyncio.Task) -> None:
            if self._tasks.get(job_id) is done:
                del self._tasks[job_id]

        task.add_done_callback(_forget)
        logger.debug("Progression scheduled", job_id=job_id)
        return task

    async def shutdown(self) -> None:
        """Cancel outstanding progression tasks (process shutdown only)."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        logger.info("Progression driver stopped", cancelled=len(tasks))

    async def _drive(self, job_id: str) -> JobStatus | None:
        try:
            return await self.run(job_id)
        except Exception as e:
            logger.error("Progression crashed", job_id=job_id, error=str(e), exc_info=True)
            try:
                await self.fail(job_id, f"Generation failed: {e}")
            except Exception as fail_error:
                logger.error(
                    "Could not mark job as failed", job_id=job_id, error=str(fail_error)
                )
            return JobStatus.FAILED


__all__ = [
    "JOB_SEQUENCE",
    "ProgressionDriver",
    "next_status",
    "uniform_delay",
]
