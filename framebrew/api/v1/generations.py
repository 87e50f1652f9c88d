"""Generation endpoints."""

from fastapi import APIRouter, Depends, Query, status

from framebrew.api.deps import get_generation_service, get_org_id
from framebrew.models.generation_job import JobStatus
from framebrew.schemas.generation import GenerationRequest, GenerationResponse, JobListResponse
from framebrew.schemas.template import TemplateRead
from framebrew.schemas.video import RescoreResponse
from framebrew.services.generation.trigger import MAX_JOB_LIST_LIMIT, GenerationService

router = APIRouter(prefix="/generations", tags=["generations"])


@router.post("", response_model=GenerationResponse, status_code=status.HTTP_201_CREATED)
async def create_generation(
    request: GenerationRequest,
    org_id: str = Depends(get_org_id),
    generations: GenerationService = Depends(get_generation_service),
) -> GenerationResponse:
    """Queue a new generated video.

    Returns as soon as the video and job exist; progress is reported on the
    event stream.
    """
    return await generations.create_generation(org_id, request)


@router.get("/jobs", response_model=JobListResponse)
async def list_jobs(
    job_status: JobStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=MAX_JOB_LIST_LIMIT),
    org_id: str = Depends(get_org_id),
    generations: GenerationService = Depends(get_generation_service),
) -> JobListResponse:
    return await generations.list_jobs(org_id, status=job_status, limit=limit)


@router.get("/jobs/{job_id}", response_model=GenerationResponse)
async def get_job(
    job_id: str,
    org_id: str = Depends(get_org_id),
    generations: GenerationService = Depends(get_generation_service),
) -> GenerationResponse:
    return await generations.get_job(org_id, job_id)


@router.post("/jobs/{job_id}/cancel", response_model=GenerationResponse)
async def cancel_job(
    job_id: str,
    org_id: str = Depends(get_org_id),
    generations: GenerationService = Depends(get_generation_service),
) -> GenerationResponse:
    return await generations.cancel_job(org_id, job_id)


@router.post(
    "/jobs/{job_id}/retry",
    response_model=GenerationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def retry_job(
    job_id: str,
    org_id: str = Depends(get_org_id),
    generations: GenerationService = Depends(get_generation_service),
) -> GenerationResponse:
    """Start a new job for the video of a failed job."""
    return await generations.retry_job(org_id, job_id)


@router.post("/videos/{video_id}/rescore", response_model=RescoreResponse)
async def rescore_video(
    video_id: str,
    org_id: str = Depends(get_org_id),
    generations: GenerationService = Depends(get_generation_service),
) -> RescoreResponse:
    return await generations.rescore_video(org_id, video_id)


@router.post(
    "/videos/{video_id}/rerender",
    response_model=GenerationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def rerender_video(
    video_id: str,
    org_id: str = Depends(get_org_id),
    generations: GenerationService = Depends(get_generation_service),
) -> GenerationResponse:
    return await generations.rerender_video(org_id, video_id)


@router.post(
    "/videos/{video_id}/duplicate-template",
    response_model=TemplateRead,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_as_template(
    video_id: str,
    org_id: str = Depends(get_org_id),
    generations: GenerationService = Depends(get_generation_service),
) -> TemplateRead:
    return await generations.save_as_template(org_id, video_id)
