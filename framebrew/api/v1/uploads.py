"""Upload completion endpoint."""

from fastapi import APIRouter, Depends, status

from framebrew.api.deps import get_org_id, get_upload_service
from framebrew.schemas.upload import UploadCompleteRequest, UploadResponse
from framebrew.services.uploads import UploadService

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/complete", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def complete_upload(
    request: UploadCompleteRequest,
    org_id: str = Depends(get_org_id),
    uploads: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Register a file the client finished uploading to object storage."""
    return await uploads.complete_upload(org_id, request)
