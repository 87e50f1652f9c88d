"""Project endpoints."""

from fastapi import APIRouter, Depends, Response, status

from framebrew.api.deps import get_org_id, get_project_service
from framebrew.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from framebrew.services.projects import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=list[ProjectRead])
async def list_projects(
    org_id: str = Depends(get_org_id),
    projects: ProjectService = Depends(get_project_service),
) -> list[ProjectRead]:
    return await projects.list_projects(org_id)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    org_id: str = Depends(get_org_id),
    projects: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    return await projects.create_project(org_id, data)


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    org_id: str = Depends(get_org_id),
    projects: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    return await projects.update_project(org_id, project_id, data)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    org_id: str = Depends(get_org_id),
    projects: ProjectService = Depends(get_project_service),
) -> Response:
    """Delete a project; fails with 409 while videos reference it."""
    await projects.delete_project(org_id, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
