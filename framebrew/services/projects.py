"""Project management."""

from sqlalchemy import func, select

from framebrew.core.exceptions import ProjectHasVideosError
from framebrew.core.logging import get_logger
from framebrew.core.types import SessionFactory
from framebrew.models.base import utcnow
from framebrew.models.project import Project
from framebrew.models.video import Video
from framebrew.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from framebrew.services.ownership import get_owned, require_organization

logger = get_logger(__name__)


class ProjectService:
    """CRUD for projects of an organization.

    A project cannot be deleted while any video still references it.
    """

    def __init__(self, db_session_factory: SessionFactory) -> None:
        self.db_session_factory = db_session_factory

    async def list_projects(self, org_id: str) -> list[ProjectRead]:
        """List projects, newest first."""
        async with self.db_session_factory() as session:
            result = await session.execute(
                select(Project)
                .where(Project.org_id == org_id)
                .order_by(Project.created_at.desc(), Project.id.desc())
            )
            projects = result.scalars().all()
        return [ProjectRead.model_validate(project) for project in projects]

    async def create_project(self, org_id: str, data: ProjectCreate) -> ProjectRead:
        """Create a project.

        Raises:
            RecordNotFoundError: If the organization does not exist
        """
        async with self.db_session_factory() as session:
            await require_organization(session, org_id)
            project = Project(name=data.name, description=data.description, org_id=org_id)
            session.add(project)
            await session.commit()

        logger.info("Project created", project_id=project.id, org_id=org_id)
        return ProjectRead.model_validate(project)

    async def update_project(self, org_id: str, project_id: str, data: ProjectUpdate) -> ProjectRead:
        """Rename or re-describe a project.

        Raises:
            RecordNotFoundError: If the project does not exist in the org
        """
        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)

        async with self.db_session_factory() as session:
            project = await get_owned(session, Project, org_id, project_id)
            for key, value in changes.items():
                setattr(project, key, value)
            project.updated_at = utcnow()
            await session.commit()

        return ProjectRead.model_validate(project)

    async def delete_project(self, org_id: str, project_id: str) -> None:
        """Delete an empty project.

        Raises:
            RecordNotFoundError: If the project does not exist in the org
            ProjectHasVideosError: If videos still reference the project
        """
        async with self.db_session_factory() as session:
            project = await get_owned(session, Project, org_id, project_id)
            video_count = await session.scalar(
                select(func.count()).select_from(Video).where(Video.project_id == project_id)
            )
            if video_count:
                raise ProjectHasVideosError(project_id=project_id, video_count=video_count)

            await session.delete(project)
            await session.commit()

        logger.info("Project deleted", project_id=project_id, org_id=org_id)


__all__ = ["ProjectService"]
