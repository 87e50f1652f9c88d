"""Generation template management."""

from sqlalchemy import select

from framebrew.core.logging import get_logger
from framebrew.core.types import SessionFactory
from framebrew.models.base import utcnow
from framebrew.models.template import Template
from framebrew.schemas.template import TemplateCreate, TemplateRead
from framebrew.services.ownership import get_owned, require_organization

logger = get_logger(__name__)


class TemplateService:
    """CRUD for reusable generation prompts."""

    def __init__(self, db_session_factory: SessionFactory) -> None:
        self.db_session_factory = db_session_factory

    async def list_templates(self, org_id: str) -> list[TemplateRead]:
        async with self.db_session_factory() as session:
            result = await session.execute(
                select(Template)
                .where(Template.org_id == org_id)
                .order_by(Template.created_at.desc(), Template.id.desc())
            )
            templates = result.scalars().all()
        return [TemplateRead.model_validate(template) for template in templates]

    async def create_template(self, org_id: str, data: TemplateCreate) -> TemplateRead:
        """Create a template.

        Raises:
            RecordNotFoundError: If the organization does not exist
        """
        async with self.db_session_factory() as session:
            await require_organization(session, org_id)
            template = Template(
                name=data.name,
                prompt=data.prompt,
                style_preset=data.style_preset,
                style=dict(data.style),
                org_id=org_id,
            )
            session.add(template)
            await session.commit()

        logger.info("Template created", template_id=template.id, org_id=org_id)
        return TemplateRead.model_validate(template)

    async def replace_template(
        self, org_id: str, template_id: str, data: TemplateCreate
    ) -> TemplateRead:
        """Overwrite every field of a template.

        Raises:
            RecordNotFoundError: If the template does not exist in the org
        """
        async with self.db_session_factory() as session:
            template = await get_owned(session, Template, org_id, template_id)
            template.name = data.name
            template.prompt = data.prompt
            template.style_preset = data.style_preset
            template.style = dict(data.style)
            template.updated_at = utcnow()
            await session.commit()

        return TemplateRead.model_validate(template)

    async def delete_template(self, org_id: str, template_id: str) -> None:
        """Delete a template.

        Raises:
            RecordNotFoundError: If the template does not exist in the org
        """
        async with self.db_session_factory() as session:
            template = await get_owned(session, Template, org_id, template_id)
            await session.delete(template)
            await session.commit()

        logger.info("Template deleted", template_id=template_id, org_id=org_id)


__all__ = ["TemplateService"]
