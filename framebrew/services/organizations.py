"""Organization bootstrap.

Organizations are provisioned outside this service; in development the
application makes sure the default organization exists so the API is
usable without any setup.
"""

from framebrew.core.logging import get_logger
from framebrew.core.types import SessionFactory
from framebrew.models.organization import Organization, OrgPlan

logger = get_logger(__name__)


class OrganizationService:
    """Look up and provision organizations."""

    def __init__(self, db_session_factory: SessionFactory) -> None:
        self.db_session_factory = db_session_factory

    async def get(self, org_id: str) -> Organization | None:
        async with self.db_session_factory() as session:
            return await session.get(Organization, org_id)

    async def ensure(
        self,
        org_id: str,
        name: str,
        plan: OrgPlan = OrgPlan.FREE,
    ) -> Organization:
        """Return the organization, creating it when missing.

        Args:
            org_id: Organization ID
            name: Name used if the organization is created
            plan: Plan used if the organization is created

        Returns:
            Existing or newly created organization
        """
        async with self.db_session_factory() as session:
            org = await session.get(Organization, org_id)
            if org is not None:
                return org

            org = Organization(id=org_id, name=name, plan=plan.value, settings={})
            session.add(org)
            await session.commit()

        logger.info("Organization created", org_id=org_id, name=name)
        return org


__all__ = ["OrganizationService"]
