"""Tenant-scoped record lookup shared by the services."""

from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from framebrew.core.exceptions import RecordNotFoundError
from framebrew.models.organization import Organization

M = TypeVar("M")


async def get_owned(session: AsyncSession, model: type[M], org_id: str, record_id: str) -> M:
    """Load a record that belongs to an organization.

    A record owned by another organization is reported exactly like a
    missing one.

    Raises:
        RecordNotFoundError: If the record is missing or foreign
    """
    record = await session.get(model, record_id)
    if record is None or getattr(record, "org_id", None) != org_id:
        raise RecordNotFoundError(model=model.__name__, record_id=record_id)
    return record


async def require_organization(session: AsyncSession, org_id: str) -> Organization:
    """Load an organization or raise RecordNotFoundError."""
    org = await session.get(Organization, org_id)
    if org is None:
        raise RecordNotFoundError(model="Organization", record_id=org_id)
    return org


__all__ = [
    "get_owned",
    "require_organization",
]
