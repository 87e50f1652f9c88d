"""Base model mixins and utilities.

This module provides reusable mixins for common model patterns:
- IDMixin: string UUID primary key
- TimestampMixin: created_at and updated_at fields
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from framebrew.core.database import Base


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(tz=UTC)


def new_id() -> str:
    return str(uuid.uuid4())


class IDMixin:
    """Mixin for string UUID primary key.

    Keys are generated client-side so a new record's id is known before
    flush, and stored as strings so they round-trip through JSON and
    SQLite unchanged.

    Example:
        >>> class Project(Base, IDMixin, TimestampMixin):
        ...     __tablename__ = "projects"
        ...     name: Mapped[str]
    """

    @declared_attr
    @classmethod
    def id(cls) -> Mapped[str]:
        """String UUID primary key.

        Returns:
            String column mapped to primary key
        """
        return mapped_column(
            String(36),
            primary_key=True,
            default=new_id,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps.

    Values are set in Python on insert/update so they are available on the
    instance right after commit without a refresh.
    """

    @declared_attr
    @classmethod
    def created_at(cls) -> Mapped[datetime]:
        """Timestamp when record was created.

        Returns:
            DateTime column with default as current UTC time
        """
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            default=utcnow,
            server_default=func.now(),
        )

    @declared_attr
    @classmethod
    def updated_at(cls) -> Mapped[datetime]:
        """Timestamp when record was last updated.

        Returns:
            DateTime column that updates automatically
        """
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            default=utcnow,
            server_default=func.now(),
            onupdate=utcnow,
        )


__all__ = [
    "Base",
    "IDMixin",
    "TimestampMixin",
    "new_id",
    "utcnow",
]
