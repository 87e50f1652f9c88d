"""Database configuration and session management.

This module provides the SQLAlchemy 2.0 declarative Base and the Database
record store. A Database is constructed once at process start, hands out
async sessions, and can be reset between tests.
"""

import re
from typing import Any, ClassVar

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, declared_attr
from sqlalchemy.pool import StaticPool

from framebrew.core.logging import get_logger

logger = get_logger(__name__)

# ============================================
# Naming Convention
# ============================================
# Consistent naming for constraints and indexes
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ============================================
# Base Model
# ============================================


class Base(DeclarativeBase):
    """Base class for all ORM models.

    Provides common functionality for all models including:
    - Consistent table naming (snake_case)
    - Metadata with naming conventions
    - __repr__ implementation
    """

    metadata: ClassVar[MetaData] = metadata

    @declared_attr.directive
    @classmethod
    def __tablename__(cls) -> str:
        """Generate table name from class name.

        Returns:
            Snake case table name
        """
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()

    def __repr__(self) -> str:
        columns = ", ".join(
            f"{k}={v!r}"
            for k, v in self.__dict__.items()
            if not k.startswith("_") and k != "metadata"
        )
        return f"{self.__class__.__name__}({columns})"


# ============================================
# Record Store
# ============================================


class Database:
    """Async engine and session factory with an explicit lifecycle.

    Example:
        >>> db = Database("sqlite+aiosqlite:///:memory:")
        >>> await db.create_all()
        >>> async with db.session() as session:
        ...     session.add(project)
        ...     await session.commit()
        >>> await db.dispose()
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ) -> None:
        """Initialize database.

        Args:
            url: Async database URL (asyncpg or aiosqlite)
            echo: Echo SQL statements
            pool_size: Connection pool size (ignored for SQLite)
            max_overflow: Max overflow connections (ignored for SQLite)
        """
        self.url = url
        engine_kwargs: dict[str, Any] = {"echo": echo}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url:
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,  # Verify connections before using
                pool_recycle=3600,  # Recycle connections after 1 hour
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Create all tables.

        This is mainly for development/testing. In production, use Alembic migrations.
        """
        _register_models()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created", url=self._safe_url)

    async def reset(self) -> None:
        """Drop and recreate all tables."""
        _register_models()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database reset", url=self._safe_url)

    async def dispose(self) -> None:
        """Close database connections.

        Call this when shutting down the application.
        """
        await self.engine.dispose()
        logger.info("Database connections closed")

    async def check_connection(self) -> bool:
        """Check if database connection is healthy.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database health check failed", error=str(e), exc_info=True)
            return False

    @property
    def _safe_url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)


def _register_models() -> None:
    # Models live in framebrew.models and register themselves with Base.metadata on import
    import framebrew.models  # noqa: F401


__all__ = [
    "Base",
    "Database",
    "metadata",
]
