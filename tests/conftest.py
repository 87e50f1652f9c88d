"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests. Service tests
run against an in-memory SQLite database; API tests use a file database so
background progression tasks and request handlers get separate connections.
"""

import asyncio
import random
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from framebrew.core.config import Config
from framebrew.core.container import ApplicationContainer, create_container
from framebrew.core.database import Database
from framebrew.core.events import EventBus
from framebrew.core.logging import setup_logging
from framebrew.main import create_app
from framebrew.models.organization import Organization
from framebrew.models.project import Project
from framebrew.schemas.events import StatusEvent
from framebrew.services.generation.progression import ProgressionDriver
from framebrew.services.media import MediaUrlBuilder
from framebrew.services.scoring import ScoreGenerator

# Setup logging for tests
setup_logging()

ORG_ID = "org-1"
OTHER_ORG_ID = "org-2"


async def no_sleep(seconds: float) -> None:
    """Sleep replacement that returns immediately."""
    return None


class GatedSleep:
    """Sleep replacement that blocks until ``release()`` is called.

    Keeps a started progression task parked before its first step.
    """

    def __init__(self) -> None:
        self.calls: list[float] = []
        self._gate = asyncio.Event()

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await self._gate.wait()

    def release(self) -> None:
        self._gate.set()


# ============================================
# Database
# ============================================


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database with all tables.

    Yields:
        Database with the schema created
    """
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def org(database: Database) -> Organization:
    """Default organization plus a second one for isolation checks."""
    async with database.session() as session:
        organization = Organization(id=ORG_ID, name="Frame Brew Studio", plan="PRO", settings={})
        other = Organization(id=OTHER_ORG_ID, name="Other Studio", settings={})
        session.add_all([organization, other])
        await session.commit()
    return organization


@pytest_asyncio.fixture
async def project(database: Database, org: Organization) -> Project:
    """Project owned by the default organization."""
    async with database.session() as session:
        record = Project(name="Launch Campaign", description="Q4 launch", org_id=org.id)
        session.add(record)
        await session.commit()
    return record


# ============================================
# Generation
# ============================================


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def published(event_bus: EventBus) -> list[StatusEvent]:
    """Every event published on the bus, in order."""
    events: list[StatusEvent] = []
    event_bus.subscribe(events.append)
    return events


@pytest.fixture
def scorer() -> ScoreGenerator:
    return ScoreGenerator(rng=random.Random(7))


@pytest.fixture
def media() -> MediaUrlBuilder:
    return MediaUrlBuilder("/media")


@pytest_asyncio.fixture
async def driver(
    database: Database,
    event_bus: EventBus,
    scorer: ScoreGenerator,
    media: MediaUrlBuilder,
) -> AsyncGenerator[ProgressionDriver, None]:
    """Progression driver that never waits between steps."""
    progression = ProgressionDriver(
        database.session,
        event_bus,
        scorer,
        media,
        initial_delay=0,
        delay_policy=lambda: 0.0,
        sleep=no_sleep,
    )
    yield progression
    await progression.shutdown()


@pytest.fixture
def gated_sleep() -> GatedSleep:
    return GatedSleep()


@pytest_asyncio.fixture
async def gated_driver(
    database: Database,
    event_bus: EventBus,
    scorer: ScoreGenerator,
    media: MediaUrlBuilder,
    gated_sleep: GatedSleep,
) -> AsyncGenerator[ProgressionDriver, None]:
    """Progression driver whose tasks wait until the gate is released."""
    progression = ProgressionDriver(
        database.session,
        event_bus,
        scorer,
        media,
        initial_delay=0,
        delay_policy=lambda: 0.0,
        sleep=gated_sleep,
    )
    yield progression
    await progression.shutdown()


# ============================================
# Application
# ============================================


def _make_config(database_url: str, **overrides) -> Config:
    """Build a test Config that ignores the environment's .env file."""
    values = {
        "app_env": "development",
        "database_url": database_url,
        "database_url_sync": "sqlite:///unused.db",
        "default_org_id": ORG_ID,
        "generation_initial_delay": 0.0,
        "generation_step_delay_min": 0.0,
        "generation_step_delay_max": 0.0,
        "sse_heartbeat_seconds": 0.05,
    }
    values.update(overrides)
    return Config(_env_file=None, **values)


@pytest.fixture
def app_config(tmp_path: Path) -> Config:
    return _make_config(f"sqlite+aiosqlite:///{tmp_path / 'framebrew.db'}")


@pytest.fixture
def app_container(app_config: Config) -> ApplicationContainer:
    return create_container(app_config)


@pytest.fixture
def client(app_container: ApplicationContainer) -> Generator[TestClient, None, None]:
    """Test client with the lifespan running (tables and default org created).

    Yields:
        TestClient bound to an app built around a fresh container
    """
    app = create_app(app_container)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def anyio_backend() -> str:
    """Specify backend for anyio.

    Returns:
        Backend name
    """
    return "asyncio"


@pytest.fixture
def config_factory():
    """Factory building test Configs for a database URL plus overrides."""
    return _make_config
