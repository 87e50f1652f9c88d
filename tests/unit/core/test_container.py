"""Unit tests for Dependency Injection Container.

Tests cover:
- Container initialization and configuration
- Provider types (Singleton, Factory)
- Sub-container composition
- Testing utilities (overrides)
"""

import pytest

from framebrew.core.container import container, create_container
from framebrew.core.database import Database
from framebrew.core.events import EventBus
from framebrew.services.generation.progression import ProgressionDriver
from framebrew.services.generation.trigger import GenerationService
from framebrew.services.library import VideoLibrary
from framebrew.services.uploads import UploadService


@pytest.fixture
def test_container(config_factory):
    return create_container(
        config_factory("sqlite+aiosqlite:///:memory:", media_base_url="https://cdn.example.com/")
    )


class TestContainerCreation:
    """Tests for container creation and configuration."""

    def test_create_container_returns_container_with_providers(self) -> None:
        """Test that create_container returns a container with expected providers."""
        new_container = create_container()

        assert hasattr(new_container, "config")
        assert hasattr(new_container, "infrastructure")
        assert hasattr(new_container, "services")

    def test_global_container_exists(self) -> None:
        """Test that global container is initialized."""
        assert container is not None
        assert hasattr(container, "infrastructure")
        assert hasattr(container, "services")

    def test_config_override(self, test_container) -> None:
        """Test that a given Config replaces the environment singleton."""
        assert test_container.config().media_base_url == "https://cdn.example.com/"
        assert test_container.config().database_url == "sqlite+aiosqlite:///:memory:"


class TestInfrastructureContainer:
    """Tests for InfrastructureContainer."""

    def test_database_is_singleton(self, test_container) -> None:
        """Test that the database is built once from config."""
        db = test_container.database()

        assert isinstance(db, Database)
        assert db is test_container.infrastructure.database()
        assert db.url == "sqlite+aiosqlite:///:memory:"

    def test_session_factory_comes_from_database(self, test_container) -> None:
        """Test that the session factory is the database's sessionmaker."""
        factory = test_container.infrastructure.db_session_factory()

        assert factory is test_container.database().session

    def test_event_bus_is_singleton(self, test_container) -> None:
        """Test that every consumer shares one event bus."""
        bus = test_container.event_bus()

        assert isinstance(bus, EventBus)
        assert bus is test_container.infrastructure.event_bus()

    def test_override_database(self, test_container) -> None:
        """Test that the database provider can be overridden in tests."""
        replacement = Database("sqlite+aiosqlite:///:memory:")

        with test_container.infrastructure.database.override(replacement):
            assert test_container.infrastructure.database() is replacement


class TestServiceContainer:
    """Tests for ServiceContainer."""

    def test_services_are_factories(self, test_container) -> None:
        """Test that stateless services are created per call."""
        first = test_container.services.video_library()
        second = test_container.services.video_library()

        assert isinstance(first, VideoLibrary)
        assert first is not second

    def test_progression_driver_is_singleton(self, test_container) -> None:
        """Test that one driver owns all progression tasks."""
        driver = test_container.progression_driver()

        assert isinstance(driver, ProgressionDriver)
        assert driver is test_container.services.progression_driver()
        assert driver.event_bus is test_container.event_bus()

    def test_generation_service_wiring(self, test_container) -> None:
        """Test that generation services share the driver and bus."""
        service = test_container.services.generation_service()

        assert isinstance(service, GenerationService)
        assert service.driver is test_container.progression_driver()
        assert service.event_bus is test_container.event_bus()

    def test_media_urls_use_configured_base(self, test_container) -> None:
        """Test that upload URLs are built from media_base_url."""
        service = test_container.services.upload_service()

        assert isinstance(service, UploadService)
        assert service.media.base_url == "https://cdn.example.com"

    def test_driver_timing_from_config(self, test_container) -> None:
        """Test that the driver delays come from config."""
        driver = test_container.progression_driver()

        assert driver.initial_delay == 0.0
        assert driver.delay_policy() == 0.0
