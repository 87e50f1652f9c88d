"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Lifecycles:
- Singleton: One instance for the entire application (database, event bus,
  progression driver)
- Transient: New instance every time (Factory), used for stateless services

Usage:
    # In FastAPI (see framebrew.api.deps)
    @router.get("/videos")
    async def list_videos(library: VideoLibrary = Depends(get_video_library)):
        ...

    # In scripts
    container = create_container()
    db = container.database()

    # In tests
    with container.infrastructure.database.override(test_db):
        ...
"""

from dependency_injector import containers, providers

from framebrew.core.config import Config, get_config


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (database, event bus)."""

    global_config = providers.Dependency(instance_of=Config)

    # ============================================
    # Database
    # ============================================

    database = providers.Singleton(
        "framebrew.core.database.Database",
        url=global_config.provided.database_url,
        echo=global_config.provided.database_echo,
        pool_size=global_config.provided.database_pool_size,
        max_overflow=global_config.provided.database_max_overflow,
    )

    db_session_factory = providers.Factory(
        lambda db: db.session,
        db=database,
    )

    # ============================================
    # Event Bus
    # ============================================

    event_bus = providers.Singleton(
        "framebrew.core.events.EventBus",
    )


class ConfigContainer(containers.DeclarativeContainer):
    """Configuration models container.

    Provides typed Pydantic config models for services.
    Configs are Singleton by default - loaded once and reused.
    """

    generation_config = providers.Singleton(
        "framebrew.config.generation.GenerationConfig",
    )

    upload_config = providers.Singleton(
        "framebrew.config.upload.UploadConfig",
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Service layer dependencies.

    Services are Transient (Factory) except the progression driver, which
    owns the running generation tasks and must be shared.
    """

    global_config = providers.Dependency(instance_of=Config)
    infrastructure = providers.DependenciesContainer()
    configs = providers.DependenciesContainer()

    # ============================================
    # Generation
    # ============================================

    score_generator = providers.Singleton(
        "framebrew.services.scoring.ScoreGenerator",
        score_range=configs.generation_config.provided.score_range,
    )

    media_urls = providers.Singleton(
        "framebrew.services.media.MediaUrlBuilder",
        base_url=global_config.provided.media_base_url,
        layout=configs.upload_config.provided.layout,
    )

    step_delay_policy = providers.Singleton(
        "framebrew.services.generation.progression.uniform_delay",
        low=global_config.provided.generation_step_delay_min,
        high=global_config.provided.generation_step_delay_max,
    )

    progression_driver = providers.Singleton(
        "framebrew.services.generation.progression.ProgressionDriver",
        db_session_factory=infrastructure.db_session_factory,
        event_bus=infrastructure.event_bus,
        scorer=score_generator,
        media=media_urls,
        config=configs.generation_config,
        initial_delay=global_config.provided.generation_initial_delay,
        delay_policy=step_delay_policy,
    )

    generation_service = providers.Factory(
        "framebrew.services.generation.trigger.GenerationService",
        db_session_factory=infrastructure.db_session_factory,
        event_bus=infrastructure.event_bus,
        driver=progression_driver,
        scorer=score_generator,
        config=configs.generation_config,
    )

    # ============================================
    # Library
    # ============================================

    organization_service = providers.Factory(
        "framebrew.services.organizations.OrganizationService",
        db_session_factory=infrastructure.db_session_factory,
    )

    video_library = providers.Factory(
        "framebrew.services.library.VideoLibrary",
        db_session_factory=infrastructure.db_session_factory,
    )

    project_service = providers.Factory(
        "framebrew.services.projects.ProjectService",
        db_session_factory=infrastructure.db_session_factory,
    )

    template_service = providers.Factory(
        "framebrew.services.templates.TemplateService",
        db_session_factory=infrastructure.db_session_factory,
    )

    upload_service = providers.Factory(
        "framebrew.services.uploads.UploadService",
        db_session_factory=infrastructure.db_session_factory,
        media=media_urls,
        config=configs.upload_config,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Global Config singleton (environment variables)
    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    # Sub-containers
    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
    )

    configs = providers.Container(
        ConfigContainer,
    )

    services = providers.Container(
        ServiceContainer,
        global_config=config,
        infrastructure=infrastructure,
        configs=configs,
    )

    # ============================================
    # Convenience accessors (shortcuts)
    # ============================================

    database = providers.Singleton(
        lambda db: db,
        db=infrastructure.database,
    )

    event_bus = providers.Singleton(
        lambda bus: bus,
        bus=infrastructure.event_bus,
    )

    progression_driver = providers.Singleton(
        lambda driver: driver,
        driver=services.progression_driver,
    )


def create_container(config: Config | None = None) -> ApplicationContainer:
    """Create and configure the application container.

    Args:
        config: Config to use instead of the environment singleton

    Returns:
        Configured ApplicationContainer instance
    """
    app_container = ApplicationContainer()
    if config is not None:
        app_container.config.override(config)
    return app_container


# Global container instance
container = create_container()


__all__ = [
    "ApplicationContainer",
    "ConfigContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "container",
    "create_container",
]
