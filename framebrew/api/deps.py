"""FastAPI dependencies.

Everything is resolved from the container stored on ``app.state``, so a
test can build an app around its own container.
"""

from fastapi import Depends, Header, Request

from framebrew.core.config import Config
from framebrew.core.container import ApplicationContainer
from framebrew.core.events import EventBus
from framebrew.services.generation.trigger import GenerationService
from framebrew.services.library import VideoLibrary
from framebrew.services.projects import ProjectService
from framebrew.services.templates import TemplateService
from framebrew.services.uploads import UploadService

ORG_HEADER = "X-Org-Id"


def get_container(request: Request) -> ApplicationContainer:
    """Get the container the app was created with."""
    return request.app.state.container


def get_app_config(container: ApplicationContainer = Depends(get_container)) -> Config:
    return container.config()


def get_org_id(
    x_org_id: str | None = Header(default=None, alias=ORG_HEADER),
    config: Config = Depends(get_app_config),
) -> str:
    """Organization of the caller.

    Authentication happens upstream; the gateway forwards the caller's
    organization in the ``X-Org-Id`` header.
    """
    return x_org_id or config.default_org_id


def get_event_bus(container: ApplicationContainer = Depends(get_container)) -> EventBus:
    return container.event_bus()


def get_video_library(container: ApplicationContainer = Depends(get_container)) -> VideoLibrary:
    return container.services.video_library()


def get_project_service(
    container: ApplicationContainer = Depends(get_container),
) -> ProjectService:
    return container.services.project_service()


def get_template_service(
    container: ApplicationContainer = Depends(get_container),
) -> TemplateService:
    return container.services.template_service()


def get_upload_service(container: ApplicationContainer = Depends(get_container)) -> UploadService:
    return container.services.upload_service()


def get_generation_service(
    container: ApplicationContainer = Depends(get_container),
) -> GenerationService:
    return container.services.generation_service()


__all__ = [
    "ORG_HEADER",
    "get_app_config",
    "get_container",
    "get_event_bus",
    "get_generation_service",
    "get_org_id",
    "get_project_service",
    "get_template_service",
    "get_upload_service",
    "get_video_library",
]
