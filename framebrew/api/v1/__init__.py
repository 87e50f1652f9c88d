"""Version 1 of the HTTP API."""

from fastapi import APIRouter

from framebrew.api.v1 import events, generations, projects, templates, uploads, videos

API_PREFIX = "/api/v1"

api_router = APIRouter(prefix=API_PREFIX)
api_router.include_router(videos.router)
api_router.include_router(projects.router)
api_router.include_router(templates.router)
api_router.include_router(uploads.router)
api_router.include_router(generations.router)
api_router.include_router(events.router)

__all__ = [
    "API_PREFIX",
    "api_router",
]
