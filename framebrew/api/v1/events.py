"""Event stream endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from framebrew.api.deps import get_app_config, get_event_bus, get_org_id
from framebrew.api.sse import SSE_HEADERS, event_stream
from framebrew.core.config import Config
from framebrew.core.events import EventBus

router = APIRouter(prefix="/events", tags=["events"])


@router.get("")
async def stream_events(
    request: Request,
    org_id: str = Depends(get_org_id),
    bus: EventBus = Depends(get_event_bus),
    config: Config = Depends(get_app_config),
) -> StreamingResponse:
    """Stream the organization's status events as server-sent events."""
    return StreamingResponse(
        event_stream(
            bus,
            org_id,
            heartbeat_seconds=config.sse_heartbeat_seconds,
            is_disconnected=request.is_disconnected,
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
