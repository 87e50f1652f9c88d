"""Server-sent event framing and per-connection event streams."""

import asyncio
import json
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from framebrew.core.events import EventBus
from framebrew.core.logging import get_logger
from framebrew.models.base import utcnow
from framebrew.schemas.events import StatusEvent

logger = get_logger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_sse(event: str, data: Any, event_id: str | None = None) -> str:
    """Encode one SSE frame.

    Args:
        event: Event name (``event:`` field)
        data: JSON-serializable payload, or a preformatted string
        event_id: Optional ``id:`` field

    Returns:
        Frame terminated by a blank line

    Example:
        >>> format_sse("heartbeat", {"timestamp": 1})
        'event: heartbeat\\ndata: {"timestamp":1}\\n\\n'
    """
    payload = data if isinstance(data, str) else json.dumps(data, separators=(",", ":"))
    lines = []
    if event_id is not None:
        lines.append(f"id: {event_id}")
    lines.append(f"event: {event}")
    lines.extend(f"data: {line}" for line in payload.split("\n"))
    return "\n".join(lines) + "\n\n"


async def event_stream(
    bus: EventBus,
    org_id: str,
    heartbeat_seconds: float = 15.0,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
) -> AsyncIterator[str]:
    """Yield SSE frames for one client connection.

    The first frame is ``connected``. After that every status event of the
    organization is forwarded in publish order, and a ``heartbeat`` frame is
    sent whenever the stream has been idle for ``heartbeat_seconds``. The
    bus subscription is released when the generator is closed.

    Args:
        bus: Event bus to subscribe to
        org_id: Only events of this organization are forwarded
        heartbeat_seconds: Idle interval between heartbeats
        is_disconnected: Polled before each frame; the stream ends when it
            returns True
    """
    queue: asyncio.Queue[StatusEvent] = asyncio.Queue()

    def deliver(event: Any) -> None:
        if isinstance(event, StatusEvent) and event.org_id == org_id:
            queue.put_nowait(event)

    subscription = bus.subscribe(deliver)
    client_id = f"{org_id}_{subscription.id}"
    logger.info("SSE client connected", client_id=client_id, org_id=org_id)

    try:
        yield format_sse(
            "connected",
            {"type": "connected", "message": "SSE connection established", "clientId": client_id},
        )
        while True:
            if is_disconnected is not None and await is_disconnected():
                break
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat_seconds)
            except asyncio.TimeoutError:
                yield format_sse(
                    "heartbeat",
                    {"type": "heartbeat", "timestamp": int(utcnow().timestamp() * 1000)},
                )
                continue
            yield format_sse("status", event.to_wire())
    finally:
        subscription.unsubscribe()
        logger.info("SSE client disconnected", client_id=client_id)


__all__ = [
    "SSE_HEADERS",
    "event_stream",
    "format_sse",
]
