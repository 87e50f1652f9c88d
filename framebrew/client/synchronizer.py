"""Keep cached query results in step with status events.

Instead of refetching after every status change, the synchronizer patches
the affected videos in every cached listing and detail in place. Applying
the same event twice leaves the cache exactly as applying it once.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from framebrew.client.cache import (
    VIDEO_LIST_PREFIX,
    QueryCache,
    video_detail_key,
)
from framebrew.core.events import EventBus, Subscription
from framebrew.core.logging import get_logger
from framebrew.schemas.events import StatusEvent

logger = get_logger(__name__)

READY = "ready"
FAILED = "failed"


@dataclass(frozen=True)
class Notification:
    """User-facing notice raised for a finished generation."""

    level: Literal["success", "error"]
    title: str
    message: str
    video_id: str
    job_id: str


NotificationListener = Callable[[Notification], None]


def _merge_video(
    current: Mapping[str, Any], status: str, video: Mapping[str, Any] | None
) -> dict[str, Any]:
    merged = {**current, **video} if video else dict(current)
    merged["status"] = status
    return merged


def apply_to_list(
    result: Mapping[str, Any],
    video_id: str,
    status: str,
    video: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Patch a list result for one status change.

    A listed video gets the new status (and the full snapshot on ready). An
    unlisted video is prepended only when a snapshot is available, and the
    total grows by one.
    """
    items = list(result.get("items", []))
    for index, item in enumerate(items):
        if item.get("id") == video_id:
            items[index] = _merge_video(item, status, video)
            return {**result, "items": items}

    if video is None:
        return dict(result)
    return {
        **result,
        "items": [dict(video), *items],
        "total": result.get("total", len(items)) + 1,
    }


def apply_to_detail(
    result: Mapping[str, Any], status: str, video: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Patch a detail result for one status change."""
    current = result.get("video") or {}
    return {**result, "video": _merge_video(current, status, video)}


class CacheSynchronizer:
    """Apply status events to a QueryCache and raise notifications.

    Example:
        >>> sync = CacheSynchronizer(cache)
        >>> sync.attach(bus)
        >>> # every StatusEvent published on the bus now patches ``cache``
    """

    def __init__(self, cache: QueryCache) -> None:
        self.cache = cache
        self.notifications: list[Notification] = []
        self._listeners: list[NotificationListener] = []

    def on_notification(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    def handle(self, event: StatusEvent | Mapping[str, Any]) -> Notification | None:
        """Apply one event.

        Args:
            event: StatusEvent or its wire form (camelCase dict); other event
                types are ignored

        Returns:
            Notification raised for the event, if any
        """
        payload = event.to_wire() if isinstance(event, StatusEvent) else dict(event)
        if payload.get("type") != "status":
            return None

        video_id = payload["videoId"]
        status = payload["status"]
        video = payload.get("video") if status == READY else None

        for key, result in self.cache.entries(VIDEO_LIST_PREFIX):
            self.cache.set(key, apply_to_list(result, video_id, status, video))

        detail_key = video_detail_key(video_id)
        detail = self.cache.get(detail_key)
        if detail is not None:
            self.cache.set(detail_key, apply_to_detail(detail, status, video))

        notification = self._notification(payload, video)
        if notification is not None:
            self.notifications.append(notification)
            for listener in list(self._listeners):
                listener(notification)
        return notification

    def attach(self, bus: EventBus) -> Subscription:
        """Subscribe to an in-process event bus."""
        return bus.subscribe(self.handle)

    @staticmethod
    def _notification(
        payload: Mapping[str, Any], video: Mapping[str, Any] | None
    ) -> Notification | None:
        status = payload["status"]
        if status == READY:
            title = (video or {}).get("title") or "Your video"
            return Notification(
                level="success",
                title="Video ready",
                message=f"{title} has been processed successfully.",
                video_id=payload["videoId"],
                job_id=payload["jobId"],
            )
        if status == FAILED:
            return Notification(
                level="error",
                title="Generation failed",
                message=payload.get("error") or "An error occurred during processing.",
                video_id=payload["videoId"],
                job_id=payload["jobId"],
            )
        return None


__all__ = [
    "CacheSynchronizer",
    "Notification",
    "apply_to_detail",
    "apply_to_list",
]
