"""In-process publish/subscribe event bus.

Status changes are broadcast to every registered subscriber. The bus is
volatile and process-local: nothing is persisted or replayed, and there is
no backpressure.
"""

import itertools
from collections.abc import Callable
from typing import Any

from framebrew.core.logging import get_logger

logger = get_logger(__name__)

Subscriber = Callable[[Any], None]


class Subscription:
    """Handle returned by EventBus.subscribe.

    Calling ``unsubscribe()`` more than once is a no-op.
    """

    def __init__(self, bus: "EventBus", subscriber_id: int) -> None:
        self._bus = bus
        self.id = subscriber_id

    @property
    def active(self) -> bool:
        return self._bus.is_subscribed(self.id)

    def unsubscribe(self) -> None:
        self._bus._remove(self.id)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unsubscribe()

    def __repr__(self) -> str:
        return f"Subscription(id={self.id}, active={self.active})"


class EventBus:
    """Fan-out registry of subscriber callbacks.

    Subscribers are called synchronously in registration order. ``publish``
    iterates a snapshot of the subscribers taken when it starts, so a
    callback may subscribe or unsubscribe freely during delivery; a
    subscriber removed mid-delivery may still receive that event.

    Example:
        >>> bus = EventBus()
        >>> sub = bus.subscribe(lambda event: print(event))
        >>> bus.publish({"type": "status"})
        1
        >>> sub.unsubscribe()
    """

    def __init__(self) -> None:
        self._subscribers: dict[int, Subscriber] = {}
        self._ids = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Subscriber) -> Subscription:
        """Register a callback.

        Args:
            callback: Called with each published event

        Returns:
            Handle used to deregister the callback
        """
        subscriber_id = next(self._ids)
        self._subscribers[subscriber_id] = callback
        logger.debug("Subscriber added", subscriber_id=subscriber_id)
        return Subscription(self, subscriber_id)

    def publish(self, event: Any) -> int:
        """Deliver an event to every current subscriber.

        A subscriber that raises is logged and skipped; delivery to the
        remaining subscribers continues.

        Args:
            event: Event payload

        Returns:
            Number of subscribers that handled the event without raising
        """
        delivered = 0
        for subscriber_id, callback in list(self._subscribers.items()):
            try:
                callback(event)
                delivered += 1
            except Exception as e:
                logger.error(
                    "Event subscriber failed",
                    subscriber_id=subscriber_id,
                    error=str(e),
                    exc_info=True,
                )
        return delivered

    def is_subscribed(self, subscriber_id: int) -> bool:
        return subscriber_id in self._subscribers

    def clear(self) -> None:
        """Remove all subscribers."""
        self._subscribers.clear()

    def _remove(self, subscriber_id: int) -> None:
        if self._subscribers.pop(subscriber_id, None) is not None:
            logger.debug("Subscriber removed", subscriber_id=subscriber_id)


__all__ = [
    "EventBus",
    "Subscriber",
    "Subscription",
]
