"""Client-side query cache.

Results are cached as the JSON documents the API returned (camelCase keys)
under tuple keys. ``("videos", ...)`` keys hold list results
``{"items", "total", "nextCursor"}`` and ``("video", id)`` keys hold detail
results ``{"video", "versions"}``.
"""

from collections.abc import Iterator, Mapping
from typing import Any

QueryKey = tuple[Any, ...]

VIDEO_LIST_PREFIX = "videos"
VIDEO_DETAIL_PREFIX = "video"


def _freeze(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    return value


def video_list_key(params: Mapping[str, Any] | None = None) -> QueryKey:
    """Cache key of a video listing with the given query parameters.

    Example:
        >>> video_list_key({"sortBy": "newest", "status": ["ready"]})
        ('videos', (('sortBy', 'newest'), ('status', ('ready',))))
    """
    items = sorted((k, _freeze(v)) for k, v in (params or {}).items() if v is not None)
    return (VIDEO_LIST_PREFIX, tuple(items))


def video_detail_key(video_id: str) -> QueryKey:
    return (VIDEO_DETAIL_PREFIX, video_id)


class QueryCache:
    """Mapping from query keys to cached results."""

    def __init__(self) -> None:
        self._entries: dict[QueryKey, dict[str, Any]] = {}

    def get(self, key: QueryKey) -> dict[str, Any] | None:
        return self._entries.get(key)

    def set(self, key: QueryKey, value: dict[str, Any]) -> None:
        self._entries[key] = value

    def entries(self, prefix: str | None = None) -> list[tuple[QueryKey, dict[str, Any]]]:
        """Snapshot of cached entries, optionally only keys starting with ``prefix``."""
        return [
            (key, value)
            for key, value in self._entries.items()
            if prefix is None or (key and key[0] == prefix)
        ]

    def invalidate(self, prefix: str | None = None) -> int:
        """Drop entries whose key starts with ``prefix`` (all when None)."""
        keys = [key for key, _ in self.entries(prefix)]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[QueryKey]:
        return iter(list(self._entries))


__all__ = [
    "QueryCache",
    "QueryKey",
    "VIDEO_DETAIL_PREFIX",
    "VIDEO_LIST_PREFIX",
    "video_detail_key",
    "video_list_key",
]
