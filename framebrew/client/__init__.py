"""Python client for the Frame Brew API with a self-updating query cache."""

from framebrew.client.api import FrameBrewClient, parse_sse
from framebrew.client.cache import QueryCache, video_detail_key, video_list_key
from framebrew.client.synchronizer import CacheSynchronizer, Notification

__all__ = [
    "CacheSynchronizer",
    "FrameBrewClient",
    "Notification",
    "QueryCache",
    "parse_sse",
    "video_detail_key",
    "video_list_key",
]
