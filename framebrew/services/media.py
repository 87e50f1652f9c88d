"""Placeholder media URLs.

Object storage is external to this service; published assets are
addressed by a deterministic layout under the configured base URL.
"""

from framebrew.config.upload import MediaLayout

GENERATED_ASSETS = ("hls", "mp4", "thumb", "captions")
UPLOADED_ASSETS = ("mp4", "thumb")


class MediaUrlBuilder:
    """Build URL bundles for a video.

    Example:
        >>> MediaUrlBuilder("/media").urls_for("v1", ("mp4",))
        {'mp4': '/media/videos/v1/video.mp4'}
    """

    def __init__(self, base_url: str = "/media", layout: MediaLayout | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.layout = layout or MediaLayout()

    def urls_for(self, video_id: str, assets: tuple[str, ...] = GENERATED_ASSETS) -> dict[str, str]:
        """Return ``{asset: url}`` for the requested asset kinds."""
        files = self.layout.model_dump()
        return {asset: f"{self.base_url}/videos/{video_id}/{files[asset]}" for asset in assets}


__all__ = [
    "GENERATED_ASSETS",
    "UPLOADED_ASSETS",
    "MediaUrlBuilder",
]
