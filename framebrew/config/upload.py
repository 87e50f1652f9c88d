"""Upload configuration models."""

from pydantic import BaseModel, Field


class MediaLayout(BaseModel):
    """File names of the placeholder assets published for a video.

    URLs are built as ``{media_base_url}/videos/{video_id}/{file}``.
    """

    mp4: str = Field(default="video.mp4")
    hls: str = Field(default="playlist.m3u8")
    thumb: str = Field(default="thumbnail.jpg")
    captions: str = Field(default="captions.vtt")


class UploadConfig(BaseModel):
    """Upload validation configuration.

    Attributes:
        allowed_mime_types: Video MIME types accepted for upload
        max_size_bytes: Largest accepted upload
        layout: Placeholder asset layout
    """

    allowed_mime_types: list[str] = Field(
        default_factory=lambda: [
            "video/mp4",
            "video/mpeg",
            "video/quicktime",
            "video/x-msvideo",
            "video/webm",
        ]
    )
    max_size_bytes: int = Field(default=100 * 1024 * 1024, ge=1)
    layout: MediaLayout = Field(default_factory=MediaLayout)
