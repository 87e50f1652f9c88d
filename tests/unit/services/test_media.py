"""Unit tests for MediaUrlBuilder."""

from framebrew.config.upload import MediaLayout
from framebrew.services.media import GENERATED_ASSETS, UPLOADED_ASSETS, MediaUrlBuilder


class TestMediaUrlBuilder:
    """Tests for placeholder URL bundles."""

    def test_generated_bundle(self):
        """Test that generated videos get all four assets."""
        urls = MediaUrlBuilder("/media").urls_for("v1", GENERATED_ASSETS)

        assert urls == {
            "hls": "/media/videos/v1/playlist.m3u8",
            "mp4": "/media/videos/v1/video.mp4",
            "thumb": "/media/videos/v1/thumbnail.jpg",
            "captions": "/media/videos/v1/captions.vtt",
        }

    def test_uploaded_bundle(self):
        """Test that uploads get only mp4 and thumb."""
        urls = MediaUrlBuilder("/media").urls_for("v2", UPLOADED_ASSETS)

        assert set(urls) == {"mp4", "thumb"}

    def test_trailing_slash_trimmed(self):
        """Test that a base URL with trailing slash yields single slashes."""
        builder = MediaUrlBuilder("https://cdn.example.com/")

        assert builder.urls_for("v3", ("mp4",)) == {
            "mp4": "https://cdn.example.com/videos/v3/video.mp4"
        }

    def test_custom_layout(self):
        """Test that file names come from the layout."""
        builder = MediaUrlBuilder("/m", MediaLayout(mp4="master.mp4"))

        assert builder.urls_for("v4", ("mp4",))["mp4"] == "/m/videos/v4/master.mp4"
