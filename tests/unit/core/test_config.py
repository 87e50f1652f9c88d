"""Tests for framebrew.core.config module."""

import pytest
from pydantic import ValidationError

from framebrew.config import GenerationConfig, GenerationLimits, ScoreRange, UploadConfig
from framebrew.core.config import Config, get_config


@pytest.mark.unit
def test_config_defaults():
    """Test that Config provides the documented defaults."""
    config = Config(_env_file=None)

    assert config.app_name == "FrameBrew"
    assert config.default_org_id == "org-1"
    assert config.media_base_url == "/media"
    assert config.generation_initial_delay == 1.0
    assert config.generation_step_delay_min == 2.0
    assert config.generation_step_delay_max == 5.0
    assert config.sse_heartbeat_seconds == 15.0


@pytest.mark.unit
def test_config_reads_environment(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("DEFAULT_ORG_ID", "acme")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///framebrew.db")

    config = Config(_env_file=None)

    assert config.is_production
    assert not config.is_development
    assert config.default_org_id == "acme"
    assert config.database_url == "sqlite+aiosqlite:///framebrew.db"


@pytest.mark.unit
def test_config_rejects_sync_database_url():
    """Test that a database URL without an async driver is rejected."""
    with pytest.raises(ValidationError, match="async driver"):
        Config(_env_file=None, database_url="postgresql://localhost/framebrew")


@pytest.mark.unit
def test_config_rejects_inverted_step_delays():
    """Test that the minimum step delay cannot exceed the maximum."""
    with pytest.raises(ValidationError, match="generation_step_delay_min"):
        Config(_env_file=None, generation_step_delay_min=6, generation_step_delay_max=5)


@pytest.mark.unit
def test_get_config_returns_singleton():
    """Test that get_config returns the same instance."""
    assert get_config() is get_config()


class TestGenerationConfig:
    """Test generation configuration models."""

    def test_default_limits(self):
        """Test the default request bounds."""
        limits = GenerationConfig().limits

        assert limits.prompt_min_length == 10
        assert limits.prompt_max_length == 2000
        assert limits.negative_prompt_max_length == 1000
        assert limits.min_duration_sec == 5
        assert limits.max_duration_sec == 60

    def test_default_parameters(self):
        """Test defaults applied to optional generation parameters."""
        defaults = GenerationConfig().defaults

        assert defaults.aspect_ratio == "16:9"
        assert defaults.resolution == "720p"
        assert defaults.model == "fast"
        assert defaults.captions is True
        assert defaults.watermark is False

    def test_progress_by_status(self):
        """Test progress percentages follow the status sequence."""
        progress = GenerationConfig().progress_by_status

        assert [progress[s] for s in ("queued", "running", "transcoding", "scoring", "ready")] == [
            0,
            25,
            50,
            75,
            100,
        ]

    def test_inverted_limits_rejected(self):
        """Test that inverted prompt bounds are rejected."""
        with pytest.raises(ValidationError):
            GenerationLimits(prompt_min_length=50, prompt_max_length=10)

    def test_empty_score_range_rejected(self):
        """Test that a score range needs low below high."""
        with pytest.raises(ValidationError):
            ScoreRange(low=80, high=80)


class TestUploadConfig:
    """Test upload configuration model."""

    def test_allowed_types_are_video(self):
        """Test that only video MIME types are allowed by default."""
        config = UploadConfig()

        assert "video/mp4" in config.allowed_mime_types
        assert all(mime.startswith("video/") for mime in config.allowed_mime_types)
        assert config.max_size_bytes == 100 * 1024 * 1024
