"""Tests for framebrew.core.exceptions module."""

import pytest

from framebrew.core.exceptions import (
    ActiveJobExistsError,
    APIClientError,
    ConfigError,
    ConflictError,
    DatabaseError,
    FrameBrewError,
    InvalidJobStateError,
    InvalidVideoStateError,
    MissingEnvironmentError,
    ProjectHasVideosError,
    RecordNotFoundError,
    RequestValidationError,
)


@pytest.mark.unit
def test_framebrew_error():
    """Test base FrameBrewError exception."""
    error = FrameBrewError("Test error")

    assert str(error) == "Test error"
    assert error.context == {}
    assert error.error_code == "INTERNAL_ERROR"
    assert error.status_code == 500


@pytest.mark.unit
def test_with_context_chains():
    """Test that with_context adds context and returns the error."""
    error = FrameBrewError("Test error", context={"a": 1}).with_context(b=2)

    assert error.context == {"a": 1, "b": 2}
    assert error.to_dict() == {
        "error_type": "FrameBrewError",
        "error_code": "INTERNAL_ERROR",
        "message": "Test error",
        "context": {"a": 1, "b": 2},
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    ("model", "code"),
    [
        ("Video", "VIDEO_NOT_FOUND"),
        ("Project", "PROJECT_NOT_FOUND"),
        ("Template", "TEMPLATE_NOT_FOUND"),
        ("GenerationJob", "GENERATION_JOB_NOT_FOUND"),
        ("Organization", "ORGANIZATION_NOT_FOUND"),
    ],
)
def test_record_not_found_error_codes(model, code):
    """Test that RecordNotFoundError derives its code from the model name."""
    error = RecordNotFoundError(model=model, record_id="123")

    assert error.error_code == code
    assert error.status_code == 404
    assert error.model == model
    assert error.record_id == "123"
    assert "123" in str(error)
    assert isinstance(error, DatabaseError)


@pytest.mark.unit
def test_request_validation_error():
    """Test RequestValidationError records the field and value."""
    error = RequestValidationError("Too short", field="prompt", value=3)

    assert error.status_code == 400
    assert error.error_code == "VALIDATION_ERROR"
    assert error.context == {"field": "prompt", "value": 3}


@pytest.mark.unit
def test_conflict_errors():
    """Test the 409 conflict family."""
    has_videos = ProjectHasVideosError(project_id="p1", video_count=2)
    active = ActiveJobExistsError(video_id="v1", job_id="j1")
    job_state = InvalidJobStateError(job_id="j1", status="ready", reason="Only failed jobs")

    for error in (has_videos, active, job_state):
        assert isinstance(error, ConflictError)
        assert error.status_code == 409

    assert has_videos.error_code == "PROJECT_HAS_VIDEOS"
    assert has_videos.context["video_count"] == 2
    assert active.error_code == "ACTIVE_JOB_EXISTS"
    assert job_state.error_code == "INVALID_JOB_STATE"


@pytest.mark.unit
def test_invalid_video_state_error_code_override():
    """Test that InvalidVideoStateError accepts a specific error code."""
    default = InvalidVideoStateError(video_id="v1", reason="Nope")
    specific = InvalidVideoStateError(
        video_id="v1", reason="Video must be ready", error_code="INVALID_VIDEO_STATUS"
    )

    assert default.error_code == "INVALID_VIDEO_STATE"
    assert specific.error_code == "INVALID_VIDEO_STATUS"
    assert InvalidVideoStateError.error_code == "INVALID_VIDEO_STATE"
    assert str(specific) == "Video must be ready"


@pytest.mark.unit
def test_api_client_error():
    """Test APIClientError carries the server's status and code."""
    error = APIClientError("Video not found", status_code=404, error_code="VIDEO_NOT_FOUND")

    assert error.status_code == 404
    assert error.error_code == "VIDEO_NOT_FOUND"
    assert isinstance(error, FrameBrewError)


@pytest.mark.unit
def test_missing_environment_error():
    """Test MissingEnvironmentError lists the missing variables."""
    error = MissingEnvironmentError(["DATABASE_URL", "GEMINI_API_KEY"])

    assert isinstance(error, ConfigError)
    assert error.missing == ["DATABASE_URL", "GEMINI_API_KEY"]
    assert "DATABASE_URL" in str(error)
