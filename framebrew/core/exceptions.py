"""Custom exceptions for the Frame Brew application.

This module defines all custom exceptions used throughout the application.
All exceptions inherit from FrameBrewError for easy catching.

Exception classes include context dictionaries for structured logging
and debugging. Use the `context` property to access additional details.
Each class also carries an ``error_code`` and ``status_code`` that the
HTTP layer uses to build error responses.
"""

from typing import Any


class FrameBrewError(Exception):
    """Base exception for all Frame Brew errors.

    All custom exceptions in the application should inherit from this class.
    Provides a context dictionary for structured error information.

    Attributes:
        context: Dictionary with additional error context
        error_code: Machine readable error code
        status_code: HTTP status used when the error reaches a client

    Example:
        >>> try:
        ...     raise FrameBrewError("Something went wrong", context={"video_id": "123"})
        ... except FrameBrewError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize FrameBrewError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "FrameBrewError":
        """Add additional context to the exception.

        Args:
            **kwargs: Key-value pairs to add to context

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Database Errors
# ============================================


class DatabaseError(FrameBrewError):
    """Base exception for database-related errors."""

    error_code = "DATABASE_ERROR"

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize DatabaseError.

        Args:
            message: Error message
            context: Additional context
            operation: Database operation that failed (e.g., "insert", "update")
        """
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class RecordNotFoundError(DatabaseError):
    """Raised when a record is not found.

    The error code is derived from the model name, so a missing video
    surfaces as ``VIDEO_NOT_FOUND`` and a missing job as
    ``GENERATION_JOB_NOT_FOUND``.

    Attributes:
        model: The model class that was queried
        record_id: The ID that was not found
    """

    status_code = 404

    def __init__(
        self,
        model: str,
        record_id: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordNotFoundError.

        Args:
            model: Name of the model class
            record_id: ID that was not found
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "record_id": record_id})
        super().__init__(f"{model} with id={record_id} not found", context=ctx)
        self.model = model
        self.record_id = record_id
        self.error_code = f"{_snake_upper(model)}_NOT_FOUND"


def _snake_upper(name: str) -> str:
    chars: list[str] = []
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0:
            chars.append("_")
        chars.append(ch.upper())
    return "".join(chars)


# ============================================
# Request Errors
# ============================================


class RequestValidationError(FrameBrewError):
    """Raised when request fields are malformed or out of range.

    Raised before any record is created.

    Attributes:
        field: Field that failed validation (optional)
        value: Rejected value (optional)
    """

    error_code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if field is not None:
            ctx["field"] = field
            ctx["value"] = value
        super().__init__(message, context=ctx)
        self.field = field
        self.value = value


class ConflictError(FrameBrewError):
    """Raised when an operation conflicts with the current state of a record."""

    error_code = "CONFLICT"
    status_code = 409


class ProjectHasVideosError(ConflictError):
    """Raised when deleting a project that still has videos."""

    error_code = "PROJECT_HAS_VIDEOS"

    def __init__(self, project_id: str, video_count: int) -> None:
        super().__init__(
            "Cannot delete project with existing videos. Please delete videos first.",
            context={"project_id": project_id, "video_count": video_count},
        )
        self.project_id = project_id
        self.video_count = video_count


class ActiveJobExistsError(ConflictError):
    """Raised when a video already has a job that has not finished."""

    error_code = "ACTIVE_JOB_EXISTS"

    def __init__(self, video_id: str, job_id: str | None = None) -> None:
        context = {"video_id": video_id}
        if job_id is not None:
            context["job_id"] = job_id
        super().__init__(
            f"Video {video_id} already has an active generation job",
            context=context,
        )
        self.video_id = video_id
        self.job_id = job_id


class InvalidVideoStateError(ConflictError):
    """Raised when a video is not in a state that allows the operation.

    Attributes:
        video_id: Video that was addressed
        reason: Why the operation is not allowed
    """

    error_code = "INVALID_VIDEO_STATE"

    def __init__(self, video_id: str, reason: str, error_code: str | None = None) -> None:
        super().__init__(reason, context={"video_id": video_id})
        self.video_id = video_id
        self.reason = reason
        if error_code:
            self.error_code = error_code


class InvalidJobStateError(ConflictError):
    """Raised when a generation job is not in a state that allows the operation."""

    error_code = "INVALID_JOB_STATE"

    def __init__(self, job_id: str, status: str, reason: str) -> None:
        super().__init__(reason, context={"job_id": job_id, "status": status})
        self.job_id = job_id
        self.status = status


# ============================================
# Client Errors
# ============================================


class APIClientError(FrameBrewError):
    """Raised by the API client when the server answers with an error.

    Attributes:
        status_code: HTTP status of the response
        error_code: ``code`` field of the error body
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str = "HTTP_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.status_code = status_code
        self.error_code = error_code


# ============================================
# Configuration Errors
# ============================================


class ConfigError(FrameBrewError):
    """Base exception for configuration-related errors."""

    error_code = "CONFIG_ERROR"

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigError.

        Args:
            message: Error message
            config_path: Path to the config key
            context: Additional context
        """
        ctx = context or {}
        if config_path:
            ctx["config_path"] = config_path
        super().__init__(message, context=ctx)


class MissingEnvironmentError(ConfigError):
    """Raised when critical environment variables are not set.

    Attributes:
        missing: Names of the missing variables
    """

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Missing critical environment variables: {', '.join(missing)}",
            context={"missing": missing},
        )
        self.missing = missing


__all__ = [
    "FrameBrewError",
    "DatabaseError",
    "RecordNotFoundError",
    "RequestValidationError",
    "ConflictError",
    "ProjectHasVideosError",
    "ActiveJobExistsError",
    "InvalidVideoStateError",
    "InvalidJobStateError",
    "APIClientError",
    "ConfigError",
    "MissingEnvironmentError",
]
