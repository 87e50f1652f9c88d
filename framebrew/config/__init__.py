"""Typed configuration models for services."""

from framebrew.config.generation import (
    AspectRatio,
    GenerationConfig,
    GenerationDefaults,
    GenerationLimits,
    GenerationModel,
    Resolution,
    ScoreRange,
)
from framebrew.config.upload import MediaLayout, UploadConfig

__all__ = [
    "AspectRatio",
    "GenerationConfig",
    "GenerationDefaults",
    "GenerationLimits",
    "GenerationModel",
    "Resolution",
    "ScoreRange",
    "MediaLayout",
    "UploadConfig",
]
