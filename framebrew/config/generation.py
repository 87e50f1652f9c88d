"""Generation configuration models."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

AspectRatio = Literal["16:9", "9:16"]
Resolution = Literal["720p", "1080p"]
GenerationModel = Literal["stable", "fast"]


class GenerationLimits(BaseModel):
    """Bounds applied to generation requests.

    Attributes:
        prompt_min_length: Shortest accepted prompt
        prompt_max_length: Longest accepted prompt
        negative_prompt_max_length: Longest accepted negative prompt
        min_duration_sec: Shortest video that can be requested
        max_duration_sec: Longest video that can be requested
    """

    prompt_min_length: int = Field(default=10, ge=1)
    prompt_max_length: int = Field(default=2000, ge=1)
    negative_prompt_max_length: int = Field(default=1000, ge=0)
    min_duration_sec: int = Field(default=5, ge=1)
    max_duration_sec: int = Field(default=60, ge=1)

    @model_validator(mode="after")
    def validate_ranges(self) -> "GenerationLimits":
        if self.prompt_min_length > self.prompt_max_length:
            raise ValueError("prompt_min_length must not exceed prompt_max_length")
        if self.min_duration_sec > self.max_duration_sec:
            raise ValueError("min_duration_sec must not exceed max_duration_sec")
        return self


class GenerationDefaults(BaseModel):
    """Defaults for optional generation parameters."""

    aspect_ratio: AspectRatio = Field(default="16:9")
    resolution: Resolution = Field(default="720p")
    model: GenerationModel = Field(default="fast")
    captions: bool = Field(default=True)
    watermark: bool = Field(default=False)


class ScoreRange(BaseModel):
    """Range for generated component scores.

    Attributes:
        low: Inclusive lower bound
        high: Exclusive upper bound
    """

    low: int = Field(default=60, ge=0, le=100)
    high: int = Field(default=100, ge=1, le=101)

    @model_validator(mode="after")
    def validate_bounds(self) -> "ScoreRange":
        if self.low >= self.high:
            raise ValueError("low must be below high")
        return self


class GenerationConfig(BaseModel):
    """Generation configuration.

    Attributes:
        limits: Request bounds
        defaults: Defaults for optional parameters
        score_range: Range of generated scores
        title_prompt_chars: Prompt characters used in a generated title
        progress_by_status: Progress percentage reported for each status
    """

    limits: GenerationLimits = Field(default_factory=GenerationLimits)
    defaults: GenerationDefaults = Field(default_factory=GenerationDefaults)
    score_range: ScoreRange = Field(default_factory=ScoreRange)
    title_prompt_chars: int = Field(default=50, ge=1)
    progress_by_status: dict[str, int] = Field(
        default_factory=lambda: {
            "queued": 0,
            "running": 25,
            "transcoding": 50,
            "scoring": 75,
            "ready": 100,
        }
    )
