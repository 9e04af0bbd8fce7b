"""Pydantic schemas for conversion parameters and settings."""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ─────────────────────────────────────────────────────────────
# Target size
# ─────────────────────────────────────────────────────────────

DEFAULT_TARGET_SIZE = 120


class TargetSpec(BaseModel):
    """Requested thumbnail canvas."""

    target_width: int = Field(
        default=DEFAULT_TARGET_SIZE,
        gt=0,
        description="Canvas width in pixels",
    )
    target_height: int = Field(
        default=DEFAULT_TARGET_SIZE,
        gt=0,
        description="Canvas height in pixels",
    )
    preserve_ratio: bool = Field(
        default=True,
        description="Scale uniformly and pad instead of stretching",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, strict=True)


# ─────────────────────────────────────────────────────────────
# Conversion parameters
# ─────────────────────────────────────────────────────────────


class ConvertParams(TargetSpec):
    """Parameters for a single image -> PNG thumbnail conversion."""

    input_path: str = Field(..., description="Path of the image to convert")
    output_path: str = Field(..., description="Path of the PNG to write")

    @field_validator("input_path", "output_path")
    @classmethod
    def validate_path_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Path must not be empty")
        return v


class ConvertOutput(BaseModel):
    """Metadata about a finished conversion."""

    output_path: str
    width: int
    height: int
    size: int = Field(..., ge=0, description="PNG size in bytes")
    decode_stage: str = Field(..., description="Resolver stage that decoded the input")
    detected_format: str | None = None


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────


class ResizeSettings(BaseModel):
    """Tunable constants of the multi-step resize."""

    step_factor: float = Field(default=0.75, gt=0.0, lt=1.0)
    min_steps: int = Field(default=2, ge=1)
    multi_step_threshold: float = Field(
        default=2.0,
        gt=1.0,
        description="Use multi-step when the source exceeds the content size by this factor",
    )
    sharpen_center: float = 1.8
    sharpen_edge: float = -0.2

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class OutputPathPolicy(StrEnum):
    WARN = "warn"
    REJECT = "reject"


class ConverterSettings(BaseModel):
    output_path_policy: OutputPathPolicy = OutputPathPolicy.WARN
    resize: ResizeSettings = Field(default_factory=ResizeSettings)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)
