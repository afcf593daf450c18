"""Application configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from canvasfx.core.resolution import DEFAULT_RESOLUTION_KEY, UnknownResolutionError, get_profile
from canvasfx.core.scaling import ScalingOptions


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")
    filename: str | None = Field(default=None, description="Log to this file instead of stderr")


class SchemaConfig(BaseModel):
    """Schema synthesis and caching."""

    cache_enabled: bool = Field(default=True, description="Memoize schemas per effect id")
    number_default_min: float = 0
    number_default_max: float = 100
    number_default_step: float = Field(default=1, gt=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> SchemaConfig:
        if self.number_default_min > self.number_default_max:
            raise ValueError(
                f"number_default_min ({self.number_default_min}) exceeds "
                f"number_default_max ({self.number_default_max})"
            )
        return self


class ScalingConfig(BaseModel):
    """Defaults for position scaling."""

    round_to_pixel: bool = False
    clamp_to_canvas: bool = False
    min_radius: float = Field(default=10.0, ge=0.0)

    def to_options(self) -> ScalingOptions:
        return ScalingOptions(
            round_to_pixel=self.round_to_pixel,
            clamp_to_canvas=self.clamp_to_canvas,
            min_radius=self.min_radius,
        )


class CanvasConfig(BaseModel):
    """Default canvas for new projects."""

    resolution_key: int = DEFAULT_RESOLUTION_KEY
    is_horizontal: bool = True

    @field_validator("resolution_key", mode="before")
    @classmethod
    def _resolve_key(cls, value: object) -> int:
        # Accepts legacy aliases ("1080p", "4k") as well as numeric keys
        try:
            return get_profile(value).key  # type: ignore[arg-type]
        except UnknownResolutionError as e:
            raise ValueError(e.args[0]) from e


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    logging: LoggingConfig = LoggingConfig()
    schema_options: SchemaConfig = Field(default_factory=SchemaConfig, alias="schema")
    scaling: ScalingConfig = ScalingConfig()
    canvas: CanvasConfig = CanvasConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("canvasfx.json")
