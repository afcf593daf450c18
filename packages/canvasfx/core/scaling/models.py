"""Scaling options."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScalingOptions(BaseModel):
    """Post-processing applied to scaled geometry.

    Both adjustments default off so scaled coordinates are the exact
    proportional values.

    Attributes:
        round_to_pixel: Round scaled coordinates and radii to whole pixels.
        clamp_to_canvas: Keep coordinates within [0, size - 1] and radii
            within [min_radius, min(width, height) / 2].
        min_radius: Smallest radius kept when clamping.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    round_to_pixel: bool = Field(default=False, description="Round to whole pixels")
    clamp_to_canvas: bool = Field(default=False, description="Clamp geometry to the canvas")
    min_radius: float = Field(default=10.0, ge=0.0, description="Minimum arc radius when clamping")
