"""Rescaling of canvas-relative geometry on resolution changes."""

from canvasfx.core.scaling.models import ScalingOptions
from canvasfx.core.scaling.scaler import (
    rescale_for_resolution,
    scale_config,
    scale_effects,
    scale_value,
)

__all__ = [
    "ScalingOptions",
    "rescale_for_resolution",
    "scale_config",
    "scale_effects",
    "scale_value",
]
