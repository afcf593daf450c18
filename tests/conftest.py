"""Shared pytest fixtures for canvasfx tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from canvasfx.core.config.loader import reset_app_config_cache
from canvasfx.core.effects import Effect, EffectType
from canvasfx.core.values import (
    ArcPath,
    ColorSelection,
    PercentageRange,
    Point,
    Position,
    Range,
)

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _fresh_app_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from a cached default config and the log level env var."""
    monkeypatch.delenv("CANVASFX_LOG_LEVEL", raising=False)
    reset_app_config_cache()
    yield
    reset_app_config_cache()


# ============================================================================
# Wire Payload Fixtures
# ============================================================================


@pytest.fixture
def wire_default_config() -> dict[str, Any]:
    """Default configuration as shipped by the configuration authority."""
    return {
        "layerOpacity": 0.7,
        "center": {"name": "position", "x": 540, "y": 960},
        "strokeColor": "#FF0000",
        "innerColor": {
            "__type": "ColorPicker",
            "selectionType": "color-bucket",
            "colorValue": None,
        },
        "numberOfRings": {"__type": "Range", "lower": 2, "upper": 8},
        "ringRadius": {
            "__type": "PercentageRange",
            "lower": {"__type": "PercentageShortestSide", "percent": 0.1},
            "upper": {"__type": "PercentageLongestSide", "percent": 0.4},
        },
        "invertLayers": False,
        "accentName": "flare",
        "__meta__": {"version": 3},
    }


# ============================================================================
# Effect Fixtures
# ============================================================================


@pytest.fixture
def orbit_effect() -> Effect:
    """Primary effect with positions at several nesting depths."""
    keyframe = Effect(
        id="kf-1",
        name="blur",
        type=EffectType.KEYFRAME,
        config={"focus": Position(x=480, y=270), "amount": Range(lower=1, upper=3)},
    )
    secondary = Effect(
        id="sec-1",
        name="glow",
        type=EffectType.SECONDARY,
        config={"anchor": {"name": "position", "x": 1920, "y": 1080}, "strength": 0.5},
    )
    return Effect(
        id="fx-1",
        name="orbit",
        type=EffectType.PRIMARY,
        config={
            "center": Position(x=960, y=540),
            "path": ArcPath(center=Position(x=960, y=540), radius=300),
            "offset": Point(x=10, y=20),
            "rings": [Position(x=0, y=0), {"label": "outer", "at": Position(x=1920, y=0)}],
            "color": ColorSelection(),
            "spread": PercentageRange(),
            "speed": 4,
        },
        secondary_effects=[secondary],
        keyframe_effects=[keyframe],
    )


@pytest.fixture
def static_effect() -> Effect:
    """Effect without any canvas-relative geometry."""
    return Effect(
        id="fx-2",
        name="grain",
        type=EffectType.FINAL_IMAGE,
        config={"amount": 0.3, "origin": Point(x=5, y=5), "tags": ["noise"]},
    )
