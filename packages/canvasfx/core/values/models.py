"""Typed configuration value models.

The closed set of structured values an effect configuration may hold.
All models are immutable; edits replace a value, never mutate it.
"""

from __future__ import annotations

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from canvasfx.core.values import tags
from canvasfx.core.values.enums import ColorSelectionType, Side

# ints stay ints so untouched values serialize back exactly as received
Number = int | float


class TypedValueBase(BaseModel):
    """Base for all typed values.

    Every subclass exposes ``wire_tag``, the discriminator written to the
    wire for that variant.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class Range(TypedValueBase):
    """Numeric interval from which an effect samples a value."""

    wire_tag: ClassVar[str] = tags.RANGE_TAG

    lower: Number = 0
    upper: Number = 1


class DynamicRange(TypedValueBase):
    """Pair of ranges bounding a value that changes over the loop."""

    wire_tag: ClassVar[str] = tags.DYNAMIC_RANGE_TAG

    bottom: Range = Field(default_factory=Range)
    top: Range = Field(default_factory=Range)


class Point(TypedValueBase):
    """Bare 2D coordinate.

    Not canvas-relative: resolution changes leave it untouched.
    """

    wire_tag: ClassVar[str] = tags.POINT_TAG

    x: Number = 0
    y: Number = 0


class Position(TypedValueBase):
    """Canvas-relative coordinate that follows resolution changes."""

    wire_tag: ClassVar[str] = tags.POSITION_KIND

    x: Number = 0
    y: Number = 0


class PercentageOfSide(TypedValueBase):
    """Fraction of the canvas' shortest or longest side."""

    percent: float = Field(default=0.5, ge=0.0, le=1.0)
    side: Side = Side.SHORTEST

    @property
    def wire_tag(self) -> str:  # type: ignore[override]
        """Tag depends on the side; each side has its own wire sub-kind."""
        if self.side is Side.SHORTEST:
            return tags.PERCENTAGE_SHORTEST_TAG
        return tags.PERCENTAGE_LONGEST_TAG


class PercentageRange(TypedValueBase):
    """Range whose bounds are fractions of canvas sides."""

    wire_tag: ClassVar[str] = tags.PERCENTAGE_RANGE_TAG

    lower: PercentageOfSide = Field(
        default_factory=lambda: PercentageOfSide(percent=0.5, side=Side.SHORTEST)
    )
    upper: PercentageOfSide = Field(
        default_factory=lambda: PercentageOfSide(percent=0.5, side=Side.LONGEST)
    )


class ColorSelection(TypedValueBase):
    """Color picker state: a fixed color or a bucket draw."""

    wire_tag: ClassVar[str] = tags.COLOR_PICKER_TAG

    selection_type: ColorSelectionType = Field(
        default=ColorSelectionType.SINGLE, alias="selectionType"
    )
    color_value: str | None = Field(default="#000000", alias="colorValue")


class ArcPath(TypedValueBase):
    """Circular arc traced around a canvas-relative center.

    Angles are in degrees; direction is 1 (clockwise) or -1.
    """

    wire_tag: ClassVar[str] = tags.ARC_PATH_KIND

    center: Position = Field(default_factory=Position)
    radius: Number = 100
    start_angle: Number = Field(default=0, alias="startAngle")
    end_angle: Number = Field(default=360, alias="endAngle")
    direction: Literal[1, -1] = 1


class OpaqueValue(TypedValueBase):
    """Tagged value of a type this package does not know.

    Preserves the tag and properties so payloads from newer or
    plugin-supplied types survive a round trip.
    """

    tag: str
    props: dict[str, Any] = Field(default_factory=dict)

    @property
    def wire_tag(self) -> str:  # type: ignore[override]
        return self.tag


TypedValue = (
    Range
    | DynamicRange
    | Point
    | Position
    | PercentageOfSide
    | PercentageRange
    | ColorSelection
    | ArcPath
    | OpaqueValue
)

TYPED_VALUE_TYPES: tuple[type[TypedValueBase], ...] = (
    Range,
    DynamicRange,
    Point,
    Position,
    PercentageOfSide,
    PercentageRange,
    ColorSelection,
    ArcPath,
    OpaqueValue,
)

__all__ = [
    "ArcPath",
    "ColorSelection",
    "DynamicRange",
    "Number",
    "OpaqueValue",
    "PercentageOfSide",
    "PercentageRange",
    "Point",
    "Position",
    "Range",
    "TYPED_VALUE_TYPES",
    "TypedValue",
    "TypedValueBase",
]
