"""Typed configuration values and their wire (de)serialization."""

from canvasfx.core.values.codec import (
    DeserializationError,
    SerializationError,
    deserialize,
    serialize,
)
from canvasfx.core.values.enums import ColorSelectionType, Side
from canvasfx.core.values.models import (
    TYPED_VALUE_TYPES,
    ArcPath,
    ColorSelection,
    DynamicRange,
    OpaqueValue,
    PercentageOfSide,
    PercentageRange,
    Point,
    Position,
    Range,
    TypedValue,
    TypedValueBase,
)
from canvasfx.core.values.tags import is_typed_payload

__all__ = [
    # Codec
    "deserialize",
    "serialize",
    "is_typed_payload",
    "DeserializationError",
    "SerializationError",
    # Models
    "ArcPath",
    "ColorSelection",
    "DynamicRange",
    "OpaqueValue",
    "PercentageOfSide",
    "PercentageRange",
    "Point",
    "Position",
    "Range",
    "TypedValue",
    "TypedValueBase",
    "TYPED_VALUE_TYPES",
    # Enums
    "ColorSelectionType",
    "Side",
]
