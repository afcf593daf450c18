"""Wire vocabulary for typed configuration values.

Serialized values carry their variant on one of two discriminator channels:

- ``__type``: the general type tag, used by every variant that is NOT
  canvas-relative geometry (``Range``, ``DynamicRange``, ``Point2D``,
  ``PercentageRange``, ``PercentageShortestSide``, ``PercentageLongestSide``,
  ``ColorPicker`` and any plugin-supplied tag).
- ``name``: reserved for geometry that follows the canvas when the target
  resolution changes (``position`` and ``arc-path``).

The second channel lets the position scaler find positions anywhere in a
configuration forest by inspecting a single key, without importing the full
type table. Legacy payloads may carry ``__className`` instead of ``__type``,
or put ``position``/``arc-path`` on the ``__type`` channel; both are accepted
on input and never emitted.
"""

from __future__ import annotations

from typing import Any, Final

TYPE_KEY: Final = "__type"
LEGACY_TYPE_KEY: Final = "__className"
KIND_KEY: Final = "name"

# Set by the authority when a PercentageRange held callables that could not
# cross the process boundary.
FUNCTIONS_DETECTED_KEY: Final = "_functionsDetected"

RANGE_TAG: Final = "Range"
DYNAMIC_RANGE_TAG: Final = "DynamicRange"
POINT_TAG: Final = "Point2D"
PERCENTAGE_RANGE_TAG: Final = "PercentageRange"
PERCENTAGE_SHORTEST_TAG: Final = "PercentageShortestSide"
PERCENTAGE_LONGEST_TAG: Final = "PercentageLongestSide"
COLOR_PICKER_TAG: Final = "ColorPicker"

POSITION_KIND: Final = "position"
ARC_PATH_KIND: Final = "arc-path"

GEOMETRY_KINDS: Final = frozenset({POSITION_KIND, ARC_PATH_KIND})

# Keys that describe a value rather than being one of its properties.
METADATA_KEYS: Final = frozenset({TYPE_KEY, LEGACY_TYPE_KEY})


def type_tag(obj: dict[str, Any]) -> str | None:
    """Return the general type tag of a wire object, if any."""
    tag = obj.get(TYPE_KEY, obj.get(LEGACY_TYPE_KEY))
    return tag if isinstance(tag, str) else None


def geometry_kind(obj: dict[str, Any]) -> str | None:
    """Return the geometry discriminator of a wire object, if any.

    ``name`` is only treated as a discriminator when it holds one of the
    reserved geometry kinds, so ordinary objects with a ``name`` property
    are left alone.
    """
    kind = obj.get(KIND_KEY)
    if isinstance(kind, str) and kind in GEOMETRY_KINDS:
        return kind
    tag = type_tag(obj)
    if tag in GEOMETRY_KINDS:
        return tag
    return None


def is_typed_payload(obj: Any) -> bool:
    """Whether obj is a wire object carrying either discriminator."""
    if not isinstance(obj, dict):
        return False
    return geometry_kind(obj) is not None or type_tag(obj) is not None
