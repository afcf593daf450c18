"""Wire (de)serialization for typed configuration values.

``deserialize`` turns a JSON-compatible payload received from the
configuration authority into typed values; ``serialize`` produces the same
vocabulary for the trip back. See ``canvasfx.core.values.tags`` for the
discriminator channels.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
import logging
from typing import Any

from canvasfx.core.values import tags
from canvasfx.core.values.enums import ColorSelectionType, Side
from canvasfx.core.values.models import (
    ArcPath,
    ColorSelection,
    DynamicRange,
    OpaqueValue,
    PercentageOfSide,
    PercentageRange,
    Point,
    Position,
    Range,
    TypedValueBase,
)

logger = logging.getLogger(__name__)

_JSON_SCALARS = (str, int, float, bool, type(None))


class DeserializationError(TypeError):
    """Raised when a payload is not a JSON value at all."""


class SerializationError(TypeError):
    """Raised when a value cannot be represented on the wire."""


def _get(props: Mapping[str, Any], key: str, default: Any) -> Any:
    """Property value, treating a missing key and null alike."""
    value = props.get(key)
    return default if value is None else value


def _strip_metadata(obj: Mapping[str, Any], *extra: str) -> dict[str, Any]:
    skip = tags.METADATA_KEYS.union(extra)
    return {k: v for k, v in obj.items() if k not in skip}


def _default_percentage_range() -> PercentageRange:
    return PercentageRange(
        lower=PercentageOfSide(percent=0.5, side=Side.SHORTEST),
        upper=PercentageOfSide(percent=0.5, side=Side.LONGEST),
    )


def _percentage_of_side(raw: Any, fallback_side: Side) -> PercentageOfSide | None:
    """Build a bound of a PercentageRange, or None when it carries no data."""
    if isinstance(raw, PercentageOfSide):
        return raw
    if not isinstance(raw, Mapping):
        return None
    tag = tags.type_tag(dict(raw))
    if tag == tags.PERCENTAGE_SHORTEST_TAG:
        side = Side.SHORTEST
    elif tag == tags.PERCENTAGE_LONGEST_TAG:
        side = Side.LONGEST
    else:
        side = Side(_get(raw, "side", fallback_side))
    return PercentageOfSide(percent=_get(raw, "percent", 0.5), side=side)


def _range(raw: Any) -> Range:
    if isinstance(raw, Range):
        return raw
    if isinstance(raw, Mapping):
        return Range(lower=_get(raw, "lower", 0), upper=_get(raw, "upper", 1))
    return Range()


def _position(raw: Any) -> Position:
    if isinstance(raw, Position):
        return raw
    if isinstance(raw, Mapping):
        return Position(x=_get(raw, "x", 0), y=_get(raw, "y", 0))
    return Position()


def _build_percentage_range(props: dict[str, Any]) -> PercentageRange:
    if props.get(tags.FUNCTIONS_DETECTED_KEY):
        logger.debug("PercentageRange bounds were not data, using defaults")
        return _default_percentage_range()
    lower = _percentage_of_side(props.get("lower"), Side.SHORTEST)
    upper = _percentage_of_side(props.get("upper"), Side.LONGEST)
    if lower is None or upper is None:
        logger.debug("PercentageRange is missing a bound, using defaults")
        return _default_percentage_range()
    return PercentageRange(lower=lower, upper=upper)


def _build_arc_path(props: dict[str, Any]) -> ArcPath:
    return ArcPath(
        center=_position(props.get("center")),
        radius=_get(props, "radius", 100),
        start_angle=_get(props, "startAngle", 0),
        end_angle=_get(props, "endAngle", 360),
        direction=_get(props, "direction", 1),
    )


_BUILDERS: dict[str, Callable[[dict[str, Any]], TypedValueBase]] = {
    tags.PERCENTAGE_RANGE_TAG: _build_percentage_range,
    tags.PERCENTAGE_SHORTEST_TAG: lambda p: PercentageOfSide(
        percent=_get(p, "percent", 0.5), side=Side.SHORTEST
    ),
    tags.PERCENTAGE_LONGEST_TAG: lambda p: PercentageOfSide(
        percent=_get(p, "percent", 0.5), side=Side.LONGEST
    ),
    tags.RANGE_TAG: _range,
    tags.DYNAMIC_RANGE_TAG: lambda p: DynamicRange(
        bottom=_range(p.get("bottom")), top=_range(p.get("top"))
    ),
    tags.POINT_TAG: lambda p: Point(x=_get(p, "x", 0), y=_get(p, "y", 0)),
    tags.POSITION_KIND: _position,
    tags.ARC_PATH_KIND: _build_arc_path,
    tags.COLOR_PICKER_TAG: lambda p: ColorSelection(
        selection_type=ColorSelectionType(
            _get(p, "selectionType", ColorSelectionType.SINGLE)
        ),
        color_value=_get(p, "colorValue", "#000000"),
    ),
}


def _opaque(tag: str, props: dict[str, Any]) -> OpaqueValue:
    # callables are kept as is; serialize drops them on the way back
    return OpaqueValue(
        tag=tag,
        props={k: v if callable(v) else deserialize(v) for k, v in props.items()},
    )


def _deserialize_tagged(tag: str, obj: dict[str, Any], is_geometry: bool) -> TypedValueBase:
    # geometry objects keep their discriminator in `name`, which is not a property
    props = _strip_metadata(obj, tags.KIND_KEY) if is_geometry else _strip_metadata(obj)
    builder = _BUILDERS.get(tag)
    if builder is None:
        logger.warning("Unknown value type '%s', preserving it as opaque", tag)
        return _opaque(tag, props)
    try:
        return builder(props)
    except ValueError as e:  # pydantic ValidationError is a ValueError
        logger.warning("Malformed '%s' payload, preserving it as opaque: %s", tag, e)
        return _opaque(tag, props)


def deserialize(payload: Any) -> Any:
    """Rebuild typed values from a wire payload.

    Arrays map element-wise, untagged objects have each property
    deserialized, tagged objects become the matching typed value. Unknown
    or malformed tagged objects become an ``OpaqueValue`` so that nothing
    from a newer authority is lost.

    Args:
        payload: Any JSON value (already-typed values pass through).

    Returns:
        Typed value, primitive, list, or dict.

    Raises:
        DeserializationError: If payload is not a JSON value.
    """
    if isinstance(payload, TypedValueBase):
        return payload
    if isinstance(payload, (list, tuple)):
        return [deserialize(item) for item in payload]
    if isinstance(payload, dict):
        for key in payload:
            if not isinstance(key, str):
                raise DeserializationError(f"Object keys must be strings, got {key!r}")
        kind = tags.geometry_kind(payload)
        if kind is not None:
            return _deserialize_tagged(kind, payload, is_geometry=True)
        tag = tags.type_tag(payload)
        if tag is not None:
            return _deserialize_tagged(tag, payload, is_geometry=False)
        return {key: deserialize(value) for key, value in payload.items()}
    if isinstance(payload, _JSON_SCALARS):
        return payload
    raise DeserializationError(f"Not a JSON value: {type(payload).__name__}")


def _serialize_typed(value: TypedValueBase) -> dict[str, Any]:
    if isinstance(value, Position):
        return {tags.KIND_KEY: tags.POSITION_KIND, "x": value.x, "y": value.y}
    if isinstance(value, ArcPath):
        return {
            tags.KIND_KEY: tags.ARC_PATH_KIND,
            "center": {"x": value.center.x, "y": value.center.y},
            "radius": value.radius,
            "startAngle": value.start_angle,
            "endAngle": value.end_angle,
            "direction": value.direction,
        }
    if isinstance(value, Range):
        return {tags.TYPE_KEY: value.wire_tag, "lower": value.lower, "upper": value.upper}
    if isinstance(value, DynamicRange):
        return {
            tags.TYPE_KEY: value.wire_tag,
            "bottom": _serialize_typed(value.bottom),
            "top": _serialize_typed(value.top),
        }
    if isinstance(value, Point):
        return {tags.TYPE_KEY: value.wire_tag, "x": value.x, "y": value.y}
    if isinstance(value, PercentageOfSide):
        return {tags.TYPE_KEY: value.wire_tag, "percent": value.percent, "side": value.side.value}
    if isinstance(value, PercentageRange):
        return {
            tags.TYPE_KEY: value.wire_tag,
            "lower": _serialize_typed(value.lower),
            "upper": _serialize_typed(value.upper),
        }
    if isinstance(value, ColorSelection):
        return {
            tags.TYPE_KEY: value.wire_tag,
            "selectionType": value.selection_type.value,
            "colorValue": value.color_value,
        }
    if isinstance(value, OpaqueValue):
        body = {key: serialize(prop) for key, prop in value.props.items() if not callable(prop)}
        # geometry tags travel on the name channel even when malformed
        key = tags.KIND_KEY if value.tag in tags.GEOMETRY_KINDS else tags.TYPE_KEY
        return {key: value.tag, **body}
    raise SerializationError(f"Unsupported typed value: {type(value).__name__}")


def _serialize_mapping(obj: Mapping[Any, Any]) -> dict[str, Any]:
    if tags.type_tag(dict(obj)) == tags.PERCENTAGE_RANGE_TAG and (
        callable(obj.get("lower")) or callable(obj.get("upper"))
    ):
        return {
            tags.TYPE_KEY: tags.PERCENTAGE_RANGE_TAG,
            tags.FUNCTIONS_DETECTED_KEY: True,
            "lower": None,
            "upper": None,
        }
    result: dict[str, Any] = {}
    for key, value in obj.items():
        if not isinstance(key, str):
            raise SerializationError(f"Object keys must be strings, got {key!r}")
        if callable(value):
            # functions cannot cross the process boundary
            continue
        result[key] = serialize(value)
    return result


def serialize(value: Any) -> Any:
    """Convert typed values back into a JSON-compatible payload.

    Emits the same tag vocabulary ``deserialize`` understands. Callables
    inside objects are dropped; inside arrays they become null.

    Args:
        value: Typed value, primitive, list, or dict.

    Returns:
        JSON-compatible value.

    Raises:
        SerializationError: If value has no wire representation.
    """
    if isinstance(value, TypedValueBase):
        return _serialize_typed(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, _JSON_SCALARS):
        return value
    if isinstance(value, Mapping):
        return _serialize_mapping(value)
    if isinstance(value, (list, tuple)):
        return [None if callable(item) else serialize(item) for item in value]
    raise SerializationError(f"Cannot serialize {type(value).__name__}")
