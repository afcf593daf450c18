"""Schema synthesis from an effect's default configuration instance.

Every property of the default instance becomes exactly one ``FieldSchema``
(reserved bookkeeping names excepted). Classification is an ordered
decision list; the first matching rule wins and the final rule accepts
anything, so no property is ever dropped.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import re
from typing import Any

from canvasfx.core.schema.enums import FieldKind
from canvasfx.core.schema.labels import format_label
from canvasfx.core.schema.models import FieldConstraints, FieldSchema
from canvasfx.core.values import DeserializationError, deserialize, is_typed_payload, tags
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

_RESERVED_NAME = re.compile(r"^__\w+__$")

_COLOR_SUFFIXES = ("color", "colour")
_NOT_COLOR_SUFFIXES = ("mode", "type", "style")
_TIMELINE_STEP_KEYS = frozenset({"minPercentage", "maxPercentage", "max", "times", "type"})

SPARSITY_OPTIONS: tuple[int, ...] = tuple(d for d in range(1, 361) if 360 % d == 0)

STROKE_CONSTRAINTS = FieldConstraints(min=0, max=20, step=1)
OPACITY_CONSTRAINTS = FieldConstraints(min=0, max=1, step=0.01)
DEFAULT_NUMBER_CONSTRAINTS = FieldConstraints(min=0, max=100, step=1)

_TYPED_KINDS: tuple[tuple[type[TypedValueBase], FieldKind], ...] = (
    (Range, FieldKind.RANGE),
    (DynamicRange, FieldKind.DYNAMIC_RANGE),
    (Position, FieldKind.POSITION),
    (Point, FieldKind.POINT),
    (ArcPath, FieldKind.ARC_PATH),
    (PercentageOfSide, FieldKind.PERCENTAGE),
    (PercentageRange, FieldKind.PERCENTAGE_RANGE),
    (ColorSelection, FieldKind.COLOR_PICKER),
)


def is_reserved_name(name: str) -> bool:
    """Whether a property is bookkeeping rather than configuration."""
    return bool(_RESERVED_NAME.match(name)) or name in tags.METADATA_KEYS


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_color_name(lowered: str) -> bool:
    return lowered.endswith(_COLOR_SUFFIXES) and not lowered.endswith(_NOT_COLOR_SUFFIXES)


def _is_timeline(items: list[Any] | tuple[Any, ...]) -> bool:
    return bool(items) and all(
        isinstance(item, Mapping) and _TIMELINE_STEP_KEYS <= item.keys() for item in items
    )


def _number_constraints(lowered: str, fallback: FieldConstraints) -> FieldConstraints:
    if "stroke" in lowered or "thickness" in lowered:
        return STROKE_CONSTRAINTS
    if "opacity" in lowered:
        return OPACITY_CONSTRAINTS
    return fallback


def _runtime_kind(value: Any) -> str:
    if isinstance(value, OpaqueValue):
        return value.tag
    if isinstance(value, Mapping):
        return "Object"
    return type(value).__name__


def _field(
    name: str,
    kind: FieldKind,
    value: Any,
    *,
    label: str | None = None,
    constraints: FieldConstraints | None = None,
    read_only: bool = False,
) -> FieldSchema:
    return FieldSchema(
        name=name,
        label=label or format_label(name),
        kind=kind,
        constraints=constraints,
        default_value=value,
        read_only=read_only,
    )


def _classify_sequence(name: str, lowered: str, value: list[Any] | tuple[Any, ...]) -> FieldSchema:
    if _is_timeline(value):
        return _field(name, FieldKind.MULTISTEP, value)
    if "algorithm" in lowered or "findvalue" in lowered:
        return _field(name, FieldKind.ALGORITHM_LIST, value)
    if "strategy" in lowered and all(isinstance(item, str) for item in value):
        return _field(
            name,
            FieldKind.MULTI_SELECT,
            value,
            constraints=FieldConstraints(options=list(value)),
        )
    if "sparsity" in lowered or "factor" in lowered:
        return _field(
            name,
            FieldKind.SPARSITY_FACTOR,
            value,
            constraints=FieldConstraints(options=list(SPARSITY_OPTIONS)),
        )
    return _field(name, FieldKind.JSON, value, label=f"{format_label(name)} (Array)")


def _classify_structural(name: str, lowered: str, value: Mapping[str, Any]) -> FieldSchema | None:
    """Shape-based fallback for untagged objects."""
    if _is_number(value.get("x")) and _is_number(value.get("y")):
        if any(hint in lowered for hint in ("center", "position", "point")):
            return _field(name, FieldKind.POSITION, value)
        return _field(name, FieldKind.POINT, value)
    if "lower" in value and "upper" in value:
        return _field(name, FieldKind.RANGE, value)
    if "bottom" in value and "top" in value:
        return _field(name, FieldKind.DYNAMIC_RANGE, value)
    return None


def classify(
    name: str,
    value: Any,
    *,
    number_defaults: FieldConstraints = DEFAULT_NUMBER_CONSTRAINTS,
) -> FieldSchema:
    """Build the field descriptor for a single property.

    Args:
        name: Property name.
        value: Default value of the property (typed or wire form).
        number_defaults: Constraints for numbers no name heuristic matches.

    Returns:
        Field descriptor; never raises for any value.
    """
    lowered = name.lower()
    if is_typed_payload(value):
        try:
            value = deserialize(value)
        except DeserializationError as e:
            logger.warning("Could not type default of %r, keeping it raw: %s", name, e)

    if _is_color_name(lowered):
        return _field(name, FieldKind.COLOR_PICKER, value)
    if callable(value):
        return _field(
            name,
            FieldKind.READ_ONLY,
            value,
            label=f"{format_label(name)} (Function)",
            read_only=True,
        )
    if value is None:
        return _field(
            name,
            FieldKind.READ_ONLY,
            value,
            label=f"{format_label(name)} (Not Set)",
            read_only=True,
        )
    if isinstance(value, (list, tuple)):
        return _classify_sequence(name, lowered, value)
    if isinstance(value, bool):
        return _field(name, FieldKind.BOOLEAN, value)
    if _is_number(value):
        return _field(
            name,
            FieldKind.NUMBER,
            value,
            constraints=_number_constraints(lowered, number_defaults),
        )
    if isinstance(value, str):
        return _field(name, FieldKind.TEXT, value)
    for model_type, kind in _TYPED_KINDS:
        if isinstance(value, model_type):
            return _field(name, kind, value)
    if isinstance(value, Mapping):
        structural = _classify_structural(name, lowered, value)
        if structural is not None:
            return structural

    label = f"{format_label(name)} ({_runtime_kind(value)})"
    return _field(name, FieldKind.JSON, value, label=label)


def synthesize(
    default_instance: Mapping[str, Any],
    *,
    overrides: Mapping[str, FieldConstraints] | None = None,
    number_defaults: FieldConstraints = DEFAULT_NUMBER_CONSTRAINTS,
) -> list[FieldSchema]:
    """Synthesize the field schema of an effect's default configuration.

    Args:
        default_instance: Property name -> default value, typed or wire form.
        overrides: Per-property constraints replacing the synthesized ones.
        number_defaults: Constraints for numbers no name heuristic matches.

    Returns:
        One field per non-reserved property, in input order.
    """
    fields: list[FieldSchema] = []
    for name, value in default_instance.items():
        if is_reserved_name(name):
            continue
        field = classify(name, value, number_defaults=number_defaults)
        if overrides and name in overrides:
            field = field.model_copy(update={"constraints": overrides[name]})
        fields.append(field)

    logger.debug("Synthesized %d fields from %d properties", len(fields), len(default_instance))
    return fields
