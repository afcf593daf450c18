"""Canvas-relative geometry scaling.

When the target resolution changes, every ``Position`` and ``ArcPath``
anywhere in an effect list (including attached secondary and keyframe
effects, nested objects and arrays) is rescaled to the new canvas. Bare
``Point`` values and everything else are returned untouched, by reference.

Arc radii scale by the geometric mean of the x and y factors, so a
non-uniform change preserves the arc's area ratio to the canvas and a
uniform change scales the radius exactly like the center.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging
import math
from typing import Any

from canvasfx.core.effects import Effect, EffectConfig
from canvasfx.core.resolution import ResolutionLookup, get_dimensions
from canvasfx.core.scaling.models import ScalingOptions
from canvasfx.core.values import tags
from canvasfx.core.values.models import ArcPath, Number, OpaqueValue, Position, TypedValueBase

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_dimensions(width: Any, height: Any, label: str) -> None:
    for value in (width, height):
        if not _is_number(value) or not math.isfinite(value) or value <= 0:
            raise ValueError(f"Invalid {label} canvas dimensions: {width}x{height}")


@dataclass
class _ScaleContext:
    """Scale factors for one rescale, plus a count of scaled nodes."""

    old_width: Number
    old_height: Number
    new_width: Number
    new_height: Number
    options: ScalingOptions
    scaled: int = 0

    def _finish(self, value: float, upper: float) -> Number:
        if self.options.round_to_pixel:
            value = math.floor(value + 0.5)
        if self.options.clamp_to_canvas:
            value = min(max(value, 0), upper)
        return value

    def x(self, value: Number) -> Number:
        return self._finish(value * self.new_width / self.old_width, self.new_width - 1)

    def y(self, value: Number) -> Number:
        return self._finish(value * self.new_height / self.old_height, self.new_height - 1)

    def radius(self, value: Number) -> Number:
        if self.new_width * self.old_height == self.new_height * self.old_width:
            scaled = value * self.new_width / self.old_width
        else:
            factor = math.sqrt(
                (self.new_width * self.new_height) / (self.old_width * self.old_height)
            )
            scaled = value * factor
        if self.options.round_to_pixel:
            scaled = math.floor(scaled + 0.5)
        if self.options.clamp_to_canvas:
            max_radius = min(self.new_width, self.new_height) / 2
            scaled = min(max(scaled, self.options.min_radius), max_radius)
        return scaled


def _scale_typed(value: TypedValueBase, ctx: _ScaleContext) -> TypedValueBase:
    if isinstance(value, Position):
        ctx.scaled += 1
        return Position(x=ctx.x(value.x), y=ctx.y(value.y))
    if isinstance(value, ArcPath):
        ctx.scaled += 1
        return value.model_copy(
            update={
                "center": Position(x=ctx.x(value.center.x), y=ctx.y(value.center.y)),
                "radius": ctx.radius(value.radius),
            }
        )
    if isinstance(value, OpaqueValue):
        props = _scale_entries(value.props, ctx)
        if props is value.props:
            return value
        return value.model_copy(update={"props": props})
    # Point and every other typed value are not canvas-relative
    return value


def _scale_wire_geometry(
    node: dict[str, Any], kind: str, ctx: _ScaleContext
) -> dict[str, Any] | None:
    """Scale a serialized position/arc-path, or None if it is malformed."""
    if kind == tags.POSITION_KIND:
        if not (_is_number(node.get("x")) and _is_number(node.get("y"))):
            return None
        ctx.scaled += 1
        return {**node, "x": ctx.x(node["x"]), "y": ctx.y(node["y"])}

    center = node.get("center")
    if not (
        isinstance(center, Mapping) and _is_number(center.get("x")) and _is_number(center.get("y"))
    ):
        return None
    ctx.scaled += 1
    scaled = {**node, "center": {**center, "x": ctx.x(center["x"]), "y": ctx.y(center["y"])}}
    if _is_number(node.get("radius")):
        scaled["radius"] = ctx.radius(node["radius"])
    return scaled


def _scale_entries(node: Mapping[str, Any], ctx: _ScaleContext) -> Any:
    """Scale the values of a mapping without treating it as geometry itself."""
    changed = False
    result: dict[str, Any] = {}
    for key, value in node.items():
        new_value = _scale_node(value, ctx)
        changed = changed or new_value is not value
        result[key] = new_value
    return result if changed else node


def _scale_mapping(node: Mapping[str, Any], ctx: _ScaleContext) -> Any:
    kind = tags.geometry_kind(dict(node))
    if kind is not None:
        scaled = _scale_wire_geometry(dict(node), kind, ctx)
        if scaled is not None:
            return scaled
    return _scale_entries(node, ctx)


def _scale_node(node: Any, ctx: _ScaleContext) -> Any:
    if isinstance(node, TypedValueBase):
        return _scale_typed(node, ctx)
    if isinstance(node, Mapping):
        return _scale_mapping(node, ctx)
    if isinstance(node, (list, tuple)):
        items = [_scale_node(item, ctx) for item in node]
        if all(new is old for new, old in zip(items, node, strict=True)):
            return node
        return type(node)(items)
    return node


def _scale_effect(effect: Effect, ctx: _ScaleContext) -> Effect:
    config = _scale_entries(effect.config, ctx)
    secondary = [_scale_effect(e, ctx) for e in effect.secondary_effects]
    keyframe = [_scale_effect(e, ctx) for e in effect.keyframe_effects]

    unchanged = (
        config is effect.config
        and all(new is old for new, old in zip(secondary, effect.secondary_effects, strict=True))
        and all(new is old for new, old in zip(keyframe, effect.keyframe_effects, strict=True))
    )
    if unchanged:
        return effect
    return effect.model_copy(
        update={"config": config, "secondary_effects": secondary, "keyframe_effects": keyframe}
    )


def _context(
    old_width: Number,
    old_height: Number,
    new_width: Number,
    new_height: Number,
    options: ScalingOptions | None,
) -> _ScaleContext:
    _validate_dimensions(old_width, old_height, "old")
    _validate_dimensions(new_width, new_height, "new")
    return _ScaleContext(
        old_width=old_width,
        old_height=old_height,
        new_width=new_width,
        new_height=new_height,
        options=options or ScalingOptions(),
    )


def scale_value(
    value: Any,
    old_width: Number,
    old_height: Number,
    new_width: Number,
    new_height: Number,
    *,
    options: ScalingOptions | None = None,
) -> Any:
    """Rescale a single configuration value (typed, wire dict, list or primitive).

    Raises:
        ValueError: If any dimension is not a positive finite number.
    """
    ctx = _context(old_width, old_height, new_width, new_height, options)
    if old_width == new_width and old_height == new_height:
        return value
    return _scale_node(value, ctx)


def scale_config(
    config: EffectConfig,
    old_width: Number,
    old_height: Number,
    new_width: Number,
    new_height: Number,
    *,
    options: ScalingOptions | None = None,
) -> EffectConfig:
    """Rescale every position in a single configuration tree.

    Returns:
        The same config object when nothing needed scaling, otherwise a new one.

    Raises:
        ValueError: If any dimension is not a positive finite number.
    """
    ctx = _context(old_width, old_height, new_width, new_height, options)
    if old_width == new_width and old_height == new_height:
        return config
    return _scale_entries(config, ctx)


def scale_effects(
    effects: Sequence[Effect],
    old_width: Number,
    old_height: Number,
    new_width: Number,
    new_height: Number,
    *,
    options: ScalingOptions | None = None,
) -> list[Effect]:
    """Rescale all canvas-relative geometry in an effect list.

    Pure: the input list and its effects are never mutated. Effects
    without any position come back as the same objects.

    Args:
        effects: Project effect list.
        old_width: Previous canvas width.
        old_height: Previous canvas height.
        new_width: New canvas width.
        new_height: New canvas height.
        options: Optional rounding/clamping behaviour.

    Returns:
        New list of effects.

    Raises:
        ValueError: If any dimension is not a positive finite number.
    """
    ctx = _context(old_width, old_height, new_width, new_height, options)

    if old_width == new_width and old_height == new_height:
        logger.debug("Canvas unchanged (%sx%s), skipping position scaling", new_width, new_height)
        return list(effects)

    scaled = [_scale_effect(effect, ctx) for effect in effects]
    logger.debug(
        "Scaled %d positions across %d effects (%sx%s -> %sx%s)",
        ctx.scaled,
        len(scaled),
        old_width,
        old_height,
        new_width,
        new_height,
    )
    return scaled


def rescale_for_resolution(
    effects: Sequence[Effect],
    old_key: ResolutionLookup,
    old_is_horizontal: bool,
    new_key: ResolutionLookup,
    new_is_horizontal: bool,
    *,
    options: ScalingOptions | None = None,
) -> list[Effect]:
    """Rescale effects for a change of resolution profile and/or orientation.

    Raises:
        UnknownResolutionError: If either resolution key is not in the catalog.
    """
    old = get_dimensions(old_key, old_is_horizontal)
    new = get_dimensions(new_key, new_is_horizontal)
    logger.info(
        "Rescaling %d effects from %dx%d to %dx%d",
        len(effects),
        old.width,
        old.height,
        new.width,
        new.height,
    )
    return scale_effects(
        effects, old.width, old.height, new.width, new.height, options=options
    )
