"""Effect models.

An effect is one configurable visual operation in the render pipeline. It
owns its configuration and may carry attached secondary and keyframe
effects, each with their own configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from canvasfx.core.values import deserialize, serialize
from canvasfx.core.values.models import Number

EffectConfig = dict[str, Any]


class EffectType(str, Enum):
    """Role of an effect in the pipeline."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    FINAL_IMAGE = "finalImage"
    SPECIALTY = "specialty"
    KEYFRAME = "keyframe"


def _normalize_wire(data: Mapping[str, Any]) -> dict[str, Any]:
    """Fill name-derived defaults and convert the legacy attachment shape.

    Older projects store ``attachedEffects: {secondary: [...], keyFrame: [...]}``
    instead of top-level ``secondaryEffects``/``keyframeEffects``.
    """
    result = dict(data)
    attached = result.pop("attachedEffects", None)
    if isinstance(attached, Mapping):
        result.setdefault("secondaryEffects", attached.get("secondary") or [])
        result.setdefault("keyframeEffects", attached.get("keyFrame") or [])

    name = result.get("name")
    if name:
        if not (result.get("className") or result.get("class_name")):
            result["className"] = name
        if not (result.get("registryKey") or result.get("registry_key")):
            result["registryKey"] = name
    return result


class Effect(BaseModel):
    """A configured effect in a project's effect list.

    Attributes:
        id: Unique effect identifier.
        name: Effect name as registered with the configuration authority.
        class_name: Effect class name (defaults to name).
        registry_key: Registry lookup key (defaults to name).
        config: Property name -> typed value, primitive, list, or dict.
        type: Role of the effect in the pipeline.
        percent_chance: Chance (0-100) the effect is applied per render.
        visible: Whether the effect is enabled.
        secondary_effects: Attached secondary effects.
        keyframe_effects: Attached keyframe effects.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    class_name: str = Field(default="", alias="className")
    registry_key: str = Field(default="", alias="registryKey")
    config: EffectConfig
    type: EffectType
    percent_chance: Number = Field(default=100, ge=0, le=100, alias="percentChance")
    visible: bool = True
    secondary_effects: list[Effect] = Field(default_factory=list, alias="secondaryEffects")
    keyframe_effects: list[Effect] = Field(default_factory=list, alias="keyframeEffects")

    @model_validator(mode="before")
    @classmethod
    def _apply_wire_defaults(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return _normalize_wire(data)
        return data

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> Effect:
        """Build an effect from its persisted/IPC form, typing the config.

        Args:
            payload: Wire dict (camelCase keys, tagged config values).

        Returns:
            Effect with deserialized config and attached effects.

        Raises:
            ValidationError: If required fields are missing or invalid.
        """
        data = _normalize_wire(payload)
        if isinstance(data.get("config"), Mapping):
            data["config"] = deserialize(dict(data["config"]))
        for key in ("secondaryEffects", "keyframeEffects"):
            data[key] = [
                cls.from_wire(child) if isinstance(child, Mapping) else child
                for child in data.get(key) or []
            ]
        return cls.model_validate(data)

    def to_wire(self) -> dict[str, Any]:
        """Convert to the persisted/IPC form with tagged config values."""
        return {
            "id": self.id,
            "name": self.name,
            "className": self.class_name,
            "registryKey": self.registry_key,
            "config": serialize(self.config),
            "type": self.type.value,
            "percentChance": self.percent_chance,
            "visible": self.visible,
            "secondaryEffects": [e.to_wire() for e in self.secondary_effects],
            "keyframeEffects": [e.to_wire() for e in self.keyframe_effects],
        }

    def iter_tree(self) -> list[Effect]:
        """This effect followed by all attached effects, depth-first."""
        result: list[Effect] = [self]
        for child in (*self.secondary_effects, *self.keyframe_effects):
            result.extend(child.iter_tree())
        return result
