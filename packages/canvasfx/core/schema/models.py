"""Field schema models."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from canvasfx.core.schema.enums import FieldKind
from canvasfx.core.values import SerializationError, serialize

logger = logging.getLogger(__name__)


class FieldConstraints(BaseModel):
    """Editor constraints for a field.

    Attributes:
        min: Lower bound for numeric fields.
        max: Upper bound for numeric fields.
        step: Increment for numeric fields.
        options: Allowed choices for selection fields.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float | None = None
    max: float | None = None
    step: float | None = Field(default=None, gt=0)
    options: list[Any] | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class FieldSchema(BaseModel):
    """Descriptor telling a UI layer how to edit one property.

    Attributes:
        name: Property name in the configuration.
        label: Human-readable label.
        kind: Editor kind.
        constraints: Numeric bounds or option list, when the kind has any.
        default_value: Value from the default instance.
        read_only: Whether the property cannot be edited.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(description="Property name")
    label: str = Field(description="Display label")
    kind: FieldKind = Field(description="Editor kind")
    constraints: FieldConstraints | None = Field(default=None, description="Editor constraints")
    default_value: Any = Field(default=None, description="Default value")
    read_only: bool = Field(default=False, description="Property is not editable")

    def to_wire(self) -> dict[str, Any]:
        """camelCase dict for the UI layer, typed defaults serialized.

        Defaults that cannot cross the process boundary (callables, arbitrary
        objects) are emitted as null.
        """
        default = None
        if not callable(self.default_value):
            try:
                default = serialize(self.default_value)
            except SerializationError as e:
                logger.warning("Default of field %s is not serializable: %s", self.name, e)
        wire: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "type": self.kind.value,
            "default": default,
            "readOnly": self.read_only,
        }
        if self.constraints is not None:
            wire.update(self.constraints.to_wire())
        return wire


class EffectSchema(BaseModel):
    """Synthesized schema of one effect."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    effect_id: str
    default_instance: dict[str, Any]
    fields: list[FieldSchema]

    def field(self, name: str) -> FieldSchema | None:
        return next((f for f in self.fields if f.name == name), None)
