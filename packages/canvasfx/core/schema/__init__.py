"""Field schema synthesis for effect configurations."""

from canvasfx.core.schema.enums import FieldKind
from canvasfx.core.schema.labels import format_label
from canvasfx.core.schema.models import EffectSchema, FieldConstraints, FieldSchema
from canvasfx.core.schema.protocols import ConfigAuthority
from canvasfx.core.schema.service import EffectSchemaService
from canvasfx.core.schema.synthesizer import classify, is_reserved_name, synthesize

__all__ = [
    "ConfigAuthority",
    "EffectSchema",
    "EffectSchemaService",
    "FieldConstraints",
    "FieldKind",
    "FieldSchema",
    "classify",
    "format_label",
    "is_reserved_name",
    "synthesize",
]
