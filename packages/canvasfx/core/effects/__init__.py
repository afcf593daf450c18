"""Effect list models."""

from canvasfx.core.effects.models import Effect, EffectConfig, EffectType

__all__ = [
    "Effect",
    "EffectConfig",
    "EffectType",
]
