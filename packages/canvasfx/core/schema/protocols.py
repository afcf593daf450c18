"""Protocols for the effect configuration authority."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConfigAuthority(Protocol):
    """Source of default effect configurations.

    The authority owns the effect implementations and ships each effect's
    default configuration across the process boundary in wire form.
    """

    async def get_default_config(self, effect_id: str) -> dict[str, Any]:
        """
        Fetch the default configuration instance of an effect.

        Args:
            effect_id: Effect identifier (registry key)

        Returns:
            Wire payload: property name -> tagged value or primitive

        Raises:
            KeyError: If the authority does not know the effect
        """
        ...
