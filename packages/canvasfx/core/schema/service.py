"""Memoized schema synthesis backed by the configuration authority."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import copy
import logging
from typing import Any

from canvasfx.core.config.models import SchemaConfig
from canvasfx.core.schema.models import EffectSchema, FieldConstraints
from canvasfx.core.schema.protocols import ConfigAuthority
from canvasfx.core.schema.synthesizer import synthesize
from canvasfx.core.utils.logging import get_logger
from canvasfx.core.values import DeserializationError, deserialize

logger = logging.getLogger(__name__)


class EffectSchemaService:
    """Fetches default configurations and caches their synthesized schemas.

    Concurrent requests for the same effect share one in-flight fetch. A
    failed fetch propagates to every waiter and is not cached. Call
    ``clear_cache()`` whenever the effect catalog changes (e.g. plugins
    loaded or removed).

    Example:
        >>> service = EffectSchemaService(authority)
        >>> schema = await service.get_schema("fuzz-flare")
        >>> [f.kind for f in schema.fields]
    """

    def __init__(
        self,
        authority: ConfigAuthority,
        config: SchemaConfig | None = None,
        *,
        constraint_overrides: Mapping[str, Mapping[str, FieldConstraints]] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            authority: Source of default configurations.
            config: Cache and numeric-default settings.
            constraint_overrides: effect id -> property name -> constraints
                replacing the synthesized ones.
        """
        config = config or SchemaConfig()
        self._authority = authority
        self.enabled = config.cache_enabled
        self._number_defaults = FieldConstraints(
            min=config.number_default_min,
            max=config.number_default_max,
            step=config.number_default_step,
        )
        self._overrides = dict(constraint_overrides or {})
        self._schemas: dict[str, EffectSchema] = {}
        self._in_flight: dict[str, asyncio.Task[EffectSchema]] = {}
        # Bumped by clear_cache so fetches started earlier cannot repopulate
        self._generation = 0

    async def _build(self, effect_id: str) -> EffectSchema:
        log = get_logger(__name__, effect_id=effect_id)
        payload = await self._authority.get_default_config(effect_id)
        if not isinstance(payload, Mapping):
            raise DeserializationError(
                f"Default config of {effect_id!r} must be an object, got {type(payload).__name__}"
            )

        # in-process authorities may hand over functions; they become read-only fields
        default_instance = {
            name: value if callable(value) else deserialize(value)
            for name, value in payload.items()
        }
        fields = synthesize(
            default_instance,
            overrides=self._overrides.get(effect_id),
            number_defaults=self._number_defaults,
        )
        log.debug("Built schema for %s with %d fields", effect_id, len(fields))
        return EffectSchema(effect_id=effect_id, default_instance=default_instance, fields=fields)

    async def _fetch_and_cache(self, effect_id: str, generation: int) -> EffectSchema:
        try:
            schema = await self._build(effect_id)
        finally:
            if self._in_flight.get(effect_id) is asyncio.current_task():
                del self._in_flight[effect_id]

        if generation == self._generation:
            self._schemas[effect_id] = schema
        else:
            logger.debug("Discarding schema for %s fetched before cache clear", effect_id)
        return schema

    async def get_schema(self, effect_id: str) -> EffectSchema:
        """Return the schema of an effect, fetching it on first use.

        Args:
            effect_id: Effect identifier.

        Returns:
            EffectSchema with the deserialized default instance and fields.

        Raises:
            Exception: Whatever the authority raised; the failure is not cached.
        """
        if not self.enabled:
            return await self._build(effect_id)

        cached = self._schemas.get(effect_id)
        if cached is not None:
            logger.debug("Schema cache hit: %s", effect_id)
            return cached

        task = self._in_flight.get(effect_id)
        if task is None:
            logger.debug("Schema cache miss: %s", effect_id)
            task = asyncio.create_task(self._fetch_and_cache(effect_id, self._generation))
            self._in_flight[effect_id] = task

        # A cancelled waiter must not cancel the fetch other waiters share
        return await asyncio.shield(task)

    async def get_default_instance(self, effect_id: str) -> dict[str, Any]:
        """Return a copy of the deserialized default configuration of an effect.

        Callers may edit the copy freely; the cached schema is unaffected.
        """
        schema = await self.get_schema(effect_id)
        return copy.deepcopy(schema.default_instance)

    def clear_cache(self) -> None:
        """Drop cached schemas and detach in-flight fetches."""
        dropped = len(self._schemas)
        self._schemas.clear()
        self._in_flight.clear()
        self._generation += 1
        logger.info("Cleared schema cache (%d entries)", dropped)

    def cache_stats(self) -> dict[str, int]:
        """Counts of cached schemas and fetches still in flight."""
        return {"cached": len(self._schemas), "in_flight": len(self._in_flight)}
