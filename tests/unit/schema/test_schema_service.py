"""Tests for the memoized schema service (async)."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from canvasfx.core.config import SchemaConfig
from canvasfx.core.schema import (
    ConfigAuthority,
    EffectSchemaService,
    FieldConstraints,
    FieldKind,
)
from canvasfx.core.values import DeserializationError, Position


class FakeAuthority:
    """In-memory configuration authority that counts fetches."""

    def __init__(self, defaults: dict[str, dict[str, Any]]) -> None:
        self.defaults = defaults
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None
        self.fail_next = False

    async def get_default_config(self, effect_id: str) -> dict[str, Any]:
        self.calls.append(effect_id)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_next:
            self.fail_next = False
            raise RuntimeError("authority unavailable")
        return self.defaults[effect_id]


@pytest.fixture
def authority(wire_default_config: dict) -> FakeAuthority:
    """Provide an authority knowing two effects."""
    return FakeAuthority(
        {
            "fuzz-flare": wire_default_config,
            "grain": {"amount": 0.2, "origin": {"name": "position", "x": 1, "y": 2}},
        }
    )


@pytest.fixture
def service(authority: FakeAuthority) -> EffectSchemaService:
    """Provide a caching schema service."""
    return EffectSchemaService(authority)


class TestProtocol:
    """Authority protocol."""

    def test_fake_authority_satisfies_protocol(self, authority: FakeAuthority):
        """Structural typing accepts any object with get_default_config."""
        assert isinstance(authority, ConfigAuthority)


class TestGetSchema:
    """Fetching and caching schemas."""

    @pytest.mark.asyncio
    async def test_builds_schema(self, service: EffectSchemaService):
        """Schema holds the typed default instance and its fields."""
        schema = await service.get_schema("grain")

        assert schema.effect_id == "grain"
        assert schema.default_instance["origin"] == Position(x=1, y=2)
        assert [f.kind for f in schema.fields] == [FieldKind.NUMBER, FieldKind.POSITION]
        assert schema.field("origin").kind is FieldKind.POSITION
        assert schema.field("missing") is None

    @pytest.mark.asyncio
    async def test_cache_hit(self, service: EffectSchemaService, authority: FakeAuthority):
        """Second request is served from the cache."""
        first = await service.get_schema("grain")
        second = await service.get_schema("grain")

        assert first is second
        assert authority.calls == ["grain"]
        assert service.cache_stats() == {"cached": 1, "in_flight": 0}

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_fetch(
        self, service: EffectSchemaService, authority: FakeAuthority
    ):
        """Concurrent requests for one effect trigger a single fetch."""
        authority.gate = asyncio.Event()

        tasks = [asyncio.create_task(service.get_schema("fuzz-flare")) for _ in range(3)]
        await asyncio.sleep(0)
        assert service.cache_stats()["in_flight"] == 1

        authority.gate.set()
        results = await asyncio.gather(*tasks)

        assert authority.calls == ["fuzz-flare"]
        assert all(r is results[0] for r in results)

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(
        self, service: EffectSchemaService, authority: FakeAuthority
    ):
        """A failed fetch propagates and the next request retries."""
        authority.fail_next = True

        with pytest.raises(RuntimeError, match="unavailable"):
            await service.get_schema("grain")
        assert service.cache_stats() == {"cached": 0, "in_flight": 0}

        schema = await service.get_schema("grain")
        assert schema.effect_id == "grain"
        assert authority.calls == ["grain", "grain"]

    @pytest.mark.asyncio
    async def test_unknown_effect_propagates(self, service: EffectSchemaService):
        """Authority errors reach the caller."""
        with pytest.raises(KeyError):
            await service.get_schema("nope")

    @pytest.mark.asyncio
    async def test_non_object_payload_rejected(self, authority: FakeAuthority):
        """A default config must be an object."""
        authority.defaults["broken"] = [1, 2, 3]  # type: ignore[assignment]
        service = EffectSchemaService(authority)

        with pytest.raises(DeserializationError):
            await service.get_schema("broken")

    @pytest.mark.asyncio
    async def test_default_instance(self, service: EffectSchemaService, authority: FakeAuthority):
        """Default instance shares the schema cache."""
        instance = await service.get_default_instance("grain")
        await service.get_schema("grain")

        assert instance == {"amount": 0.2, "origin": Position(x=1, y=2)}
        assert authority.calls == ["grain"]

    @pytest.mark.asyncio
    async def test_default_instance_edits_do_not_leak(self, service: EffectSchemaService):
        """Editing a returned default instance leaves the cache untouched."""
        instance = await service.get_default_instance("grain")
        instance["amount"] = 99
        instance["extra"] = [1]

        again = await service.get_default_instance("grain")
        schema = await service.get_schema("grain")

        assert again == {"amount": 0.2, "origin": Position(x=1, y=2)}
        assert schema.default_instance == again

    @pytest.mark.asyncio
    async def test_in_process_functions(self, authority: FakeAuthority):
        """Functions handed over in-process become fields instead of errors."""
        authority.defaults["plugin"] = {
            "draw": lambda ctx: None,
            "shape": {"__type": "PluginShape", "render": lambda: 1, "sides": 5},
        }
        service = EffectSchemaService(authority)

        schema = await service.get_schema("plugin")

        assert schema.field("draw").read_only
        assert schema.field("shape").kind is FieldKind.JSON


class TestClearCache:
    """Explicit invalidation."""

    @pytest.mark.asyncio
    async def test_clear_cache_forces_refetch(
        self, service: EffectSchemaService, authority: FakeAuthority
    ):
        """After clear_cache the authority is asked again."""
        await service.get_schema("grain")
        service.clear_cache()

        assert service.cache_stats() == {"cached": 0, "in_flight": 0}
        await service.get_schema("grain")
        assert authority.calls == ["grain", "grain"]

    @pytest.mark.asyncio
    async def test_fetch_started_before_clear_does_not_repopulate(
        self, service: EffectSchemaService, authority: FakeAuthority
    ):
        """A stale in-flight fetch still answers its caller but is not cached."""
        authority.gate = asyncio.Event()
        pending = asyncio.create_task(service.get_schema("grain"))
        await asyncio.sleep(0)

        service.clear_cache()
        authority.gate.set()
        stale = await pending

        assert stale.effect_id == "grain"
        assert service.cache_stats() == {"cached": 0, "in_flight": 0}


class TestConfiguration:
    """SchemaConfig and constraint overrides."""

    @pytest.mark.asyncio
    async def test_cache_disabled(self, authority: FakeAuthority):
        """With caching disabled every request fetches."""
        service = EffectSchemaService(authority, SchemaConfig(cache_enabled=False))

        await service.get_schema("grain")
        await service.get_schema("grain")

        assert authority.calls == ["grain", "grain"]
        assert service.cache_stats() == {"cached": 0, "in_flight": 0}

    @pytest.mark.asyncio
    async def test_number_defaults_from_config(self, authority: FakeAuthority):
        """Numeric fallback constraints come from SchemaConfig."""
        authority.defaults["count"] = {"count": 3}
        config = SchemaConfig(number_default_min=1, number_default_max=50, number_default_step=2)
        service = EffectSchemaService(authority, config)

        schema = await service.get_schema("count")

        assert schema.fields[0].constraints == FieldConstraints(min=1, max=50, step=2)

    @pytest.mark.asyncio
    async def test_constraint_overrides(self, authority: FakeAuthority):
        """Per-effect overrides replace synthesized constraints."""
        override = FieldConstraints(min=0, max=0.5, step=0.05)
        service = EffectSchemaService(
            authority, constraint_overrides={"grain": {"amount": override}}
        )

        schema = await service.get_schema("grain")

        assert schema.field("amount").constraints == override
