"""Tests for Redis-backed entity state loading."""

from __future__ import annotations

import asyncio
import json

from hmi_status.card_config import load_card_config
from hmi_status.levels import SeverityLevel
from hmi_status.orchestrator import refresh
from services.state_source import EntityStates, RedisStateSource


class FakeRedis:
    def __init__(self, data: dict[str, bytes | str]):
        self.data = data
        self.gets: list[str] = []

    async def get(self, key: str):
        self.gets.append(key)
        return self.data.get(key)


PREFIX = "sensor.generator_"


def test_entity_states_resolve_channel_keys() -> None:
    states = EntityStates(
        {
            f"{PREFIX}engine_state": "Running",
            f"{PREFIX}battery_voltage": 13.4,
            f"{PREFIX}oil_service": "",
            f"{PREFIX}maintenance_service_total_run_hours": "1237",
        },
        PREFIX,
    )

    assert states.channel("engine") == "Running"
    assert states.channel("battery") == "13.4"
    assert states.channel("oil") == "--"
    assert states.channel("frequency") == "--"
    assert states.readout("run_hours") == "1237"
    assert len(states) == 4


def test_load_from_redis_json() -> None:
    payload = {f"{PREFIX}engine_state": "Fault - Low Oil", f"{PREFIX}outage_status": "No outage"}
    redis = FakeRedis({"hmi:generator:states": json.dumps(payload).encode("utf-8")})
    source = RedisStateSource(redis, "hmi:generator:states", PREFIX)

    states = asyncio.run(source.load())
    snapshot = refresh(load_card_config(), states.channel)

    assert redis.gets == ["hmi:generator:states"]
    assert snapshot["engine"].level == SeverityLevel.ALARM
    assert snapshot["outage"].level == SeverityLevel.NORMAL


def test_missing_key_gives_placeholders() -> None:
    source = RedisStateSource(FakeRedis({}), "hmi:generator:states", PREFIX)

    states = asyncio.run(source.load())

    assert len(states) == 0
    assert states.channel("engine") == "--"


def test_bad_payloads_give_placeholders() -> None:
    for raw in (b"{not json", b"[1, 2, 3]"):
        source = RedisStateSource(FakeRedis({"k": raw}), "k", PREFIX)
        states = asyncio.run(source.load())
        assert states.channel("switch") == "--"
