"""HMI state source — reads the generator's entity states from Redis.

The state bus writes one JSON object per generator under HMI_STATE_KEY:

    {"sensor.generator_engine_state": "Running", "sensor.generator_rpm": "3600", ...}

load() fetches it once per refresh and returns an EntityStates object whose
accessors are plain synchronous lookups, so the classification engine never
waits on Redis.
"""
from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import Any, Mapping

from redis.asyncio import Redis

from hmi_status.channels import entity_suffix
from hmi_status.levels import PLACEHOLDER

logger = logging.getLogger("scada.hmi.state_source")


class EntityStates:
    """Immutable view of one state load, keyed by full entity id."""

    def __init__(self, states: Mapping[str, Any], entity_prefix: str):
        self._states = MappingProxyType(dict(states))
        self.entity_prefix = entity_prefix

    def __len__(self) -> int:
        return len(self._states)

    def get(self, suffix: str) -> str:
        val = self._states.get(f"{self.entity_prefix}{suffix}")
        if val is None or val == "":
            return PLACEHOLDER
        return str(val)

    def channel(self, key: str) -> str:
        """StateAccessor for hmi_status.refresh()."""
        return self.get(entity_suffix(key))

    readout = channel


class RedisStateSource:
    """Loads entity states for one generator from a Redis JSON key."""

    def __init__(self, redis: Redis, key: str, entity_prefix: str):
        self.redis = redis
        self.key = key
        self.entity_prefix = entity_prefix

    async def load(self) -> EntityStates:
        raw = await self.redis.get(self.key)
        if not raw:
            logger.debug("No state published at %s", self.key)
            return EntityStates({}, self.entity_prefix)
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Bad state JSON at %s: %s", self.key, exc)
            return EntityStates({}, self.entity_prefix)
        if not isinstance(data, dict):
            logger.warning("State at %s is %s, expected object", self.key, type(data).__name__)
            return EntityStates({}, self.entity_prefix)
        return EntityStates(data, self.entity_prefix)
