"""Fixed channel set of the generator HMI panel.

Key -> classifier kind + source entity suffix. The full entity id is
<entity_prefix><entity_suffix>, e.g. "sensor.generator_engine_state".
"""
from __future__ import annotations

import enum
from typing import NamedTuple

from hmi_status.enumerated import StateKind


class ChannelKind(str, enum.Enum):
    state = "state"
    analog = "analog"
    maintenance = "maintenance"


class Channel(NamedTuple):
    key: str
    kind: ChannelKind
    entity_suffix: str
    title: str
    state_kind: StateKind | None = None  # state channels
    envelope: str | None = None          # analog channels: HmiCardConfig envelope name


CHANNELS: tuple[Channel, ...] = (
    # Primary status row
    Channel("engine", ChannelKind.state, "engine_state", "Engine", state_kind=StateKind.engine),
    Channel("outage", ChannelKind.state, "outage_status", "Utility", state_kind=StateKind.outage),
    Channel("switch", ChannelKind.state, "switch_state", "Load Source", state_kind=StateKind.switch),
    # Analog bars
    Channel("output_voltage", ChannelKind.analog, "output_voltage", "Output Voltage", envelope="voltage"),
    Channel("utility_voltage", ChannelKind.analog, "utility_voltage", "Utility Voltage", envelope="voltage"),
    Channel("frequency", ChannelKind.analog, "frequency", "Frequency", envelope="frequency"),
    Channel("battery", ChannelKind.analog, "battery_voltage", "Battery", envelope="battery"),
    # Maintenance
    Channel("oil", ChannelKind.maintenance, "oil_service", "Oil"),
    Channel("air_filter", ChannelKind.maintenance, "air_filter_service", "Air Filter"),
    Channel("spark_plug", ChannelKind.maintenance, "spark_plug_service", "Spark Plug"),
    Channel("battery_service", ChannelKind.maintenance, "battery_service", "Battery"),
)

CHANNEL_KEYS: tuple[str, ...] = tuple(ch.key for ch in CHANNELS)

CHANNELS_BY_KEY: dict[str, Channel] = {ch.key: ch for ch in CHANNELS}

# Plain readouts shown as-is (no classification)
READOUTS: dict[str, str] = {
    "rpm": "rpm",
    "run_hours": "maintenance_service_total_run_hours",
    "exercise_time": "exercise_time",
}


def entity_suffix(key: str) -> str:
    """Source entity suffix for a channel or readout key."""
    if key in CHANNELS_BY_KEY:
        return CHANNELS_BY_KEY[key].entity_suffix
    if key in READOUTS:
        return READOUTS[key]
    raise KeyError(f"unknown channel/readout key: {key}")
