"""Classification orchestrator — one refresh = one immutable snapshot.

refresh() pulls every channel's raw state through the accessor and runs the
matching classifier with the thresholds from the card config. No caching,
no I/O: it can be called at any rate, calls may be dropped or repeated.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping

from hmi_status.analog import classify_channel_value
from hmi_status.card_config import HmiCardConfig
from hmi_status.channels import CHANNELS, Channel, ChannelKind
from hmi_status.enumerated import classify_state
from hmi_status.levels import PLACEHOLDER, ClassificationResult, SeverityLevel
from hmi_status.maintenance import classify_maintenance

logger = logging.getLogger("scada.hmi.orchestrator")

StateAccessor = Callable[[str], str]
Snapshot = Mapping[str, ClassificationResult]


def classify_channel(
    channel: Channel, raw: str, config: HmiCardConfig
) -> ClassificationResult:
    if channel.kind == ChannelKind.state:
        return classify_state(raw, channel.state_kind)
    if channel.kind == ChannelKind.analog:
        return classify_channel_value(
            raw, config.envelope(channel.envelope), config.warning_bands
        )
    return classify_maintenance(raw, thresholds=config.maintenance_thresholds)


def refresh(config: HmiCardConfig, state_accessor: StateAccessor) -> Snapshot:
    """Classify all 11 panel channels. Always returns exactly the fixed key set."""
    results: dict[str, ClassificationResult] = {}
    for channel in CHANNELS:
        raw = state_accessor(channel.key) or PLACEHOLDER
        results[channel.key] = classify_channel(channel, raw, config)
    return MappingProxyType(results)


def worst_level(snapshot: Snapshot) -> SeverityLevel:
    """Highest severity across a snapshot (NORMAL for an empty one)."""
    return max((r.level for r in snapshot.values()), default=SeverityLevel.NORMAL)
