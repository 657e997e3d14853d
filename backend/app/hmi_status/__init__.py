"""HMI Status — isolated classification engine for the generator HMI panel.

Turns raw generator telemetry (state strings, maintenance countdowns, analog
readings) into ISA-101 severity levels and short display labels.

Pure and synchronous: no Redis, no DB, no background tasks. The I/O side
(state loading, refresh loop) lives in services/.
"""
from hmi_status.analog import classify_analog, classify_channel_value, warning_band
from hmi_status.card_config import HmiCardConfig, load_card_config
from hmi_status.channels import CHANNEL_KEYS, CHANNELS, READOUTS, Channel, ChannelKind
from hmi_status.enumerated import (
    StateKind,
    classify_engine,
    classify_outage,
    classify_state,
    classify_switch,
)
from hmi_status.errors import ConfigurationError
from hmi_status.levels import ClassificationResult, SeverityLevel
from hmi_status.maintenance import classify_maintenance
from hmi_status.orchestrator import Snapshot, StateAccessor, refresh
from hmi_status.panel import (
    CommandIntent,
    ControlAction,
    ControlState,
    PanelView,
    build_panel_view,
    command_for,
    dispatch_command,
)
from hmi_status.thresholds import AnalogChannelSpec, MaintenanceThresholds, WarningBandFractions

__all__ = [
    "AnalogChannelSpec",
    "CHANNELS",
    "CHANNEL_KEYS",
    "Channel",
    "ChannelKind",
    "ClassificationResult",
    "CommandIntent",
    "ConfigurationError",
    "ControlAction",
    "ControlState",
    "HmiCardConfig",
    "MaintenanceThresholds",
    "PanelView",
    "READOUTS",
    "SeverityLevel",
    "Snapshot",
    "StateAccessor",
    "StateKind",
    "WarningBandFractions",
    "build_panel_view",
    "classify_analog",
    "classify_channel_value",
    "classify_engine",
    "classify_maintenance",
    "classify_outage",
    "classify_state",
    "classify_switch",
    "command_for",
    "dispatch_command",
    "load_card_config",
    "refresh",
    "warning_band",
]
