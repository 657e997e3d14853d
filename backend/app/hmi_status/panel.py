"""Panel view: snapshot + plain readouts + control button states.

Control availability follows the engine state: start / transfer / exercise
only while the engine is stopped, stop only while it is not. Commands are
handed to an external dispatcher; classification never depends on them.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from hmi_status.card_config import HmiCardConfig
from hmi_status.channels import CHANNELS, READOUTS, ChannelKind
from hmi_status.levels import PLACEHOLDER, ClassificationResult
from hmi_status.orchestrator import Snapshot, StateAccessor, refresh

logger = logging.getLogger("scada.hmi.panel")

STOPPED_KEYWORDS = ("off", "ready", "standby")


class ControlAction(str, enum.Enum):
    start = "start"
    stop = "stop"
    start_transfer = "start_transfer"
    start_exercise = "start_exercise"


CONFIRM_TEXTS: dict[ControlAction, str] = {
    ControlAction.start: "Start the generator?",
    ControlAction.stop: "Stop the generator?",
    ControlAction.start_transfer: "Start and transfer load?",
    ControlAction.start_exercise: "Run exercise cycle?",
}


@dataclass(frozen=True)
class ControlState:
    action: ControlAction
    entity_id: str
    enabled: bool
    confirm_text: str


@dataclass(frozen=True)
class CommandIntent:
    action: ControlAction
    entity_id: str


@dataclass(frozen=True)
class PanelView:
    title: str
    snapshot: Snapshot
    readouts: Mapping[str, str]
    displays: Mapping[str, str]  # analog channel key -> "241.5 V" / "--"
    maintenance: Mapping[str, ClassificationResult]  # empty when show_maintenance is off
    controls: tuple[ControlState, ...]
    footer: str

    def control(self, action: ControlAction | str) -> ControlState | None:
        action = ControlAction(action)
        for ctrl in self.controls:
            if ctrl.action == action:
                return ctrl
        return None


def engine_is_stopped(raw_engine_state: str) -> bool:
    state = (raw_engine_state or "").lower()
    return any(word in state for word in STOPPED_KEYWORDS)


def control_states(config: HmiCardConfig, raw_engine_state: str) -> tuple[ControlState, ...]:
    if not config.show_controls:
        return ()
    stopped = engine_is_stopped(raw_engine_state)
    return tuple(
        ControlState(
            action=action,
            entity_id=config.button_entity(action.value),
            enabled=(not stopped) if action == ControlAction.stop else stopped,
            confirm_text=CONFIRM_TEXTS[action],
        )
        for action in ControlAction
    )


def build_panel_view(
    config: HmiCardConfig,
    state_accessor: StateAccessor,
    readout_accessor: Callable[[str], str] | None = None,
) -> PanelView:
    """Snapshot plus everything else the panel shows for one refresh."""
    snapshot = refresh(config, state_accessor)

    displays = {
        ch.key: snapshot[ch.key].label for ch in CHANNELS if ch.kind == ChannelKind.analog
    }
    # snapshot keeps all channels; the panel drops the hidden maintenance row
    maintenance = {
        ch.key: snapshot[ch.key]
        for ch in CHANNELS
        if ch.kind == ChannelKind.maintenance and config.show_maintenance
    }

    readouts: dict[str, str] = {}
    for key in READOUTS:
        value = readout_accessor(key) if readout_accessor else PLACEHOLDER
        readouts[key] = value or PLACEHOLDER

    return PanelView(
        title=config.title,
        snapshot=snapshot,
        readouts=MappingProxyType(readouts),
        displays=MappingProxyType(displays),
        maintenance=MappingProxyType(maintenance),
        controls=control_states(config, state_accessor("engine") or PLACEHOLDER),
        footer=f"Next Exercise: {readouts['exercise_time']}",
    )


def dispatch_command(
    intent: CommandIntent, dispatcher: Callable[[str, str, dict[str, Any]], Any]
) -> Any:
    """Hand a button press to the host platform: dispatcher(domain, service, data)."""
    logger.info("Command %s -> %s", intent.action.value, intent.entity_id)
    return dispatcher("button", "press", {"entity_id": intent.entity_id})


def command_for(view: PanelView, action: ControlAction | str) -> CommandIntent:
    """Intent for an enabled control; ValueError if hidden or disabled."""
    ctrl = view.control(action)
    if ctrl is None:
        raise ValueError(f"control {ControlAction(action).value} is not shown")
    if not ctrl.enabled:
        raise ValueError(f"control {ctrl.action.value} is disabled")
    return CommandIntent(action=ctrl.action, entity_id=ctrl.entity_id)
