"""PanelRefresher — periodic HMI refresh loop.

Every REFRESH_INTERVAL seconds:
1. Loads the generator's entity states from the state source
2. Builds the panel view (pure hmi_status call)
3. Compares channel levels with the previous snapshot (by value)
4. Logs level transitions, ALARM entries and clears
5. Hands the view to the sink (renderer / bridge)

Change detection lives here, not in the engine: hmi_status stays stateless.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, NamedTuple, Protocol

from hmi_status.card_config import HmiCardConfig
from hmi_status.levels import SeverityLevel
from hmi_status.orchestrator import Snapshot
from hmi_status.panel import PanelView, build_panel_view
from services.state_source import EntityStates

logger = logging.getLogger("scada.hmi.refresher")

PanelSink = Callable[[PanelView], Any]


class StateSource(Protocol):
    async def load(self) -> EntityStates: ...


class LevelTransition(NamedTuple):
    channel: str
    previous: SeverityLevel | None  # None on the first refresh
    current: SeverityLevel
    label: str


def diff_levels(previous: Snapshot | None, current: Snapshot) -> list[LevelTransition]:
    """Channels whose severity level differs between two snapshots."""
    transitions: list[LevelTransition] = []
    for key, result in current.items():
        before = previous.get(key) if previous is not None else None
        before_level = before.level if before is not None else None
        if before_level != result.level:
            transitions.append(LevelTransition(key, before_level, result.level, result.label))
    return transitions


class PanelRefresher:
    """Background task: refreshes the HMI panel from a state source."""

    def __init__(
        self,
        source: StateSource,
        config: HmiCardConfig,
        sink: PanelSink,
        interval: float = 2.0,
    ):
        self.source = source
        self.config = config
        self.sink = sink
        self.interval = interval
        self._running = False
        self._prev: Snapshot | None = None

    async def start(self) -> None:
        self._running = True
        logger.info(
            "PanelRefresher started (every %.1fs, entities %s*)",
            self.interval, self.config.entity_prefix,
        )
        while self._running:
            try:
                await self.refresh_once()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error("PanelRefresher cycle error: %s", exc, exc_info=True)
            await asyncio.sleep(self.interval)

    async def stop(self) -> None:
        self._running = False
        logger.info("PanelRefresher stopped")

    # ------------------------------------------------------------------
    async def refresh_once(self) -> PanelView:
        states = await self.source.load()
        view = build_panel_view(self.config, states.channel, states.readout)

        for tr in diff_levels(self._prev, view.snapshot):
            self._log_transition(tr)
        self._prev = view.snapshot

        result = self.sink(view)
        if inspect.isawaitable(result):
            await result
        return view

    def _log_transition(self, tr: LevelTransition) -> None:
        if tr.current == SeverityLevel.ALARM:
            logger.warning("ALARM ON: %s (%s)", tr.channel, tr.label)
        elif tr.previous == SeverityLevel.ALARM:
            logger.info("ALARM OFF: %s -> %s (%s)", tr.channel, tr.current.name, tr.label)
        elif tr.previous is None:
            logger.debug("%s: %s (%s)", tr.channel, tr.current.name, tr.label)
        else:
            logger.info(
                "%s: %s -> %s (%s)", tr.channel, tr.previous.name, tr.current.name, tr.label,
            )
