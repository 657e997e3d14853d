"""Demo state source — emulates a Genmon-monitored standby generator.

Produces the same entity-state map the real state bus publishes, so the
refresh loop and the panel cannot tell the difference. The demo walks a
fixed scenario: standby on utility -> utility outage -> generator running
and carrying the load -> utility restored -> cool-down back to standby.
"""
from __future__ import annotations

import logging
import math
import random

from services.state_source import EntityStates

logger = logging.getLogger("scada.hmi.demo_source")

# (ticks in phase, engine_state, outage_status, switch_state)
DEMO_SCENARIO = (
    (30, "Ready", "No outage", "Utility"),
    (5, "Cranking", "Utility outage", "Utility"),
    (60, "Running", "Utility outage", "Generator"),
    (20, "Running - Cooling down", "No outage", "Utility"),
)

OIL_SERVICE_START_HOURS = 63
AIR_FILTER_START_HOURS = 142
SPARK_PLUG_START_HOURS = 18


class DemoStateSource:
    """Generates entity states in memory. One load() = one tick."""

    def __init__(self, entity_prefix: str, rng: random.Random | None = None):
        self.entity_prefix = entity_prefix
        self._rng = rng or random.Random()
        self._tick = 0

    def _phase(self, tick: int) -> tuple[str, str, str]:
        cycle = sum(p[0] for p in DEMO_SCENARIO)
        pos = tick % cycle
        for length, engine, outage, switch in DEMO_SCENARIO:
            if pos < length:
                return engine, outage, switch
            pos -= length
        raise AssertionError("unreachable")

    def states_for_tick(self, tick: int) -> dict[str, str]:
        noise = lambda amp=1.0: self._rng.uniform(-amp, amp)  # noqa: E731
        engine, outage, switch = self._phase(tick)
        running = "running" in engine.lower()
        on_outage = "outage" in outage.lower() and "no" not in outage.lower()

        # Service countdowns burn down one hour per 60 ticks of running
        burned = tick // 60
        oil = max(0, OIL_SERVICE_START_HOURS - burned)
        spark = max(0, SPARK_PLUG_START_HOURS - burned)

        states = {
            "engine_state": engine,
            "outage_status": outage,
            "switch_state": switch,
            "output_voltage": f"{240 + noise(4):.1f}" if running else "0.0",
            "utility_voltage": "0.0" if on_outage else f"{241 + noise(3):.1f}",
            "frequency": f"{60 + 0.3 * math.sin(tick * 0.2) + noise(0.05):.2f}" if running else "0.00",
            "battery_voltage": f"{13.4 + noise(0.2):.2f}" if running else f"{12.9 + noise(0.1):.2f}",
            "oil_service": f"{oil} hrs or 05/27/2027",
            "air_filter_service": f"{AIR_FILTER_START_HOURS - burned} hrs or 11/02/2027",
            "spark_plug_service": f"{spark} hrs or 01/15/2027" if spark else "Due now",
            "battery_service": "OK",
            "rpm": f"{3600 + noise(8):.0f}" if running else "0",
            "maintenance_service_total_run_hours": f"{1237 + burned}",
            "exercise_time": "Wednesday 12:00 Quiet Mode",
        }
        return {f"{self.entity_prefix}{suffix}": val for suffix, val in states.items()}

    async def load(self) -> EntityStates:
        states = EntityStates(self.states_for_tick(self._tick), self.entity_prefix)
        self._tick += 1
        return states
