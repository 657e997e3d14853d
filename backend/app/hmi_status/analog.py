"""Analog range classifier — bar percentage and severity for numeric readings.

Severity is decided against the channel envelope (min, nominal, max):

    value outside [min, max]            -> ALARM
    value outside [low_warn, high_warn] -> WARNING
    otherwise                           -> NORMAL

The warning band is asymmetric: it starts 30% of the way from min to nominal
on the low side and 70% of the way from nominal to max on the high side.
ABNORMAL is never produced here, it belongs to the discrete-state channels.
"""
from __future__ import annotations

import logging
import math
import re

from hmi_status.errors import ConfigurationError
from hmi_status.levels import PLACEHOLDER, ClassificationResult, SeverityLevel
from hmi_status.thresholds import AnalogChannelSpec, WarningBandFractions

logger = logging.getLogger("scada.hmi.analog")

# Leading decimal number, the rest of the string is ignored ("241.5 V" -> 241.5)
_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_reading(raw: str | float | int | None) -> float | None:
    """Parse a raw reading into a finite float, or None if it is not a number."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        m = _NUMBER_RE.match(raw)
        if not m:
            return None
        value = float(m.group(1))
    return value if math.isfinite(value) else None


def _check_bounds(min_value: float, max_value: float) -> None:
    if not min_value < max_value:
        raise ConfigurationError(
            f"analog envelope needs min < max, got min={min_value} max={max_value}"
        )


def warning_band(
    min_value: float,
    nominal: float,
    max_value: float,
    bands: WarningBandFractions | None = None,
) -> tuple[float, float]:
    """Return (low_warn, high_warn) for an envelope."""
    _check_bounds(min_value, max_value)
    bands = bands or WarningBandFractions()
    low_warn = min_value + (nominal - min_value) * bands.low
    high_warn = nominal + (max_value - nominal) * bands.high
    return low_warn, high_warn


def classify_analog(
    raw_value: str | float | None,
    min_value: float,
    nominal: float,
    max_value: float,
    *,
    unit: str = "",
    bands: WarningBandFractions | None = None,
) -> ClassificationResult:
    """Classify one analog reading against its envelope.

    Unparseable readings (including "--", "unavailable", "unknown") come back
    NORMAL with percent 0. A degenerate envelope (min >= max) raises
    ConfigurationError instead of producing NaN output.
    """
    low_warn, high_warn = warning_band(min_value, nominal, max_value, bands)

    value = parse_reading(raw_value)
    if value is None:
        return ClassificationResult(
            level=SeverityLevel.NORMAL, label=PLACEHOLDER, percent=0.0, value=None
        )

    percent = (value - min_value) / (max_value - min_value) * 100
    percent = max(0.0, min(100.0, percent))

    if value < min_value or value > max_value:
        level = SeverityLevel.ALARM
    elif value < low_warn or value > high_warn:
        level = SeverityLevel.WARNING
    else:
        level = SeverityLevel.NORMAL

    text = raw_value.strip() if isinstance(raw_value, str) else f"{value:g}"
    if unit and not text.lower().endswith(unit.lower()):
        label = f"{text} {unit}"
    else:
        label = text
    return ClassificationResult(level=level, label=label, percent=percent, value=value)


def classify_channel_value(
    raw_value: str | float | None,
    spec: AnalogChannelSpec,
    bands: WarningBandFractions | None = None,
) -> ClassificationResult:
    return classify_analog(
        raw_value, spec.min, spec.nominal, spec.max, unit=spec.unit, bands=bands,
    )
