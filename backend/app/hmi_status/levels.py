"""ISA-101 severity levels and the per-channel classification result."""
from __future__ import annotations

import enum

from pydantic import BaseModel

# Sentinel states published by the state bus when an entity has no reading
PLACEHOLDER = "--"
PLACEHOLDER_STATES = frozenset({"", "--", "unavailable", "unknown"})


class SeverityLevel(enum.IntEnum):
    """Ordered display urgency: higher value = more severe."""

    NORMAL = 0    # grey
    ABNORMAL = 1  # blue, attention-worthy but expected
    WARNING = 2   # amber
    ALARM = 3     # red, action required


class ClassificationResult(BaseModel):
    level: SeverityLevel
    label: str
    percent: float | None = None  # analog channels only, 0..100
    value: float | None = None    # analog channels only, parsed reading
    model_config = {"frozen": True}


def is_placeholder(raw: str | None) -> bool:
    """True for missing/unavailable readings (None, "", "--", "unavailable", "unknown")."""
    if raw is None:
        return True
    return raw.strip().lower() in PLACEHOLDER_STATES
