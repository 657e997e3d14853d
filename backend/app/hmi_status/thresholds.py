"""Classification constants and analog envelopes.

All thresholds are plain values passed explicitly into the classifiers,
so a card can override them without touching classifier code.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError, model_validator

from hmi_status.errors import ConfigurationError

# Maintenance countdown thresholds (hours remaining)
THRESHOLD_WARNING_HOURS = 20
THRESHOLD_ABNORMAL_HOURS = 50

# Warning band fractions for analog envelopes
LOW_WARN_FRACTION = 0.3   # of the min..nominal distance, measured from min
HIGH_WARN_FRACTION = 0.7  # of the nominal..max distance, measured from nominal


class MaintenanceThresholds(BaseModel):
    """Hours-remaining limits: <= warning_hours is WARNING, <= abnormal_hours is ABNORMAL."""

    warning_hours: int = THRESHOLD_WARNING_HOURS
    abnormal_hours: int = THRESHOLD_ABNORMAL_HOURS
    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_order(self) -> "MaintenanceThresholds":
        if self.warning_hours < 0:
            raise ValueError("warning_hours must be >= 0")
        if self.warning_hours > self.abnormal_hours:
            raise ValueError("warning_hours must not exceed abnormal_hours")
        return self


class WarningBandFractions(BaseModel):
    """Where WARNING starts inside an envelope.

    low_warn = min + (nominal - min) * low
    high_warn = nominal + (max - nominal) * high
    """

    low: float = LOW_WARN_FRACTION
    high: float = HIGH_WARN_FRACTION
    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_range(self) -> "WarningBandFractions":
        for name, frac in (("low", self.low), ("high", self.high)):
            if not 0.0 <= frac <= 1.0:
                raise ValueError(f"{name} fraction must be within [0, 1], got {frac}")
        return self


class AnalogChannelSpec(BaseModel):
    """Operating envelope for one analog channel, in the channel's physical unit."""

    min: float
    nominal: float
    max: float
    unit: str = ""
    model_config = {"frozen": True}

    def __init__(self, **data: Any) -> None:
        # nested validation inside HmiCardConfig bypasses this; load_card_config wraps that path
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid analog envelope: {exc}") from exc

    @model_validator(mode="after")
    def _check_envelope(self) -> "AnalogChannelSpec":
        if not self.min < self.nominal < self.max:
            raise ValueError(
                f"envelope must satisfy min < nominal < max, "
                f"got min={self.min} nominal={self.nominal} max={self.max}"
            )
        return self
