"""Generator HMI card configuration.

Loaded once, validated once, read-only afterwards. Accepts the flat card
keys (voltage_min, voltage_nominal, ...) as well as nested envelopes.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError, model_validator

from hmi_status.errors import ConfigurationError
from hmi_status.thresholds import AnalogChannelSpec, MaintenanceThresholds, WarningBandFractions

logger = logging.getLogger("scada.hmi.config")

DEFAULT_ENTITY_PREFIX = "sensor.generator_"
DEFAULT_BUTTON_PREFIX = "button.generator_"

# envelope name -> default setpoints
DEFAULT_ENVELOPES: dict[str, dict[str, Any]] = {
    "voltage":   {"min": 220.0, "nominal": 240.0, "max": 260.0, "unit": "V"},
    "frequency": {"min": 59.0,  "nominal": 60.0,  "max": 61.0,  "unit": "Hz"},
    "battery":   {"min": 11.5,  "nominal": 13.2,  "max": 14.5,  "unit": "V"},
}

_FLAT_SUFFIXES = ("min", "nominal", "max")


def normalize_device_name(name: str) -> str:
    """'Backup Gen 1' -> 'backup_gen_1'."""
    return re.sub(r"\s+", "_", name.strip().lower())


class HmiCardConfig(BaseModel):
    title: str = "GENERATOR"
    device_name: str | None = None
    entity_prefix: str = DEFAULT_ENTITY_PREFIX
    button_prefix: str = DEFAULT_BUTTON_PREFIX
    show_controls: bool = True
    show_maintenance: bool = True

    voltage: AnalogChannelSpec = AnalogChannelSpec(**DEFAULT_ENVELOPES["voltage"])
    frequency: AnalogChannelSpec = AnalogChannelSpec(**DEFAULT_ENVELOPES["frequency"])
    battery: AnalogChannelSpec = AnalogChannelSpec(**DEFAULT_ENVELOPES["battery"])

    maintenance_thresholds: MaintenanceThresholds = MaintenanceThresholds()
    warning_bands: WarningBandFractions = WarningBandFractions()

    model_config = {"frozen": True, "extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def _derive_prefixes(cls, data: Any) -> Any:
        # device_name drives both prefixes unless they are given explicitly
        if not isinstance(data, dict) or not data.get("device_name"):
            return data
        name = normalize_device_name(data["device_name"])
        data = dict(data)
        if not data.get("entity_prefix"):
            data["entity_prefix"] = f"sensor.{name}_"
        if not data.get("button_prefix"):
            data["button_prefix"] = f"button.{name}_"
        return data

    def envelope(self, name: str) -> AnalogChannelSpec:
        if name not in DEFAULT_ENVELOPES:
            raise ConfigurationError(f"unknown analog envelope: {name}")
        return getattr(self, name)

    def entity_id(self, suffix: str) -> str:
        return f"{self.entity_prefix}{suffix}"

    def button_entity(self, action: str) -> str:
        return f"{self.button_prefix}{action}"

    @classmethod
    def stub(cls) -> "HmiCardConfig":
        """Minimal example configuration."""
        return cls(title="GENERATOR", device_name="generator")


def _fold_flat_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Move voltage_min / frequency_max / ... into nested envelope dicts."""
    for name, defaults in DEFAULT_ENVELOPES.items():
        flat = {
            suffix: data.pop(f"{name}_{suffix}")
            for suffix in _FLAT_SUFFIXES
            if f"{name}_{suffix}" in data
        }
        nested = data.get(name)
        if not flat and nested is None:
            continue
        if nested is not None and not isinstance(nested, Mapping):
            raise ConfigurationError(f"{name} envelope must be a mapping, got {type(nested).__name__}")
        data[name] = {**defaults, **(nested or {}), **flat}
    return data


def load_card_config(raw: Mapping[str, Any] | None = None) -> HmiCardConfig:
    """Merge a user card mapping over defaults and validate it.

    Raises ConfigurationError for invalid envelopes, thresholds or unknown keys.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"card config must be a mapping, got {type(raw).__name__}")

    data = _fold_flat_keys(dict(raw))
    try:
        config = HmiCardConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid HMI card config: {exc}") from exc

    logger.info(
        "HMI card config loaded: title=%s entity_prefix=%s",
        config.title, config.entity_prefix,
    )
    return config
