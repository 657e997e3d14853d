"""Tests for HMI card configuration loading and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hmi_status.card_config import HmiCardConfig, load_card_config, normalize_device_name
from hmi_status.errors import ConfigurationError


def test_defaults() -> None:
    config = load_card_config()

    assert config.title == "GENERATOR"
    assert config.entity_prefix == "sensor.generator_"
    assert config.button_prefix == "button.generator_"
    assert config.show_controls is True
    assert config.show_maintenance is True
    assert (config.voltage.min, config.voltage.nominal, config.voltage.max) == (220.0, 240.0, 260.0)
    assert config.frequency.unit == "Hz"
    assert config.battery.nominal == 13.2
    assert config.maintenance_thresholds.warning_hours == 20
    assert config.maintenance_thresholds.abnormal_hours == 50
    assert config.warning_bands.low == 0.3
    assert config.warning_bands.high == 0.7


def test_device_name_derives_prefixes() -> None:
    config = load_card_config({"device_name": "Backup  Gen 1"})

    assert config.entity_prefix == "sensor.backup_gen_1_"
    assert config.button_prefix == "button.backup_gen_1_"
    assert config.entity_id("engine_state") == "sensor.backup_gen_1_engine_state"
    assert config.button_entity("start") == "button.backup_gen_1_start"


def test_explicit_prefix_wins_over_device_name() -> None:
    config = load_card_config({"device_name": "Shed", "entity_prefix": "sensor.genmon_"})

    assert config.entity_prefix == "sensor.genmon_"
    assert config.button_prefix == "button.shed_"


def test_flat_setpoint_keys_are_folded_into_envelopes() -> None:
    config = load_card_config(
        {
            "voltage_min": 110,
            "voltage_nominal": 120,
            "voltage_max": 130,
            "frequency_nominal": 50,
            "frequency_min": 49,
            "frequency_max": 51,
        }
    )

    assert (config.voltage.min, config.voltage.nominal, config.voltage.max) == (110.0, 120.0, 130.0)
    assert config.voltage.unit == "V"
    assert config.frequency.nominal == 50.0
    assert config.battery.max == 14.5


def test_partial_nested_envelope_keeps_defaults() -> None:
    config = load_card_config({"battery": {"min": 23.0, "nominal": 26.4, "max": 29.0}})

    assert config.battery.unit == "V"
    assert config.battery.nominal == 26.4


@pytest.mark.parametrize(
    "raw",
    [
        {"voltage_min": 250},
        {"battery_min": 12, "battery_nominal": 12, "battery_max": 12},
        {"frequency": {"min": 61, "nominal": 60, "max": 59}},
        {"maintenance_thresholds": {"warning_hours": 60, "abnormal_hours": 50}},
        {"warning_bands": {"low": 1.5}},
        {"voltage": 240},
    ],
)
def test_invalid_config_raises_configuration_error(raw: dict) -> None:
    with pytest.raises(ConfigurationError):
        load_card_config(raw)


def test_non_mapping_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        load_card_config(["voltage_min", 220])  # type: ignore[arg-type]


def test_config_is_read_only() -> None:
    config = load_card_config()

    with pytest.raises(ValidationError):
        config.title = "OTHER"  # type: ignore[misc]


def test_unknown_envelope_name() -> None:
    with pytest.raises(ConfigurationError):
        load_card_config().envelope("oil_pressure")


def test_stub_config() -> None:
    stub = HmiCardConfig.stub()

    assert stub.device_name == "generator"
    assert stub.entity_prefix == "sensor.generator_"


def test_normalize_device_name() -> None:
    assert normalize_device_name(" My Generator ") == "my_generator"


def test_card_type_and_unknown_keys_are_ignored() -> None:
    config = load_card_config(
        {"type": "custom:generator-hmi-card", "device_name": "generator", "colour": "red"}
    )

    assert config.entity_prefix == "sensor.generator_"
    assert not hasattr(config, "type")


def test_empty_prefix_falls_back_to_device_name() -> None:
    config = load_card_config({"device_name": "Shed", "entity_prefix": "", "button_prefix": ""})

    assert config.entity_prefix == "sensor.shed_"
    assert config.button_prefix == "button.shed_"
