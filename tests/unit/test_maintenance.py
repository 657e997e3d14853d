"""Tests for maintenance countdown classification."""

from __future__ import annotations

import pytest

from hmi_status.levels import SeverityLevel
from hmi_status.maintenance import classify_maintenance, parse_hours
from hmi_status.thresholds import MaintenanceThresholds


@pytest.mark.parametrize(
    ("raw", "level", "label"),
    [
        ("142 hrs or 05/27/2027", SeverityLevel.NORMAL, "OK"),
        ("15 hrs or 01/02/2026", SeverityLevel.WARNING, "15h"),
        ("45 hrs", SeverityLevel.ABNORMAL, "45h"),
        ("0 hrs", SeverityLevel.ALARM, "DUE"),
        ("1 hr", SeverityLevel.WARNING, "1h"),
        ("20 hrs", SeverityLevel.WARNING, "20h"),
        ("21 hrs", SeverityLevel.ABNORMAL, "21h"),
        ("50 hrs or 12/01/2026", SeverityLevel.ABNORMAL, "50h"),
        ("51 hrs", SeverityLevel.NORMAL, "OK"),
        ("45hrs", SeverityLevel.ABNORMAL, "45h"),
        ("-3 hrs", SeverityLevel.ALARM, "DUE"),
    ],
)
def test_hour_countdowns(raw: str, level: SeverityLevel, label: str) -> None:
    result = classify_maintenance(raw)

    assert result.level == level
    assert result.label == label


@pytest.mark.parametrize("raw", ["OVERDUE", "Overdue by 3 days", "due now", "Due Now"])
def test_overdue_is_alarm(raw: str) -> None:
    result = classify_maintenance(raw)

    assert result.level == SeverityLevel.ALARM
    assert result.label == "OVERDUE"


@pytest.mark.parametrize("raw", ["OK", "ok", "Battery OK"])
def test_ok(raw: str) -> None:
    result = classify_maintenance(raw)

    assert result.level == SeverityLevel.NORMAL
    assert result.label == "OK"


@pytest.mark.parametrize("raw", ["", "--", "unavailable", "unknown", None])
def test_placeholders(raw: str | None) -> None:
    result = classify_maintenance(raw)

    assert result.level == SeverityLevel.NORMAL
    assert result.label == "--"


def test_generic_due_is_warning() -> None:
    result = classify_maintenance("Due soon")

    assert result.level == SeverityLevel.WARNING
    assert result.label == "DUE"


def test_hour_count_takes_precedence_over_generic_due() -> None:
    result = classify_maintenance("35 hrs until due")

    assert result.level == SeverityLevel.ABNORMAL
    assert result.label == "35h"


def test_unknown_format_is_flagged_with_truncated_label() -> None:
    result = classify_maintenance("ServiceRequired")

    assert result.level == SeverityLevel.ABNORMAL
    assert result.label == "ServiceR"


def test_custom_thresholds() -> None:
    thresholds = MaintenanceThresholds(warning_hours=10, abnormal_hours=100)

    assert classify_maintenance("15 hrs", thresholds=thresholds).level == SeverityLevel.ABNORMAL
    assert classify_maintenance("80 hrs", thresholds=thresholds).label == "80h"
    assert classify_maintenance("8 hrs", thresholds=thresholds).level == SeverityLevel.WARNING


def test_thresholds_must_be_ordered() -> None:
    with pytest.raises(ValueError):
        MaintenanceThresholds(warning_hours=60, abnormal_hours=50)


def test_parse_hours() -> None:
    assert parse_hours("142 hrs or 05/27/2027") == 142
    assert parse_hours("7 HR") == 7
    assert parse_hours("hrs 7") is None
    assert parse_hours("12 hours") is None
