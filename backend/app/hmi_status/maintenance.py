"""Maintenance interval classifier.

Parses the countdown strings published for each service item (oil, air
filter, spark plug, battery). Genmon-style examples:

    "142 hrs or 05/27/2027"   -> NORMAL   "OK"
    "45 hrs"                  -> ABNORMAL "45h"
    "15 hrs or 01/02/2026"    -> WARNING  "15h"
    "0 hrs"                   -> ALARM    "DUE"
    "Overdue" / "Due now"     -> ALARM    "OVERDUE"

Rule order matters: an hour count is tried before the generic "due" check,
so a numeric countdown is never read as a bare "due".
"""
from __future__ import annotations

import logging
import re

from hmi_status.levels import PLACEHOLDER, ClassificationResult, SeverityLevel, is_placeholder
from hmi_status.thresholds import MaintenanceThresholds

logger = logging.getLogger("scada.hmi.maintenance")

_HOURS_RE = re.compile(r"^\s*(-?\d+)\s*hrs?\b", re.IGNORECASE)

UNKNOWN_LABEL_LENGTH = 8


def parse_hours(raw: str) -> int | None:
    """Leading hour count of a countdown string, or None."""
    m = _HOURS_RE.match(raw)
    return int(m.group(1)) if m else None


def classify_hours(hours: int, thresholds: MaintenanceThresholds) -> ClassificationResult:
    if hours <= 0:
        return ClassificationResult(level=SeverityLevel.ALARM, label="DUE")
    if hours <= thresholds.warning_hours:
        return ClassificationResult(level=SeverityLevel.WARNING, label=f"{hours}h")
    if hours <= thresholds.abnormal_hours:
        return ClassificationResult(level=SeverityLevel.ABNORMAL, label=f"{hours}h")
    return ClassificationResult(level=SeverityLevel.NORMAL, label="OK")


def classify_maintenance(
    raw: str | None,
    *,
    thresholds: MaintenanceThresholds | None = None,
) -> ClassificationResult:
    """Classify one maintenance countdown. Never raises for string input."""
    if is_placeholder(raw):
        return ClassificationResult(level=SeverityLevel.NORMAL, label=PLACEHOLDER)

    lower = raw.lower()
    if "ok" in lower:
        return ClassificationResult(level=SeverityLevel.NORMAL, label="OK")
    if "overdue" in lower or "due now" in lower:
        return ClassificationResult(level=SeverityLevel.ALARM, label="OVERDUE")

    hours = parse_hours(raw)
    if hours is not None:
        return classify_hours(hours, thresholds or MaintenanceThresholds())

    if "due" in lower:
        return ClassificationResult(level=SeverityLevel.WARNING, label="DUE")

    # Unknown format: flag it, show what we got
    logger.debug("Unrecognised maintenance format: %r", raw)
    return ClassificationResult(
        level=SeverityLevel.ABNORMAL, label=raw[:UNKNOWN_LABEL_LENGTH]
    )
