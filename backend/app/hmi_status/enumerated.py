"""Enumerated-state classifier: engine run-state, utility outage, transfer switch.

Upstream controllers (Genmon and friends) publish free-form state strings with
varying prefixes and suffixes ("Running - Exercising", "Fault - Low Oil",
"no_outage_detected"), so matching is ordered keyword containment on the
lower-cased string. Each kind has a rule table: the first matching
KeywordRule wins, and the FallbackRule arm catches everything else.
"""
from __future__ import annotations

import enum
import logging
from typing import NamedTuple

from hmi_status.levels import ClassificationResult, SeverityLevel

logger = logging.getLogger("scada.hmi.enumerated")


class StateKind(str, enum.Enum):
    engine = "engine"
    outage = "outage"
    switch = "switch"


class KeywordRule(NamedTuple):
    any_of: tuple[str, ...]       # match if any keyword is contained
    level: SeverityLevel
    label: str
    none_of: tuple[str, ...] = ()  # ...and none of these is contained

    def matches(self, text: str) -> bool:
        if not any(word in text for word in self.any_of):
            return False
        return not any(word in text for word in self.none_of)


class FallbackRule(NamedTuple):
    level: SeverityLevel
    label: str | None = None  # None -> show the upper-cased raw state

    def result(self, raw: str) -> ClassificationResult:
        label = self.label if self.label is not None else raw.upper()
        return ClassificationResult(level=self.level, label=label)


class RuleTable(NamedTuple):
    rules: tuple[KeywordRule, ...]
    fallback: FallbackRule


RULE_TABLES: dict[StateKind, RuleTable] = {
    StateKind.engine: RuleTable(
        rules=(
            KeywordRule(("alarm", "fault"), SeverityLevel.ALARM, "ALARM"),
            # running on its own is the non-default state, not an alarm
            KeywordRule(("running",), SeverityLevel.ABNORMAL, "RUNNING"),
            KeywordRule(("ready", "off", "standby"), SeverityLevel.NORMAL, "STANDBY"),
        ),
        fallback=FallbackRule(SeverityLevel.NORMAL),
    ),
    StateKind.outage: RuleTable(
        rules=(
            # "no_outage" must not trip
            KeywordRule(("outage",), SeverityLevel.ALARM, "OUTAGE", none_of=("no",)),
        ),
        fallback=FallbackRule(SeverityLevel.NORMAL, "NORMAL"),
    ),
    StateKind.switch: RuleTable(
        rules=(
            KeywordRule(("generator",), SeverityLevel.ABNORMAL, "GENERATOR"),
        ),
        fallback=FallbackRule(SeverityLevel.NORMAL, "UTILITY"),
    ),
}


def classify_state(raw: str, kind: StateKind | str) -> ClassificationResult:
    """Classify one enumerated state string. Never raises for string input."""
    table = RULE_TABLES[StateKind(kind)]
    text = (raw or "").lower()
    for rule in table.rules:
        if rule.matches(text):
            return ClassificationResult(level=rule.level, label=rule.label)
    logger.debug("No %s rule matched %r, using fallback", StateKind(kind).value, raw)
    return table.fallback.result(raw or "")


def classify_engine(raw: str) -> ClassificationResult:
    return classify_state(raw, StateKind.engine)


def classify_outage(raw: str) -> ClassificationResult:
    return classify_state(raw, StateKind.outage)


def classify_switch(raw: str) -> ClassificationResult:
    return classify_state(raw, StateKind.switch)
