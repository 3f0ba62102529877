"""Alarm threshold tiers.

A tier is a (percentage of quota, aggregation period) pair.  Two policies
exist:

* ``single`` – one alarm per quota at 90 % over one minute.
* ``dual``   – a slow-burn alarm at 80 % summed over 30 minutes and a
  fast-spike alarm at 95 % over one minute.
"""

from __future__ import annotations

from dataclasses import dataclass

from helpers.constants import (
    ALARM_POLICY,
    CRITICAL_THRESHOLD_PCT,
    SINGLE_THRESHOLD_PCT,
    WARNING_THRESHOLD_PCT,
)

ONE_MINUTE = 60
THIRTY_MINUTES = 30 * ONE_MINUTE


@dataclass(frozen=True)
class ThresholdTier:
    """When an alarm fires: ``percentage`` of the quota within ``period`` seconds."""

    severity: str
    percentage: float
    period: int

    def threshold(self, quota_value: float) -> float:
        return quota_value * self.percentage

    def as_dict(self) -> dict[str, float | int | str]:
        return {
            "severity": self.severity,
            "percentage": self.percentage,
            "period": self.period,
        }


def build_policies(
    warning_pct: float = WARNING_THRESHOLD_PCT,
    critical_pct: float = CRITICAL_THRESHOLD_PCT,
    single_pct: float = SINGLE_THRESHOLD_PCT,
) -> dict[str, list[ThresholdTier]]:
    """Return every known policy, percentages given as 0-100 values."""
    return {
        "single": [ThresholdTier("critical", single_pct / 100, ONE_MINUTE)],
        "dual": [
            ThresholdTier("warning", warning_pct / 100, THIRTY_MINUTES),
            ThresholdTier("critical", critical_pct / 100, ONE_MINUTE),
        ],
    }


ALARM_POLICIES = build_policies()


def get_alarm_policy(name: str = ALARM_POLICY) -> list[ThresholdTier]:
    """Return the tiers of the named policy."""
    try:
        return ALARM_POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown alarm policy '{name}'. Valid policies: {list(ALARM_POLICIES)}"
        ) from None
