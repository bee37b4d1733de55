"""Cost entry aggregation.

Monthly and annual entries are recurring and convert into each other
(annual / 12, monthly x 12). One-off entries are the implementation cost and
never enter the recurring totals.
"""

from __future__ import annotations

from typing import Iterable

from roi_tracker.engine.result import CostSummary
from roi_tracker.models.enums import CostRecurrence
from roi_tracker.models.indicator import CostEntry


def _sum(costs: Iterable[CostEntry], recurrence: CostRecurrence) -> float:
    return sum(c.value for c in costs if c.recurrence == recurrence)


def total_monthly(costs: list[CostEntry]) -> float:
    return _sum(costs, CostRecurrence.MONTHLY) + _sum(costs, CostRecurrence.ANNUAL) / 12


def total_annual(costs: list[CostEntry]) -> float:
    return _sum(costs, CostRecurrence.ANNUAL) + _sum(costs, CostRecurrence.MONTHLY) * 12


def total_one_off(costs: list[CostEntry]) -> float:
    return _sum(costs, CostRecurrence.ONE_OFF)


def summarize_costs(costs: list[CostEntry]) -> CostSummary:
    return CostSummary(
        monthly=total_monthly(costs),
        annual=total_annual(costs),
        one_off=total_one_off(costs),
    )
