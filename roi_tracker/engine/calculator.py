"""Core calculation engine.

``recompute`` refreshes the computed fields of a Post-IA record;
``MetricCalculator`` turns a whole indicator into an ``IndicatorResult``
with savings, hours, costs, ROI and payback.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

# Ensure all formulas are registered on import
import roi_tracker.kpi_library.formulas  # noqa: F401
from roi_tracker.config.settings import Settings
from roi_tracker.engine.costs import summarize_costs
from roi_tracker.engine.result import CostSummary, IndicatorResult
from roi_tracker.hooks.audit_hooks import log_calculation
from roi_tracker.kpi_library.registry import get_variant
from roi_tracker.models.indicator import Indicator

logger = logging.getLogger(__name__)


def recompute(
    baseline: Any,
    post_ia: Any,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> Any:
    """Return a copy of ``post_ia`` with every computed field replaced.

    A missing Baseline, or one of another variant, zeroes the comparative
    outputs.
    """
    variant = get_variant(post_ia.type)
    if baseline is not None and baseline.type != post_ia.type:
        logger.warning(
            "Baseline variant %s does not match Post-IA %s; comparative outputs zeroed",
            baseline.type,
            post_ia.type,
        )
        baseline = None

    values = variant.formula_fn(baseline, post_ia, implementation_cost, settings)
    logger.debug("Recomputed %s: %s", variant.type.value, values)
    return post_ia.model_copy(
        update={name: float(values.get(name, 0.0)) for name in variant.computed_fields},
        deep=True,
    )


def _pct_return(benefit: float, cost: float) -> Optional[float]:
    if cost <= 0:
        return None
    return (benefit - cost) / cost * 100


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _execution_metrics(
    hours: tuple[float, float],
    executions: tuple[float, float],
    labor_cost: tuple[float, float],
    recurring_monthly: float,
) -> dict[str, float]:
    """Capacity, efficiency and unit cost of one execution, before and after.

    Recurring costs are charged to the Post-IA executions.
    """
    hours_before, hours_after = hours
    runs_before, runs_after = executions
    time_before = _ratio(hours_before, runs_before)
    time_after = _ratio(hours_after, runs_after)

    cost_before = _ratio(labor_cost[0], runs_before)
    cost_after = _ratio(labor_cost[1] + recurring_monthly, runs_after)
    return {
        "executions_before_month": runs_before,
        "executions_after_month": runs_after,
        "capacity_gain_pct": (runs_after / runs_before - 1) * 100 if runs_before > 0 else 0.0,
        "efficiency_pct": (1 - time_after / time_before) * 100 if time_before > 0 else 0.0,
        "equivalent_executions": _ratio(time_before, time_after),
        "cost_per_execution_before": cost_before,
        "cost_per_execution_after": cost_after,
        "saving_per_execution": cost_before - cost_after,
    }


class MetricCalculator:
    """Stateless calculator for a single indicator."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def calculate(self, indicator: Indicator) -> IndicatorResult:
        costs = summarize_costs(indicator.costs)

        if not indicator.records_match():
            result = self._uncomputable(indicator, costs)
        else:
            result = self._calculate(indicator, costs)

        log_calculation(
            indicator_id=indicator.id,
            indicator_type=indicator.type.value,
            summary={
                "annual_saving": result.annual_saving,
                "roi_pct": result.roi_pct,
                "payback_months": result.payback_months,
                "computable": result.computable,
            },
            warnings=result.warnings,
        )
        return result

    def _calculate(self, indicator: Indicator, costs: CostSummary) -> IndicatorResult:
        variant = get_variant(indicator.type)
        baseline = indicator.baseline
        post_ia = recompute(baseline, indicator.post_ia, costs.one_off, self.settings)

        # Tool implementation costs count as one-off investment too
        implementation = costs.one_off + getattr(post_ia, "total_implementation_cost", 0.0)

        annual_saving = variant.annual_saving_fn(post_ia)
        monthly_saving = annual_saving / 12

        gain = getattr(post_ia, variant.gain_field) if variant.gain_field else None
        hours_before, hours_after = (
            variant.hours_fn(baseline, post_ia) if variant.hours_fn else (0.0, 0.0)
        )
        team_size = variant.team_size_fn(baseline, post_ia) if variant.team_size_fn else 0.0

        per_execution = {}
        if variant.executions_fn:
            labor_cost = (
                variant.labor_cost_fn(baseline, post_ia) if variant.labor_cost_fn else (0.0, 0.0)
            )
            per_execution = _execution_metrics(
                (hours_before, hours_after),
                variant.executions_fn(baseline, post_ia),
                labor_cost,
                costs.monthly,
            )

        net_monthly = monthly_saving - costs.monthly
        if net_monthly > 0:
            payback = implementation / net_monthly if implementation > 0 else 0.0
        else:
            payback = None

        return IndicatorResult(
            indicator_id=indicator.id,
            indicator_name=indicator.name,
            type=indicator.type,
            computable=True,
            post_ia=post_ia,
            monthly_saving=monthly_saving,
            annual_saving=annual_saving,
            net_annual_saving=annual_saving - costs.annual,
            productivity_gain_pct=gain,
            hours_before_month=hours_before,
            hours_after_month=hours_after,
            hours_saved_month=hours_before - hours_after,
            team_size=float(team_size),
            **per_execution,
            costs=costs,
            implementation_cost=implementation,
            roi_pct=_pct_return(annual_saving, implementation + costs.annual),
            roi_following_years_pct=_pct_return(annual_saving, costs.annual),
            payback_months=payback,
        )

    def _uncomputable(self, indicator: Indicator, costs: CostSummary) -> IndicatorResult:
        if indicator.baseline is None:
            reason = "Baseline is missing"
        elif indicator.post_ia is None:
            reason = "Post-IA is missing"
        else:
            reason = (
                f"Records ({indicator.baseline.type}/{indicator.post_ia.type}) "
                f"do not match indicator type {indicator.type.value}"
            )
        logger.warning("Indicator %s is not computable: %s", indicator.id, reason)
        # Stored computed fields are never passed through
        post_ia = indicator.post_ia
        if post_ia is not None:
            post_ia = recompute(None, post_ia, costs.one_off, self.settings)
        return IndicatorResult(
            indicator_id=indicator.id,
            indicator_name=indicator.name,
            type=indicator.type,
            computable=False,
            post_ia=post_ia,
            costs=costs,
            implementation_cost=costs.one_off,
            warnings=[reason],
        )
