"""Project-level roll-up of indicator results."""

from __future__ import annotations

import logging
from typing import Optional

from roi_tracker.config.settings import Settings
from roi_tracker.engine.calculator import MetricCalculator
from roi_tracker.engine.result import IndicatorResult, ProjectSummary
from roi_tracker.models.indicator import Project

logger = logging.getLogger(__name__)


class ProjectAggregator:
    """Stateless aggregator over a project's indicators."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.calculator = MetricCalculator(self.settings)

    def aggregate(self, project: Project) -> ProjectSummary:
        results = [self.calculator.calculate(i) for i in project.indicators]
        return self.summarize(project, results)

    def summarize(self, project: Project, results: list[IndicatorResult]) -> ProjectSummary:
        """Roll up already computed results. Uncomputable indicators count as 0."""
        computable = [r for r in results if r.computable]
        uncomputable = [r.indicator_id for r in results if not r.computable]
        if uncomputable:
            logger.warning(
                "Project %s: %d indicator(s) not computable", project.id, len(uncomputable)
            )

        # Mean of the positive gains only
        gains = [
            r.productivity_gain_pct
            for r in computable
            if r.productivity_gain_pct is not None and r.productivity_gain_pct > 0
        ]
        aggregate_gain = sum(gains) / len(gains) if gains else 0.0
        capacity_gains = [
            r.capacity_gain_pct
            for r in computable
            if r.capacity_gain_pct is not None and r.capacity_gain_pct > 0
        ]
        aggregate_capacity = (
            sum(capacity_gains) / len(capacity_gains) if capacity_gains else 0.0
        )

        total_annual = sum(r.annual_saving for r in computable)
        implementation = sum(r.implementation_cost for r in results)
        recurring = sum(r.costs.annual for r in results)
        investment = implementation + recurring
        overall_roi = (total_annual - investment) / investment * 100 if investment > 0 else None

        paybacks = [r.payback_months for r in computable if r.payback_months is not None]
        average_payback = sum(paybacks) / len(paybacks) if paybacks else None

        savings_by_type: dict[str, float] = {}
        for r in computable:
            key = r.type.value
            savings_by_type[key] = savings_by_type.get(key, 0.0) + r.annual_saving

        return ProjectSummary(
            project_id=project.id,
            project_name=project.name,
            total_indicators=len(results),
            total_annual_saving=total_annual,
            aggregate_productivity_gain=aggregate_gain,
            total_net_annual_saving=sum(r.net_annual_saving for r in computable),
            aggregate_capacity_gain=aggregate_capacity,
            total_monthly_saving=sum(r.monthly_saving for r in computable),
            total_hours_saved_year=sum(r.hours_saved_year for r in computable),
            total_implementation_cost=implementation,
            total_recurring_annual_cost=recurring,
            overall_roi=overall_roi,
            average_payback_months=average_payback,
            savings_by_type=savings_by_type,
            indicator_results=results,
            uncomputable_indicators=uncomputable,
        )
