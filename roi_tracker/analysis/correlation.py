"""Cross-indicator correlation analysis.

Looks for relationships between the metrics of a project's indicators (hours
before/after, cost vs. saving, team size vs. gain...) and turns the notable
ones into short insights. Results are ephemeral and never persisted.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Sequence, Union

from roi_tracker.config.settings import Settings
from roi_tracker.engine.calculator import MetricCalculator
from roi_tracker.engine.result import (
    CorrelationReport,
    CorrelationResult,
    IndicatorResult,
    Insight,
    TypeROIBreakdown,
)
from roi_tracker.kpi_library.registry import get_variant
from roi_tracker.models.enums import CorrelationKind, CorrelationStrength, InsightType
from roi_tracker.models.indicator import Project

logger = logging.getLogger(__name__)

# (minimum |r|, bucket), checked in order
_STRENGTH_BUCKETS = (
    (0.8, CorrelationStrength.VERY_STRONG),
    (0.6, CorrelationStrength.STRONG),
    (0.4, CorrelationStrength.MODERATE),
    (0.2, CorrelationStrength.WEAK),
)


_RELATIVE_TOLERANCE = 1e-9


def _is_flat(std: float, mean: float, n: int) -> bool:
    return std <= _RELATIVE_TOLERANCE * max(1.0, abs(mean)) * math.sqrt(n)


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation coefficient.

    Returns 0.0 when the coefficient is undefined (fewer than two points or
    a series without variance).
    """
    if len(x) != len(y):
        raise ValueError(f"Series lengths differ: {len(x)} != {len(y)}")
    n = len(x)
    if n < 2:
        return 0.0

    mean_x = sum(x) / n
    mean_y = sum(y) / n

    dx = [xi - mean_x for xi in x]
    dy = [yi - mean_y for yi in y]
    cov = sum(a * b for a, b in zip(dx, dy))
    ss_x = sum(a * a for a in dx)
    ss_y = sum(b * b for b in dy)

    # Spread at rounding-noise level counts as a constant series
    if _is_flat(math.sqrt(ss_x), mean_x, n) or _is_flat(math.sqrt(ss_y), mean_y, n):
        return 0.0

    return max(-1.0, min(1.0, cov / math.sqrt(ss_x * ss_y)))


def classify_strength(r: float) -> CorrelationStrength:
    magnitude = abs(r)
    for threshold, strength in _STRENGTH_BUCKETS:
        if magnitude >= threshold:
            return strength
    return CorrelationStrength.VERY_WEAK


class CorrelationAnalyzer:
    """Runs the fixed set of metric pairings over a project's indicators."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def analyze(
        self,
        source: Union[Project, list[IndicatorResult]],
        project_id: Optional[str] = None,
    ) -> CorrelationReport:
        if isinstance(source, Project):
            calculator = MetricCalculator(self.settings)
            results = [calculator.calculate(i) for i in source.indicators]
            project_id = source.id
        else:
            results = list(source)

        computable = [r for r in results if r.computable]
        correlations: list[CorrelationResult] = []
        insights: list[Insight] = []

        for pairing in (
            self._baseline_vs_post_ia,
            self._cost_vs_saving,
            self._type_vs_roi,
            self._team_size_vs_gain,
            self._time_saved_vs_investment,
        ):
            correlation, insight = pairing(computable)
            if correlation is not None:
                correlations.append(correlation)
            if insight is not None:
                insights.append(insight)

        logger.info(
            "Correlation analysis for %s: %d pairing(s), %d insight(s)",
            project_id,
            len(correlations),
            len(insights),
        )
        return CorrelationReport(
            project_id=project_id, correlations=correlations, insights=insights
        )

    # -- numeric pairings ---------------------------------------------------

    def _numeric(
        self,
        kind: CorrelationKind,
        description: str,
        sample: list[IndicatorResult],
        x_fn: Callable[[IndicatorResult], float],
        y_fn: Callable[[IndicatorResult], float],
    ) -> Optional[CorrelationResult]:
        if len(sample) < self.settings.correlation_min_samples:
            logger.debug(
                "Skipping %s: %d sample(s), need %d",
                kind.value,
                len(sample),
                self.settings.correlation_min_samples,
            )
            return None
        r = pearson([x_fn(s) for s in sample], [y_fn(s) for s in sample])
        return CorrelationResult(
            kind=kind,
            description=description,
            sample_size=len(sample),
            coefficient=r,
            strength=classify_strength(r),
        )

    def _baseline_vs_post_ia(self, results):
        kind = CorrelationKind.BASELINE_VS_POST_IA
        sample = [r for r in results if r.hours_before_month > 0]
        correlation = self._numeric(
            kind,
            "Baseline hours per month vs. Post-IA hours per month",
            sample,
            lambda r: r.hours_before_month,
            lambda r: r.hours_after_month,
        )
        insight = None
        if correlation and correlation.coefficient >= self.settings.insight_strong_threshold:
            insight = Insight(
                InsightType.INFO,
                kind,
                "Savings scale with process size: the largest processes keep "
                "the largest share of hours after automation.",
            )
        return correlation, insight

    def _cost_vs_saving(self, results):
        kind = CorrelationKind.COST_VS_SAVING
        sample = [r for r in results if r.total_investment > 0]
        correlation = self._numeric(
            kind,
            "Total cost (implementation + recurring) vs. annual saving",
            sample,
            lambda r: r.total_investment,
            lambda r: r.annual_saving,
        )
        insight = None
        if correlation:
            if correlation.coefficient >= self.settings.insight_positive_threshold:
                insight = Insight(
                    InsightType.POSITIVE,
                    kind,
                    "Higher investments are returning higher savings.",
                )
            elif correlation.coefficient <= self.settings.insight_negative_threshold:
                insight = Insight(
                    InsightType.WARNING,
                    kind,
                    "Higher investments are returning lower savings; review "
                    "the most expensive indicators.",
                )
        return correlation, insight

    def _team_size_vs_gain(self, results):
        kind = CorrelationKind.TEAM_SIZE_VS_GAIN
        sample = [
            r for r in results if r.team_size > 0 and r.productivity_gain_pct is not None
        ]
        correlation = self._numeric(
            kind,
            "Team size vs. productivity gain (%)",
            sample,
            lambda r: r.team_size,
            lambda r: r.productivity_gain_pct,
        )
        insight = None
        if correlation:
            if correlation.coefficient >= self.settings.insight_positive_threshold:
                insight = Insight(
                    InsightType.POSITIVE,
                    kind,
                    "Larger teams are seeing larger productivity gains.",
                )
            elif correlation.coefficient <= self.settings.insight_negative_threshold:
                insight = Insight(
                    InsightType.WARNING,
                    kind,
                    "Productivity gains shrink as teams grow; larger teams may "
                    "need more adoption support.",
                )
        return correlation, insight

    def _time_saved_vs_investment(self, results):
        kind = CorrelationKind.TIME_SAVED_VS_INVESTMENT
        sample = [r for r in results if r.hours_before_month > 0]
        correlation = self._numeric(
            kind,
            "Hours saved per year vs. implementation cost",
            sample,
            lambda r: r.hours_saved_year,
            lambda r: r.implementation_cost,
        )
        insight = None
        if correlation:
            if correlation.coefficient >= self.settings.insight_positive_threshold:
                insight = Insight(
                    InsightType.POSITIVE,
                    kind,
                    "Bigger implementation budgets are saving more hours.",
                )
            elif correlation.coefficient <= self.settings.insight_investment_warning:
                insight = Insight(
                    InsightType.WARNING,
                    kind,
                    "The most expensive implementations are saving the fewest hours.",
                )
        return correlation, insight

    # -- categorical pairing ------------------------------------------------

    def _type_vs_roi(self, results):
        kind = CorrelationKind.TYPE_VS_ROI
        grouped: dict = {}
        for r in results:
            if r.roi_pct is None:
                continue
            grouped.setdefault(r.type, []).append(r.roi_pct)

        sample_size = sum(len(v) for v in grouped.values())
        if sample_size < self.settings.correlation_min_samples:
            return None, None

        breakdown = sorted(
            (
                TypeROIBreakdown(type=t, average_roi=sum(v) / len(v), count=len(v))
                for t, v in grouped.items()
            ),
            key=lambda b: b.average_roi,
            reverse=True,
        )
        correlation = CorrelationResult(
            kind=kind,
            description="Indicator type vs. average ROI (%)",
            sample_size=sample_size,
            breakdown=breakdown,
        )
        insight = None
        if len(breakdown) >= 2:
            best = breakdown[0]
            insight = Insight(
                InsightType.INFO,
                kind,
                f"{get_variant(best.type).label} indicators have the best average ROI "
                f"({best.average_roi:.1f}%).",
            )
        return correlation, insight
