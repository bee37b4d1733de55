"""Immutable result structures returned by the calculator, aggregator and analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from roi_tracker.models.enums import (
    CorrelationKind,
    CorrelationStrength,
    IndicatorType,
    InsightType,
)


@dataclass(frozen=True)
class CostSummary:
    """Cost entries of one indicator grouped by recurrence."""

    monthly: float = 0.0
    annual: float = 0.0
    one_off: float = 0.0


@dataclass(frozen=True)
class IndicatorResult:
    """Everything derived from one indicator's Baseline, Post-IA and costs."""

    indicator_id: str
    indicator_name: str
    type: IndicatorType
    computable: bool
    post_ia: Any = None
    monthly_saving: float = 0.0
    annual_saving: float = 0.0
    # annual_saving less a year of recurring cost
    net_annual_saving: float = 0.0
    productivity_gain_pct: Optional[float] = None
    hours_before_month: float = 0.0
    hours_after_month: float = 0.0
    hours_saved_month: float = 0.0
    team_size: float = 0.0
    # Per-execution figures; None for variants without an execution volume
    executions_before_month: float = 0.0
    executions_after_month: float = 0.0
    capacity_gain_pct: Optional[float] = None
    efficiency_pct: Optional[float] = None
    equivalent_executions: Optional[float] = None
    cost_per_execution_before: Optional[float] = None
    cost_per_execution_after: Optional[float] = None
    saving_per_execution: Optional[float] = None
    costs: CostSummary = field(default_factory=CostSummary)
    implementation_cost: float = 0.0
    roi_pct: Optional[float] = None
    roi_following_years_pct: Optional[float] = None
    payback_months: Optional[float] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def hours_saved_year(self) -> float:
        return self.hours_saved_month * 12

    @property
    def total_investment(self) -> float:
        """First-year investment: implementation plus a year of recurring cost."""
        return self.implementation_cost + self.costs.annual


@dataclass(frozen=True)
class ProjectSummary:
    project_id: str
    project_name: str
    total_indicators: int
    total_annual_saving: float
    aggregate_productivity_gain: float
    total_net_annual_saving: float = 0.0
    aggregate_capacity_gain: float = 0.0
    total_monthly_saving: float = 0.0
    total_hours_saved_year: float = 0.0
    total_implementation_cost: float = 0.0
    total_recurring_annual_cost: float = 0.0
    overall_roi: Optional[float] = None
    average_payback_months: Optional[float] = None
    savings_by_type: dict[str, float] = field(default_factory=dict)
    indicator_results: list[IndicatorResult] = field(default_factory=list)
    uncomputable_indicators: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TypeROIBreakdown:
    type: IndicatorType
    average_roi: float
    count: int


@dataclass(frozen=True)
class CorrelationResult:
    """One pairing of metrics across a project's indicators. Never persisted."""

    kind: CorrelationKind
    description: str
    sample_size: int
    coefficient: Optional[float] = None
    strength: Optional[CorrelationStrength] = None
    breakdown: list[TypeROIBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class Insight:
    type: InsightType
    kind: CorrelationKind
    message: str


@dataclass(frozen=True)
class CorrelationReport:
    project_id: Optional[str]
    correlations: list[CorrelationResult] = field(default_factory=list)
    insights: list[Insight] = field(default_factory=list)

    def get(self, kind: CorrelationKind) -> Optional[CorrelationResult]:
        for correlation in self.correlations:
            if correlation.kind == kind:
                return correlation
        return None
