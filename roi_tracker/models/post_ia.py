"""Post-IA schemas: the same process after automation/AI.

Each model mirrors its Baseline counterpart. Fields listed in a variant's
``COMPUTED_FIELDS`` are derived values; ``engine.calculator.recompute`` is
the only writer and overwrites them all on every call.
"""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal, Union

from pydantic import Field

from .baseline import DecisionCriterion, Person, QualitativeField, Record, Tool
from .enums import CalendarPeriod, ScoreType, TimeUnit
from .fields import (
    Amount,
    CalendarPeriodField,
    NonNegativeAmount,
    ScoreTypeField,
    Text,
    TimeUnitField,
)


class PostIATool(Tool):
    implementation_cost: NonNegativeAmount = 0.0


class ProductivityPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = (
        "baseline_total_cost",
        "post_ia_total_cost",
        "delta_productivity",
        "hours_saved_month",
        "hours_saved_year",
        "hours_saved_desired_month",
        "cost_saved_desired_month",
        "productivity_gain_pct",
    )

    type: Literal["productivity"] = "productivity"
    person_involved: bool = False
    people: list[Person] = Field(default_factory=list)

    baseline_total_cost: float = 0.0
    post_ia_total_cost: float = 0.0
    delta_productivity: float = 0.0
    hours_saved_month: float = 0.0
    hours_saved_year: float = 0.0
    hours_saved_desired_month: float = 0.0
    cost_saved_desired_month: float = 0.0
    productivity_gain_pct: float = 0.0


class AnalyticalCapacityPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = ()

    type: Literal["analytical_capacity"] = "analytical_capacity"
    qualitative_fields: list[QualitativeField] = Field(default_factory=list)


class RevenueIncreasePostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = ("delta_revenue",)

    type: Literal["revenue_increase"] = "revenue_increase"
    revenue_after: NonNegativeAmount = 0.0

    delta_revenue: float = 0.0


class MarginImprovementPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = (
        "delta_margin_pct",
        "delta_margin_cash",
        "monthly_saving",
        "annual_saving",
    )

    type: Literal["margin_improvement"] = "margin_improvement"
    gross_revenue_monthly: NonNegativeAmount = 0.0
    total_cost_monthly: NonNegativeAmount = 0.0
    margin_pct: Amount = 0.0
    transaction_volume: NonNegativeAmount = 0.0

    delta_margin_pct: float = 0.0
    delta_margin_cash: float = 0.0
    monthly_saving: float = 0.0
    annual_saving: float = 0.0


class RiskReductionPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = (
        "probability_reduction",
        "exposure_before",
        "exposure_after",
        "risk_value_avoided",
        "mitigation_saving",
        "annual_benefit",
        "cost_benefit_ratio",
        "roi",
    )

    type: Literal["risk_reduction"] = "risk_reduction"
    probability: Amount = 0.0
    financial_impact: NonNegativeAmount = 0.0
    assessment_frequency: NonNegativeAmount = 0.0
    assessment_period: CalendarPeriodField = CalendarPeriod.MONTH
    mitigation_cost: NonNegativeAmount = 0.0

    probability_reduction: float = 0.0
    exposure_before: float = 0.0
    exposure_after: float = 0.0
    risk_value_avoided: float = 0.0
    mitigation_saving: float = 0.0
    annual_benefit: float = 0.0
    cost_benefit_ratio: float = 0.0
    roi: float = 0.0


class DecisionQualityPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = (
        "score_before",
        "score_after",
        "delta_score",
        "accuracy_improvement",
        "error_saving",
        "time_saving_hours",
        "time_value",
        "total_monthly_benefit",
        "roi",
    )

    type: Literal["decision_quality"] = "decision_quality"
    criteria: list[DecisionCriterion] = Field(default_factory=list)
    decisions_per_period: NonNegativeAmount = 0.0
    period: CalendarPeriodField = CalendarPeriod.MONTH
    accuracy_pct: Amount = 0.0
    avg_error_cost: NonNegativeAmount = 0.0
    avg_minutes_per_decision: NonNegativeAmount = 0.0
    people_involved: NonNegativeAmount = 0.0

    score_before: float = 0.0
    score_after: float = 0.0
    delta_score: float = 0.0
    accuracy_improvement: float = 0.0
    error_saving: float = 0.0
    time_saving_hours: float = 0.0
    time_value: float = 0.0
    total_monthly_benefit: float = 0.0
    roi: float = 0.0


class SpeedPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = (
        "delivery_time_reduction_pct",
        "capacity_increase",
        "delay_cost_saving",
        "hours_saved",
        "time_value_saved",
        "productivity_gain_pct",
        "roi",
    )

    type: Literal["speed"] = "speed"
    delivery_time: NonNegativeAmount = 0.0
    delivery_time_unit: TimeUnitField = TimeUnit.DAYS
    deliveries_per_period: NonNegativeAmount = 0.0
    deliveries_period: CalendarPeriodField = CalendarPeriod.MONTH
    delay_cost: NonNegativeAmount = 0.0
    people_involved: NonNegativeAmount = 0.0
    work_hours_per_delivery: NonNegativeAmount = 0.0

    delivery_time_reduction_pct: float = 0.0
    capacity_increase: float = 0.0
    delay_cost_saving: float = 0.0
    hours_saved: float = 0.0
    time_value_saved: float = 0.0
    productivity_gain_pct: float = 0.0
    roi: float = 0.0


class SatisfactionPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = (
        "delta_score",
        "churn_reduction",
        "retained_customers",
        "retention_value",
        "support_saving",
        "revenue_increase",
        "ltv_before",
        "ltv_after",
        "ltv_delta",
        "roi",
    )

    type: Literal["satisfaction"] = "satisfaction"
    score: Amount = 0.0
    score_type: ScoreTypeField = ScoreType.NPS
    customer_count: NonNegativeAmount = 0.0
    avg_value_per_customer: NonNegativeAmount = 0.0
    churn_pct: Amount = 0.0
    support_tickets: NonNegativeAmount = 0.0

    delta_score: float = 0.0
    churn_reduction: float = 0.0
    retained_customers: float = 0.0
    retention_value: float = 0.0
    support_saving: float = 0.0
    revenue_increase: float = 0.0
    ltv_before: float = 0.0
    ltv_after: float = 0.0
    ltv_delta: float = 0.0
    roi: float = 0.0


class RelatedCostsPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = (
        "total_implementation_cost",
        "monthly_cost_before",
        "monthly_cost_after",
        "monthly_saving",
    )

    type: Literal["related_costs"] = "related_costs"
    tools: list[PostIATool] = Field(default_factory=list)

    total_implementation_cost: float = 0.0
    monthly_cost_before: float = 0.0
    monthly_cost_after: float = 0.0
    monthly_saving: float = 0.0


class OtherPostIA(Record):
    COMPUTED_FIELDS: ClassVar[tuple[str, ...]] = ("delta",)

    type: Literal["other"] = "other"
    indicator_name: Text = ""
    value_after: Amount = 0.0

    delta: float = 0.0


PostIARecord = Annotated[
    Union[
        ProductivityPostIA,
        AnalyticalCapacityPostIA,
        RevenueIncreasePostIA,
        MarginImprovementPostIA,
        RiskReductionPostIA,
        DecisionQualityPostIA,
        SpeedPostIA,
        SatisfactionPostIA,
        RelatedCostsPostIA,
        OtherPostIA,
    ],
    Field(discriminator="type"),
]
