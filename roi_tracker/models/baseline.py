"""Baseline schemas: how the process ran before automation/AI.

One model per indicator type, joined in the ``BaselineRecord`` discriminated
union on ``type``. Defaults are the empty record: lists empty, scalars zero.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import CalendarPeriod, FrequencyPeriod, ScoreType, TimeUnit
from .fields import (
    Amount,
    CalendarPeriodField,
    FrequencyPeriodField,
    NonNegativeAmount,
    ScoreTypeField,
    Text,
    TimeUnitField,
    new_id,
)


class Record(BaseModel):
    """Common configuration for every Baseline/Post-IA model."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class Frequency(Record):
    quantity: NonNegativeAmount = 0.0
    period: FrequencyPeriodField = FrequencyPeriod.MONTHLY


class Person(Record):
    """Someone who performs the measured task."""

    id: str = Field(default_factory=new_id)
    name: Text = ""
    role: Text = ""
    hourly_rate: NonNegativeAmount = 0.0
    time_spent_minutes: NonNegativeAmount = 0.0
    real_frequency: Frequency = Field(default_factory=Frequency)
    desired_frequency: Frequency = Field(default_factory=Frequency)


class Tool(Record):
    id: str = Field(default_factory=new_id)
    name: Text = ""
    monthly_cost: NonNegativeAmount = 0.0
    other_costs: NonNegativeAmount = 0.0


class QualitativeField(Record):
    id: str = Field(default_factory=new_id)
    criterion: Text = ""
    value: Text = ""


class DecisionCriterion(Record):
    id: str = Field(default_factory=new_id)
    name: Text = ""
    rating: Amount = Field(default=0.0, description="0-100")


class ProductivityBaseline(Record):
    type: Literal["productivity"] = "productivity"
    people: list[Person] = Field(default_factory=list)


class AnalyticalCapacityBaseline(Record):
    type: Literal["analytical_capacity"] = "analytical_capacity"
    qualitative_fields: list[QualitativeField] = Field(default_factory=list)


class RevenueIncreaseBaseline(Record):
    type: Literal["revenue_increase"] = "revenue_increase"
    revenue_before: NonNegativeAmount = Field(default=0.0, description="Monthly revenue")


class MarginImprovementBaseline(Record):
    type: Literal["margin_improvement"] = "margin_improvement"
    gross_revenue_monthly: NonNegativeAmount = 0.0
    total_cost_monthly: NonNegativeAmount = 0.0
    margin_pct: Amount = 0.0
    transaction_volume: NonNegativeAmount = 0.0


class RiskReductionBaseline(Record):
    type: Literal["risk_reduction"] = "risk_reduction"
    risk_type: Text = ""
    probability: Amount = Field(default=0.0, description="0-100 (%)")
    financial_impact: NonNegativeAmount = 0.0
    assessment_frequency: NonNegativeAmount = 0.0
    assessment_period: CalendarPeriodField = CalendarPeriod.MONTH
    mitigation_cost: NonNegativeAmount = Field(default=0.0, description="Per month")


class DecisionQualityBaseline(Record):
    type: Literal["decision_quality"] = "decision_quality"
    criteria: list[DecisionCriterion] = Field(default_factory=list)
    decisions_per_period: NonNegativeAmount = 0.0
    period: CalendarPeriodField = CalendarPeriod.MONTH
    accuracy_pct: Amount = 0.0
    avg_error_cost: NonNegativeAmount = 0.0
    avg_minutes_per_decision: NonNegativeAmount = 0.0
    people_involved: NonNegativeAmount = 0.0
    avg_hourly_rate: NonNegativeAmount = 0.0


class SpeedBaseline(Record):
    type: Literal["speed"] = "speed"
    delivery_time: NonNegativeAmount = 0.0
    delivery_time_unit: TimeUnitField = TimeUnit.DAYS
    deliveries_per_period: NonNegativeAmount = 0.0
    deliveries_period: CalendarPeriodField = CalendarPeriod.MONTH
    delay_cost: NonNegativeAmount = 0.0
    people_involved: NonNegativeAmount = 0.0
    work_hours_per_delivery: NonNegativeAmount = 0.0
    avg_hourly_rate: NonNegativeAmount = 0.0


class SatisfactionBaseline(Record):
    type: Literal["satisfaction"] = "satisfaction"
    score: Amount = 0.0
    score_type: ScoreTypeField = ScoreType.NPS
    customer_count: NonNegativeAmount = 0.0
    avg_value_per_customer: NonNegativeAmount = 0.0
    churn_pct: Amount = 0.0
    support_tickets: NonNegativeAmount = 0.0


class RelatedCostsBaseline(Record):
    type: Literal["related_costs"] = "related_costs"
    tools: list[Tool] = Field(default_factory=list)


class OtherBaseline(Record):
    type: Literal["other"] = "other"
    indicator_name: Text = ""
    value: Amount = 0.0


BaselineRecord = Annotated[
    Union[
        ProductivityBaseline,
        AnalyticalCapacityBaseline,
        RevenueIncreaseBaseline,
        MarginImprovementBaseline,
        RiskReductionBaseline,
        DecisionQualityBaseline,
        SpeedBaseline,
        SatisfactionBaseline,
        RelatedCostsBaseline,
        OtherBaseline,
    ],
    Field(discriminator="type"),
]
