"""Baseline -> Post-IA formulas for the ten indicator types.

Each function is a pure calculation with no side effects. It receives the
Baseline record (or None when it is missing), the Post-IA record and the
indicator's implementation cost, and returns every computed field of the
Post-IA variant. Outputs that compare the two scenarios are 0 whenever the
Baseline is missing or belongs to another variant. All monetary values are
in the currency of the inputs; "monthly" means per month.
"""

from __future__ import annotations

from typing import Any, Optional

from roi_tracker.config.settings import Settings
from roi_tracker.kpi_library.periods import normalize_calendar, normalize_frequency, to_hours
from roi_tracker.kpi_library.registry import register_variant
from roi_tracker.models.baseline import (
    AnalyticalCapacityBaseline,
    DecisionQualityBaseline,
    MarginImprovementBaseline,
    OtherBaseline,
    Person,
    ProductivityBaseline,
    RelatedCostsBaseline,
    RevenueIncreaseBaseline,
    RiskReductionBaseline,
    SatisfactionBaseline,
    SpeedBaseline,
)
from roi_tracker.models.enums import IndicatorType
from roi_tracker.models.post_ia import (
    AnalyticalCapacityPostIA,
    DecisionQualityPostIA,
    MarginImprovementPostIA,
    OtherPostIA,
    ProductivityPostIA,
    RelatedCostsPostIA,
    RevenueIncreasePostIA,
    RiskReductionPostIA,
    SatisfactionPostIA,
    SpeedPostIA,
)

_VISIBILITY_KEYS = (
    "show_operation_time",
    "show_delivery_time",
    "show_hourly_rate",
    "show_operation_count",
    "show_value_per_analysis",
    "show_avoided_impact",
)
_POST_IA_VISIBILITY_KEYS = (
    "show_execution_time",
    "show_operation_count",
    "show_value_per_analysis",
    "show_avoided_impact",
)


def _baseline_flags(**enabled: bool) -> dict[str, bool]:
    return {key: enabled.get(key, False) for key in _VISIBILITY_KEYS}


def _post_ia_flags(**enabled: bool) -> dict[str, bool]:
    return {key: enabled.get(key, False) for key in _POST_IA_VISIBILITY_KEYS}


def _comparable(baseline: Any, post_ia: Any) -> bool:
    return baseline is not None and baseline.type == post_ia.type


def _zeros(post_ia: Any, **known: float) -> dict[str, float]:
    """All computed fields at 0, except the non-comparative ones in ``known``."""
    result = {name: 0.0 for name in post_ia.COMPUTED_FIELDS}
    result.update(known)
    return result


def _roi(annual_benefit: float, implementation_cost: float) -> float:
    if implementation_cost <= 0:
        return 0.0
    return (annual_benefit - implementation_cost) / implementation_cost * 100


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# ---------------------------------------------------------------------------
# Productivity
# ---------------------------------------------------------------------------


def person_executions_per_month(person: Person) -> float:
    return normalize_frequency(person.real_frequency.quantity, person.real_frequency.period)


def person_hours_per_month(person: Person) -> float:
    """HH = time per execution (h) x executions per month."""
    return person.time_spent_minutes / 60 * person_executions_per_month(person)


def person_monthly_cost(person: Person) -> float:
    return person_hours_per_month(person) * person.hourly_rate


def _productivity_hours(baseline: Any, post_ia: Any) -> tuple[float, float]:
    if baseline is None:
        before = 0.0
    else:
        before = sum(person_hours_per_month(p) for p in baseline.people)
    after = sum(person_hours_per_month(p) for p in post_ia.people)
    return before, after


def _productivity_team(baseline: Any, post_ia: Any) -> float:
    if baseline is not None and baseline.people:
        return float(len(baseline.people))
    return float(len(post_ia.people))


def _productivity_executions(baseline: Any, post_ia: Any) -> tuple[float, float]:
    if baseline is None:
        before = 0.0
    else:
        before = sum(person_executions_per_month(p) for p in baseline.people)
    return before, sum(person_executions_per_month(p) for p in post_ia.people)


def _productivity_labor_cost(baseline: Any, post_ia: Any) -> tuple[float, float]:
    if baseline is None:
        before = 0.0
    else:
        before = sum(person_monthly_cost(p) for p in baseline.people)
    return before, sum(person_monthly_cost(p) for p in post_ia.people)


def _cost_at_baseline_rate(hours_fn):
    """Monthly labour cost of both scenarios at the Baseline's average hourly rate."""

    def labor_cost(baseline: Any, post_ia: Any) -> tuple[float, float]:
        rate = baseline.avg_hourly_rate if baseline is not None else 0.0
        before, after = hours_fn(baseline, post_ia)
        return before * rate, after * rate

    return labor_cost


@register_variant(
    indicator_type=IndicatorType.PRODUCTIVITY,
    label="Productivity",
    description=(
        "Total cost of the hours invested before (HH x cost). "
        "Measures the time reduction on existing tasks."
    ),
    main_metric="Baseline total cost = sum(people x hourly rate x time x real frequency)",
    baseline_model=ProductivityBaseline,
    post_ia_model=ProductivityPostIA,
    annual_saving_fn=lambda post: post.delta_productivity * 12,
    baseline_visibility=_baseline_flags(
        show_operation_time=True,
        show_delivery_time=True,
        show_hourly_rate=True,
        show_operation_count=True,
    ),
    post_ia_visibility=_post_ia_flags(show_execution_time=True, show_operation_count=True),
    hours_fn=_productivity_hours,
    team_size_fn=_productivity_team,
    executions_fn=_productivity_executions,
    labor_cost_fn=_productivity_labor_cost,
    gain_field="productivity_gain_pct",
)
def calc_productivity(
    baseline: Optional[ProductivityBaseline],
    post_ia: ProductivityPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Delta_Productivity = sum((HH_before - HH_after) x hourly_rate_after), matched by person id."""
    post_ia_total_cost = sum(person_monthly_cost(p) for p in post_ia.people)
    if not _comparable(baseline, post_ia):
        return _zeros(post_ia, post_ia_total_cost=post_ia_total_cost)

    baseline_by_id = {p.id: p for p in baseline.people}
    delta = 0.0
    hours_saved = 0.0
    matched_before = 0.0
    matched_after = 0.0
    desired_hours = 0.0
    desired_cost = 0.0

    for person in post_ia.people:
        before = baseline_by_id.get(person.id)
        if before is None:
            continue
        hh_before = person_hours_per_month(before)
        hh_after = person_hours_per_month(person)
        delta += (hh_before - hh_after) * person.hourly_rate
        hours_saved += hh_before - hh_after
        matched_before += hh_before
        matched_after += hh_after

        # Same comparison at the frequency the task should be done
        desired_executions = normalize_frequency(
            before.desired_frequency.quantity, before.desired_frequency.period
        )
        saved = max(
            0.0,
            (before.time_spent_minutes - person.time_spent_minutes) / 60 * desired_executions,
        )
        desired_hours += saved
        desired_cost += saved * person.hourly_rate

    gain = (
        (matched_before - matched_after) / matched_before * 100
        if matched_before > 0
        else 0.0
    )
    return {
        "baseline_total_cost": sum(person_monthly_cost(p) for p in baseline.people),
        "post_ia_total_cost": post_ia_total_cost,
        "delta_productivity": delta,
        "hours_saved_month": hours_saved,
        "hours_saved_year": hours_saved * 12,
        "hours_saved_desired_month": desired_hours,
        "cost_saved_desired_month": desired_cost,
        "productivity_gain_pct": gain,
    }


# ---------------------------------------------------------------------------
# Analytical capacity
# ---------------------------------------------------------------------------


@register_variant(
    indicator_type=IndicatorType.ANALYTICAL_CAPACITY,
    label="Analytical Capacity",
    description=(
        "New insights and decisions. Ability to produce analyses that "
        "were not possible before."
    ),
    main_metric="Qualitative analysis fields",
    baseline_model=AnalyticalCapacityBaseline,
    post_ia_model=AnalyticalCapacityPostIA,
    annual_saving_fn=lambda post: 0.0,
    baseline_visibility=_baseline_flags(show_operation_count=True, show_value_per_analysis=True),
    post_ia_visibility=_post_ia_flags(show_operation_count=True, show_value_per_analysis=True),
    category="qualitative",
)
def calc_analytical_capacity(
    baseline: Optional[AnalyticalCapacityBaseline],
    post_ia: AnalyticalCapacityPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Qualitative only: the entries are reported as entered, nothing is derived."""
    return {}


# ---------------------------------------------------------------------------
# Revenue increase
# ---------------------------------------------------------------------------


@register_variant(
    indicator_type=IndicatorType.REVENUE_INCREASE,
    label="Revenue Increase",
    description=(
        "Revenue before. Direct revenue increase through new opportunities "
        "or sales optimization."
    ),
    main_metric="Revenue before (monthly)",
    baseline_model=RevenueIncreaseBaseline,
    post_ia_model=RevenueIncreasePostIA,
    annual_saving_fn=lambda post: post.delta_revenue * 12,
    baseline_visibility=_baseline_flags(),
    post_ia_visibility=_post_ia_flags(),
    category="revenue",
)
def calc_revenue_increase(
    baseline: Optional[RevenueIncreaseBaseline],
    post_ia: RevenueIncreasePostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Delta_Revenue = revenue_after - revenue_before"""
    if not _comparable(baseline, post_ia):
        return _zeros(post_ia)
    return {"delta_revenue": post_ia.revenue_after - baseline.revenue_before}


# ---------------------------------------------------------------------------
# Margin improvement
# ---------------------------------------------------------------------------


@register_variant(
    indicator_type=IndicatorType.MARGIN_IMPROVEMENT,
    label="Margin Improvement",
    description=(
        "Profit margin improvement through process optimization or cost reduction."
    ),
    main_metric="Monthly gross revenue, monthly total cost, current gross margin (%), transaction volume",
    baseline_model=MarginImprovementBaseline,
    post_ia_model=MarginImprovementPostIA,
    annual_saving_fn=lambda post: post.annual_saving,
    baseline_visibility=_baseline_flags(),
    post_ia_visibility=_post_ia_flags(),
    category="revenue",
)
def calc_margin_improvement(
    baseline: Optional[MarginImprovementBaseline],
    post_ia: MarginImprovementPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Delta_Margin_Cash = (revenue_est - cost_est) - (revenue_now - cost_now)"""
    if not _comparable(baseline, post_ia):
        return _zeros(post_ia)
    gross_profit_before = baseline.gross_revenue_monthly - baseline.total_cost_monthly
    gross_profit_after = post_ia.gross_revenue_monthly - post_ia.total_cost_monthly
    delta_cash = gross_profit_after - gross_profit_before
    return {
        "delta_margin_pct": post_ia.margin_pct - baseline.margin_pct,
        "delta_margin_cash": delta_cash,
        "monthly_saving": delta_cash,
        "annual_saving": delta_cash * 12,
    }


# ---------------------------------------------------------------------------
# Risk reduction
# ---------------------------------------------------------------------------


def risk_exposure(probability_pct: float, impact: float) -> float:
    return probability_pct / 100 * impact


@register_variant(
    indicator_type=IndicatorType.RISK_REDUCTION,
    label="Risk Reduction",
    description="Money avoided. Reduction of financial risk through prevention or mitigation.",
    main_metric="Avoided value = probability x financial impact",
    baseline_model=RiskReductionBaseline,
    post_ia_model=RiskReductionPostIA,
    annual_saving_fn=lambda post: post.annual_benefit,
    baseline_visibility=_baseline_flags(show_avoided_impact=True),
    post_ia_visibility=_post_ia_flags(show_avoided_impact=True),
    category="risk",
)
def calc_risk_reduction(
    baseline: Optional[RiskReductionBaseline],
    post_ia: RiskReductionPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Annual_Benefit = mitigation_saving x 12 + (exposure_before - exposure_after)"""
    exposure_after = risk_exposure(post_ia.probability, post_ia.financial_impact)
    if not _comparable(baseline, post_ia):
        return _zeros(post_ia, exposure_after=exposure_after)

    exposure_before = risk_exposure(baseline.probability, baseline.financial_impact)
    risk_value_avoided = exposure_before - exposure_after
    mitigation_saving = baseline.mitigation_cost - post_ia.mitigation_cost
    annual_benefit = mitigation_saving * 12 + risk_value_avoided
    return {
        "probability_reduction": baseline.probability - post_ia.probability,
        "exposure_before": exposure_before,
        "exposure_after": exposure_after,
        "risk_value_avoided": risk_value_avoided,
        "mitigation_saving": mitigation_saving,
        "annual_benefit": annual_benefit,
        "cost_benefit_ratio": (
            annual_benefit / implementation_cost if implementation_cost > 0 else 0.0
        ),
        "roi": _roi(annual_benefit, implementation_cost),
    }


# ---------------------------------------------------------------------------
# Decision quality
# ---------------------------------------------------------------------------


def _monthly_decisions(record: Any) -> float:
    return normalize_calendar(record.decisions_per_period, record.period)


def _decision_hours(record: Any) -> float:
    return _monthly_decisions(record) * record.avg_minutes_per_decision * record.people_involved / 60


def _decision_hours_pair(baseline: Any, post_ia: Any) -> tuple[float, float]:
    before = _decision_hours(baseline) if baseline is not None else 0.0
    return before, _decision_hours(post_ia)


def _decision_executions_pair(baseline: Any, post_ia: Any) -> tuple[float, float]:
    before = _monthly_decisions(baseline) if baseline is not None else 0.0
    return before, _monthly_decisions(post_ia)


@register_variant(
    indicator_type=IndicatorType.DECISION_QUALITY,
    label="Decision Quality",
    description="Qualitative score. Better decisions through data and analysis.",
    main_metric="Decision criteria rating (0-100), accuracy rate and cost of wrong decisions",
    baseline_model=DecisionQualityBaseline,
    post_ia_model=DecisionQualityPostIA,
    annual_saving_fn=lambda post: post.total_monthly_benefit * 12,
    baseline_visibility=_baseline_flags(),
    post_ia_visibility=_post_ia_flags(),
    hours_fn=_decision_hours_pair,
    executions_fn=_decision_executions_pair,
    labor_cost_fn=_cost_at_baseline_rate(_decision_hours_pair),
    team_size_fn=lambda baseline, post_ia: (
        baseline.people_involved if baseline is not None else post_ia.people_involved
    ),
)
def calc_decision_quality(
    baseline: Optional[DecisionQualityBaseline],
    post_ia: DecisionQualityPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Total_Monthly_Benefit = error_saving + time_saving_hours x avg_hourly_rate"""
    score_after = _mean([c.rating for c in post_ia.criteria])
    if not _comparable(baseline, post_ia):
        return _zeros(post_ia, score_after=score_after)

    monthly_before = _monthly_decisions(baseline)
    monthly_after = _monthly_decisions(post_ia)

    wrong_before = monthly_before * (1 - baseline.accuracy_pct / 100)
    wrong_after = monthly_after * (1 - post_ia.accuracy_pct / 100)
    error_saving = wrong_before * baseline.avg_error_cost - wrong_after * post_ia.avg_error_cost

    time_saving_hours = _decision_hours(baseline) - _decision_hours(post_ia)
    time_value = time_saving_hours * baseline.avg_hourly_rate
    total_monthly_benefit = error_saving + time_value

    score_before = _mean([c.rating for c in baseline.criteria])
    return {
        "score_before": score_before,
        "score_after": score_after,
        "delta_score": score_after - score_before,
        "accuracy_improvement": post_ia.accuracy_pct - baseline.accuracy_pct,
        "error_saving": error_saving,
        "time_saving_hours": time_saving_hours,
        "time_value": time_value,
        "total_monthly_benefit": total_monthly_benefit,
        "roi": _roi(total_monthly_benefit * 12, implementation_cost),
    }


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------


def _monthly_deliveries(record: Any) -> float:
    return normalize_calendar(record.deliveries_per_period, record.deliveries_period)


def _speed_labor_hours(record: Any) -> float:
    return _monthly_deliveries(record) * record.work_hours_per_delivery * record.people_involved


def _speed_hours_pair(baseline: Any, post_ia: Any) -> tuple[float, float]:
    before = _speed_labor_hours(baseline) if baseline is not None else 0.0
    return before, _speed_labor_hours(post_ia)


def _speed_executions_pair(baseline: Any, post_ia: Any) -> tuple[float, float]:
    before = _monthly_deliveries(baseline) if baseline is not None else 0.0
    return before, _monthly_deliveries(post_ia)


@register_variant(
    indicator_type=IndicatorType.SPEED,
    label="Speed",
    description="Cycle time. Reduction of the time needed to complete processes or deliveries.",
    main_metric="Initial process time",
    baseline_model=SpeedBaseline,
    post_ia_model=SpeedPostIA,
    annual_saving_fn=lambda post: (post.delay_cost_saving + post.time_value_saved) * 12,
    baseline_visibility=_baseline_flags(
        show_operation_time=True,
        show_delivery_time=True,
        show_hourly_rate=True,
        show_operation_count=True,
    ),
    post_ia_visibility=_post_ia_flags(show_execution_time=True, show_operation_count=True),
    hours_fn=_speed_hours_pair,
    executions_fn=_speed_executions_pair,
    labor_cost_fn=_cost_at_baseline_rate(_speed_hours_pair),
    team_size_fn=lambda baseline, post_ia: (
        baseline.people_involved if baseline is not None else post_ia.people_involved
    ),
    gain_field="productivity_gain_pct",
)
def calc_speed(
    baseline: Optional[SpeedBaseline],
    post_ia: SpeedPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Delivery_Time_Reduction_% = (t_before - t_after) / t_before x 100"""
    if not _comparable(baseline, post_ia):
        return _zeros(post_ia)

    monthly_before = _monthly_deliveries(baseline)
    monthly_after = _monthly_deliveries(post_ia)

    time_before = to_hours(baseline.delivery_time, baseline.delivery_time_unit)
    time_after = to_hours(post_ia.delivery_time, post_ia.delivery_time_unit)
    reduction_pct = (
        (time_before - time_after) / time_before * 100 if time_before > 0 else 0.0
    )

    capacity_increase = monthly_after - monthly_before
    delay_cost_saving = (baseline.delay_cost - post_ia.delay_cost) * monthly_after
    hours_saved = _speed_labor_hours(baseline) - _speed_labor_hours(post_ia)
    time_value_saved = hours_saved * baseline.avg_hourly_rate
    gain_pct = capacity_increase / monthly_before * 100 if monthly_before > 0 else 0.0

    return {
        "delivery_time_reduction_pct": reduction_pct,
        "capacity_increase": capacity_increase,
        "delay_cost_saving": delay_cost_saving,
        "hours_saved": hours_saved,
        "time_value_saved": time_value_saved,
        "productivity_gain_pct": gain_pct,
        "roi": _roi((delay_cost_saving + time_value_saved) * 12, implementation_cost),
    }


# ---------------------------------------------------------------------------
# Satisfaction
# ---------------------------------------------------------------------------


def lifetime_value(monthly_value: float, churn_pct: float) -> float:
    """LTV = value / churn rate; 0 when nobody churns (undefined)."""
    if churn_pct <= 0:
        return 0.0
    return monthly_value / (churn_pct / 100)


@register_variant(
    indicator_type=IndicatorType.SATISFACTION,
    label="Satisfaction",
    description="NPS, eNPS. Customer or employee satisfaction improvement.",
    main_metric="Current satisfaction score (0-100)",
    baseline_model=SatisfactionBaseline,
    post_ia_model=SatisfactionPostIA,
    annual_saving_fn=lambda post: post.retention_value + post.support_saving * 12,
    baseline_visibility=_baseline_flags(),
    post_ia_visibility=_post_ia_flags(),
    category="retention",
)
def calc_satisfaction(
    baseline: Optional[SatisfactionBaseline],
    post_ia: SatisfactionPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Retention_Value = customers x churn_reduction% x value_per_customer x 12"""
    ltv_after = lifetime_value(post_ia.avg_value_per_customer, post_ia.churn_pct)
    if not _comparable(baseline, post_ia):
        return _zeros(post_ia, ltv_after=ltv_after)

    settings = settings or Settings()
    churn_reduction = baseline.churn_pct - post_ia.churn_pct
    retained_customers = baseline.customer_count * churn_reduction / 100
    retention_value = retained_customers * baseline.avg_value_per_customer * 12
    support_saving = (
        baseline.support_tickets - post_ia.support_tickets
    ) * settings.support_ticket_cost
    revenue_increase = (
        post_ia.customer_count * post_ia.avg_value_per_customer
        - baseline.customer_count * baseline.avg_value_per_customer
    ) * 12
    ltv_before = lifetime_value(baseline.avg_value_per_customer, baseline.churn_pct)

    return {
        "delta_score": post_ia.score - baseline.score,
        "churn_reduction": churn_reduction,
        "retained_customers": retained_customers,
        "retention_value": retention_value,
        "support_saving": support_saving,
        "revenue_increase": revenue_increase,
        "ltv_before": ltv_before,
        "ltv_after": ltv_after,
        "ltv_delta": ltv_after - ltv_before,
        "roi": _roi(retention_value + support_saving * 12, implementation_cost),
    }


# ---------------------------------------------------------------------------
# Related costs
# ---------------------------------------------------------------------------


def tool_running_cost(tools: list) -> float:
    return sum(t.monthly_cost + t.other_costs for t in tools)


@register_variant(
    indicator_type=IndicatorType.RELATED_COSTS,
    label="Related Costs",
    description=(
        "Financial savings. Costs of tools, services and other resources "
        "needed by the process."
    ),
    main_metric="Total cost = sum(monthly cost + other costs)",
    baseline_model=RelatedCostsBaseline,
    post_ia_model=RelatedCostsPostIA,
    annual_saving_fn=lambda post: post.monthly_saving * 12,
    baseline_visibility=_baseline_flags(),
    post_ia_visibility=_post_ia_flags(),
)
def calc_related_costs(
    baseline: Optional[RelatedCostsBaseline],
    post_ia: RelatedCostsPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Monthly_Saving = sum(tool costs before) - sum(tool costs after)"""
    total_implementation = sum(t.implementation_cost for t in post_ia.tools)
    monthly_after = tool_running_cost(post_ia.tools)
    if not _comparable(baseline, post_ia):
        return _zeros(
            post_ia,
            total_implementation_cost=total_implementation,
            monthly_cost_after=monthly_after,
        )
    monthly_before = tool_running_cost(baseline.tools)
    return {
        "total_implementation_cost": total_implementation,
        "monthly_cost_before": monthly_before,
        "monthly_cost_after": monthly_after,
        "monthly_saving": monthly_before - monthly_after,
    }


# ---------------------------------------------------------------------------
# Other
# ---------------------------------------------------------------------------


@register_variant(
    indicator_type=IndicatorType.OTHER,
    label="Other",
    description="Custom indicators that do not fit the standard categories.",
    main_metric="Indicator value",
    baseline_model=OtherBaseline,
    post_ia_model=OtherPostIA,
    annual_saving_fn=lambda post: 0.0,
    baseline_visibility=_baseline_flags(),
    post_ia_visibility=_post_ia_flags(),
    category="custom",
)
def calc_other(
    baseline: Optional[OtherBaseline],
    post_ia: OtherPostIA,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> dict[str, float]:
    """Delta = value_after - value_before"""
    if not _comparable(baseline, post_ia):
        return _zeros(post_ia)
    return {"delta": post_ia.value_after - baseline.value}
