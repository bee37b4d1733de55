from __future__ import annotations

from enum import Enum
from typing import Optional


class IndicatorType(str, Enum):
    PRODUCTIVITY = "productivity"
    ANALYTICAL_CAPACITY = "analytical_capacity"
    REVENUE_INCREASE = "revenue_increase"
    MARGIN_IMPROVEMENT = "margin_improvement"
    RISK_REDUCTION = "risk_reduction"
    DECISION_QUALITY = "decision_quality"
    SPEED = "speed"
    SATISFACTION = "satisfaction"
    RELATED_COSTS = "related_costs"
    OTHER = "other"

    @classmethod
    def parse(cls, value: object) -> Optional[IndicatorType]:
        """Resolve a member value, member name or legacy form label.

        Returns None when nothing matches; callers decide on the fallback.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        return _LEGACY_LABELS.get(key)


# Labels from the legacy 8-type forms and the storage layer
_LEGACY_LABELS: dict[str, IndicatorType] = {
    "produtividade": IndicatorType.PRODUCTIVITY,
    "capacidade analítica": IndicatorType.ANALYTICAL_CAPACITY,
    "incremento receita": IndicatorType.REVENUE_INCREASE,
    "melhoria margem": IndicatorType.MARGIN_IMPROVEMENT,
    "redução de risco": IndicatorType.RISK_REDUCTION,
    "qualidade decisão": IndicatorType.DECISION_QUALITY,
    "velocidade": IndicatorType.SPEED,
    "satisfação": IndicatorType.SATISFACTION,
    "custos relacionados": IndicatorType.RELATED_COSTS,
    "cost_reduction": IndicatorType.RELATED_COSTS,
    "outros": IndicatorType.OTHER,
}


class FrequencyPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class CalendarPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class TimeUnit(str, Enum):
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


class ScoreType(str, Enum):
    NPS = "nps"
    ENPS = "enps"
    OTHER = "other"


class CostRecurrence(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"
    ONE_OFF = "one_off"


class CorrelationStrength(str, Enum):
    VERY_STRONG = "very strong"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    VERY_WEAK = "very weak"


class CorrelationKind(str, Enum):
    BASELINE_VS_POST_IA = "baseline_vs_post_ia"
    COST_VS_SAVING = "cost_vs_saving"
    TYPE_VS_ROI = "type_vs_roi"
    TEAM_SIZE_VS_GAIN = "team_size_vs_gain"
    TIME_SAVED_VS_INVESTMENT = "time_saved_vs_investment"


class InsightType(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    INFO = "info"
