"""Annotated field types shared by the Baseline and Post-IA schemas.

Form inputs reach the engine as whatever the storage layer kept: numbers,
numeric strings, blanks or nulls. Every numeric field coerces to a finite
float so that no formula ever sees NaN.
"""

from __future__ import annotations

import math
from typing import Annotated, Any
from uuid import uuid4

from pydantic import BeforeValidator

from .enums import CalendarPeriod, CostRecurrence, FrequencyPeriod, ScoreType, TimeUnit


def new_id() -> str:
    return uuid4().hex


def coerce_number(value: Any) -> float:
    """Blank, null, non-numeric and non-finite inputs become 0.0."""
    if value is None or isinstance(value, bool):
        return float(value or 0)
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def coerce_non_negative(value: Any) -> float:
    return max(0.0, coerce_number(value))


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _enum_coercer(enum_cls, aliases: dict[str, Any], default):
    def coerce(value: Any):
        if isinstance(value, enum_cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in enum_cls:
                if key in (member.value, member.name.lower()):
                    return member
            if key in aliases:
                return aliases[key]
        return default

    return coerce


coerce_frequency_period = _enum_coercer(
    FrequencyPeriod,
    {
        "diário": FrequencyPeriod.DAILY,
        "por dia": FrequencyPeriod.DAILY,
        "semanal": FrequencyPeriod.WEEKLY,
        "por semana": FrequencyPeriod.WEEKLY,
        "mensal": FrequencyPeriod.MONTHLY,
        "por mês": FrequencyPeriod.MONTHLY,
    },
    FrequencyPeriod.MONTHLY,
)

coerce_calendar_period = _enum_coercer(
    CalendarPeriod,
    {
        "dia": CalendarPeriod.DAY,
        "semana": CalendarPeriod.WEEK,
        "mês": CalendarPeriod.MONTH,
        "ano": CalendarPeriod.YEAR,
    },
    CalendarPeriod.MONTH,
)

coerce_time_unit = _enum_coercer(
    TimeUnit,
    {"minutos": TimeUnit.MINUTES, "horas": TimeUnit.HOURS, "dias": TimeUnit.DAYS},
    TimeUnit.HOURS,
)


# Signed value (deltas, margins, scores).
Amount = Annotated[float, BeforeValidator(coerce_number)]

# Money, time, counts and rates.
NonNegativeAmount = Annotated[float, BeforeValidator(coerce_non_negative)]

Text = Annotated[str, BeforeValidator(coerce_text)]

# Unknown labels fall back to monthly / hours.
FrequencyPeriodField = Annotated[FrequencyPeriod, BeforeValidator(coerce_frequency_period)]

CalendarPeriodField = Annotated[CalendarPeriod, BeforeValidator(coerce_calendar_period)]

TimeUnitField = Annotated[TimeUnit, BeforeValidator(coerce_time_unit)]

ScoreTypeField = Annotated[
    ScoreType,
    BeforeValidator(
        _enum_coercer(ScoreType, {"outro": ScoreType.OTHER}, ScoreType.NPS)
    ),
]

RecurrenceField = Annotated[
    CostRecurrence,
    BeforeValidator(
        _enum_coercer(
            CostRecurrence,
            {
                "mensal": CostRecurrence.MONTHLY,
                "anual": CostRecurrence.ANNUAL,
                "unico": CostRecurrence.ONE_OFF,
                "único": CostRecurrence.ONE_OFF,
                "one-off": CostRecurrence.ONE_OFF,
            },
            CostRecurrence.MONTHLY,
        )
    ),
]
