"""Period normalization: every rate in the engine is expressed per month."""

from __future__ import annotations

from typing import Any

from roi_tracker.models.enums import CalendarPeriod, FrequencyPeriod, TimeUnit
from roi_tracker.models.fields import (
    coerce_calendar_period,
    coerce_frequency_period,
    coerce_number,
    coerce_time_unit,
)

# Person frequencies (daily/weekly/monthly). 4.33 = 52 weeks / 12 months.
FREQUENCY_MULTIPLIERS: dict[FrequencyPeriod, float] = {
    FrequencyPeriod.DAILY: 30.0,
    FrequencyPeriod.WEEKLY: 4.33,
    FrequencyPeriod.MONTHLY: 1.0,
}

# Decision, delivery and assessment volumes (day/week/month/year).
CALENDAR_MULTIPLIERS: dict[CalendarPeriod, float] = {
    CalendarPeriod.DAY: 30.0,
    CalendarPeriod.WEEK: 4.0,
    CalendarPeriod.MONTH: 1.0,
    CalendarPeriod.YEAR: 1.0 / 12.0,
}

HOURS_PER_UNIT: dict[TimeUnit, float] = {
    TimeUnit.MINUTES: 1.0 / 60.0,
    TimeUnit.HOURS: 1.0,
    TimeUnit.DAYS: 24.0,
}


def normalize_frequency(quantity: Any, period: Any) -> float:
    """Monthly equivalent of ``quantity`` per day/week/month.

    Periods accept the same labels as the record fields; unknown ones are
    taken as already monthly.
    """
    qty = coerce_number(quantity)
    if qty == 0:
        return 0.0
    return qty * FREQUENCY_MULTIPLIERS[coerce_frequency_period(period)]


def normalize_calendar(quantity: Any, period: Any) -> float:
    """Monthly equivalent of ``quantity`` per day/week/month/year."""
    qty = coerce_number(quantity)
    if qty == 0:
        return 0.0
    return qty * CALENDAR_MULTIPLIERS[coerce_calendar_period(period)]


def to_hours(value: Any, unit: Any) -> float:
    return coerce_number(value) * HOURS_PER_UNIT[coerce_time_unit(unit)]
