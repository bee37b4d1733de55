"""Shared fixtures: small indicators and projects built from plain dicts."""

import pytest

from roi_tracker.config.settings import Settings
from roi_tracker.models.indicator import Indicator, Project


def productivity_indicator(
    minutes_before: float = 60,
    minutes_after: float = 10,
    hourly_rate: float = 50,
    people: int = 1,
    costs: list | None = None,
    **kwargs,
) -> Indicator:
    """One productivity indicator; each person does the task once a day."""
    staff = [
        {
            "id": f"p{i}",
            "name": f"Analyst {i}",
            "role": "analyst",
            "hourly_rate": hourly_rate,
            "time_spent_minutes": minutes_before,
            "real_frequency": {"quantity": 1, "period": "daily"},
            "desired_frequency": {"quantity": 1, "period": "daily"},
        }
        for i in range(people)
    ]
    post_staff = [dict(p, time_spent_minutes=minutes_after) for p in staff]
    return Indicator.model_validate(
        {
            "name": kwargs.pop("name", "Weekly report"),
            "type": "productivity",
            "baseline": {"type": "productivity", "people": staff},
            "post_ia": {"type": "productivity", "people": post_staff},
            "costs": costs or [],
            **kwargs,
        }
    )


def risk_indicator(costs: list | None = None) -> Indicator:
    return Indicator.model_validate(
        {
            "name": "Fraud exposure",
            "type": "risk_reduction",
            "baseline": {
                "type": "risk_reduction",
                "probability": 20,
                "financial_impact": 100000,
                "mitigation_cost": 500,
            },
            "post_ia": {
                "type": "risk_reduction",
                "probability": 5,
                "financial_impact": 100000,
                "mitigation_cost": 200,
            },
            "costs": costs or [],
        }
    )


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def productivity():
    return productivity_indicator()


@pytest.fixture
def risk():
    return risk_indicator()


@pytest.fixture
def project():
    return Project(
        name="Finance automation",
        department="Finance",
        indicators=[
            productivity_indicator(
                people=1, costs=[{"name": "Licence", "value": 1000, "recurrence": "one_off"}]
            ),
            productivity_indicator(
                people=2, costs=[{"name": "Licence", "value": 2000, "recurrence": "one_off"}]
            ),
            productivity_indicator(
                people=4, costs=[{"name": "Licence", "value": 4000, "recurrence": "one_off"}]
            ),
        ],
    )
