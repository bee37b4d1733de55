"""Tests for the pydantic schemas: coercion, discriminated unions, legacy labels."""

import math

import pytest

from roi_tracker.models.baseline import ProductivityBaseline, RiskReductionBaseline
from roi_tracker.models.enums import CalendarPeriod, CostRecurrence, FrequencyPeriod, IndicatorType
from roi_tracker.models.fields import coerce_number
from roi_tracker.models.indicator import CostEntry, Indicator, Project
from roi_tracker.models.post_ia import RelatedCostsPostIA


class TestCoercion:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 0.0),
            ("", 0.0),
            ("  ", 0.0),
            ("abc", 0.0),
            ("12,5", 12.5),
            ("7", 7.0),
            (math.nan, 0.0),
            (math.inf, 0.0),
            (True, 1.0),
        ],
    )
    def test_coerce_number(self, raw, expected):
        assert coerce_number(raw) == expected

    def test_invalid_numeric_input_becomes_zero(self):
        baseline = RiskReductionBaseline(probability="n/a", financial_impact=None)
        assert baseline.probability == 0.0
        assert baseline.financial_impact == 0.0

    def test_negative_cost_clamped(self):
        baseline = RiskReductionBaseline(mitigation_cost=-300, probability=-5)
        assert baseline.mitigation_cost == 0.0
        # percentages are kept as given
        assert baseline.probability == -5

    def test_portuguese_period_aliases(self):
        baseline = ProductivityBaseline.model_validate(
            {"people": [{"real_frequency": {"quantity": 2, "period": "Semanal"}}]}
        )
        assert baseline.people[0].real_frequency.period == FrequencyPeriod.WEEKLY

    def test_unknown_recurrence_falls_back_to_monthly(self):
        assert CostEntry(value=10, recurrence="quarterly").recurrence == CostRecurrence.MONTHLY

    def test_people_get_ids(self):
        baseline = ProductivityBaseline.model_validate({"people": [{}, {}]})
        ids = {p.id for p in baseline.people}
        assert len(ids) == 2


class TestIndicatorType:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("productivity", IndicatorType.PRODUCTIVITY),
            ("PRODUCTIVITY", IndicatorType.PRODUCTIVITY),
            ("Produtividade", IndicatorType.PRODUCTIVITY),
            ("Custos Relacionados", IndicatorType.RELATED_COSTS),
            ("cost_reduction", IndicatorType.RELATED_COSTS),
            ("Qualidade Decisão", IndicatorType.DECISION_QUALITY),
            ("Outros", IndicatorType.OTHER),
        ],
    )
    def test_parse(self, label, expected):
        assert IndicatorType.parse(label) == expected

    def test_parse_unknown_returns_none(self):
        assert IndicatorType.parse("unknown") is None
        assert IndicatorType.parse(42) is None


class TestIndicator:
    def test_discriminated_records(self):
        indicator = Indicator.model_validate(
            {
                "type": "related_costs",
                "baseline": {"type": "related_costs", "tools": [{"name": "ERP"}]},
                "post_ia": {"type": "related_costs", "tools": [{"name": "ERP"}]},
            }
        )
        assert isinstance(indicator.post_ia, RelatedCostsPostIA)
        assert indicator.post_ia.tools[0].implementation_cost == 0.0
        assert indicator.records_match()

    def test_unknown_type_label_falls_back(self):
        indicator = Indicator(type="Something Else")
        assert indicator.type == IndicatorType.PRODUCTIVITY

    def test_create_builds_default_records(self):
        indicator = Indicator.create("Redução de Risco", name="Fraud")
        assert indicator.type == IndicatorType.RISK_REDUCTION
        assert indicator.baseline.type == "risk_reduction"
        assert indicator.post_ia.type == "risk_reduction"
        assert indicator.post_ia.assessment_period == CalendarPeriod.MONTH

    def test_records_mismatch(self, caplog):
        indicator = Indicator.model_validate(
            {
                "type": "productivity",
                "baseline": {"type": "speed"},
                "post_ia": {"type": "productivity"},
            }
        )
        assert not indicator.records_match()
        assert "baseline belong to another type" in caplog.text

    def test_assigning_type_replaces_records(self):
        indicator = Indicator.create("productivity", costs=[{"value": 100}])
        indicator.type = "speed"

        assert indicator.type == IndicatorType.SPEED
        assert indicator.baseline.type == "speed"
        assert indicator.post_ia.type == "speed"
        assert indicator.records_match()
        assert len(indicator.costs) == 1

    def test_assigning_same_type_keeps_records(self):
        indicator = Indicator.create("risk_reduction")
        indicator.baseline = RiskReductionBaseline(probability=10)
        indicator.type = "risk_reduction"
        assert indicator.baseline.probability == 10

    def test_assigning_foreign_record_is_reported(self, caplog):
        indicator = Indicator.create("productivity")
        indicator.baseline = RiskReductionBaseline(probability=10)
        assert not indicator.records_match()
        assert "belong to another type" in caplog.text

    def test_missing_baseline_is_allowed(self):
        indicator = Indicator.model_validate({"type": "speed", "post_ia": {"type": "speed"}})
        assert indicator.baseline is None
        assert not indicator.records_match()


class TestProject:
    def test_remove_indicator(self):
        keep = Indicator.create("revenue_increase")
        drop = Indicator.create("productivity")
        project = Project(name="P", indicators=[keep, drop])

        assert project.remove_indicator(drop.id) is True
        assert [i.id for i in project.indicators] == [keep.id]
        assert project.get_indicator(drop.id) is None

    def test_remove_missing_indicator(self):
        project = Project(name="P", indicators=[Indicator.create("other")])
        assert project.remove_indicator("nope") is False
        assert len(project.indicators) == 1
