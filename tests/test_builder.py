"""Tests for default records and indicator type changes."""

import pytest

from conftest import productivity_indicator
from roi_tracker.engine.builder import build_default_baseline, build_default_post_ia, change_type
from roi_tracker.models.baseline import ProductivityBaseline, RiskReductionBaseline
from roi_tracker.models.enums import IndicatorType
from roi_tracker.models.post_ia import RiskReductionPostIA


class TestDefaults:
    @pytest.mark.parametrize("indicator_type", list(IndicatorType))
    def test_default_baseline_is_empty(self, indicator_type):
        baseline = build_default_baseline(indicator_type)
        assert baseline.type == indicator_type.value
        for name, value in baseline.model_dump(exclude={"type"}).items():
            if isinstance(value, list):
                assert value == []
            elif isinstance(value, float):
                assert value == 0.0

    def test_default_post_ia(self):
        post_ia = build_default_post_ia("risk_reduction")
        assert isinstance(post_ia, RiskReductionPostIA)
        assert post_ia.roi == 0.0

    def test_unknown_type_builds_productivity(self):
        assert isinstance(build_default_baseline("nonsense"), ProductivityBaseline)


class TestChangeType:
    def test_change_to_risk_discards_people(self):
        indicator = productivity_indicator(
            people=2, costs=[{"name": "Licence", "value": 99, "recurrence": "monthly"}]
        )

        result = change_type(indicator, IndicatorType.RISK_REDUCTION)

        assert result.destructive is True
        assert result.discarded_type == IndicatorType.PRODUCTIVITY
        changed = result.indicator
        assert changed.type == IndicatorType.RISK_REDUCTION
        assert isinstance(changed.baseline, RiskReductionBaseline)
        assert changed.baseline.probability == 0.0
        assert changed.baseline.financial_impact == 0.0
        assert not hasattr(changed.baseline, "people")
        assert changed.post_ia.type == "risk_reduction"
        # Costs survive the change
        assert [c.value for c in changed.costs] == [99.0]

    def test_input_is_not_mutated(self):
        indicator = productivity_indicator(people=2)
        change_type(indicator, "speed")
        assert indicator.type == IndicatorType.PRODUCTIVITY
        assert len(indicator.baseline.people) == 2

    def test_same_type_is_not_destructive(self):
        indicator = productivity_indicator(people=2)
        result = change_type(indicator, "productivity")
        assert result.destructive is False
        assert result.discarded_type is None
        assert len(result.indicator.baseline.people) == 2

    def test_legacy_label_target(self):
        result = change_type(productivity_indicator(), "Velocidade")
        assert result.indicator.type == IndicatorType.SPEED
