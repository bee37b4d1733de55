"""Tests for deriving Post-IA records from their Baseline (merge-by-id)."""

import pytest

from roi_tracker.engine.inheritance import inherit_post_ia
from roi_tracker.models.baseline import (
    AnalyticalCapacityBaseline,
    ProductivityBaseline,
    QualitativeField,
    RelatedCostsBaseline,
    RevenueIncreaseBaseline,
    RiskReductionBaseline,
)
from roi_tracker.models.post_ia import ProductivityPostIA, RiskReductionPostIA, SpeedPostIA


def _person(pid, name, minutes=60, rate=50):
    return {
        "id": pid,
        "name": name,
        "role": "analyst",
        "hourly_rate": rate,
        "time_spent_minutes": minutes,
        "real_frequency": {"quantity": 1, "period": "daily"},
    }


@pytest.fixture
def baseline():
    return ProductivityBaseline.model_validate(
        {"people": [_person("a", "Ana"), _person("b", "Bruno"), _person("c", "Carla")]}
    )


class TestFreshInheritance:
    def test_people_copied_from_baseline(self, baseline):
        post_ia = inherit_post_ia(baseline)
        assert isinstance(post_ia, ProductivityPostIA)
        assert [p.id for p in post_ia.people] == ["a", "b", "c"]
        assert post_ia.people[0].time_spent_minutes == 60

    def test_unchanged_process_has_no_saving(self, baseline):
        post_ia = inherit_post_ia(baseline)
        assert post_ia.delta_productivity == 0.0
        assert post_ia.baseline_total_cost == pytest.approx(post_ia.post_ia_total_cost)

    def test_scalars_seeded(self):
        baseline = RiskReductionBaseline(probability=20, financial_impact=1000, mitigation_cost=50)
        post_ia = inherit_post_ia(baseline)
        assert isinstance(post_ia, RiskReductionPostIA)
        assert post_ia.probability == 20
        assert post_ia.financial_impact == 1000
        assert post_ia.mitigation_cost == 50

    def test_revenue_after_starts_at_revenue_before(self):
        post_ia = inherit_post_ia(RevenueIncreaseBaseline(revenue_before=5000))
        assert post_ia.revenue_after == 5000
        assert post_ia.delta_revenue == 0.0

    def test_tools_get_zero_implementation_cost(self):
        baseline = RelatedCostsBaseline.model_validate(
            {"tools": [{"id": "t1", "name": "ERP", "monthly_cost": 300}]}
        )
        post_ia = inherit_post_ia(baseline)
        assert post_ia.tools[0].implementation_cost == 0.0
        assert post_ia.tools[0].monthly_cost == 300

    def test_variant_mismatch_rebuilds(self, baseline, caplog):
        post_ia = inherit_post_ia(baseline, SpeedPostIA(delivery_time=4))
        assert isinstance(post_ia, ProductivityPostIA)
        assert len(post_ia.people) == 3
        assert "does not match" in caplog.text


class TestMergeById:
    def test_post_ia_values_kept_and_removed_dropped(self, baseline):
        post_ia = inherit_post_ia(baseline)
        post_ia.people[0].time_spent_minutes = 10

        # Baseline drops "b", adds "d" and renames "a"
        updated = ProductivityBaseline.model_validate(
            {"people": [_person("d", "Diego"), _person("a", "Ana Paula"), _person("c", "Carla")]}
        )
        merged = inherit_post_ia(updated, post_ia)

        assert [p.id for p in merged.people] == ["d", "a", "c"]
        by_id = {p.id: p for p in merged.people}
        assert by_id["a"].time_spent_minutes == 10
        assert by_id["a"].name == "Ana Paula"
        assert by_id["d"].time_spent_minutes == 60

    def test_scalars_untouched(self):
        baseline = RiskReductionBaseline(probability=20)
        existing = inherit_post_ia(baseline).model_copy(update={"probability": 5})
        merged = inherit_post_ia(RiskReductionBaseline(probability=30), existing)
        assert merged.probability == 5

    def test_label_sync_on_qualitative_fields(self):
        baseline = AnalyticalCapacityBaseline.model_validate(
            {"qualitative_fields": [{"id": "q1", "criterion": "Depth", "value": "low"}]}
        )
        post_ia = inherit_post_ia(baseline)
        post_ia.qualitative_fields[0].value = "high"
        renamed = AnalyticalCapacityBaseline.model_validate(
            {"qualitative_fields": [{"id": "q1", "criterion": "Analysis depth", "value": "low"}]}
        )
        merged = inherit_post_ia(renamed, post_ia)
        assert merged.qualitative_fields[0].criterion == "Analysis depth"
        assert merged.qualitative_fields[0].value == "high"

    def test_qualitative_entries_follow_baseline(self):
        baseline = AnalyticalCapacityBaseline.model_validate(
            {"qualitative_fields": [{"id": "q1", "criterion": "Depth"}]}
        )
        existing = inherit_post_ia(baseline).model_copy(
            update={
                "qualitative_fields": inherit_post_ia(baseline).qualitative_fields
                + [QualitativeField(id="q2", criterion="Forecasts")]
            }
        )
        merged = inherit_post_ia(baseline, existing)
        assert [f.id for f in merged.qualitative_fields] == ["q1"]

    def test_idempotent(self, baseline):
        edited = inherit_post_ia(baseline)
        edited.people[1].time_spent_minutes = 15
        once = inherit_post_ia(baseline, edited)
        twice = inherit_post_ia(baseline, once)
        assert twice == once

    def test_computed_fields_refreshed(self, baseline):
        post_ia = inherit_post_ia(baseline)
        post_ia.people[0].time_spent_minutes = 10
        post_ia.delta_productivity = 123456.0
        merged = inherit_post_ia(baseline, post_ia)
        # (30 - 5) hours x 50
        assert merged.delta_productivity == pytest.approx(1250)

    def test_input_not_mutated(self, baseline):
        post_ia = inherit_post_ia(baseline)
        post_ia.people[0].time_spent_minutes = 10
        inherit_post_ia(ProductivityBaseline(), post_ia)
        assert len(post_ia.people) == 3
