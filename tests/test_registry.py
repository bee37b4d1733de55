"""Tests for the variant registry."""

import pytest

import roi_tracker.kpi_library.formulas  # noqa: F401
from roi_tracker.kpi_library.registry import (
    DEFAULT_TYPE,
    get_all_variants,
    get_variant,
    register_variant,
)
from roi_tracker.models.baseline import OtherBaseline
from roi_tracker.models.enums import IndicatorType
from roi_tracker.models.post_ia import OtherPostIA


class TestRegistry:
    def test_every_type_has_one_entry(self):
        variants = get_all_variants()
        assert len(variants) == 10
        assert set(variants) == set(IndicatorType)

    def test_models_carry_matching_tags(self):
        for indicator_type, definition in get_all_variants().items():
            assert definition.baseline_model().type == indicator_type.value
            assert definition.post_ia_model().type == indicator_type.value

    def test_unknown_type_falls_back_to_productivity(self, caplog):
        definition = get_variant("teleportation")
        assert definition.type == DEFAULT_TYPE
        assert "falling back" in caplog.text

    def test_lookup_by_legacy_label(self):
        assert get_variant("Redução de Risco").type == IndicatorType.RISK_REDUCTION

    def test_duplicate_registration_raises(self):
        with pytest.raises(ValueError, match="already registered"):
            register_variant(
                indicator_type=IndicatorType.OTHER,
                label="Other again",
                description="",
                main_metric="",
                baseline_model=OtherBaseline,
                post_ia_model=OtherPostIA,
                annual_saving_fn=lambda post: 0.0,
            )(lambda baseline, post_ia, implementation_cost=0.0, settings=None: {})

    def test_get_all_variants_returns_copy(self):
        variants = get_all_variants()
        variants.clear()
        assert len(get_all_variants()) == 10

    def test_post_ia_fields_exclude_computed(self):
        definition = get_variant(IndicatorType.RISK_REDUCTION)
        assert "probability" in definition.post_ia_fields
        assert "roi" not in definition.post_ia_fields
        assert "roi" in definition.computed_fields

    def test_visibility_flags(self):
        productivity = get_variant(IndicatorType.PRODUCTIVITY)
        assert productivity.post_ia_visibility["show_execution_time"] is True
        risk = get_variant(IndicatorType.RISK_REDUCTION)
        assert risk.baseline_visibility["show_avoided_impact"] is True
        other = get_variant(IndicatorType.OTHER)
        assert not any(other.baseline_visibility.values())
