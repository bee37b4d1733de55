"""Tests for audit hooks -- calculation audit entries."""

import logging

from roi_tracker.engine.calculator import MetricCalculator
from roi_tracker.hooks.audit_hooks import log_calculation


class TestAuditHooks:
    def test_entry_fields(self):
        """The returned entry carries ids, summary and a UTC timestamp."""
        entry = log_calculation(
            "ind-1", "productivity", summary={"annual_saving": 15000.0}, warnings=["w"]
        )
        assert entry["indicator_id"] == "ind-1"
        assert entry["indicator_type"] == "productivity"
        assert entry["summary"] == {"annual_saving": 15000.0}
        assert entry["warnings"] == ["w"]
        assert entry["timestamp"].endswith("+00:00")

    def test_defaults(self):
        entry = log_calculation("ind-2", "other")
        assert entry["summary"] == {}
        assert entry["warnings"] == []

    def test_calculation_is_audited(self, productivity, settings, caplog):
        """Every indicator calculation is logged at INFO."""
        with caplog.at_level(logging.INFO, logger="roi_tracker.hooks.audit_hooks"):
            MetricCalculator(settings).calculate(productivity)
        assert f"productivity → {productivity.id}" in caplog.text
