from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from roi_tracker.models.enums import IndicatorType

logger = logging.getLogger(__name__)

# Global registry -- maps IndicatorType -> VariantDefinition
_REGISTRY: dict[IndicatorType, VariantDefinition] = {}

# Lookups for unknown types resolve to this entry
DEFAULT_TYPE = IndicatorType.PRODUCTIVITY


@dataclass(frozen=True)
class VariantDefinition:
    """Everything the engine knows about one indicator type."""

    type: IndicatorType
    label: str
    description: str
    main_metric: str
    baseline_model: type
    post_ia_model: type
    formula_fn: Callable[..., dict[str, float]]
    annual_saving_fn: Callable[[Any], float]
    # Optional-field visibility flags for the input forms
    baseline_visibility: dict[str, bool] = field(default_factory=dict)
    post_ia_visibility: dict[str, bool] = field(default_factory=dict)
    # Hours per month (baseline, post-IA) for time-based variants
    hours_fn: Optional[Callable[[Any, Any], tuple[float, float]]] = None
    team_size_fn: Optional[Callable[[Any, Any], float]] = None
    # Executions per month and monthly labour cost, both as (baseline, post-IA)
    executions_fn: Optional[Callable[[Any, Any], tuple[float, float]]] = None
    labor_cost_fn: Optional[Callable[[Any, Any], tuple[float, float]]] = None
    gain_field: Optional[str] = None
    category: str = "cost_savings"

    @property
    def computed_fields(self) -> tuple[str, ...]:
        return self.post_ia_model.COMPUTED_FIELDS

    @property
    def baseline_fields(self) -> list[str]:
        return [name for name in self.baseline_model.model_fields if name != "type"]

    @property
    def post_ia_fields(self) -> list[str]:
        return [
            name
            for name in self.post_ia_model.model_fields
            if name != "type" and name not in self.computed_fields
        ]


def register_variant(
    indicator_type: IndicatorType,
    label: str,
    description: str,
    main_metric: str,
    baseline_model: type,
    post_ia_model: type,
    annual_saving_fn: Callable[[Any], float],
    baseline_visibility: Optional[dict[str, bool]] = None,
    post_ia_visibility: Optional[dict[str, bool]] = None,
    hours_fn: Optional[Callable[[Any, Any], tuple[float, float]]] = None,
    team_size_fn: Optional[Callable[[Any, Any], float]] = None,
    executions_fn: Optional[Callable[[Any, Any], tuple[float, float]]] = None,
    labor_cost_fn: Optional[Callable[[Any, Any], tuple[float, float]]] = None,
    gain_field: Optional[str] = None,
    category: str = "cost_savings",
) -> Callable:
    """Decorator to register a formula function as the calculator of a variant."""

    def decorator(fn: Callable[..., dict[str, float]]) -> Callable[..., dict[str, float]]:
        if indicator_type in _REGISTRY:
            raise ValueError(f"Variant '{indicator_type.value}' is already registered")
        _REGISTRY[indicator_type] = VariantDefinition(
            type=indicator_type,
            label=label,
            description=description,
            main_metric=main_metric,
            baseline_model=baseline_model,
            post_ia_model=post_ia_model,
            formula_fn=fn,
            annual_saving_fn=annual_saving_fn,
            baseline_visibility=dict(baseline_visibility or {}),
            post_ia_visibility=dict(post_ia_visibility or {}),
            hours_fn=hours_fn,
            team_size_fn=team_size_fn,
            executions_fn=executions_fn,
            labor_cost_fn=labor_cost_fn,
            gain_field=gain_field,
            category=category,
        )
        return fn

    return decorator


def get_variant(indicator_type: IndicatorType | str | None) -> VariantDefinition:
    """Look up a variant; unknown types fall back to productivity."""
    parsed = IndicatorType.parse(indicator_type)
    definition = _REGISTRY.get(parsed) if parsed is not None else None
    if definition is None:
        logger.warning(
            "No variant registered for %r, falling back to %s",
            indicator_type,
            DEFAULT_TYPE.value,
        )
        return _REGISTRY[DEFAULT_TYPE]
    return definition


def get_all_variants() -> dict[IndicatorType, VariantDefinition]:
    """Return the full registry (read-only copy)."""
    return dict(_REGISTRY)
