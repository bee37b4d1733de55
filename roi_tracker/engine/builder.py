"""Default records per variant and indicator type changes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

# Ensure all formulas are registered on import
import roi_tracker.kpi_library.formulas  # noqa: F401
from roi_tracker.engine.inheritance import inherit_post_ia
from roi_tracker.kpi_library.registry import DEFAULT_TYPE, get_variant
from roi_tracker.models.enums import IndicatorType
from roi_tracker.models.indicator import Indicator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeChangeResult:
    """Outcome of ``change_type``.

    ``destructive`` tells the caller that the previous Baseline and Post-IA
    were discarded and must be confirmed/re-rendered from ``indicator``.
    """

    indicator: Indicator
    destructive: bool
    discarded_type: Optional[IndicatorType] = None


def build_default_baseline(indicator_type: IndicatorType | str):
    """Fresh Baseline for the variant: lists empty, scalars zero."""
    return get_variant(indicator_type).baseline_model()


def build_default_post_ia(indicator_type: IndicatorType | str):
    """Fresh, empty Post-IA for the variant."""
    return get_variant(indicator_type).post_ia_model()


def change_type(indicator: Indicator, new_type: IndicatorType | str) -> TypeChangeResult:
    """Switch an indicator to another variant.

    Records of different variants are not convertible, so Baseline and
    Post-IA are replaced by defaults for ``new_type``. Cost entries are kept.
    The input indicator is left untouched.
    """
    target = IndicatorType.parse(new_type)
    if target is None:
        logger.warning("Unknown indicator type %r, using %s", new_type, DEFAULT_TYPE.value)
        target = DEFAULT_TYPE

    if target == indicator.type:
        return TypeChangeResult(indicator=indicator.model_copy(deep=True), destructive=False)

    baseline = build_default_baseline(target)
    changed = indicator.model_copy(
        update={
            "type": target,
            "baseline": baseline,
            "post_ia": inherit_post_ia(baseline),
        },
        deep=True,
    )
    logger.info(
        "Indicator %s changed type %s -> %s; records discarded",
        indicator.id,
        indicator.type.value,
        target.value,
    )
    return TypeChangeResult(
        indicator=changed,
        destructive=True,
        discarded_type=indicator.type,
    )
