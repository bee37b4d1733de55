"""Derive a Post-IA record from its Baseline.

List entries (people, tools, criteria, qualitative fields) are merged by id:
Baseline decides which entries exist and in which order, Post-IA keeps its
own values for the entries it already has.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, get_args

from roi_tracker.config.settings import Settings
from roi_tracker.engine.calculator import recompute
from roi_tracker.kpi_library.registry import get_variant

logger = logging.getLogger(__name__)

# Identity/label fields always taken from the Baseline entry
_LABEL_FIELDS = ("name", "role", "criterion")

# Post-IA scalars seeded from a differently named Baseline field
_SEED_SOURCES = {
    "revenue_after": "revenue_before",
    "value_after": "value",
}


def _item_model(post_model: type, field_name: str) -> Optional[type]:
    """Entry model of a list field, e.g. ``list[Person]`` -> ``Person``."""
    args = get_args(post_model.model_fields[field_name].annotation)
    return args[0] if args else None


def _list_fields(baseline: Any, post_model: type) -> list[str]:
    return [
        name
        for name in post_model.model_fields
        if isinstance(getattr(baseline, name, None), list)
    ]


def merge_entries(baseline_entries: list, post_entries: list, item_model: type) -> list:
    """Merge-by-id; output follows Baseline order."""
    post_by_id = {entry.id: entry for entry in post_entries}
    merged = []
    for entry in baseline_entries:
        current = post_by_id.get(entry.id)
        if current is None:
            merged.append(item_model.model_validate(entry.model_dump()))
            continue
        labels = {
            name: getattr(entry, name)
            for name in _LABEL_FIELDS
            if name in type(entry).model_fields and name in type(current).model_fields
        }
        merged.append(current.model_copy(update=labels, deep=True))
    return merged


def _seed_post_ia(baseline: Any, post_model: type) -> Any:
    """Fresh Post-IA whose inputs start at the Baseline values."""
    computed = set(post_model.COMPUTED_FIELDS)
    source = baseline.model_dump(exclude={"type"})
    seed = {
        name: source[name]
        for name in post_model.model_fields
        if name in source and name not in computed
    }
    for target, origin in _SEED_SOURCES.items():
        if target in post_model.model_fields and origin in source:
            seed[target] = source[origin]
    return post_model.model_validate(seed)


def inherit_post_ia(
    baseline: Any,
    existing: Any = None,
    implementation_cost: float = 0.0,
    settings: Optional[Settings] = None,
) -> Any:
    """Return the Post-IA record for ``baseline``.

    With a matching ``existing`` record its lists are refreshed by
    merge-by-id and its scalars are left alone; otherwise a new record is
    seeded from the Baseline. Computed fields are always recomputed.
    Applying it twice gives the same record as applying it once.
    """
    variant = get_variant(baseline.type)
    post_model = variant.post_ia_model

    if existing is not None and existing.type == baseline.type:
        updates = {}
        for name in _list_fields(baseline, post_model):
            updates[name] = merge_entries(
                getattr(baseline, name),
                getattr(existing, name),
                _item_model(post_model, name),
            )
        post_ia = existing.model_copy(update=updates, deep=True)
    else:
        if existing is not None:
            logger.warning(
                "Post-IA variant %s does not match baseline %s; rebuilding",
                existing.type,
                baseline.type,
            )
        post_ia = _seed_post_ia(baseline, post_model)

    return recompute(baseline, post_ia, implementation_cost, settings)
