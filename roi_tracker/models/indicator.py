from __future__ import annotations

import logging
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from .baseline import BaselineRecord
from .enums import CostRecurrence, IndicatorType
from .fields import NonNegativeAmount, RecurrenceField, Text, new_id
from .post_ia import PostIARecord

logger = logging.getLogger(__name__)


def _coerce_indicator_type(value: Any) -> IndicatorType:
    parsed = IndicatorType.parse(value)
    if parsed is None:
        logger.warning("Unknown indicator type %r, falling back to productivity", value)
        return IndicatorType.PRODUCTIVITY
    return parsed


IndicatorTypeField = Annotated[IndicatorType, BeforeValidator(_coerce_indicator_type)]


class CostEntry(BaseModel):
    """A cost attached to an indicator (tool licence, infra, consulting...)."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    name: Text = ""
    value: NonNegativeAmount = 0.0
    recurrence: RecurrenceField = CostRecurrence.MONTHLY


class Indicator(BaseModel):
    """One measured process within a project.

    ``baseline`` and ``post_ia`` may be missing when the storage layer hands
    over a half-filled row; the calculator reports such indicators as
    uncomputable instead of failing.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    id: str = Field(default_factory=new_id)
    project_id: Optional[str] = None
    name: Text = ""
    description: Text = ""
    type: IndicatorTypeField = IndicatorType.PRODUCTIVITY
    baseline: Optional[BaselineRecord] = None
    post_ia: Optional[PostIARecord] = None
    costs: list[CostEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_record_types(self) -> Indicator:
        stale = [
            name
            for name in ("baseline", "post_ia")
            if getattr(self, name) is not None and getattr(self, name).type != self.type
        ]
        if stale:
            logger.warning(
                "Indicator %s is %s but its %s belong to another type",
                self.id,
                self.type.value,
                " and ".join(stale),
            )
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "type":
            target = _coerce_indicator_type(value)
            if target != self.type:
                self._reset_records(target)
        super().__setattr__(name, value)

    def _reset_records(self, indicator_type: IndicatorType) -> None:
        """Replace both records with defaults of ``indicator_type``.

        Written straight to the instance so the type check only runs once the
        new type itself is assigned.
        """
        from roi_tracker.engine.builder import build_default_baseline
        from roi_tracker.engine.inheritance import inherit_post_ia

        baseline = build_default_baseline(indicator_type)
        logger.info(
            "Indicator %s changed type %s -> %s; records discarded",
            self.id,
            self.type.value,
            indicator_type.value,
        )
        self.__dict__.update(baseline=baseline, post_ia=inherit_post_ia(baseline))

    @classmethod
    def create(
        cls,
        indicator_type: IndicatorType | str = IndicatorType.PRODUCTIVITY,
        **kwargs: Any,
    ) -> Indicator:
        """Create an empty indicator with default records for its type."""
        from roi_tracker.engine.builder import build_default_baseline
        from roi_tracker.engine.inheritance import inherit_post_ia

        indicator = cls(type=indicator_type, **kwargs)
        baseline = build_default_baseline(indicator.type)
        indicator.baseline = baseline
        indicator.post_ia = inherit_post_ia(baseline)
        return indicator

    def records_match(self) -> bool:
        """True when both records exist and carry the indicator's type."""
        if self.baseline is None or self.post_ia is None:
            return False
        return self.baseline.type == self.type and self.post_ia.type == self.type


class Project(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    name: Text = ""
    department: Text = ""
    description: Text = ""
    indicators: list[Indicator] = Field(default_factory=list)

    def get_indicator(self, indicator_id: str) -> Optional[Indicator]:
        for indicator in self.indicators:
            if indicator.id == indicator_id:
                return indicator
        return None

    def remove_indicator(self, indicator_id: str) -> bool:
        """Drop an indicator together with its records and costs."""
        remaining = [i for i in self.indicators if i.id != indicator_id]
        removed = len(remaining) != len(self.indicators)
        self.indicators = remaining
        return removed
