from .calculator import MetricCalculator, recompute
from .costs import summarize_costs, total_annual, total_monthly, total_one_off
from .inheritance import inherit_post_ia
from .builder import TypeChangeResult, build_default_baseline, build_default_post_ia, change_type
from .project import ProjectAggregator

__all__ = [
    "MetricCalculator",
    "recompute",
    "summarize_costs",
    "total_annual",
    "total_monthly",
    "total_one_off",
    "inherit_post_ia",
    "TypeChangeResult",
    "build_default_baseline",
    "build_default_post_ia",
    "change_type",
    "ProjectAggregator",
]
