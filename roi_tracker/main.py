"""FastAPI application for the ROI tracker: stateless REST endpoints over the engine."""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from roi_tracker.analysis.correlation import CorrelationAnalyzer
from roi_tracker.config.settings import Settings
from roi_tracker.engine.builder import change_type
from roi_tracker.engine.calculator import MetricCalculator
from roi_tracker.engine.inheritance import inherit_post_ia
from roi_tracker.engine.project import ProjectAggregator
from roi_tracker.kpi_library.registry import get_all_variants
from roi_tracker.models.baseline import BaselineRecord
from roi_tracker.models.indicator import Indicator, Project
from roi_tracker.models.post_ia import PostIARecord

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="ROI Tracker API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ChangeTypeRequest(BaseModel):
    indicator: Indicator
    new_type: str


class InheritRequest(BaseModel):
    baseline: BaselineRecord
    existing: Optional[PostIARecord] = None
    implementation_cost: float = 0.0


@app.post("/api/indicators/compute")
async def compute_indicator(indicator: Indicator):
    """Recompute one indicator: Post-IA computed fields, savings, ROI, payback."""
    return MetricCalculator(settings).calculate(indicator)


@app.post("/api/indicators/change-type")
async def change_indicator_type(body: ChangeTypeRequest):
    """Switch variant. ``destructive`` means the old records were discarded."""
    return change_type(body.indicator, body.new_type)


@app.post("/api/indicators/inherit")
async def inherit(body: InheritRequest):
    return inherit_post_ia(
        body.baseline,
        body.existing,
        implementation_cost=body.implementation_cost,
        settings=settings,
    )


@app.post("/api/projects/summary")
async def project_summary(project: Project):
    return ProjectAggregator(settings).aggregate(project)


@app.post("/api/projects/correlations")
async def project_correlations(project: Project):
    return CorrelationAnalyzer(settings).analyze(project)


@app.get("/api/variants")
async def list_variants():
    """Registry contract: labels, input fields, computed fields and visibility flags."""
    return [
        {
            "type": definition.type.value,
            "label": definition.label,
            "description": definition.description,
            "main_metric": definition.main_metric,
            "category": definition.category,
            "baseline_fields": definition.baseline_fields,
            "post_ia_fields": definition.post_ia_fields,
            "computed_fields": list(definition.computed_fields),
            "baseline_visibility": definition.baseline_visibility,
            "post_ia_visibility": definition.post_ia_visibility,
        }
        for definition in get_all_variants().values()
    ]


@app.get("/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
