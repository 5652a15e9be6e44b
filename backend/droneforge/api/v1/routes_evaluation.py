import logging

from fastapi import APIRouter

from droneforge.api.v1.mappers import (
    capabilities_to_schema,
    config_from_schema,
    performance_to_response,
    placed_list_from_schema,
    report_to_response,
)
from droneforge.api.v1.schemas import (
    BuildPerformanceResponse,
    CapabilitySummarySchema,
    ComponentsRequest,
    EvaluationRequest,
    EvaluationResponse,
)
from droneforge.engine.capabilities import aggregate
from droneforge.engine.performance import build_performance
from droneforge.engine.report import run_flight_test

router = APIRouter(tags=["evaluation"])
logger = logging.getLogger("droneforge.backend")


@router.post("/capabilities", response_model=CapabilitySummarySchema)
def compute_capabilities(request: ComponentsRequest):
    return capabilities_to_schema(aggregate(placed_list_from_schema(request.components)))


@router.post("/performance", response_model=BuildPerformanceResponse)
def compute_performance(request: ComponentsRequest):
    return performance_to_response(build_performance(placed_list_from_schema(request.components)))


@router.post("/evaluate", response_model=EvaluationResponse)
def evaluate_flight_test(request: EvaluationRequest):
    components = placed_list_from_schema(request.components)
    report = run_flight_test(components, request.test, config_from_schema(request.config))
    logger.info(
        "evaluated %s on %d components: %s",
        report.test,
        len(components),
        report.status.overall,
    )
    return report_to_response(report)
