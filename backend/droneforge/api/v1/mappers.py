from __future__ import annotations

from dataclasses import asdict
from typing import Any, Iterable

from droneforge.api.v1.schemas import (
    BuildMetricSchema,
    BuildPerformanceResponse,
    BuildResponse,
    CapabilitySummarySchema,
    ComponentSchema,
    ComponentSpecsSchema,
    DroneColorsSchema,
    EvaluationResponse,
    PlacedComponentSchema,
    SliderSchema,
    StatusSummarySchema,
    SuggestionSchema,
    TestConfigSchema,
    TestDefinitionSchema,
    TestResultSchema,
    TestRunResponse,
)
from droneforge.builds.storage import DroneColors, deserialize_build
from droneforge.engine.capabilities import aggregate
from droneforge.engine.models import (
    CapabilitySummary,
    Component,
    ComponentSpecs,
    PlacedComponent,
    Position,
    TestConfig,
)
from droneforge.engine.performance import BuildPerformance
from droneforge.engine.progress import TestRunTicker
from droneforge.engine.report import FlightTestReport
from droneforge.engine.test_library import TestDefinition


def component_to_schema(component: Component) -> ComponentSchema:
    return ComponentSchema(
        id=component.id,
        name=component.name,
        category=component.category,
        specs=ComponentSpecsSchema(**asdict(component.specs)),
    )


def placed_from_schema(item: PlacedComponentSchema) -> PlacedComponent:
    return PlacedComponent(
        component=Component(
            id=item.id,
            name=item.name,
            category=item.category,
            specs=ComponentSpecs(
                weight=item.specs.weight,
                power=item.specs.power,
                thrust=item.specs.thrust,
            ),
        ),
        instance_id=item.instance_id,
        position=Position(x=item.x, y=item.y, z=item.z),
    )


def placed_list_from_schema(items: Iterable[PlacedComponentSchema]) -> tuple[PlacedComponent, ...]:
    return tuple(placed_from_schema(item) for item in items)


def placed_to_schema(item: PlacedComponent) -> PlacedComponentSchema:
    return PlacedComponentSchema(
        id=item.id,
        name=item.name,
        category=item.category,
        specs=ComponentSpecsSchema(**asdict(item.specs)),
        instance_id=item.instance_id,
        x=item.position.x,
        y=item.position.y,
        z=item.position.z,
    )


def config_from_schema(config: TestConfigSchema) -> TestConfig:
    return TestConfig(**config.model_dump())


def colors_from_schema(colors: DroneColorsSchema) -> DroneColors:
    return DroneColors(**colors.model_dump())


def capabilities_to_schema(summary: CapabilitySummary) -> CapabilitySummarySchema:
    return CapabilitySummarySchema(**asdict(summary), is_flight_ready=summary.is_flight_ready)


def report_to_response(report: FlightTestReport) -> EvaluationResponse:
    return EvaluationResponse(
        test=report.test,
        capabilities=capabilities_to_schema(report.capabilities),
        results=[TestResultSchema(**asdict(result)) for result in report.results],
        status=StatusSummarySchema(**asdict(report.status)),
        recommendation=report.recommendation,
        inputs_hash=report.inputs_hash,
    )


def report_to_payload(report: FlightTestReport) -> dict[str, Any]:
    return report_to_response(report).model_dump(mode="json")


def performance_to_response(performance: BuildPerformance) -> BuildPerformanceResponse:
    return BuildPerformanceResponse(
        completeness=performance.completeness,
        metrics=[BuildMetricSchema(**asdict(metric)) for metric in performance.metrics],
        suggestions=[SuggestionSchema(**asdict(item)) for item in performance.suggestions],
        component_count=performance.component_count,
        message=performance.message,
    )


def test_definition_to_schema(test: TestDefinition) -> TestDefinitionSchema:
    return TestDefinitionSchema(
        id=str(test.id),
        name=test.name,
        description=test.description,
        duration=test.duration,
        tier=test.tier,
        sliders=[SliderSchema(**asdict(slider)) for slider in test.sliders],
    )


def build_record_to_response(record: dict[str, Any]) -> BuildResponse:
    components, colors = deserialize_build(record["payload"])
    return BuildResponse(
        id=record["id"],
        components=[placed_to_schema(item) for item in components],
        colors=DroneColorsSchema(**asdict(colors)),
        capabilities=capabilities_to_schema(aggregate(components)),
        created_at=record["created_at"],
        updated_at=record["updated_at"],
    )


def test_run_record_to_response(record: dict[str, Any]) -> TestRunResponse:
    progress = float(record.get("progress") or 0.0)
    return TestRunResponse(
        id=record["id"],
        test_id=record["test_id"],
        status=record["status"],
        progress=progress,
        run_status=TestRunTicker(progress=progress).status,
        params=record.get("params") or {},
        result=record.get("result"),
        error=record.get("error"),
        created_at=record["created_at"],
        updated_at=record["updated_at"],
    )
