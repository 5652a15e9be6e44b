from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable

from droneforge.engine.capabilities import aggregate
from droneforge.engine.evaluator import base_quantities
from droneforge.engine.models import PlacedComponent
from droneforge.engine.parsing import round_half_up

READY_TO_SIMULATE = "Looking good! Ready to simulate."
HEAVY_BUILD_G = 600
MAH_PER_FLIGHT_MINUTE = 125


class MetricStatus(StrEnum):
    GOOD = "good"
    WARNING = "warning"
    BAD = "bad"
    NEUTRAL = "neutral"


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class BuildMetric:
    label: str
    value: str
    status: MetricStatus


@dataclass(frozen=True)
class Suggestion:
    text: str
    priority: Priority


@dataclass(frozen=True)
class BuildPerformance:
    completeness: int
    metrics: list[BuildMetric]
    suggestions: list[Suggestion] = field(default_factory=list)
    component_count: int = 0
    message: str | None = None


def _weight_status(total_weight: int) -> MetricStatus:
    if total_weight < 500:
        return MetricStatus.GOOD
    if total_weight < 800:
        return MetricStatus.WARNING
    return MetricStatus.BAD


def build_performance(components: Iterable[PlacedComponent]) -> BuildPerformance:
    parts = list(components)
    summary = aggregate(parts)
    base = base_quantities(summary)

    present = [
        summary.has_motors,
        summary.has_frame,
        summary.has_battery,
        summary.has_flight_controller,
    ]
    completeness = 25 * sum(1 for flag in present if flag)

    if summary.has_battery:
        minutes = round_half_up(summary.battery_capacity_mah / MAH_PER_FLIGHT_MINUTE)
        flight_time = BuildMetric("Flight Time", f"~{minutes} min", MetricStatus.GOOD)
    else:
        flight_time = BuildMetric("Flight Time", "N/A", MetricStatus.NEUTRAL)

    if summary.has_motors:
        max_speed = BuildMetric("Max Speed", f"{base.max_speed_kmh} km/h", MetricStatus.GOOD)
        ratio = BuildMetric("Thrust/Weight", f"{summary.thrust_to_weight:.1f}:1", MetricStatus.GOOD)
    else:
        max_speed = BuildMetric("Max Speed", "N/A", MetricStatus.NEUTRAL)
        ratio = BuildMetric("Thrust/Weight", "N/A", MetricStatus.NEUTRAL)

    metrics = [
        BuildMetric("Total Weight", f"{summary.total_weight}g", _weight_status(summary.total_weight)),
        flight_time,
        max_speed,
        ratio,
    ]

    suggestions: list[Suggestion] = []
    if not summary.has_frame:
        suggestions.append(Suggestion("Add a frame to start your build", Priority.HIGH))
    if not summary.has_motors:
        suggestions.append(Suggestion("Add motors for propulsion", Priority.HIGH))
    if not summary.has_battery:
        suggestions.append(Suggestion("Add a battery for power", Priority.MEDIUM))
    if not summary.has_flight_controller:
        suggestions.append(Suggestion("Add a flight controller", Priority.MEDIUM))
    if summary.total_weight > HEAVY_BUILD_G:
        suggestions.append(
            Suggestion("Consider lighter components for better agility", Priority.LOW)
        )
    if summary.has_motors and not summary.has_propellers:
        suggestions.append(Suggestion("Don't forget the propellers!", Priority.HIGH))

    return BuildPerformance(
        completeness=completeness,
        metrics=metrics,
        suggestions=suggestions,
        component_count=len(parts),
        message=None if suggestions else READY_TO_SIMULATE,
    )
