from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from droneforge.engine.capabilities import aggregate
from droneforge.engine.evaluator import evaluate
from droneforge.engine.models import (
    CapabilitySummary,
    PlacedComponent,
    TestConfig,
    TestId,
    TestResult,
)
from droneforge.engine.reducer import StatusSummary, recommend, summarize


@dataclass(frozen=True)
class FlightTestReport:
    test: str
    capabilities: CapabilitySummary
    results: list[TestResult]
    status: StatusSummary
    recommendation: str
    inputs_hash: str


def compute_inputs_hash(payload: dict[str, Any]) -> str:
    normalized = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def _inputs_payload(
    components: list[PlacedComponent], test: str, config: TestConfig
) -> dict[str, Any]:
    return {
        "components": [
            {
                "id": item.id,
                "name": item.name,
                "category": str(item.category),
                "specs": asdict(item.specs),
                "instance_id": item.instance_id,
            }
            for item in components
        ],
        "test": test,
        "config": asdict(config),
    }


def run_flight_test(
    components: Iterable[PlacedComponent],
    test: TestId | str | None,
    config: TestConfig,
) -> FlightTestReport:
    parts = list(components)
    test_key = str(test) if test is not None else ""
    capabilities = aggregate(parts)
    results = evaluate(test, capabilities, config, len(parts))
    status = summarize(results)
    return FlightTestReport(
        test=test_key,
        capabilities=capabilities,
        results=results,
        status=status,
        recommendation=recommend(status, len(parts), capabilities.is_flight_ready),
        inputs_hash=compute_inputs_hash(_inputs_payload(parts, test_key, config)),
    )
