from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from droneforge.engine.models import TestResult, TestStatus

EMPTY_BUILD_MESSAGE = "Add components to your drone build before running flight tests."
INCOMPLETE_BUILD_MESSAGE = (
    "Complete the build checklist: a frame, motors, propellers, a battery and a "
    "flight controller are required for flight."
)
FAILED_MESSAGE = (
    "One or more metrics failed. Upgrade the affected components or ease the test "
    "conditions before deployment."
)
WARNING_MESSAGE = "Consider optimizing motor cooling or reducing sustained high-power operations."
READY_MESSAGE = "Performance is within optimal parameters. Ready for deployment."


@dataclass(frozen=True)
class StatusSummary:
    pass_count: int
    warning_count: int
    fail_count: int
    overall: TestStatus


def summarize(results: Iterable[TestResult]) -> StatusSummary:
    statuses = [result.status for result in results]
    pass_count = statuses.count(TestStatus.PASS)
    warning_count = statuses.count(TestStatus.WARNING)
    fail_count = statuses.count(TestStatus.FAIL)
    if fail_count:
        overall = TestStatus.FAIL
    elif warning_count:
        overall = TestStatus.WARNING
    else:
        overall = TestStatus.PASS
    return StatusSummary(
        pass_count=pass_count,
        warning_count=warning_count,
        fail_count=fail_count,
        overall=overall,
    )


def recommend(status: StatusSummary, component_count: int, is_flight_ready: bool) -> str:
    if component_count == 0:
        return EMPTY_BUILD_MESSAGE
    if not is_flight_ready:
        return INCOMPLETE_BUILD_MESSAGE
    if status.overall == TestStatus.FAIL:
        return FAILED_MESSAGE
    if status.overall == TestStatus.WARNING:
        return WARNING_MESSAGE
    return READY_MESSAGE
