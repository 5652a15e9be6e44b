from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from droneforge.engine.models import TestResult

MASKED_VALUE = "—"


class RunStatus(StrEnum):
    READY = "Ready"
    RUNNING = "Running"
    COMPLETE = "Complete"


@dataclass
class TestRunTicker:
    """Monotonic progress counter for a simulated test run.

    Holds no evaluation state; callers re-derive results from their inputs
    whenever they need them, so stopping or resetting mid-run is always safe.
    """

    step_pct: float = 2.0
    progress: float = 0.0
    is_running: bool = False

    @property
    def is_complete(self) -> bool:
        return self.progress >= 100.0

    @property
    def status(self) -> RunStatus:
        if self.is_complete:
            return RunStatus.COMPLETE
        if self.progress > 0:
            return RunStatus.RUNNING
        return RunStatus.READY

    def start(self) -> None:
        if self.is_complete:
            self.progress = 0.0
        self.is_running = True

    def stop(self) -> None:
        self.is_running = False

    def toggle(self) -> None:
        if self.is_running:
            self.stop()
        else:
            self.start()

    def reset(self) -> None:
        self.progress = 0.0
        self.is_running = False

    def tick(self) -> bool:
        """Advance one step; returns True while the run should keep ticking."""
        if not self.is_running or self.is_complete:
            return False
        self.progress = min(100.0, self.progress + self.step_pct)
        if self.is_complete:
            self.is_running = False
        return self.is_running

    def reveal(self, results: list[TestResult]) -> list[TestResult]:
        if self.is_complete:
            return list(results)
        return [replace(result, value=MASKED_VALUE) for result in results]
