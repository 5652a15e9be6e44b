import unittest
from unittest import mock

from droneforge.workers.tasks import run_flight_test_task

PARAMS = {
    "test": "thermal",
    "components": [
        {"id": "frame-x", "name": "X-Frame 250", "category": "Frames", "specs": {"weight": "120g"}, "instance_id": "frame-1"},
        {"id": "motor-2212", "name": "Motor 2212", "category": "Motors", "specs": {"weight": "45g", "thrust": "850g"}, "instance_id": "motor-1"},
        {"id": "prop-5x4", "name": "Propeller 5x4", "category": "Propellers", "specs": {"weight": "8g"}, "instance_id": "prop-1"},
        {"id": "battery-4s", "name": "LiPo 4S 1500mAh", "category": "Power", "specs": {"weight": "165g", "power": "14.8V"}, "instance_id": "battery-1"},
        {"id": "fc-f4", "name": "Flight Controller F4", "category": "Electronics", "specs": {"weight": "8g"}, "instance_id": "fc-1"},
    ],
    "config": {"wind_speed": 20.0, "temperature": 25.0, "altitude": 50.0, "humidity": 40.0, "precision": 5.0},
}

ACTIVE = ("queued", "running")


class _FakeRun:
    """Single test_runs row honouring the same status guards as the SQL updates."""

    def __init__(self, status="queued", cancel_at=None):
        self.status = status
        self.progress = 0.0
        self.result = None
        self.error = None
        self.cancel_at = cancel_at
        self.advances = 0

    def advance(self, run_id, progress):
        if self.status not in ACTIVE:
            return False
        self.advances += 1
        self.status = "running"
        self.progress = progress
        if self.cancel_at is not None and progress >= self.cancel_at:
            self.status = "cancelled"
        return True

    def finish(self, run_id, status, progress=None, result=None, error=None):
        if self.status not in ACTIVE:
            return False
        self.status = status
        if progress is not None:
            self.progress = progress
        self.result = result
        self.error = error
        return True


@mock.patch("droneforge.workers.tasks.time.sleep")
class FlightTestTaskTests(unittest.TestCase):
    def _run(self, row, params=PARAMS):
        with mock.patch("droneforge.workers.tasks.advance_test_run", side_effect=row.advance), \
                mock.patch("droneforge.workers.tasks.finish_test_run", side_effect=row.finish):
            run_flight_test_task("run-1", params)

    def test_run_completes_with_report(self, sleep):
        row = _FakeRun()
        self._run(row)
        self.assertEqual(row.advances, 50)
        self.assertEqual(row.status, "completed")
        self.assertEqual(row.progress, 100.0)
        self.assertEqual(row.result["status"]["overall"], "pass")
        self.assertEqual(len(row.result["results"]), 4)

    def test_cancelled_run_stops_ticking(self, sleep):
        row = _FakeRun(cancel_at=6.0)
        self._run(row)
        self.assertEqual(row.advances, 3)
        self.assertEqual(row.status, "cancelled")
        self.assertIsNone(row.result)

    def test_cancel_after_last_tick_is_kept(self, sleep):
        row = _FakeRun(cancel_at=100.0)
        self._run(row)
        self.assertEqual(row.advances, 50)
        self.assertEqual(row.status, "cancelled")
        self.assertIsNone(row.result)

    def test_failure_marks_run_failed(self, sleep):
        row = _FakeRun()
        with self.assertRaises(TypeError):
            self._run(row, {**PARAMS, "config": {"gravity": 9.81}})
        self.assertEqual(row.status, "failed")
        self.assertIn("gravity", row.error)
        self.assertEqual(row.advances, 0)

    def test_failure_does_not_overwrite_cancel(self, sleep):
        row = _FakeRun(status="cancelled")
        with self.assertRaises(TypeError):
            self._run(row, {**PARAMS, "config": {"gravity": 9.81}})
        self.assertEqual(row.status, "cancelled")
        self.assertIsNone(row.error)
