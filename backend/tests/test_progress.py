import unittest

from droneforge.engine.models import TestResult, TestStatus, Trend
from droneforge.engine.progress import MASKED_VALUE, RunStatus, TestRunTicker


class TestRunTickerTests(unittest.TestCase):
    def test_idle_ticker_does_not_advance(self):
        ticker = TestRunTicker()
        self.assertFalse(ticker.tick())
        self.assertEqual(ticker.progress, 0.0)
        self.assertEqual(ticker.status, RunStatus.READY)

    def test_runs_to_completion(self):
        ticker = TestRunTicker(step_pct=2.0)
        ticker.start()
        ticks = 1
        while ticker.tick():
            ticks += 1
        self.assertEqual(ticks, 50)
        self.assertEqual(ticker.progress, 100.0)
        self.assertFalse(ticker.is_running)
        self.assertEqual(ticker.status, RunStatus.COMPLETE)

    def test_progress_clamps_at_hundred(self):
        ticker = TestRunTicker(step_pct=30.0)
        ticker.start()
        while ticker.tick():
            pass
        self.assertEqual(ticker.progress, 100.0)

    def test_toggle_pauses_and_resumes(self):
        ticker = TestRunTicker(step_pct=10.0)
        ticker.toggle()
        ticker.tick()
        ticker.toggle()
        self.assertFalse(ticker.tick())
        self.assertEqual(ticker.progress, 10.0)
        self.assertEqual(ticker.status, RunStatus.RUNNING)
        ticker.toggle()
        self.assertTrue(ticker.tick())
        self.assertEqual(ticker.progress, 20.0)

    def test_start_after_completion_restarts(self):
        ticker = TestRunTicker(progress=100.0)
        ticker.start()
        self.assertEqual(ticker.progress, 0.0)
        self.assertTrue(ticker.is_running)

    def test_reset(self):
        ticker = TestRunTicker(step_pct=10.0)
        ticker.start()
        ticker.tick()
        ticker.reset()
        self.assertEqual(ticker.progress, 0.0)
        self.assertFalse(ticker.is_running)

    def test_values_hidden_until_complete(self):
        results = [TestResult("Stability Score", "90%", Trend.UP, TestStatus.PASS)]
        ticker = TestRunTicker(progress=40.0)
        self.assertEqual(ticker.reveal(results)[0].value, MASKED_VALUE)
        self.assertEqual(ticker.reveal(results)[0].status, TestStatus.PASS)
        ticker.progress = 100.0
        self.assertEqual(ticker.reveal(results), results)
