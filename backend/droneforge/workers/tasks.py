import logging
import time
from typing import Any

from droneforge.api.v1.mappers import report_to_payload
from droneforge.builds.storage import deserialize_components
from droneforge.core.config import get_settings
from droneforge.db.queries import advance_test_run, finish_test_run
from droneforge.engine.models import TestConfig
from droneforge.engine.progress import TestRunTicker
from droneforge.engine.report import run_flight_test
from droneforge.workers.celery_app import celery_app

logger = logging.getLogger("droneforge.backend.worker")


@celery_app.task(bind=True, name="run_flight_test")
def run_flight_test_task(self, run_id: str, params: dict[str, Any]) -> None:
    settings = get_settings()
    ticker = TestRunTicker(step_pct=settings.test_tick_step_pct)
    try:
        components = deserialize_components(params.get("components", []))
        config = TestConfig(**params.get("config", {}))
        ticker.start()
        while True:
            keep_ticking = ticker.tick()
            if not advance_test_run(run_id, ticker.progress):
                logger.info("run %s stopped at %.0f%%", run_id, ticker.progress)
                return
            if not keep_ticking:
                break
            time.sleep(settings.test_tick_interval_ms / 1000)
        report = run_flight_test(components, params.get("test"), config)
        stored = finish_test_run(
            run_id,
            status="completed",
            progress=ticker.progress,
            result=report_to_payload(report),
        )
        if not stored:
            logger.info("run %s was cancelled before its report was stored", run_id)
    except Exception as exc:
        logger.exception("flight test run failed: %s", exc)
        finish_test_run(run_id, status="failed", error=str(exc))
        raise
