import logging

from fastapi import APIRouter, HTTPException

from droneforge.api.v1.mappers import placed_list_from_schema, test_run_record_to_response
from droneforge.api.v1.schemas import TestRunRequest, TestRunResponse
from droneforge.builds.storage import deserialize_build, serialize_build
from droneforge.db.queries import cancel_test_run, fetch_build, fetch_test_run, insert_test_run
from droneforge.engine.build import Build
from droneforge.workers.tasks import run_flight_test_task

router = APIRouter(tags=["runs"])
logger = logging.getLogger("droneforge.backend")


def _resolve_components(request: TestRunRequest) -> Build:
    if request.build_id is None:
        return placed_list_from_schema(request.components or [])
    record = fetch_build(request.build_id)
    if not record:
        raise HTTPException(status_code=404, detail="build not found")
    components, _ = deserialize_build(record["payload"])
    return components


@router.post("/runs", response_model=TestRunResponse)
def create_test_run(request: TestRunRequest):
    components = _resolve_components(request)
    params = {
        "test": request.test,
        "build_id": request.build_id,
        "components": serialize_build(components)["components"],
        "config": request.config.model_dump(),
    }
    run_id = insert_test_run(request.test, params)
    run_flight_test_task.delay(run_id, params)
    logger.info("queued %s run %s", request.test, run_id)
    record = fetch_test_run(run_id)
    if not record:
        raise HTTPException(status_code=500, detail="failed to persist run")
    return test_run_record_to_response(record)


@router.get("/runs/{run_id}", response_model=TestRunResponse)
def get_test_run(run_id: str):
    record = fetch_test_run(run_id)
    if not record:
        raise HTTPException(status_code=404, detail="run not found")
    return test_run_record_to_response(record)


@router.post("/runs/{run_id}/cancel", response_model=TestRunResponse)
def cancel_run(run_id: str):
    cancelled = cancel_test_run(run_id)
    record = fetch_test_run(run_id)
    if not record:
        raise HTTPException(status_code=404, detail="run not found")
    if not cancelled:
        raise HTTPException(status_code=409, detail=f"run is already {record['status']}")
    return test_run_record_to_response(record)
