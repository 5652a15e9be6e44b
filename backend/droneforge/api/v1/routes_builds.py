from typing import Any

from fastapi import APIRouter, HTTPException

from droneforge.api.v1.mappers import (
    build_record_to_response,
    colors_from_schema,
    placed_list_from_schema,
)
from droneforge.api.v1.schemas import BuildRequest, BuildResponse, PlaceComponentRequest
from droneforge.builds.storage import DroneColors, deserialize_build, serialize_build
from droneforge.db.queries import fetch_build, insert_build, update_build
from droneforge.engine.build import Build, clear_build, place_component, remove_component
from droneforge.engine.catalog import get_component
from droneforge.engine.models import Position

router = APIRouter(tags=["builds"])


def _load_build(build_id: str) -> tuple[Build, DroneColors]:
    record = fetch_build(build_id)
    if not record:
        raise HTTPException(status_code=404, detail="build not found")
    return deserialize_build(record["payload"])


def _save_build(build_id: str, payload: dict[str, Any]) -> BuildResponse:
    if not update_build(build_id, payload):
        raise HTTPException(status_code=404, detail="build not found")
    record = fetch_build(build_id)
    if not record:
        raise HTTPException(status_code=404, detail="build not found")
    return build_record_to_response(record)


@router.post("/builds", response_model=BuildResponse)
def create_build(request: BuildRequest):
    payload = serialize_build(
        placed_list_from_schema(request.components), colors_from_schema(request.colors)
    )
    build_id = insert_build(payload)
    record = fetch_build(build_id)
    if not record:
        raise HTTPException(status_code=500, detail="failed to persist build")
    return build_record_to_response(record)


@router.get("/builds/{build_id}", response_model=BuildResponse)
def get_build(build_id: str):
    record = fetch_build(build_id)
    if not record:
        raise HTTPException(status_code=404, detail="build not found")
    return build_record_to_response(record)


@router.put("/builds/{build_id}", response_model=BuildResponse)
def replace_build(build_id: str, request: BuildRequest):
    payload = serialize_build(
        placed_list_from_schema(request.components), colors_from_schema(request.colors)
    )
    return _save_build(build_id, payload)


@router.post("/builds/{build_id}/components", response_model=BuildResponse)
def add_build_component(build_id: str, request: PlaceComponentRequest):
    components, colors = _load_build(build_id)
    try:
        component = get_component(request.component_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="component not found")
    if request.instance_id and any(
        item.instance_id == request.instance_id for item in components
    ):
        raise HTTPException(status_code=409, detail="instance_id already placed")
    updated = place_component(
        components,
        component,
        position=Position(x=request.x, y=request.y, z=request.z),
        instance_id=request.instance_id,
    )
    return _save_build(build_id, serialize_build(updated, colors))


@router.delete("/builds/{build_id}/components/{instance_id}", response_model=BuildResponse)
def remove_build_component(build_id: str, instance_id: str):
    components, colors = _load_build(build_id)
    if not any(item.instance_id == instance_id for item in components):
        raise HTTPException(status_code=404, detail="component instance not found")
    return _save_build(build_id, serialize_build(remove_component(components, instance_id), colors))


@router.delete("/builds/{build_id}/components", response_model=BuildResponse)
def clear_build_components(build_id: str):
    _, colors = _load_build(build_id)
    return _save_build(build_id, serialize_build(clear_build(), colors))
