from fastapi import APIRouter, HTTPException

from droneforge.api.v1.mappers import component_to_schema, test_definition_to_schema
from droneforge.api.v1.schemas import ComponentSchema, TestDefinitionSchema
from droneforge.engine.catalog import get_component, list_components
from droneforge.engine.models import ComponentCategory
from droneforge.engine.test_library import TestTier, get_test, list_tests

router = APIRouter(tags=["catalog"])


@router.get("/components", response_model=list[ComponentSchema])
def list_catalog_components(category: ComponentCategory | None = None):
    return [component_to_schema(item) for item in list_components(category)]


@router.get("/components/{component_id}", response_model=ComponentSchema)
def get_catalog_component(component_id: str):
    try:
        return component_to_schema(get_component(component_id))
    except KeyError:
        raise HTTPException(status_code=404, detail="component not found")


@router.get("/tests", response_model=list[TestDefinitionSchema])
def list_flight_tests(tier: TestTier | None = None):
    return [test_definition_to_schema(item) for item in list_tests(tier)]


@router.get("/tests/{test_id}", response_model=TestDefinitionSchema)
def get_flight_test(test_id: str):
    try:
        return test_definition_to_schema(get_test(test_id))
    except KeyError:
        raise HTTPException(status_code=404, detail="test not found")
