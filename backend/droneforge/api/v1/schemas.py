from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from droneforge.builds.schemas import HEX_COLOR_PATTERN
from droneforge.engine.models import ComponentCategory, TestStatus, Trend
from droneforge.engine.performance import MetricStatus, Priority
from droneforge.engine.progress import RunStatus
from droneforge.engine.test_library import TestTier


class ComponentSpecsSchema(BaseModel):
    weight: str
    power: str | None = None
    thrust: str | None = None


class ComponentSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    category: ComponentCategory
    specs: ComponentSpecsSchema


class PlacedComponentSchema(ComponentSchema):
    instance_id: str = Field(..., min_length=1)
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class TestConfigSchema(BaseModel):
    wind_speed: float = Field(default=20.0, ge=0, le=100, description="km/h")
    temperature: float = Field(default=25.0, ge=-20, le=50, description="°C")
    altitude: float = Field(default=50.0, ge=0, le=500, description="m")
    humidity: float = Field(default=40.0, ge=0, le=100, description="%")
    precision: float = Field(default=5.0, ge=1, le=10, description="level")


class CapabilitySummarySchema(BaseModel):
    total_weight: int
    motor_count: int
    propeller_count: int
    total_thrust: int
    thrust_to_weight: float
    battery_capacity_mah: int
    battery_voltage: float
    has_frame: bool
    has_motors: bool
    has_propellers: bool
    has_battery: bool
    has_flight_controller: bool
    has_gps: bool
    is_flight_ready: bool


class TestResultSchema(BaseModel):
    label: str
    value: str
    trend: Trend
    status: TestStatus


class StatusSummarySchema(BaseModel):
    pass_count: int
    warning_count: int
    fail_count: int
    overall: TestStatus


class ComponentsRequest(BaseModel):
    components: list[PlacedComponentSchema] = Field(default_factory=list)


class EvaluationRequest(BaseModel):
    components: list[PlacedComponentSchema] = Field(default_factory=list)
    test: str = Field(..., description="hover, ascent, rotation, wind, speed, thermal, weather or waypoint")
    config: TestConfigSchema = Field(default_factory=TestConfigSchema)


class EvaluationResponse(BaseModel):
    test: str
    capabilities: CapabilitySummarySchema
    results: list[TestResultSchema]
    status: StatusSummarySchema
    recommendation: str
    inputs_hash: str


class BuildMetricSchema(BaseModel):
    label: str
    value: str
    status: MetricStatus


class SuggestionSchema(BaseModel):
    text: str
    priority: Priority


class BuildPerformanceResponse(BaseModel):
    completeness: int
    metrics: list[BuildMetricSchema]
    suggestions: list[SuggestionSchema] = Field(default_factory=list)
    component_count: int
    message: str | None = None


class SliderSchema(BaseModel):
    field: str
    label: str
    min: float
    max: float
    unit: str
    scale: float = 1.0


class TestDefinitionSchema(BaseModel):
    id: str
    name: str
    description: str
    duration: str
    tier: TestTier
    sliders: list[SliderSchema] = Field(default_factory=list)


class DroneColorsSchema(BaseModel):
    motors: str = Field(default="#00D4FF", pattern=HEX_COLOR_PATTERN)
    frame: str = Field(default="#2a2a4a", pattern=HEX_COLOR_PATTERN)
    propellers: str = Field(default="#1a1a2e", pattern=HEX_COLOR_PATTERN)
    battery: str = Field(default="#F59E0B", pattern=HEX_COLOR_PATTERN)
    leds: str = Field(default="#22C55E", pattern=HEX_COLOR_PATTERN)


class BuildRequest(BaseModel):
    components: list[PlacedComponentSchema] = Field(default_factory=list)
    colors: DroneColorsSchema = Field(default_factory=DroneColorsSchema)

    @model_validator(mode="after")
    def validate_instance_ids(self):
        instance_ids = [item.instance_id for item in self.components]
        if len(set(instance_ids)) != len(instance_ids):
            raise ValueError("component instance_id values must be unique")
        return self


class PlaceComponentRequest(BaseModel):
    component_id: str = Field(..., min_length=1)
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    instance_id: str | None = Field(default=None, min_length=1)


class BuildResponse(BaseModel):
    id: str
    components: list[PlacedComponentSchema]
    colors: DroneColorsSchema
    capabilities: CapabilitySummarySchema
    created_at: datetime
    updated_at: datetime


class TestRunRequest(BaseModel):
    build_id: str | None = None
    components: list[PlacedComponentSchema] | None = None
    test: str
    config: TestConfigSchema = Field(default_factory=TestConfigSchema)

    @model_validator(mode="after")
    def validate_build_source(self):
        if self.build_id is None and self.components is None:
            raise ValueError("provide build_id or components")
        if self.build_id is not None and self.components is not None:
            raise ValueError("provide only one of build_id or components")
        return self


class TestRunResponse(BaseModel):
    id: str
    test_id: str
    status: Literal["queued", "running", "completed", "failed", "cancelled"]
    progress: float
    run_status: RunStatus
    params: dict[str, Any] = Field(default_factory=dict)
    result: dict[str, Any] | None = None
    error: str | None = None
    created_at: datetime
    updated_at: datetime
