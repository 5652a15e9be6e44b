from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ComponentCategory(StrEnum):
    MOTORS = "Motors"
    PROPELLERS = "Propellers"
    FRAMES = "Frames"
    POWER = "Power"
    ELECTRONICS = "Electronics"
    SENSORS = "Sensors"
    CAMERAS = "Cameras"
    ACCESSORIES = "Accessories"


class TestId(StrEnum):
    HOVER = "hover"
    ASCENT = "ascent"
    ROTATION = "rotation"
    WIND = "wind"
    SPEED = "speed"
    THERMAL = "thermal"
    WEATHER = "weather"
    WAYPOINT = "waypoint"


class Trend(StrEnum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class TestStatus(StrEnum):
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


@dataclass(frozen=True)
class ComponentSpecs:
    weight: str
    power: str | None = None
    thrust: str | None = None


@dataclass(frozen=True)
class Component:
    id: str
    name: str
    category: ComponentCategory
    specs: ComponentSpecs


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class PlacedComponent:
    component: Component
    instance_id: str
    position: Position = Position()

    @property
    def id(self) -> str:
        return self.component.id

    @property
    def name(self) -> str:
        return self.component.name

    @property
    def category(self) -> ComponentCategory:
        return self.component.category

    @property
    def specs(self) -> ComponentSpecs:
        return self.component.specs


@dataclass(frozen=True)
class CapabilitySummary:
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

    @property
    def is_flight_ready(self) -> bool:
        return (
            self.has_frame
            and self.has_motors
            and self.has_battery
            and self.has_flight_controller
            and self.has_propellers
        )


@dataclass(frozen=True)
class TestConfig:
    """Environmental test parameters.

    Nominal slider ranges: wind_speed 0-100 km/h, temperature -20-50 °C,
    altitude 0-500 m, humidity 0-100 %, precision 1-10. Values outside the
    ranges are accepted and flow through the same arithmetic.
    """

    wind_speed: float = 20.0
    temperature: float = 25.0
    altitude: float = 50.0
    humidity: float = 40.0
    precision: float = 5.0


DEFAULT_TEST_CONFIG = TestConfig()


@dataclass(frozen=True)
class TestResult:
    label: str
    value: str
    trend: Trend
    status: TestStatus
