from __future__ import annotations

from typing import Iterable

from droneforge.engine.models import CapabilitySummary, ComponentCategory, PlacedComponent
from droneforge.engine.parsing import parse_capacity_mah, parse_leading_int, parse_voltage


def _is_battery(component: PlacedComponent) -> bool:
    return component.category == ComponentCategory.POWER and "battery" in component.id


def _is_flight_controller(component: PlacedComponent) -> bool:
    return component.category == ComponentCategory.ELECTRONICS and "fc" in component.id


def aggregate(components: Iterable[PlacedComponent]) -> CapabilitySummary:
    """Reduce a build into its capability summary.

    Unparsable spec fields count as zero; an empty build yields a zero
    thrust-to-weight ratio rather than dividing by zero.
    """
    parts = list(components)

    total_weight = sum(parse_leading_int(c.specs.weight) for c in parts)
    motors = [c for c in parts if c.category == ComponentCategory.MOTORS]
    propellers = [c for c in parts if c.category == ComponentCategory.PROPELLERS]
    total_thrust = sum(parse_leading_int(c.specs.thrust) for c in motors)
    thrust_to_weight = total_thrust / total_weight if total_weight else 0.0

    battery = next((c for c in parts if _is_battery(c)), None)
    battery_capacity_mah = parse_capacity_mah(battery.name) if battery else 0
    battery_voltage = parse_voltage(battery.specs.power) if battery else 0.0

    return CapabilitySummary(
        total_weight=total_weight,
        motor_count=len(motors),
        propeller_count=len(propellers),
        total_thrust=total_thrust,
        thrust_to_weight=thrust_to_weight,
        battery_capacity_mah=battery_capacity_mah,
        battery_voltage=battery_voltage,
        has_frame=any(c.category == ComponentCategory.FRAMES for c in parts),
        has_motors=bool(motors),
        has_propellers=bool(propellers),
        has_battery=battery is not None,
        has_flight_controller=any(_is_flight_controller(c) for c in parts),
        has_gps=any(c.id == "gps" for c in parts),
    )
