from __future__ import annotations

from typing import Any

from droneforge.engine.models import Component, ComponentCategory, ComponentSpecs


CATEGORIES: list[ComponentCategory] = [
    ComponentCategory.MOTORS,
    ComponentCategory.PROPELLERS,
    ComponentCategory.FRAMES,
    ComponentCategory.POWER,
    ComponentCategory.ELECTRONICS,
    ComponentCategory.SENSORS,
    ComponentCategory.CAMERAS,
    ComponentCategory.ACCESSORIES,
]


_DEFAULT_PARTS: list[dict[str, Any]] = [
    # Motors
    {"id": "motor-1404", "name": "Motor 1404", "category": "Motors", "weight": "12g", "thrust": "420g"},
    {"id": "motor-2212", "name": "Motor 2212", "category": "Motors", "weight": "45g", "thrust": "850g"},
    {"id": "motor-2306", "name": "Motor 2306", "category": "Motors", "weight": "32g", "thrust": "1300g"},
    {"id": "motor-2806", "name": "Motor 2806", "category": "Motors", "weight": "62g", "thrust": "1200g"},
    {"id": "motor-3115", "name": "Motor 3115", "category": "Motors", "weight": "110g", "thrust": "2400g"},
    # Propellers
    {"id": "prop-3x2", "name": "Propeller 3x2", "category": "Propellers", "weight": "2g"},
    {"id": "prop-5x4", "name": "Propeller 5x4", "category": "Propellers", "weight": "8g"},
    {"id": "prop-7x3", "name": "Propeller 7x3", "category": "Propellers", "weight": "12g"},
    {"id": "prop-10x4", "name": "Propeller 10x4.5", "category": "Propellers", "weight": "18g"},
    # Frames
    {"id": "frame-whoop", "name": "Whoop Frame 75", "category": "Frames", "weight": "25g"},
    {"id": "frame-x", "name": "X-Frame 250", "category": "Frames", "weight": "120g"},
    {"id": "frame-h", "name": "H-Frame 450", "category": "Frames", "weight": "180g"},
    {"id": "frame-hex", "name": "Hex Frame 550", "category": "Frames", "weight": "420g"},
    # Power
    {"id": "battery-3s", "name": "LiPo 3S 850mAh", "category": "Power", "weight": "75g", "power": "11.1V"},
    {"id": "battery-4s", "name": "LiPo 4S 1500mAh", "category": "Power", "weight": "165g", "power": "14.8V"},
    {"id": "battery-6s", "name": "LiPo 6S 2200mAh", "category": "Power", "weight": "280g", "power": "22.2V"},
    {"id": "battery-liion-4s", "name": "Li-Ion 4S 4000mAh", "category": "Power", "weight": "250g", "power": "14.4V"},
    {"id": "pdb", "name": "Power Distribution Board", "category": "Power", "weight": "10g", "power": "5V"},
    # Electronics
    {"id": "fc-f4", "name": "Flight Controller F4", "category": "Electronics", "weight": "8g"},
    {"id": "fc-f7", "name": "Flight Controller F7", "category": "Electronics", "weight": "10g"},
    {"id": "fc-h7", "name": "Flight Controller H7", "category": "Electronics", "weight": "12g"},
    {"id": "esc-4in1", "name": "4-in-1 ESC 45A", "category": "Electronics", "weight": "15g", "power": "25.2V"},
    {"id": "rx-elrs", "name": "ELRS Receiver", "category": "Electronics", "weight": "2g"},
    # Sensors
    {"id": "gps", "name": "GPS Module", "category": "Sensors", "weight": "15g"},
    {"id": "baro", "name": "Barometer", "category": "Sensors", "weight": "3g"},
    {"id": "compass", "name": "Magnetometer", "category": "Sensors", "weight": "4g"},
    {"id": "lidar", "name": "LiDAR Rangefinder", "category": "Sensors", "weight": "20g"},
    {"id": "optical-flow", "name": "Optical Flow Sensor", "category": "Sensors", "weight": "5g"},
    # Cameras
    {"id": "camera-fpv", "name": "FPV Camera", "category": "Cameras", "weight": "10g"},
    {"id": "camera-hd", "name": "HD Camera", "category": "Cameras", "weight": "25g"},
    {"id": "camera-4k", "name": "4K Action Camera", "category": "Cameras", "weight": "120g"},
    {"id": "camera-thermal", "name": "Thermal Camera", "category": "Cameras", "weight": "45g"},
    # Accessories
    {"id": "vtx", "name": "Video TX 600mW", "category": "Accessories", "weight": "8g"},
    {"id": "led-strip", "name": "LED Strip", "category": "Accessories", "weight": "6g"},
    {"id": "landing-gear", "name": "Landing Gear", "category": "Accessories", "weight": "35g"},
    {"id": "payload-mount", "name": "Payload Mount", "category": "Accessories", "weight": "40g"},
]


def _to_component(entry: dict[str, Any]) -> Component:
    return Component(
        id=entry["id"],
        name=entry["name"],
        category=ComponentCategory(entry["category"]),
        specs=ComponentSpecs(
            weight=entry["weight"],
            power=entry.get("power"),
            thrust=entry.get("thrust"),
        ),
    )


COMPONENTS: tuple[Component, ...] = tuple(_to_component(entry) for entry in _DEFAULT_PARTS)
_BY_ID: dict[str, Component] = {component.id: component for component in COMPONENTS}


def list_components(category: ComponentCategory | str | None = None) -> list[Component]:
    if category is None:
        return list(COMPONENTS)
    return [component for component in COMPONENTS if component.category == category]


def get_component(component_id: str) -> Component:
    try:
        return _BY_ID[component_id]
    except KeyError:
        raise KeyError(f"unknown component: {component_id}") from None
