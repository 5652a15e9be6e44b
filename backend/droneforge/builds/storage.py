from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from pydantic import ValidationError

from droneforge.builds.schemas import StoredComponent, StoredPalette
from droneforge.engine.models import Component, ComponentSpecs, PlacedComponent, Position

logger = logging.getLogger("droneforge.builds")


@dataclass(frozen=True)
class DroneColors:
    motors: str = "#00D4FF"
    frame: str = "#2a2a4a"
    propellers: str = "#1a1a2e"
    battery: str = "#F59E0B"
    leds: str = "#22C55E"


DEFAULT_COLORS = DroneColors()


def _component_payload(item: PlacedComponent) -> dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "category": str(item.category),
        "specs": asdict(item.specs),
        "instance_id": item.instance_id,
        "x": item.position.x,
        "y": item.position.y,
        "z": item.position.z,
    }


def _placed_from_stored(stored: StoredComponent) -> PlacedComponent:
    return PlacedComponent(
        component=Component(
            id=stored.id,
            name=stored.name,
            category=stored.category,
            specs=ComponentSpecs(
                weight=stored.specs.weight,
                power=stored.specs.power,
                thrust=stored.specs.thrust,
            ),
        ),
        instance_id=stored.instance_id,
        position=Position(x=stored.x, y=stored.y, z=stored.z),
    )


def serialize_build(
    components: Iterable[PlacedComponent], colors: DroneColors | None = None
) -> dict[str, Any]:
    payload: dict[str, Any] = {"components": [_component_payload(item) for item in components]}
    if colors is not None:
        payload["colors"] = asdict(colors)
    return payload


def deserialize_components(raw: Any) -> tuple[PlacedComponent, ...]:
    if not isinstance(raw, list):
        logger.warning("stored build is not a component list; using an empty build")
        return ()
    try:
        return tuple(_placed_from_stored(StoredComponent.model_validate(item)) for item in raw)
    except ValidationError as exc:
        logger.warning("stored build is malformed; using an empty build: %s", exc)
        return ()


def deserialize_colors(raw: Any) -> DroneColors:
    if raw is None:
        return DEFAULT_COLORS
    try:
        stored = StoredPalette.model_validate(raw)
    except ValidationError as exc:
        logger.warning("stored palette is malformed; using defaults: %s", exc)
        return DEFAULT_COLORS
    return DroneColors(**stored.model_dump())


def deserialize_build(payload: Any) -> tuple[tuple[PlacedComponent, ...], DroneColors]:
    if not isinstance(payload, dict):
        logger.warning("stored build payload is not an object; using defaults")
        return (), DEFAULT_COLORS
    return (
        deserialize_components(payload.get("components")),
        deserialize_colors(payload.get("colors")),
    )


def dumps_build(components: Iterable[PlacedComponent], colors: DroneColors | None = None) -> str:
    return json.dumps(serialize_build(components, colors), ensure_ascii=False)


def loads_build(text: str | None) -> tuple[tuple[PlacedComponent, ...], DroneColors]:
    if not text:
        return (), DEFAULT_COLORS
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("stored build is not valid JSON; using defaults: %s", exc)
        return (), DEFAULT_COLORS
    return deserialize_build(payload)
