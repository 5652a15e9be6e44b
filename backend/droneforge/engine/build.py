from __future__ import annotations

import uuid

from droneforge.engine.models import Component, PlacedComponent, Position

Build = tuple[PlacedComponent, ...]


def new_instance_id(component: Component) -> str:
    return f"{component.id}-{uuid.uuid4().hex[:12]}"


def place_component(
    build: Build,
    component: Component,
    position: Position | None = None,
    instance_id: str | None = None,
) -> Build:
    placed = PlacedComponent(
        component=component,
        instance_id=instance_id or new_instance_id(component),
        position=position or Position(),
    )
    return (*build, placed)


def remove_component(build: Build, instance_id: str) -> Build:
    return tuple(item for item in build if item.instance_id != instance_id)


def clear_build() -> Build:
    return ()
