from __future__ import annotations

from pydantic import BaseModel, Field

from droneforge.engine.models import ComponentCategory

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class StoredSpecs(BaseModel):
    weight: str
    power: str | None = None
    thrust: str | None = None


class StoredComponent(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    category: ComponentCategory
    specs: StoredSpecs
    instance_id: str = Field(..., min_length=1)
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class StoredPalette(BaseModel):
    motors: str = Field(..., pattern=HEX_COLOR_PATTERN)
    frame: str = Field(..., pattern=HEX_COLOR_PATTERN)
    propellers: str = Field(..., pattern=HEX_COLOR_PATTERN)
    battery: str = Field(..., pattern=HEX_COLOR_PATTERN)
    leds: str = Field(..., pattern=HEX_COLOR_PATTERN)
