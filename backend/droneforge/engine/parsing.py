from __future__ import annotations

import math
import re

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_CAPACITY_MAH = re.compile(r"(\d+)mAh")
_VOLTAGE = re.compile(r"(\d+(?:\.\d+)?)V")


def parse_leading_int(text: str | None) -> int:
    """Integer prefix of a spec string such as "45g" or "850g"; 0 when absent."""
    if not text:
        return 0
    match = _LEADING_INT.match(text)
    if not match:
        return 0
    return int(match.group(1))


def parse_capacity_mah(name: str | None) -> int:
    if not name:
        return 0
    match = _CAPACITY_MAH.search(name)
    if not match:
        return 0
    return int(match.group(1))


def parse_voltage(power: str | None) -> float:
    if not power:
        return 0.0
    match = _VOLTAGE.search(power)
    if not match:
        return 0.0
    return float(match.group(1))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
