"""Closed-form flight test evaluator.

Every test kind derives four rows from a handful of base quantities computed
from the capability summary, offset by the environmental test parameters.
The coefficients are estimation constants, not validated physics; they are
kept stable so results stay reproducible across releases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from droneforge.engine.models import (
    CapabilitySummary,
    TestConfig,
    TestId,
    TestResult,
    TestStatus,
    Trend,
)
from droneforge.engine.parsing import round_half_up

STABILITY_CEILING = 98.0
POWER_CEILING = 95.0
RESPONSE_FLOOR_MS = 15.0
COMFORT_TEMP_RANGE_C = (0.0, 35.0)


@dataclass(frozen=True)
class BaseQuantities:
    stability: float
    power: float
    response_ms: float
    max_speed_kmh: int
    max_handled_wind_kmh: float


def base_quantities(summary: CapabilitySummary) -> BaseQuantities:
    ratio = summary.thrust_to_weight
    stability = min(STABILITY_CEILING, 70 + 8 * ratio + (10 if summary.has_gps else 0))
    power = min(
        POWER_CEILING,
        60 + summary.battery_capacity_mah / 50 + (10 if ratio > 3 else 0),
    )
    response = max(RESPONSE_FLOOR_MS, 40 - 5 * ratio)
    max_speed = round_half_up(18 * ratio)
    max_wind = 15 + 5 * ratio + (5 if summary.total_weight > 400 else 0)
    return BaseQuantities(
        stability=stability,
        power=power,
        response_ms=response,
        max_speed_kmh=max_speed,
        max_handled_wind_kmh=max_wind,
    )


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _at_least(value: float, pass_at: float, warn_at: float) -> TestStatus:
    if value >= pass_at:
        return TestStatus.PASS
    if value >= warn_at:
        return TestStatus.WARNING
    return TestStatus.FAIL


def _at_most(value: float, pass_at: float, warn_at: float) -> TestStatus:
    if value <= pass_at:
        return TestStatus.PASS
    if value <= warn_at:
        return TestStatus.WARNING
    return TestStatus.FAIL


def _trend(value: float, baseline: float, higher_is_better: bool = True) -> Trend:
    if value == baseline:
        return Trend.NEUTRAL
    if (value > baseline) == higher_is_better:
        return Trend.UP
    return Trend.DOWN


def _temp_penalty(temperature: float) -> float:
    low, high = COMFORT_TEMP_RANGE_C
    if temperature < low:
        return 1.5 * (low - temperature)
    if temperature > high:
        return 1.5 * (temperature - high)
    return 0.0


def _score_row(label: str, score: float, pass_at: float, warn_at: float, baseline: float) -> TestResult:
    value = round_half_up(_clamp(score))
    return TestResult(
        label=label,
        value=f"{value}%",
        trend=_trend(value, baseline),
        status=_at_least(value, pass_at, warn_at),
    )


def _hold_row(label: str, error_m: float, pass_at: float, warn_at: float) -> TestResult:
    return TestResult(
        label=label,
        value=f"±{error_m:.1f}m",
        trend=_trend(error_m, 0.5, higher_is_better=False),
        status=_at_most(error_m, pass_at, warn_at),
    )


def _gps_hold_base(summary: CapabilitySummary) -> float:
    return 0.3 if summary.has_gps else 0.8


def _hover(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    wind = config.wind_speed
    ratio = summary.thrust_to_weight
    throttle = round_half_up(min(100.0, 100 / ratio) if ratio > 0 else 100.0)
    return [
        _score_row("Stability Score", base.stability - 0.6 * wind - 0.01 * config.altitude, 80, 60, 70),
        _hold_row("Position Hold", _gps_hold_base(summary) + 0.02 * wind, 0.5, 1.0),
        _score_row("Power Efficiency", base.power - 0.25 * wind, 75, 55, 60),
        TestResult(
            label="Hover Throttle",
            value=f"{throttle}%",
            trend=_trend(throttle, 50, higher_is_better=False),
            status=_at_most(throttle, 50, 75),
        ),
    ]


def _ascent(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    altitude = config.altitude
    efficiency = round_half_up(_clamp(base.power - _temp_penalty(config.temperature) - 0.02 * altitude))
    climb_rate = max(0.0, (summary.thrust_to_weight - 1) * 4) * efficiency / 100
    drain = round_half_up(_clamp(0.05 * altitude + 0.2 * (100 - efficiency)))

    if climb_rate > 0:
        seconds = round_half_up(altitude / climb_rate)
        time_row = TestResult(
            label="Time to Altitude",
            value=f"{seconds}s",
            trend=_trend(seconds, 60, higher_is_better=False),
            status=_at_most(seconds, 60, 120),
        )
    else:
        time_row = TestResult(
            label="Time to Altitude", value="N/A", trend=Trend.DOWN, status=TestStatus.FAIL
        )

    return [
        TestResult(
            label="Climb Efficiency",
            value=f"{efficiency}%",
            trend=_trend(efficiency, 60),
            status=_at_least(efficiency, 75, 55),
        ),
        TestResult(
            label="Climb Rate",
            value=f"{climb_rate:.1f} m/s",
            trend=_trend(climb_rate, 4.0),
            status=_at_least(climb_rate, 5.0, 2.0),
        ),
        time_row,
        TestResult(
            label="Battery Drain",
            value=f"{drain}%",
            trend=_trend(drain, 15, higher_is_better=False),
            status=_at_most(drain, 15, 30),
        ),
    ]


def _rotation(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    precision = config.precision
    requested = 36 * precision
    capable = 60 + 60 * summary.thrust_to_weight
    yaw_rate = round_half_up(min(requested, capable))
    heading_error = 0.5 + 0.2 * precision + max(0.0, requested - capable) / 20
    response = round_half_up(base.response_ms + 2 * precision)

    if capable >= requested:
        yaw_status = TestStatus.PASS
    elif capable >= 0.75 * requested:
        yaw_status = TestStatus.WARNING
    else:
        yaw_status = TestStatus.FAIL

    return [
        TestResult(
            label="Yaw Rate",
            value=f"{yaw_rate}°/s",
            trend=_trend(capable, requested),
            status=yaw_status,
        ),
        TestResult(
            label="Heading Accuracy",
            value=f"±{heading_error:.1f}°",
            trend=_trend(heading_error, 1.5, higher_is_better=False),
            status=_at_most(heading_error, 2.0, 4.0),
        ),
        TestResult(
            label="Response Time",
            value=f"{response}ms",
            trend=_trend(response, 40, higher_is_better=False),
            status=_at_most(response, 35, 50),
        ),
        _score_row("Stability Score", base.stability - 1.5 * precision, 80, 60, 70),
    ]


def _wind(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    wind = config.wind_speed
    altitude = config.altitude
    max_wind = base.max_handled_wind_kmh
    overload = max(0.0, wind - max_wind)
    impact = round_half_up(0.8 * wind + 0.01 * altitude)

    if max_wind >= wind:
        handled_status = TestStatus.PASS
    elif max_wind >= 0.75 * wind:
        handled_status = TestStatus.WARNING
    else:
        handled_status = TestStatus.FAIL

    return [
        _score_row(
            "Wind Compensation",
            base.stability - 0.5 * wind - 2 * overload - 0.02 * altitude,
            75,
            50,
            70,
        ),
        _hold_row("Position Hold", _gps_hold_base(summary) + 0.03 * wind + 0.002 * altitude, 0.5, 1.5),
        TestResult(
            label="Max Wind Handled",
            value=f"{round_half_up(max_wind)} km/h",
            trend=_trend(max_wind, wind),
            status=handled_status,
        ),
        TestResult(
            label="Battery Impact",
            value=f"{impact:+d}%",
            trend=_trend(impact, 0, higher_is_better=False),
            status=_at_most(impact, 15, 30),
        ),
    ]


def _speed(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    wind = config.wind_speed
    target = round_half_up(config.precision * 10)
    achieved = round_half_up(max(0.0, base.max_speed_kmh - 0.5 * wind))
    load = min(1.5, target / base.max_speed_kmh) if base.max_speed_kmh > 0 else 1.5
    motor_temp = round_half_up(35 + 30 * load + 0.2 * wind)

    if achieved >= target:
        achieved_status = TestStatus.PASS
    elif achieved >= 0.75 * target:
        achieved_status = TestStatus.WARNING
    else:
        achieved_status = TestStatus.FAIL

    if wind < 20:
        headwind_status = TestStatus.PASS
    elif wind < 40:
        headwind_status = TestStatus.WARNING
    else:
        headwind_status = TestStatus.FAIL

    return [
        TestResult(
            label="Achieved Speed",
            value=f"{achieved} km/h",
            trend=_trend(achieved, target),
            status=achieved_status,
        ),
        TestResult(
            label="Target Speed",
            value=f"{target} km/h",
            trend=Trend.NEUTRAL,
            status=TestStatus.PASS if base.max_speed_kmh >= target else TestStatus.WARNING,
        ),
        TestResult(
            label="Headwind",
            value=f"{round_half_up(wind)} km/h",
            trend=_trend(wind, 0, higher_is_better=False),
            status=headwind_status,
        ),
        TestResult(
            label="Motor Temp",
            value=f"{motor_temp}°C",
            trend=_trend(motor_temp, 65, higher_is_better=False),
            status=_at_most(motor_temp, 70, 85),
        ),
    ]


def _thermal(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    ambient = config.temperature
    humidity = config.humidity
    motor_temp = round_half_up(ambient + 30 + 20 / max(summary.thrust_to_weight, 1.0))
    esc_temp = round_half_up(ambient + 20 + 0.1 * humidity)
    battery_temp = round_half_up(ambient + 10 + summary.battery_capacity_mah / 500)
    cooling = 100 - 1.5 * max(0.0, ambient - 25) - 0.2 * humidity

    if 15 <= battery_temp <= 45:
        battery_status, battery_trend = TestStatus.PASS, Trend.NEUTRAL
    elif 0 <= battery_temp <= 60:
        battery_status, battery_trend = TestStatus.WARNING, Trend.DOWN
    else:
        battery_status, battery_trend = TestStatus.FAIL, Trend.DOWN

    return [
        TestResult(
            label="Motor Temp",
            value=f"{motor_temp}°C",
            trend=_trend(motor_temp, 65, higher_is_better=False),
            status=_at_most(motor_temp, 70, 85),
        ),
        TestResult(
            label="ESC Temp",
            value=f"{esc_temp}°C",
            trend=_trend(esc_temp, 55, higher_is_better=False),
            status=_at_most(esc_temp, 60, 75),
        ),
        TestResult(
            label="Battery Temp",
            value=f"{battery_temp}°C",
            trend=battery_trend,
            status=battery_status,
        ),
        _score_row("Cooling Efficiency", cooling, 75, 50, 80),
    ]


def _weather(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    wind = config.wind_speed
    rain = config.humidity
    temperature = config.temperature
    impact = round_half_up(0.6 * wind + 0.1 * rain + max(0.0, -temperature))

    if rain < 30:
        moisture = TestResult("Moisture Risk", "Low", Trend.NEUTRAL, TestStatus.PASS)
    elif rain < 70:
        moisture = TestResult("Moisture Risk", "Moderate", Trend.DOWN, TestStatus.WARNING)
    else:
        moisture = TestResult("Moisture Risk", "High", Trend.DOWN, TestStatus.FAIL)

    return [
        _score_row(
            "Weather Resilience",
            base.stability - 0.6 * wind - 0.3 * rain - _temp_penalty(temperature),
            70,
            50,
            70,
        ),
        moisture,
        _hold_row("Position Hold", _gps_hold_base(summary) + 0.04 * wind + 0.005 * rain, 0.8, 1.5),
        TestResult(
            label="Battery Impact",
            value=f"{impact:+d}%",
            trend=_trend(impact, 0, higher_is_better=False),
            status=_at_most(impact, 20, 40),
        ),
    ]


def _waypoint(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    wind = config.wind_speed
    precision = config.precision
    has_gps = summary.has_gps
    tolerance = 0.5 * (11 - precision)
    error = (1.0 if has_gps else 5.0) + 0.05 * wind + 0.002 * config.altitude
    overload = max(0.0, wind - base.max_handled_wind_kmh)
    completion = round_half_up(_clamp(100 - 3 * overload - (0 if has_gps else 40)))

    if has_gps:
        gps_row = TestResult("GPS Status", "Locked", Trend.UP, TestStatus.PASS)
    else:
        gps_row = TestResult("GPS Status", "No GPS", Trend.DOWN, TestStatus.FAIL)

    return [
        gps_row,
        _score_row(
            "Navigation Score",
            base.stability - 2 * precision - 0.3 * wind + (10 if has_gps else -20),
            75,
            50,
            70,
        ),
        TestResult(
            label="Waypoint Accuracy",
            value=f"±{error:.1f}m",
            trend=_trend(error, tolerance, higher_is_better=False),
            status=_at_most(error, tolerance, 2 * tolerance),
        ),
        TestResult(
            label="Route Completion",
            value=f"{completion}%",
            trend=_trend(completion, 100),
            status=_at_least(completion, 95, 70),
        ),
    ]


def _stability(summary: CapabilitySummary, config: TestConfig, base: BaseQuantities) -> list[TestResult]:
    ratio = summary.thrust_to_weight
    response = round_half_up(base.response_ms)
    if ratio >= 2:
        vibration = TestResult("Vibration Level", "Low", Trend.UP, TestStatus.PASS)
    elif ratio >= 1.2:
        vibration = TestResult("Vibration Level", "Medium", Trend.NEUTRAL, TestStatus.WARNING)
    else:
        vibration = TestResult("Vibration Level", "High", Trend.DOWN, TestStatus.FAIL)
    return [
        _score_row("Stability Score", base.stability, 80, 60, 70),
        _score_row("Power Efficiency", base.power, 75, 55, 60),
        TestResult(
            label="Response Time",
            value=f"{response}ms",
            trend=_trend(response, 40, higher_is_better=False),
            status=_at_most(response, 30, 45),
        ),
        vibration,
    ]


Evaluator = Callable[[CapabilitySummary, TestConfig, BaseQuantities], list[TestResult]]

EVALUATORS: dict[TestId, Evaluator] = {
    TestId.HOVER: _hover,
    TestId.ASCENT: _ascent,
    TestId.ROTATION: _rotation,
    TestId.WIND: _wind,
    TestId.SPEED: _speed,
    TestId.THERMAL: _thermal,
    TestId.WEATHER: _weather,
    TestId.WAYPOINT: _waypoint,
}


def empty_results() -> list[TestResult]:
    return [
        TestResult("Components", "None", Trend.DOWN, TestStatus.FAIL),
        TestResult("Thrust-to-Weight", "N/A", Trend.DOWN, TestStatus.FAIL),
        TestResult("Flight Time", "N/A", Trend.DOWN, TestStatus.FAIL),
        TestResult("Flight Readiness", "N/A", Trend.DOWN, TestStatus.FAIL),
    ]


def _check(label: str, present: bool, value: str) -> TestResult:
    if present:
        return TestResult(label, value, Trend.UP, TestStatus.PASS)
    return TestResult(label, "Missing", Trend.DOWN, TestStatus.FAIL)


def readiness_checklist(summary: CapabilitySummary) -> list[TestResult]:
    return [
        _check("Frame", summary.has_frame, "OK"),
        _check("Motors", summary.has_motors, f"{summary.motor_count}x"),
        _check("Propellers", summary.has_propellers, f"{summary.propeller_count}x"),
        _check("Battery", summary.has_battery, "OK"),
        _check("Flight Controller", summary.has_flight_controller, "OK"),
    ]


def resolve_test_id(test: TestId | str | None) -> TestId | None:
    try:
        return TestId(test)
    except ValueError:
        return None


def evaluate(
    test: TestId | str | None,
    summary: CapabilitySummary,
    config: TestConfig,
    component_count: int,
) -> list[TestResult]:
    if component_count == 0:
        return empty_results()
    if not summary.is_flight_ready:
        return readiness_checklist(summary)

    base = base_quantities(summary)
    test_id = resolve_test_id(test)
    if test_id is None:
        return _stability(summary, config, base)
    return EVALUATORS[test_id](summary, config, base)
