import unittest
from dataclasses import replace

from droneforge.engine.build import place_component
from droneforge.engine.catalog import get_component
from droneforge.engine.models import DEFAULT_TEST_CONFIG, ComponentCategory, TestConfig, TestStatus
from droneforge.engine.reducer import (
    EMPTY_BUILD_MESSAGE,
    FAILED_MESSAGE,
    INCOMPLETE_BUILD_MESSAGE,
    READY_MESSAGE,
)
from droneforge.engine.report import compute_inputs_hash, run_flight_test


def _build(*component_ids):
    build = ()
    for index, component_id in enumerate(component_ids):
        build = place_component(build, get_component(component_id), instance_id=f"{component_id}-{index}")
    return build


READY_BUILD = _build("frame-x", "motor-2212", "prop-5x4", "battery-4s", "fc-f4")


class FlightTestReportTests(unittest.TestCase):
    def test_empty_build_report(self):
        report = run_flight_test((), "hover", DEFAULT_TEST_CONFIG)
        self.assertEqual(report.status.fail_count, 4)
        self.assertEqual(report.recommendation, EMPTY_BUILD_MESSAGE)

    def test_incomplete_build_report(self):
        report = run_flight_test(_build("frame-x"), "hover", DEFAULT_TEST_CONFIG)
        self.assertEqual(report.status.pass_count, 1)
        self.assertEqual(report.recommendation, INCOMPLETE_BUILD_MESSAGE)

    def test_failing_speed_report(self):
        report = run_flight_test(READY_BUILD, "speed", DEFAULT_TEST_CONFIG)
        self.assertEqual(report.test, "speed")
        self.assertEqual(report.status.overall, TestStatus.FAIL)
        self.assertEqual(report.status.warning_count, 3)
        self.assertEqual(report.recommendation, FAILED_MESSAGE)

    def test_passing_thermal_report(self):
        report = run_flight_test(READY_BUILD, "thermal", DEFAULT_TEST_CONFIG)
        self.assertEqual(report.status.overall, TestStatus.PASS)
        self.assertEqual(report.recommendation, READY_MESSAGE)
        self.assertTrue(report.capabilities.is_flight_ready)

    def test_inputs_hash_tracks_inputs(self):
        first = run_flight_test(READY_BUILD, "thermal", DEFAULT_TEST_CONFIG)
        again = run_flight_test(READY_BUILD, "thermal", DEFAULT_TEST_CONFIG)
        hotter = run_flight_test(READY_BUILD, "thermal", TestConfig(temperature=45.0))
        self.assertEqual(first.inputs_hash, again.inputs_hash)
        self.assertNotEqual(first.inputs_hash, hotter.inputs_hash)

    def test_hash_ignores_key_order(self):
        self.assertEqual(
            compute_inputs_hash({"a": 1, "b": [1, 2]}),
            compute_inputs_hash({"b": [1, 2], "a": 1}),
        )

    def test_hash_tracks_component_name(self):
        battery = get_component("battery-4s")
        renamed = replace(battery, name="LiPo 4S 9000mAh")
        small = (*READY_BUILD[:3], *place_component((), battery, instance_id="battery-4s-3"), READY_BUILD[4])
        large = (*READY_BUILD[:3], *place_component((), renamed, instance_id="battery-4s-3"), READY_BUILD[4])
        first = run_flight_test(small, "thermal", DEFAULT_TEST_CONFIG)
        second = run_flight_test(large, "thermal", DEFAULT_TEST_CONFIG)
        self.assertEqual(first.capabilities.battery_capacity_mah, 1500)
        self.assertEqual(second.capabilities.battery_capacity_mah, 9000)
        self.assertNotEqual(first.results, second.results)
        self.assertNotEqual(first.inputs_hash, second.inputs_hash)

    def test_hash_tracks_component_category(self):
        camera = get_component("camera-4k")
        moved = replace(camera, category=ComponentCategory.ACCESSORIES)
        first = run_flight_test(place_component(READY_BUILD, camera, instance_id="cam"), "hover", DEFAULT_TEST_CONFIG)
        second = run_flight_test(place_component(READY_BUILD, moved, instance_id="cam"), "hover", DEFAULT_TEST_CONFIG)
        self.assertNotEqual(first.inputs_hash, second.inputs_hash)
