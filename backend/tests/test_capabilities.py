import math
import unittest

from droneforge.engine.build import place_component
from droneforge.engine.capabilities import aggregate
from droneforge.engine.catalog import get_component
from droneforge.engine.models import Component, ComponentCategory, ComponentSpecs


def _build(*component_ids):
    build = ()
    for index, component_id in enumerate(component_ids):
        build = place_component(build, get_component(component_id), instance_id=f"{component_id}-{index}")
    return build


class CapabilityTests(unittest.TestCase):
    def test_empty_build(self):
        summary = aggregate(())
        self.assertEqual(summary.total_weight, 0)
        self.assertEqual(summary.thrust_to_weight, 0.0)
        self.assertFalse(math.isnan(summary.thrust_to_weight))
        self.assertFalse(summary.is_flight_ready)

    def test_battery_capacity_and_voltage(self):
        summary = aggregate(_build("battery-6s"))
        self.assertEqual(summary.battery_capacity_mah, 2200)
        self.assertAlmostEqual(summary.battery_voltage, 22.2)
        self.assertTrue(summary.has_battery)

    def test_first_battery_wins(self):
        summary = aggregate(_build("battery-4s", "battery-6s"))
        self.assertEqual(summary.battery_capacity_mah, 1500)
        self.assertAlmostEqual(summary.battery_voltage, 14.8)
        self.assertEqual(summary.total_weight, 165 + 280)

    def test_power_board_is_not_a_battery(self):
        summary = aggregate(_build("pdb"))
        self.assertFalse(summary.has_battery)
        self.assertEqual(summary.battery_capacity_mah, 0)

    def test_complete_quad(self):
        summary = aggregate(
            _build(
                "frame-x",
                "motor-2212", "motor-2212", "motor-2212", "motor-2212",
                "prop-5x4", "prop-5x4", "prop-5x4", "prop-5x4",
                "battery-4s",
                "fc-f4",
                "gps",
            )
        )
        self.assertEqual(summary.motor_count, 4)
        self.assertEqual(summary.propeller_count, 4)
        self.assertEqual(summary.total_thrust, 3400)
        self.assertEqual(summary.total_weight, 120 + 4 * 45 + 4 * 8 + 165 + 8 + 15)
        self.assertAlmostEqual(summary.thrust_to_weight, 3400 / 520)
        self.assertTrue(summary.has_gps)
        self.assertTrue(summary.is_flight_ready)

    def test_missing_propellers_blocks_readiness(self):
        summary = aggregate(_build("frame-x", "motor-2212", "battery-4s", "fc-f4"))
        self.assertFalse(summary.has_propellers)
        self.assertFalse(summary.is_flight_ready)

    def test_unparsable_weight_counts_as_zero(self):
        odd = Component(
            id="mystery",
            name="Mystery Part",
            category=ComponentCategory.ACCESSORIES,
            specs=ComponentSpecs(weight="unknown"),
        )
        build = place_component(_build("frame-x"), odd, instance_id="mystery-1")
        self.assertEqual(aggregate(build).total_weight, 120)
