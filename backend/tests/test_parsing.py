import unittest

from droneforge.engine.parsing import (
    parse_capacity_mah,
    parse_leading_int,
    parse_voltage,
    round_half_up,
)


class ParsingTests(unittest.TestCase):
    def test_leading_int_reads_prefix(self):
        self.assertEqual(parse_leading_int("45g"), 45)
        self.assertEqual(parse_leading_int("850g"), 850)
        self.assertEqual(parse_leading_int(" 12 g"), 12)

    def test_leading_int_defaults_to_zero(self):
        self.assertEqual(parse_leading_int(None), 0)
        self.assertEqual(parse_leading_int(""), 0)
        self.assertEqual(parse_leading_int("heavy"), 0)

    def test_capacity_from_battery_name(self):
        self.assertEqual(parse_capacity_mah("LiPo 6S 2200mAh"), 2200)
        self.assertEqual(parse_capacity_mah("LiPo 4S"), 0)
        self.assertEqual(parse_capacity_mah(None), 0)

    def test_voltage_from_power_spec(self):
        self.assertAlmostEqual(parse_voltage("22.2V"), 22.2)
        self.assertAlmostEqual(parse_voltage("5V"), 5.0)
        self.assertEqual(parse_voltage("n/a"), 0.0)
        self.assertEqual(parse_voltage(None), 0.0)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(3.5), 4)
        self.assertEqual(round_half_up(2.49), 2)
        self.assertEqual(round_half_up(-0.5), 0)
