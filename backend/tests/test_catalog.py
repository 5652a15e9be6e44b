import unittest

from droneforge.engine.catalog import CATEGORIES, COMPONENTS, get_component, list_components
from droneforge.engine.models import ComponentCategory, TestId
from droneforge.engine.test_library import TIERS, TestTier, get_test, list_tests


class CatalogTests(unittest.TestCase):
    def test_component_ids_are_unique(self):
        ids = [component.id for component in COMPONENTS]
        self.assertEqual(len(ids), len(set(ids)))

    def test_every_category_is_stocked(self):
        for category in CATEGORIES:
            self.assertTrue(list_components(category), category)

    def test_filter_by_category_name(self):
        motors = list_components("Motors")
        self.assertTrue(all(item.category == ComponentCategory.MOTORS for item in motors))
        self.assertTrue(all(item.specs.thrust for item in motors))

    def test_lookup(self):
        battery = get_component("battery-4s")
        self.assertEqual(battery.name, "LiPo 4S 1500mAh")
        self.assertEqual(battery.specs.power, "14.8V")
        with self.assertRaises(KeyError):
            get_component("warp-drive")


class TestLibraryTests(unittest.TestCase):
    def test_library_covers_every_test(self):
        self.assertEqual({test.id for test in list_tests()}, set(TestId))

    def test_tiers(self):
        self.assertEqual(TIERS, [TestTier.BASIC, TestTier.ADVANCED, TestTier.EXTREME])
        extreme = [test.id for test in list_tests("Extreme")]
        self.assertEqual(extreme, [TestId.WEATHER, TestId.WAYPOINT])

    def test_speed_target_slider_scales_precision(self):
        slider = get_test("speed").sliders[0]
        self.assertEqual(slider.field, "precision")
        self.assertEqual(slider.scale, 10.0)

    def test_sliders_name_config_fields(self):
        fields = {"wind_speed", "temperature", "altitude", "humidity", "precision"}
        for test in list_tests():
            for slider in test.sliders:
                self.assertIn(slider.field, fields)

    def test_unknown_test(self):
        with self.assertRaises(KeyError):
            get_test("tornado")
