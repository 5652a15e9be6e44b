import unittest

from droneforge.builds.storage import (
    DEFAULT_COLORS,
    DroneColors,
    deserialize_build,
    dumps_build,
    loads_build,
    serialize_build,
)
from droneforge.engine.build import place_component
from droneforge.engine.catalog import get_component
from droneforge.engine.models import Position


class BuildStorageTests(unittest.TestCase):
    def setUp(self):
        build = place_component((), get_component("frame-x"), instance_id="frame-1")
        self.build = place_component(
            build, get_component("motor-2212"), Position(0.5, 0.1, -0.5), instance_id="motor-1"
        )

    def test_payload_shape(self):
        payload = serialize_build(self.build)
        self.assertNotIn("colors", payload)
        self.assertEqual(payload["components"][1]["instance_id"], "motor-1")
        self.assertEqual(payload["components"][1]["category"], "Motors")
        self.assertEqual(payload["components"][1]["specs"]["thrust"], "850g")
        self.assertEqual(payload["components"][1]["x"], 0.5)

    def test_reload_restores_components_and_colors(self):
        colors = DroneColors(motors="#EF4444")
        components, restored = loads_build(dumps_build(self.build, colors))
        self.assertEqual(components, self.build)
        self.assertEqual(restored.motors, "#EF4444")
        self.assertEqual(restored.leds, DEFAULT_COLORS.leds)

    def test_missing_colors_use_defaults(self):
        _, colors = deserialize_build(serialize_build(self.build))
        self.assertEqual(colors, DEFAULT_COLORS)

    def test_malformed_payloads_fall_back(self):
        self.assertEqual(loads_build(None), ((), DEFAULT_COLORS))
        self.assertEqual(loads_build("{not json"), ((), DEFAULT_COLORS))
        self.assertEqual(deserialize_build(["frame-x"]), ((), DEFAULT_COLORS))
        components, _ = deserialize_build({"components": [{"id": "frame-x"}]})
        self.assertEqual(components, ())

    def test_invalid_palette_falls_back(self):
        payload = serialize_build(self.build)
        payload["colors"] = {"motors": "red"}
        components, colors = deserialize_build(payload)
        self.assertEqual(len(components), 2)
        self.assertEqual(colors, DEFAULT_COLORS)
