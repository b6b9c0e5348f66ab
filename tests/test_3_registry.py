import logging
import unittest
from unittest.mock import MagicMock

from wot_adapter.constants import ResourceTypes
from wot_adapter.core import CapabilityRegistry, WoTAction, WoTEvent, WoTProperty
from wot_adapter.exceptions import (SchemaError, UnknownActionError, UnknownEventError, 
                                    UnknownInteractionError, UnknownPropertyError)
from wot_adapter.td import ThingDescription

try:
    from .utils import TestCase, TestRunner
    from .things import lamp_td
except ImportError:
    from utils import TestCase, TestRunner
    from things import lamp_td



logger = logging.getLogger('test-registry')
logger.setLevel(logging.CRITICAL)


class TestCapabilityRegistry(TestCase):

    def setUp(self):
        super().setUp()
        self.owner = MagicMock()
        self.owner.id = 'test-device'


    def test_1_populate(self):
        registry = CapabilityRegistry(self.owner, logger)
        skipped = registry.populate(ThingDescription.from_TD(lamp_td))
        self.assertEqual(skipped, [])
        self.assertEqual(set(registry.properties), {"on", "brightness", "firmware", "password"})
        self.assertEqual(set(registry.actions), {"fade", "toggle"})
        self.assertEqual(set(registry.events), {"overheating"})
        self.assertIsInstance(registry.properties["on"], WoTProperty)
        self.assertIsInstance(registry.actions["fade"], WoTAction)
        self.assertIsInstance(registry.events["overheating"], WoTEvent)
        self.assertIs(registry.properties["on"].device, self.owner)
        # mappings are read-only
        with self.assertRaises(TypeError):
            registry.properties["new"] = None


    def test_2_malformed_affordances_are_skipped(self):
        TD = {
            "properties": {
                "good": {"type": "number"},
                "bad-type": {"type": "decimal"},
                "not-an-object": 42
            },
            "actions": {
                "good": {"input": {"type": "number"}},
                "bad-input": {"input": "number"}
            },
            "events": {
                "good": {"data": {"type": "string"}},
                "bad-data": {"data": {"type": "text"}}
            }
        }
        registry = CapabilityRegistry(self.owner, logger)
        skipped = registry.populate(ThingDescription.from_TD(TD))
        self.assertEqual(list(registry.properties), ["good"])
        self.assertEqual(list(registry.actions), ["good"])
        self.assertEqual(list(registry.events), ["good"])
        self.assertEqual(len(skipped), 4)
        self.assertTrue(all(isinstance(error, SchemaError) for error in skipped))
        self.assertEqual(sorted(error.name for error in skipped),
                        ["bad-data", "bad-input", "bad-type", "not-an-object"])
        self.assertEqual(registry.skipped, skipped)


    def test_3_lookup(self):
        TD = {
            "properties": {"test": {"type": "number"}},
            "actions": {"test": {}},
            "events": {"other": {"type": "number"}}
        }
        registry = CapabilityRegistry(self.owner, logger)
        registry.populate(ThingDescription.from_TD(TD))
        # same name in different interaction types resolves to different handles
        self.assertIsInstance(registry.lookup(ResourceTypes.PROPERTY, "test"), WoTProperty)
        self.assertIsInstance(registry.lookup(ResourceTypes.ACTION, "test"), WoTAction)
        self.assertIsInstance(registry.find(ResourceTypes.EVENT, "other"), WoTEvent)
        self.assertIsNone(registry.find(ResourceTypes.EVENT, "test"))
        with self.assertRaises(UnknownPropertyError) as ex:
            registry.lookup(ResourceTypes.PROPERTY, "other")
        self.assertEqual(ex.exception.name, "other")
        self.assertEqual(ex.exception.device_id, "test-device")
        self.assertIn("property", str(ex.exception))
        self.assertRaises(UnknownActionError, registry.lookup, ResourceTypes.ACTION, "other")
        self.assertRaises(UnknownEventError, registry.lookup, ResourceTypes.EVENT, "test")
        self.assertRaises(UnknownInteractionError, registry.lookup, ResourceTypes.EVENT, "test")
        self.assertRaises(LookupError, registry.lookup, ResourceTypes.EVENT, "test")



if __name__ == '__main__':
    unittest.main(testRunner=TestRunner())
