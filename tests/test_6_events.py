import logging
import unittest

from wot_adapter.constants import SubscriptionKinds
from wot_adapter.core import Event, WoTAdapter, WoTDevice

try:
    from .utils import AsyncTestCase, TestRunner
    from .things import ScriptedConsumedThing, RecordingManager
except ImportError:
    from utils import AsyncTestCase, TestRunner
    from things import ScriptedConsumedThing, RecordingManager



class TestEvents(AsyncTestCase):

    def setUp(self):
        super().setUp()
        self.manager = RecordingManager()
        self.adapter = WoTAdapter(self.manager, id='test-adapter', log_level=logging.CRITICAL)


    async def test_1_subscribe(self):
        thing = ScriptedConsumedThing()
        device = await WoTDevice.create(self.adapter, 'test', {"events": {"test": {}}}, thing, 
                                        log_level=logging.CRITICAL)
        thing.subscribe_event.assert_awaited_once()
        self.assertEqual(thing.subscribe_event.await_args.args[0], 'test')
        thing.observe_property.assert_not_awaited()
        self.assertEqual([subscription.key for subscription in device.subscriptions], 
                        [(SubscriptionKinds.EVENT_SUBSCRIBE, 'test')])
        await device.destroy()


    async def test_2_relay(self):
        thing = ScriptedConsumedThing()
        device = await WoTDevice.create(self.adapter, 'test', {"events": {"test": {}}}, thing, 
                                        log_level=logging.CRITICAL)
        thing.push_event('test', 1)
        self.assertEqual(len(self.manager.events), 1)
        self.assertEqual(self.manager.events[0], Event(device, 'test', 1))
        self.assertEqual(self.manager.events[0].device_id, 'test')
        # equal payloads are relayed each time
        thing.push_event('test', 1)
        thing.push_event('test', None)
        self.assertEqual([event.data for event in self.manager.events], [1, 1, None])
        description = self.manager.events[0].as_dict()
        self.assertEqual(description['device'], 'test')
        self.assertEqual(description['data'], 1)
        self.assertIn('timestamp', description)
        await device.destroy()


    async def test_3_event_equality(self):
        thing = ScriptedConsumedThing()
        device = WoTDevice(self.adapter, 'test', {"events": {"test": {}}}, thing, log_level=logging.CRITICAL)
        other = WoTDevice(self.adapter, 'other', {"events": {"test": {}}}, thing, log_level=logging.CRITICAL)
        self.assertEqual(Event(device, 'test', 1), Event(device, 'test', 1))
        self.assertNotEqual(Event(device, 'test', 1), Event(device, 'test', 2))
        self.assertNotEqual(Event(device, 'test', 1), Event(other, 'test', 1))
        self.assertNotEqual(Event(device, 'test', 1), 1)


    async def test_4_failed_subscription_is_isolated(self):
        td = {
            "properties": {"value": {"type": "number", "observable": True}},
            "actions": {"reset": {}},
            "events": {"broken": {}, "working": {"data": {"type": "string"}}}
        }
        thing = ScriptedConsumedThing(td)
        subscribe = thing._subscribe
        def subscribe_or_fail(name, listener):
            if name == 'broken':
                raise ConnectionError("event not available")
            return subscribe(name, listener)
        thing.subscribe_event.side_effect = subscribe_or_fail
        device = await WoTDevice.create(self.adapter, 'test', td, thing, log_level=logging.CRITICAL)
        self.assertEqual(thing.subscribe_event.await_count, 2)
        self.assertEqual(sorted(subscription.name for subscription in device.subscriptions), 
                        ['value', 'working'])
        # the event descriptor is still exposed
        self.assertIsNotNone(device.find_event('broken'))
        thing.push_event('working', 'hot')
        thing.push_property('value', 3)
        await device.request_action('1', 'reset')
        self.assertEqual(self.manager.events, [Event(device, 'working', 'hot')])
        self.assertEqual(device.find_property('value').value, 3)
        thing.invoke_action.assert_awaited_once_with('reset', None)
        await device.destroy()


    async def test_5_handler_errors_stay_local(self):
        thing = ScriptedConsumedThing()
        device = await WoTDevice.create(self.adapter, 'test', {"events": {"test": {}}}, thing, 
                                        log_level=logging.CRITICAL)
        self.manager.event_notify = lambda event: 1 / 0
        # the transport listener never sees the error
        thing.push_event('test', 1)
        await device.destroy()


    async def test_6_payload_schema(self):
        td = {"events": {
            "described": {"data": {"type": "string"}}, 
            "loose": {"type": "integer", "minimum": 0},
            "bare": {}
        }}
        device = WoTDevice(self.adapter, 'test', td, ScriptedConsumedThing(td), log_level=logging.CRITICAL)
        self.assertEqual(device.find_event('described').payload_schema, {"type": "string"})
        self.assertEqual(device.find_event('loose').payload_schema, {"type": "integer", "minimum": 0})
        self.assertIsNone(device.find_event('bare').payload_schema)



if __name__ == '__main__':
    unittest.main(testRunner=TestRunner())
