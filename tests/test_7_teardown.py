import asyncio
import logging
import unittest

from wot_adapter.constants import ResourceTypes, SubscriptionKinds
from wot_adapter.core import WoTAdapter, WoTDevice

try:
    from .utils import AsyncTestCase, TestRunner
    from .things import ScriptedConsumedThing, RecordingManager, lamp_td
except ImportError:
    from utils import AsyncTestCase, TestRunner
    from things import ScriptedConsumedThing, RecordingManager, lamp_td



td = {
    "properties": {
        "temperature": {"type": "number", "observable": True},
        "humidity": {"type": "number", "observable": True},
        "setpoint": {"type": "number"}
    },
    "events": {
        "alarm": {"data": {"type": "string"}},
        "heartbeat": {}
    }
}


class TestTeardown(AsyncTestCase):

    def setUp(self):
        super().setUp()
        self.manager = RecordingManager()
        self.adapter = WoTAdapter(self.manager, id='test-adapter', log_level=logging.CRITICAL)
        self.thing = ScriptedConsumedThing(td)


    async def test_1_destroy_cancels_every_subscription(self):
        device = await self.adapter.add_device('test', td, self.thing)
        self.assertEqual(len(device.subscriptions), 4)
        await device.destroy()
        self.assertEqual(device.subscriptions, [])
        self.assertTrue(device.destroyed)
        self.assertEqual(sorted(self.thing.stopped), sorted([
            (ResourceTypes.PROPERTY, 'temperature'),
            (ResourceTypes.PROPERTY, 'humidity'),
            (ResourceTypes.EVENT, 'alarm'),
            (ResourceTypes.EVENT, 'heartbeat')
        ]))
        self.assertTrue(all(not handle.active for handle in self.thing.handles.values()))
        self.assertTrue(all(not prop.observed for prop in device.properties.values()))


    async def test_2_destroy_twice(self):
        device = await self.adapter.add_device('test', td, self.thing)
        await device.destroy()
        await device.destroy()
        self.assertEqual(len(self.thing.stopped), 4)
        self.assertEqual(self.manager.removed, [device])


    async def test_3_no_notifications_after_destroy(self):
        device = await self.adapter.add_device('test', td, self.thing)
        self.thing.push_property('temperature', 20)
        await device.destroy()
        # a transport may still deliver notifications in flight
        self.thing.push_property('temperature', 21)
        self.thing.push_event('alarm', 'too hot')
        self.assertEqual(self.manager.property_changes, [('test', 'temperature', 20)])
        self.assertEqual(self.manager.events, [])
        self.assertEqual(device.find_property('temperature').value, 20)
        # reads go to the remote thing again
        self.thing.read_property.return_value = 22
        self.assertEqual(await device.get_property('temperature'), 22)


    async def test_4_failing_cancellation(self):
        self.thing.failing_stops.add('humidity')
        device = await self.adapter.add_device('test', td, self.thing)
        await device.destroy()
        self.assertEqual(device.subscriptions, [])
        self.assertEqual(len(self.thing.stopped), 3)
        self.assertNotIn((ResourceTypes.PROPERTY, 'humidity'), self.thing.stopped)
        self.assertIsNone(self.adapter.get_device('test'))


    async def test_5_hanging_cancellation_is_bounded(self):
        self.thing.hanging_stops.add('alarm')
        device = await self.adapter.add_device('test', td, self.thing, cancel_timeout=0.05)
        await asyncio.wait_for(device.destroy(), 5)
        self.assertEqual(device.subscriptions, [])
        self.assertEqual(len(self.thing.stopped), 3)
        self.thing.push_event('alarm', 'late')
        self.assertEqual(self.manager.events, [])


    async def test_6_subscription_completing_after_destroy(self):
        opened = asyncio.Event()
        proceed = asyncio.Event()
        observe = self.thing._observe

        async def slow_observe(name, listener):
            if name == 'temperature':
                opened.set()
                await proceed.wait()
            return observe(name, listener)
        
        self.thing.observe_property.side_effect = slow_observe
        device = WoTDevice(self.adapter, 'test', td, self.thing, log_level=logging.CRITICAL)
        connecting = asyncio.create_task(device.connect())
        await opened.wait()
        await device.destroy()
        proceed.set()
        await connecting
        # the late subscription is cancelled at once and never held
        self.assertEqual(device.subscriptions, [])
        self.assertEqual(self.thing.stopped, [(ResourceTypes.PROPERTY, 'temperature')])
        self.assertFalse(device.find_property('temperature').observed)
        # nothing else is opened once the device is destroyed
        self.assertEqual([call.args[0] for call in self.thing.observe_property.await_args_list], ['temperature'])
        self.thing.subscribe_event.assert_not_awaited()
        self.assertFalse(device.find_property('humidity').observed)
        self.thing.push_property('temperature', 30)
        self.assertEqual(self.manager.property_changes, [])


    async def test_7_connect_after_destroy(self):
        device = WoTDevice(self.adapter, 'test', td, self.thing, log_level=logging.CRITICAL)
        await device.destroy()
        await device.connect()
        self.thing.observe_property.assert_not_awaited()
        self.thing.subscribe_event.assert_not_awaited()


    async def test_8_devices_are_torn_down_independently(self):
        other_thing = ScriptedConsumedThing(lamp_td)
        device = await self.adapter.add_device('test', td, self.thing)
        lamp = await self.adapter.add_device('lamp', lamp_td, other_thing)
        await device.destroy()
        self.assertEqual(len(lamp.subscriptions), 2)
        other_thing.push_property('on', True)
        self.assertEqual(self.manager.property_changes, [('lamp', 'on', True)])
        await lamp.destroy()
        self.assertEqual(len(other_thing.stopped), 2)


    async def test_9_duplicate_subscription_is_released(self):
        device = await self.adapter.add_device('test', td, self.thing)
        prop = device.find_property('temperature')
        opened = await device._open_subscription(SubscriptionKinds.PROPERTY_OBSERVE, 'temperature', 
                                            self.thing.observe_property, prop.set_cached_value_and_notify)
        self.assertFalse(opened)
        # the second observation is stopped, the first one is kept
        self.assertEqual(self.thing.stopped, [(ResourceTypes.PROPERTY, 'temperature')])
        self.assertEqual(len(device.subscriptions), 4)
        self.assertTrue(prop.observed)
        await device.destroy()
        self.assertEqual(len(self.thing.stopped), 5)



if __name__ == '__main__':
    unittest.main(testRunner=TestRunner())
