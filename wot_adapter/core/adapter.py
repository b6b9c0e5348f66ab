import asyncio
import typing
from types import MappingProxyType

from ..client import ConsumedThing
from ..config import global_config
from ..constants import JSON
from ..td import ThingDescription
from ..utils import get_default_logger
from .actions import ActionRequest
from .device import WoTDevice
from .events import Event
from .property import WoTProperty



class AddonManager:
    """
    Device-management layer of the host gateway, which stores and exposes the local devices. 
    Serves as a type definition, the host implements the notifications. 
    """

    def handle_device_added(self, device: WoTDevice) -> None:
        """a device was created and connected by an adapter"""
        raise NotImplementedError("implement handle_device_added in the host")
    
    def handle_device_removed(self, device: WoTDevice) -> None:
        """a device was destroyed and detached from its adapter"""
        raise NotImplementedError("implement handle_device_removed in the host")

    def property_changed(self, property: WoTProperty) -> None:
        """the remote thing pushed a new value, available as ``property.value``"""
        raise NotImplementedError("implement property_changed in the host")
    
    def event_notify(self, event: Event) -> None:
        """the remote thing emitted an event"""
        raise NotImplementedError("implement event_notify in the host")
    
    def action_status(self, request: ActionRequest) -> None:
        """an action request changed its status"""
        raise NotImplementedError("implement action_status in the host")



class WoTAdapter:
    """
    Owns the devices mirroring remote things and relays their notifications to the addon manager.

    Parameters
    ----------
    manager: AddonManager
        device-management layer of the host
    id: str
        id of the adapter, prefixes the logger names of its devices
    **kwargs:
        logger: logging.Logger
            logger instance
        log_level: int
            log level corresponding to logging.Logger when internally created
    """

    def __init__(self, manager: AddonManager, id: str = 'wot-adapter', **kwargs) -> None:
        self.manager = manager
        self.id = id 
        self.log_level = kwargs.get('log_level', global_config.LOG_LEVEL)
        self.logger = kwargs.get('logger', None) or get_default_logger(id, self.log_level)
        self._devices = dict() # type: typing.Dict[str, WoTDevice]
        self._device_locks = dict() # type: typing.Dict[str, asyncio.Lock]

    def get_manager(self) -> AddonManager:
        return self.manager

    @property
    def devices(self) -> typing.Mapping[str, WoTDevice]:
        return MappingProxyType(self._devices)
    
    def get_device(self, id: str) -> typing.Optional[WoTDevice]:
        return self._devices.get(id, None)

    async def add_device(self, 
                device_id: str, 
                td: typing.Union[ThingDescription, JSON], 
                consumed_thing: ConsumedThing, 
                **kwargs
            ) -> WoTDevice:
        """
        mirror a consumed thing as a local device. A device with the same id is destroyed first, concurrent 
        adds of the same id run one after the other. The new device is connected and announced to the manager 
        before it is stored; it is destroyed again if the manager raises. 

        Parameters
        ----------
        device_id: str
            id of the device
        td: ThingDescription | JSON
            Thing Description of the remote thing
        consumed_thing: ConsumedThing
            handle to interact with the remote thing
        **kwargs:
            passed to ``WoTDevice``

        Raises
        ------
        SchemaError:
            if the TD itself is malformed, malformed affordances are only skipped
        Exception:
            whatever ``AddonManager.handle_device_added`` raised
        """
        kwargs.setdefault('log_level', self.log_level)
        # one add or remove at a time per id, a concurrent add waits and then replaces
        async with self._device_lock(device_id):
            existing = self._devices.get(device_id, None)
            if existing is not None:
                self.logger.info(f"replacing device {device_id}")
                await existing.destroy()
            device = await WoTDevice.create(self, device_id, td, consumed_thing, **kwargs)
            try:
                self.manager.handle_device_added(device)
            except Exception as ex:
                self.logger.error(f"manager refused device {device_id} - {type(ex).__name__}: {str(ex)}")
                await device.destroy()
                raise
            self._devices[device_id] = device
        self.logger.info(f"added device {device_id}")
        return device

    def _device_lock(self, device_id: str) -> asyncio.Lock:
        lock = self._device_locks.get(device_id, None)
        if lock is None:
            lock = self._device_locks[device_id] = asyncio.Lock()
        return lock
    
    def handle_device_removed(self, device: WoTDevice) -> None:
        """detach a destroyed device, called by ``WoTDevice.destroy()``"""
        if self._devices.get(device.id, None) is not device:
            return
        del self._devices[device.id]
        self.manager.handle_device_removed(device)
        self.logger.info(f"removed device {device.id}")

    async def remove_device(self, device_id: str) -> bool:
        """
        destroy a device, returns False if there is no device with that id
        """
        async with self._device_lock(device_id):
            device = self._devices.get(device_id, None)
            if device is None:
                return False
            await device.destroy()
        return True
    
    async def unload(self) -> None:
        """destroy every device of the adapter"""
        for device in list(self._devices.values()):
            await device.destroy()
        self.logger.info(f"unloaded adapter {self.id}")

    def __repr__(self) -> str:
        return f"WoTAdapter({self.id})"



__all__ = [
    AddonManager.__name__,
    WoTAdapter.__name__
]
