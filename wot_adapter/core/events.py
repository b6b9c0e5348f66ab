import datetime
import typing

from ..constants import JSON
from ..td import EventAffordance

if typing.TYPE_CHECKING:
    from .device import WoTDevice



class WoTEvent:
    """
    Local descriptor of an event of the remote thing, relays every payload pushed by the 
    remote thing as a local ``Event`` of the owning device.
    """

    __slots__ = ['device', 'affordance']

    def __init__(self, device: "WoTDevice", affordance: EventAffordance) -> None:
        self.device = device
        self.affordance = affordance

    @property
    def name(self) -> str:
        return self.affordance.name
    
    @property
    def payload_schema(self) -> typing.Optional[JSON]:
        return self.affordance.payload_schema

    def relay(self, data: typing.Any) -> None:
        """emit exactly one local event for a payload pushed by the remote thing"""
        self.device.event_notify(Event(self.device, self.name, data))

    def as_dict(self) -> JSON:
        description = self.affordance.asdict()
        description.pop('forms', None)
        description['name'] = self.name
        return description

    def __repr__(self) -> str:
        return f"WoTEvent({self.device.id}.{self.name})"
    


class Event:
    """
    An event emitted by a device, tagged with the device, the event name and the payload
    """

    __slots__ = ['device', 'name', 'data', 'timestamp']

    def __init__(self, device: "WoTDevice", name: str, data: typing.Any = None) -> None:
        self.device = device
        self.name = name 
        self.data = data 
        self.timestamp = datetime.datetime.now().strftime("%Y-%m-%dT%H:%M:%S.%f")

    @property
    def device_id(self) -> str:
        return self.device.id

    def as_dict(self) -> JSON:
        description = {
            'device': self.device.id,
            'name': self.name,
            'timestamp': self.timestamp
        }
        if self.data is not None:
            description['data'] = self.data
        return description

    def __eq__(self, other) -> bool:
        if not isinstance(other, Event):
            return False
        return self.device is other.device and self.name == other.name and self.data == other.data
    
    def __hash__(self) -> int:
        return hash((self.device.id, self.name))

    def __repr__(self) -> str:
        return f"Event({self.device.id}.{self.name}, data={self.data!r})"



__all__ = [
    WoTEvent.__name__,
    Event.__name__
]
