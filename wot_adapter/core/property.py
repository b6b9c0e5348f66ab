import typing

from ..config import global_config
from ..constants import JSON
from ..exceptions import RemoteReadError, RemoteWriteError
from ..schema_validators import JSONSchemaValidator
from ..td import PropertyAffordance

if typing.TYPE_CHECKING:
    from .device import WoTDevice



class WoTProperty:
    """
    Local handle of a property of the remote thing. The cached value is only updated by values 
    pushed by the remote thing, writes are forwarded and take effect once the remote thing pushes 
    the new value. Reads return the cached value when the property is observed and a value was 
    received, otherwise the value is read from the remote thing.
    """

    __slots__ = ['device', 'affordance', '_value', '_has_value', '_observed', '_validator']

    def __init__(self, device: "WoTDevice", affordance: PropertyAffordance) -> None:
        """
        Parameters
        ----------
        device: WoTDevice
            owning device 
        affordance: PropertyAffordance
            property affordance from the Thing Description
        """
        self.device = device
        self.affordance = affordance
        self._value = None
        self._has_value = False
        self._observed = False
        self._validator = None

    @property
    def name(self) -> str:
        return self.affordance.name

    @property
    def readable(self) -> bool:
        """False for write only properties"""
        return self.affordance.readable

    @property
    def writable(self) -> bool:
        """False for read only properties"""
        return self.affordance.writable

    @property
    def observable(self) -> bool:
        return bool(self.affordance.observable)

    @property
    def observed(self) -> bool:
        """True while a remote observation pushes values into the cache"""
        return self._observed
    
    @observed.setter
    def observed(self, value: bool) -> None:
        self._observed = bool(value)

    @property
    def value(self) -> typing.Any:
        """last value pushed by the remote thing, None if none received yet"""
        return self._value

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def validator(self) -> JSONSchemaValidator:
        if self._validator is None:
            self._validator = JSONSchemaValidator(self.affordance.value_schema())
        return self._validator

    def set_cached_value(self, value: typing.Any) -> None:
        self._value = value
        self._has_value = True

    def set_cached_value_and_notify(self, value: typing.Any) -> None:
        """update the cache with a value pushed by the remote thing and notify the device"""
        self.set_cached_value(value)
        self.device.notify_property_changed(self)

    async def get_value(self) -> typing.Any:
        """
        cached value if observed and received, otherwise the value read from the remote thing.

        Raises
        ------
        RemoteReadError:
            if reading from the remote thing failed
        """
        if self._observed and self._has_value:
            return self._value
        try:
            return await self.device.consumed_thing.read_property(self.name)
        except Exception as ex:
            raise RemoteReadError(self.name, ex) from ex

    async def set_value(self, value: typing.Any) -> None:
        """
        forward a write to the remote thing, the cache is not updated.

        Raises
        ------
        jsonschema.ValidationError:
            if ``global_config.validate_schema_on_client`` is set and the value does not match the schema
        RemoteWriteError:
            if writing to the remote thing failed
        """
        if global_config.validate_schema_on_client:
            self.validator.validate(value)
        try:
            await self.device.consumed_thing.write_property(self.name, value)
        except Exception as ex:
            raise RemoteWriteError(self.name, ex) from ex
        
    def as_dict(self) -> JSON:
        """property description for the host, i.e. the affordance without forms"""
        description = self.affordance.asdict()
        description.pop('forms', None)
        description['name'] = self.name
        return description
    
    def __repr__(self) -> str:
        return f"WoTProperty({self.device.id}.{self.name})"



__all__ = [
    WoTProperty.__name__
]
