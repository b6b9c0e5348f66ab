import logging
import typing
from types import MappingProxyType

from ..constants import ResourceTypes
from ..exceptions import SchemaError, UnknownActionError, UnknownEventError, UnknownPropertyError
from ..td import ActionAffordance, EventAffordance, PropertyAffordance, ThingDescription
from .actions import WoTAction
from .events import WoTEvent
from .property import WoTProperty

if typing.TYPE_CHECKING:
    from .device import WoTDevice


Handle = typing.Union[WoTProperty, WoTAction, WoTEvent]



class CapabilityRegistry:
    """
    Maps the interaction affordances of a Thing Description to local handles of a device, 
    one mapping per interaction type. Names are only unique within their interaction type, 
    so lookups are made with the type and the name. Affordances which fail to parse are 
    logged and skipped. 
    """

    # interaction type -> (affordance class, handle class, unknown name error)
    handle_types = {
        ResourceTypes.PROPERTY: (PropertyAffordance, WoTProperty, UnknownPropertyError),
        ResourceTypes.ACTION: (ActionAffordance, WoTAction, UnknownActionError),
        ResourceTypes.EVENT: (EventAffordance, WoTEvent, UnknownEventError)
    }

    def __init__(self, owner: "WoTDevice", logger: typing.Optional[logging.Logger] = None) -> None:
        self.owner = owner
        self.logger = logger or logging.getLogger(__name__)
        self._handles = {what: dict() for what in self.handle_types} # type: typing.Dict[ResourceTypes, typing.Dict[str, Handle]]
        self.skipped = [] # type: typing.List[SchemaError]

    def populate(self, td: ThingDescription) -> typing.List[SchemaError]:
        """
        create the handles for every interaction affordance of the TD, properties first, then actions 
        and events. 

        Returns
        -------
        List[SchemaError]
            errors of the affordances which were skipped 
        """
        TD = td.asdict()
        skipped = []
        for what, (affordance_cls, handle_cls, _) in self.handle_types.items():
            for name in getattr(td, affordance_cls.td_key):
                try:
                    affordance = affordance_cls.from_TD(name, TD)
                except SchemaError as ex:
                    self.logger.warning(f"skipped {what.lower()} '{name}' of device {self.owner.id} - {str(ex)}")
                    skipped.append(ex)
                    continue
                self._handles[what][name] = handle_cls(self.owner, affordance)
        self.skipped.extend(skipped)
        self.logger.debug(f"registered {len(self._handles[ResourceTypes.PROPERTY])} properties, " + 
                        f"{len(self._handles[ResourceTypes.ACTION])} actions & " + 
                        f"{len(self._handles[ResourceTypes.EVENT])} events for device {self.owner.id}")
        return skipped

    def find(self, what: ResourceTypes, name: str) -> typing.Optional[Handle]:
        return self._handles[what].get(name, None)
    
    def lookup(self, what: ResourceTypes, name: str) -> Handle:
        """
        find the handle or raise the unknown name error of the interaction type - 
        ``UnknownPropertyError``, ``UnknownActionError`` or ``UnknownEventError``
        """
        handle = self._handles[what].get(name, None)
        if handle is None:
            raise self.handle_types[what][2](name, self.owner.id)
        return handle

    @property
    def properties(self) -> typing.Mapping[str, WoTProperty]:
        return MappingProxyType(self._handles[ResourceTypes.PROPERTY])
    
    @property
    def actions(self) -> typing.Mapping[str, WoTAction]:
        return MappingProxyType(self._handles[ResourceTypes.ACTION])
    
    @property
    def events(self) -> typing.Mapping[str, WoTEvent]:
        return MappingProxyType(self._handles[ResourceTypes.EVENT])



__all__ = [
    CapabilityRegistry.__name__
]
