import typing

from ..client import ConsumedThing
from ..config import global_config
from ..constants import JSON, ResourceTypes, SubscriptionKinds
from ..exceptions import SubscribeError
from ..td import ThingDescription
from ..utils import get_default_logger
from .actions import ActionRequest, WoTAction
from .events import Event, WoTEvent
from .property import WoTProperty
from .registry import CapabilityRegistry
from .subscriptions import Subscription, SubscriptionLedger

if typing.TYPE_CHECKING:
    from .adapter import WoTAdapter



class WoTDevice:
    """
    Local device mirroring a remote thing consumed through its Thing Description. 
    Properties, actions and events of the TD become local handles; observable properties and 
    events are kept in sync with remote subscriptions, which are all released by ``destroy()``. 

    Construction only builds the local handles, ``connect()`` opens the remote subscriptions. 
    Use ``WoTDevice.create()`` to do both. 
    """

    def __init__(self, 
                adapter: "WoTAdapter", 
                id: str, 
                td: typing.Union[ThingDescription, JSON], 
                consumed_thing: ConsumedThing, 
                **kwargs
            ) -> None:
        """
        Parameters
        ----------
        adapter: WoTAdapter
            owning adapter, receives the notifications and is detached from on teardown
        id: str
            id of the device, unique within the adapter
        td: ThingDescription | JSON
            Thing Description of the remote thing
        consumed_thing: ConsumedThing
            handle to interact with the remote thing
        **kwargs:
            logger: logging.Logger
                logger instance
            log_level: int
                log level corresponding to logging.Logger when internally created
            cancel_timeout: float
                seconds to wait for the cancellation of each subscription on teardown
        """
        self.adapter = adapter
        self.id = id
        self.td = ThingDescription.from_TD(td)
        self.consumed_thing = consumed_thing
        self.logger = kwargs.get('logger', None) or get_default_logger(f"{getattr(adapter, 'id', 'adapter')}|{id}", 
                                                    kwargs.get('log_level', global_config.LOG_LEVEL))
        self.title = self.td.title or id 
        self.description = self.td.description or ''
        self._registry = CapabilityRegistry(self, self.logger)
        self._registry.populate(self.td)
        self._ledger = SubscriptionLedger(self.id, self.logger, kwargs.get('cancel_timeout', None))
        self._action_requests = dict() # type: typing.Dict[str, ActionRequest]
        self._connected = False
        self._destroyed = False
        self.logger.info(f"initialised device {self.id} with {len(self.properties)} properties, " + 
                        f"{len(self.actions)} actions & {len(self.events)} events")

    @classmethod
    async def create(cls, 
                adapter: "WoTAdapter", 
                id: str, 
                td: typing.Union[ThingDescription, JSON], 
                consumed_thing: ConsumedThing, 
                **kwargs
            ) -> "WoTDevice":
        """create the device and open its remote subscriptions, same arguments as ``__init__()``"""
        device = cls(adapter, id, td, consumed_thing, **kwargs)
        await device.connect()
        return device

    @property
    def properties(self) -> typing.Mapping[str, WoTProperty]:
        return self._registry.properties
    
    @property
    def actions(self) -> typing.Mapping[str, WoTAction]:
        return self._registry.actions
    
    @property
    def events(self) -> typing.Mapping[str, WoTEvent]:
        return self._registry.events

    @property
    def subscriptions(self) -> typing.List[Subscription]:
        """remote subscriptions currently held by the device"""
        return list(self._ledger)
    
    @property
    def connected(self) -> bool:
        return self._connected
    
    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def find_property(self, name: str) -> typing.Optional[WoTProperty]:
        return self._registry.find(ResourceTypes.PROPERTY, name)
    
    def find_action(self, name: str) -> typing.Optional[WoTAction]:
        return self._registry.find(ResourceTypes.ACTION, name)

    def find_event(self, name: str) -> typing.Optional[WoTEvent]:
        return self._registry.find(ResourceTypes.EVENT, name)

    async def connect(self) -> None:
        """
        observe every observable property which is not write only, then subscribe every event. 
        A failed subscription is logged and only degrades that interaction - the property is read 
        on demand, the event is not relayed. Runs only once and stops when the device is destroyed meanwhile. 
        """
        if self._connected or self._destroyed:
            return 
        self._connected = True 
        for prop in list(self.properties.values()):
            if self._destroyed:
                return
            if not prop.readable or not prop.observable:
                continue
            try:
                if await self._open_subscription(SubscriptionKinds.PROPERTY_OBSERVE, prop.name, 
                                                    self.consumed_thing.observe_property, prop.set_cached_value_and_notify):
                    prop.observed = True
            except SubscribeError as ex:
                self.logger.warning(f"{str(ex)}, property '{prop.name}' will be read on demand")
        for event in list(self.events.values()):
            if self._destroyed:
                return
            try:
                await self._open_subscription(SubscriptionKinds.EVENT_SUBSCRIBE, event.name, 
                                            self.consumed_thing.subscribe_event, event.relay)
            except SubscribeError as ex:
                self.logger.warning(f"{str(ex)}, event '{event.name}' will not be relayed")
        self.logger.debug(f"device {self.id} holds {len(self._ledger)} subscription(s)")

    async def _open_subscription(self, 
                kind: SubscriptionKinds, 
                name: str, 
                opener: typing.Callable[[str, typing.Callable], typing.Awaitable], 
                handler: typing.Callable[[typing.Any], None]
            ) -> bool:
        """
        open a remote subscription and register it in the ledger before returning. 

        Returns
        -------
        bool
            False if the device was destroyed while subscribing or the interaction is already subscribed, 
            the new subscription is then released at once. 

        Raises
        ------
        SubscribeError:
            if the remote thing failed the subscription
        """
        subscription = Subscription(kind, name, handler, logger=self.logger)
        try:
            handle = await opener(name, subscription.deliver)
        except Exception as ex:
            subscription.deactivate()
            raise SubscribeError(name, ex) from ex
        subscription.attach(handle)
        try:
            registered = self._ledger.register(subscription)
        except ValueError as ex:
            self.logger.warning(f"{str(ex)}, releasing the new one")
            registered = False
        if not registered:
            await self._ledger.release(subscription)
            return False
        return True

    async def get_property(self, name: str) -> typing.Any:
        """
        value of a property - the cached value if the property is observed and a value was 
        received, otherwise the value read from the remote thing.

        Raises
        ------
        UnknownPropertyError:
            if the device has no property of that name
        RemoteReadError:
            if reading from the remote thing failed
        """
        prop = self._registry.lookup(ResourceTypes.PROPERTY, name) # type: WoTProperty
        return await prop.get_value()

    async def set_property(self, name: str, value: typing.Any) -> None:
        """
        write a property of the remote thing. The cached value changes only when the remote 
        thing pushes the new value.

        Raises
        ------
        UnknownPropertyError:
            if the device has no property of that name
        RemoteWriteError:
            if writing to the remote thing failed
        """
        prop = self._registry.lookup(ResourceTypes.PROPERTY, name) # type: WoTProperty
        await prop.set_value(value)

    async def request_action(self, request_id: str, name: str, input: typing.Any = None) -> ActionRequest:
        """
        invoke an action on the remote thing and record the request under its id. 

        Parameters
        ----------
        request_id: str
            opaque id correlating the local request with the remote invocation
        name: str
            name of the action
        input: Any
            input of the action

        Returns
        -------
        ActionRequest
            the completed request carrying the output

        Raises
        ------
        UnknownActionError:
            if the device has no action of that name
        InvokeError:
            if the remote thing failed the invocation, the request is recorded as failed
        """
        action = self._registry.lookup(ResourceTypes.ACTION, name) # type: WoTAction
        request = ActionRequest(self, request_id, name, input)
        self._action_requests[request_id] = request
        request.start()
        self.action_notify(request)
        try:
            output = await action.invoke(input)
        except Exception as ex:
            request.fail(ex)
            self.action_notify(request)
            raise
        request.finish(output)
        self.action_notify(request)
        return request
    
    def get_action_request(self, request_id: str) -> typing.Optional[ActionRequest]:
        return self._action_requests.get(request_id, None)
    
    def remove_action_request(self, request_id: str) -> bool:
        """forget the record of an action request, the remote invocation is not affected"""
        return self._action_requests.pop(request_id, None) is not None

    def notify_property_changed(self, property: WoTProperty) -> None:
        self.adapter.get_manager().property_changed(property)

    def event_notify(self, event: Event) -> None:
        self.adapter.get_manager().event_notify(event)

    def action_notify(self, request: ActionRequest) -> None:
        self.adapter.get_manager().action_status(request)

    async def destroy(self) -> None:
        """
        release every remote subscription, then detach from the owning adapter. Calling again is a no-op.
        """
        if self._destroyed:
            return
        self._destroyed = True
        count = len(self._ledger)
        released = await self._ledger.release_all()
        for prop in self.properties.values():
            prop.observed = False
        self.logger.info(f"destroyed device {self.id}, cancelled {released} of {count} subscription(s)")
        self.adapter.handle_device_removed(self)

    def as_dict(self) -> JSON:
        """device description for the host device-management layer"""
        description = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            '@type': self.td.capabilities,
            'properties': {name: prop.as_dict() for name, prop in self.properties.items()},
            'actions': {name: action.as_dict() for name, action in self.actions.items()},
            'events': {name: event.as_dict() for name, event in self.events.items()}
        }
        if self.td.context is not None:
            description['@context'] = self.td.context
        return description

    def __repr__(self) -> str:
        return f"WoTDevice({self.id})"



__all__ = [
    WoTDevice.__name__
]
