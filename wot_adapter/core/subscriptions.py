import asyncio
import logging
import typing

from ..client import ConsumedThingSubscription
from ..config import global_config
from ..constants import SubscriptionKinds



class Subscription:
    """
    A remote subscription opened by a device - an observed property or a subscribed event. 
    The consumed thing is given ``deliver()`` as listener, which forwards each notification 
    to the handler until the subscription is cancelled. 
    """

    __slots__ = ['kind', 'name', 'handler', 'handle', '_cancelled', '_logger']

    def __init__(self, 
                kind: SubscriptionKinds, 
                name: str, 
                handler: typing.Callable[[typing.Any], None], 
                logger: typing.Optional[logging.Logger] = None
            ) -> None:
        """
        Parameters
        ----------
        kind: SubscriptionKinds
            property-observe or event-subscribe
        name: str
            name of the property or event
        handler: Callable
            called with every value or payload pushed by the remote thing
        logger: logging.Logger, optional
            logger to report errors raised by the handler
        """
        self.kind = kind
        self.name = name
        self.handler = handler
        self.handle = None # type: typing.Optional[ConsumedThingSubscription]
        self._cancelled = False
        self._logger = logger or logging.getLogger(__name__)

    @property
    def key(self) -> typing.Tuple[SubscriptionKinds, str]:
        """one subscription per kind and interaction name"""
        return (self.kind, self.name)

    @property
    def active(self) -> bool:
        return not self._cancelled

    def attach(self, handle: ConsumedThingSubscription) -> None:
        """attach the cancellation handle returned by the consumed thing"""
        if self.handle is not None:
            raise AttributeError(f"handle already attached to {self}, cannot reattach.")
        self.handle = handle

    def deliver(self, value: typing.Any) -> None:
        """
        listener handed to the consumed thing. Notifications after cancellation are dropped, errors 
        raised by the handler are logged and not propagated to the transport.
        """
        if self._cancelled:
            self._logger.debug(f"dropped notification of cancelled subscription {self}")
            return
        try:
            self.handler(value)
        except Exception as ex:
            self._logger.error(f"handler of {self} failed - {type(ex).__name__}: {str(ex)}")

    def deactivate(self) -> None:
        """stop delivering notifications without stopping the remote subscription"""
        self._cancelled = True

    async def cancel(self, timeout: typing.Optional[float] = None) -> None:
        """
        stop delivering notifications and stop the remote subscription.

        Parameters
        ----------
        timeout: float, optional
            seconds to wait for the remote thing, raises TimeoutError when expired
        """
        self.deactivate()
        if self.handle is None:
            return
        await asyncio.wait_for(self.handle.stop(), timeout)

    def __repr__(self) -> str:
        return f"Subscription({self.kind} {self.name})"



class SubscriptionLedger:
    """
    Holds every remote subscription opened by a device so that all of them are released together 
    when the device is destroyed. Subscriptions are only added with ``register()`` and only removed 
    with ``release_all()``, which is terminal.
    """

    def __init__(self, 
                owner_id: str, 
                logger: typing.Optional[logging.Logger] = None, 
                cancel_timeout: typing.Optional[float] = None
            ) -> None:
        """
        Parameters
        ----------
        owner_id: str
            id of the owning device, used in logs
        logger: logging.Logger, optional
            logger instance
        cancel_timeout: float, optional
            seconds to wait for each cancellation, default from ``global_config.CANCEL_TIMEOUT``
        """
        self.owner_id = owner_id
        self.logger = logger or logging.getLogger(__name__)
        self.cancel_timeout = cancel_timeout if cancel_timeout is not None else global_config.CANCEL_TIMEOUT
        self._subscriptions = dict() # type: typing.Dict[typing.Tuple[SubscriptionKinds, str], Subscription]
        self._released = False 

    @property
    def released(self) -> bool:
        """True once ``release_all()`` was called, no further subscriptions are accepted"""
        return self._released

    def get(self, kind: SubscriptionKinds, name: str) -> typing.Optional[Subscription]:
        return self._subscriptions.get((kind, name), None)

    def register(self, subscription: Subscription) -> bool:
        """
        add a subscription to the ledger. 

        Returns
        -------
        bool
            False if the ledger is already released, the caller must then release the subscription
            itself with ``release()``.
        
        Raises
        ------
        ValueError:
            if a subscription of the same kind is already held for the interaction
        """
        if self._released:
            return False
        if subscription.key in self._subscriptions:
            raise ValueError(f"{subscription.kind} subscription for '{subscription.name}' already held " + 
                            f"by device {self.owner_id}")
        self._subscriptions[subscription.key] = subscription
        self.logger.debug(f"registered {subscription}")
        return True

    async def release(self, subscription: Subscription) -> bool:
        """
        cancel a single subscription, best-effort. Failures and timeouts are logged and swallowed.

        Returns
        -------
        bool
            True if the remote thing acknowledged the cancellation
        """
        try:
            await subscription.cancel(timeout=self.cancel_timeout)
        except Exception as ex:
            self.logger.warning(f"could not cancel {subscription} of device {self.owner_id} - " + 
                                f"{type(ex).__name__}: {str(ex)}")
            return False
        self.logger.debug(f"cancelled {subscription}")
        return True

    async def release_all(self) -> int:
        """
        cancel every held subscription and clear the ledger. A failure cancelling one subscription 
        does not prevent cancelling the rest. Calling again is a no-op.

        Returns
        -------
        int
            number of subscriptions whose cancellation succeeded
        """
        subscriptions = list(self._subscriptions.values())
        self._subscriptions.clear()
        self._released = True
        if not subscriptions:
            return 0
        results = await asyncio.gather(*[self.release(subscription) for subscription in subscriptions])
        return sum(results)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __iter__(self) -> typing.Iterator[Subscription]:
        return iter(list(self._subscriptions.values()))

    def __contains__(self, key: typing.Tuple[SubscriptionKinds, str]) -> bool:
        return key in self._subscriptions



__all__ = [
    Subscription.__name__,
    SubscriptionLedger.__name__
]
