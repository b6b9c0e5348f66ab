"""
MIT License

Copyright (c) 2018 CTIC Centro Tecnologico

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""
import asyncio
import typing

from ..constants import JSON, ResourceTypes
from ..td import ThingDescription



class ConsumedThingSubscription:
    
    __slots__ = ['_name', '_what', '_active', '_on_stop']

    # handle of an observed property or a subscribed event on the remote thing.
    # Dont add class doc otherwise __doc__ in slots will conflict with class variable

    def __init__(self, 
                name: str, 
                what: ResourceTypes, 
                on_stop: typing.Optional[typing.Callable] = None
            ) -> None:
        """
        Parameters
        ----------
        name: str
            name of the property or event 
        what: ResourceTypes
            PROPERTY for an observation, EVENT for an event subscription
        on_stop: Callable, optional
            function or coroutine function called once when the subscription is stopped, 
            transports use it to unsubscribe on the network level.
        """
        self._name = name
        self._what = what
        self._active = True
        self._on_stop = on_stop

    @property
    def name(self) -> str:
        """name of the property or event"""
        return self._name
    
    @property
    def what(self) -> ResourceTypes:
        return self._what
    
    @property
    def active(self) -> bool:
        """False once the subscription is stopped"""
        return self._active

    async def stop(self) -> None:
        """
        stop the subscription, i.e. unobserve the property or unsubscribe the event. 
        Stopping an already stopped subscription does nothing.
        """
        if not self._active:
            return
        self._active = False
        if self._on_stop is None:
            return
        result = self._on_stop()
        if asyncio.iscoroutine(result):
            await result

    def __repr__(self) -> str:
        return f"ConsumedThingSubscription({self._what.lower()} {self._name}, active={self._active})"
  

class ConsumedThing:
    """
    An entity that serves to interact with a remote Thing described by a Thing Description. 
    Protocol bindings subclass it and implement the operations; every operation is a coroutine 
    which returns once the remote thing resolved it or raises the transport error.
    """

    def __init__(self, 
                td: typing.Union[ThingDescription, JSON], 
                **kwargs
            ) -> None:
        """
        Parameters
        ----------
        td: ThingDescription | JSON
            Thing Description of the remote thing
        **kwargs:
            logger: logging.Logger
                logger instance
        """
        self.td = ThingDescription.from_TD(td)
        self.logger = kwargs.get('logger', None)

    @property
    def title(self) -> typing.Optional[str]:
        """title of the Thing"""
        return self.td.title

    def get_thing_description(self) -> JSON:
        """Returns the Thing Description of the Thing"""
        return self.td.asdict()

    async def read_property(self, name: str) -> typing.Any:
        """
        Reads the value of a Property on the remote Thing.

        Parameters
        ----------
        name: str
            name of the property

        Returns
        -------
        typing.Any
            property value
        """
        raise NotImplementedError("implement read_property per protocol")

    async def write_property(self, name: str, value: typing.Any) -> None:
        """
        Updates the value of a Property on the remote Thing.

        Parameters
        ----------
        name: str
            name of the property
        value: typing.Any
            value to write
        """
        raise NotImplementedError("implement write_property per protocol")

    async def invoke_action(self, name: str, input: typing.Any = None) -> typing.Any:
        """
        Invokes an Action on the remote Thing.

        Parameters
        ----------
        name: str
            name of the action
        input: typing.Any
            input of the action as described by the input schema of the action

        Returns
        -------
        typing.Any
            output of the action, None when the action has no output
        """
        raise NotImplementedError("implement invoke_action per protocol")

    async def observe_property(self, name: str, listener: typing.Callable[[typing.Any], None]) -> ConsumedThingSubscription:
        """
        Subscribes to property changes on the remote Thing. 

        Parameters
        ----------
        name: str
            name of the property
        listener: Callable
            called with the new value for every change pushed by the remote thing

        Returns
        -------
        ConsumedThingSubscription
            handle to stop observing the property
        """
        raise NotImplementedError("implement observe_property per protocol")

    async def subscribe_event(self, name: str, listener: typing.Callable[[typing.Any], None]) -> ConsumedThingSubscription:
        """
        Subscribes to an event on the remote Thing. 

        Parameters
        ----------
        name: str
            name of the event
        listener: Callable
            called with the payload of every event pushed by the remote thing

        Returns
        -------
        ConsumedThingSubscription
            handle to unsubscribe the event
        """
        raise NotImplementedError("implement subscribe_event per protocol")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.td.id or self.td.title})"
