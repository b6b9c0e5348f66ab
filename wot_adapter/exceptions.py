import typing 


class SchemaError(ValueError):
    """
    raised when a Thing Description or one of its interaction affordances is malformed
    """
    def __init__(self, message : str, what : typing.Optional[str] = None, name : typing.Optional[str] = None) -> None:
        super().__init__(message)
        self.what = what 
        self.name = name 


class UnknownInteractionError(LookupError):
    """
    raised when a property, action or event name is not declared by the device
    """
    what = "interaction"

    def __init__(self, name : str, device_id : typing.Optional[str] = None) -> None:
        self.name = name 
        self.device_id = device_id
        if device_id:
            super().__init__(f"no {self.what} named '{name}' in device {device_id}")
        else:
            super().__init__(f"no {self.what} named '{name}'")


class UnknownPropertyError(UnknownInteractionError):
    """
    raised when reading or writing a property not declared by the device
    """
    what = "property"


class UnknownActionError(UnknownInteractionError):
    """
    raised when requesting an action not declared by the device
    """
    what = "action"


class UnknownEventError(UnknownInteractionError):
    """
    raised when looking up an event not declared by the device
    """
    what = "event"


class RemoteInteractionError(Exception):
    """
    raised when the consumed thing failed an operation, the transport error is chained as cause
    """
    operation = "operate on"

    def __init__(self, name : str, reason : typing.Optional[BaseException] = None) -> None:
        self.name = name 
        message = f"could not {self.operation} '{name}' on remote thing"
        if reason is not None:
            message = f"{message} - {type(reason).__name__}: {str(reason)}"
        super().__init__(message)


class RemoteReadError(RemoteInteractionError):
    """
    raised when reading a property from the remote thing failed
    """
    operation = "read property"


class RemoteWriteError(RemoteInteractionError):
    """
    raised when writing a property to the remote thing failed
    """
    operation = "write property"


class InvokeError(RemoteInteractionError):
    """
    raised when invoking an action on the remote thing failed
    """
    operation = "invoke action"


class SubscribeError(RemoteInteractionError):
    """
    raised when observing a property or subscribing an event on the remote thing failed
    """
    operation = "subscribe to"



__all__ = [
    'SchemaError',
    'UnknownInteractionError',
    'UnknownPropertyError',
    'UnknownActionError',
    'UnknownEventError',
    'RemoteInteractionError',
    'RemoteReadError',
    'RemoteWriteError',
    'InvokeError',
    'SubscribeError'
]
