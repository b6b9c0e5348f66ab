import typing
from enum import StrEnum


# types
JSON = typing.Dict[str, typing.Any]

# JSON types allowed for the "type" key of a data schema
JSON_TYPES = ('string', 'number', 'integer', 'boolean', 'object', 'array', 'null')


class ResourceTypes(StrEnum):
    "Interaction affordance types declared in a Thing Description"

    PROPERTY = "PROPERTY"
    ACTION = "ACTION"
    EVENT = "EVENT"


class Operations(StrEnum):
    "operation types of a consumed thing, as used in the op member of TD forms"

    readproperty = "readproperty"
    writeproperty = "writeproperty"
    observeproperty = "observeproperty"
    unobserveproperty = "unobserveproperty"
    invokeaction = "invokeaction"
    subscribeevent = "subscribeevent"
    unsubscribeevent = "unsubscribeevent"


class SubscriptionKinds(StrEnum):
    "kinds of remote subscriptions held by a device"

    PROPERTY_OBSERVE = "property-observe"
    EVENT_SUBSCRIBE = "event-subscribe"


class ActionStatus(StrEnum):
    "lifecycle of a local action request"

    CREATED = "created"
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


__all__ = [
    'JSON',
    'JSON_TYPES',
    ResourceTypes.__name__,
    Operations.__name__,
    SubscriptionKinds.__name__,
    ActionStatus.__name__
]
