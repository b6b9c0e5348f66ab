from .abstractions import ConsumedThing, ConsumedThingSubscription
