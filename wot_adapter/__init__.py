__version__ = "0.1.0"

from .exceptions import *
from .td import ThingDescription
from .client import ConsumedThing, ConsumedThingSubscription
from .core import WoTAdapter, AddonManager, WoTDevice
