# Order of import is reflected in this file to avoid circular imports
from .subscriptions import *
from .property import *
from .actions import *
from .events import *
from .registry import *
from .device import *
from .adapter import *
