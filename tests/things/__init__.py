from .consumed_thing import ScriptedConsumedThing
from .manager import RecordingManager
from .tds import *
