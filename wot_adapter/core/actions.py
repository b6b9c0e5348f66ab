import datetime
import typing

from ..config import global_config
from ..constants import JSON, ActionStatus
from ..exceptions import InvokeError
from ..schema_validators import JSONSchemaValidator
from ..td import ActionAffordance
from ..utils import format_exception_as_json

if typing.TYPE_CHECKING:
    from .device import WoTDevice



def _timestamp() -> str:
    return datetime.datetime.now().strftime("%Y-%m-%dT%H:%M:%S.%f")


class WoTAction:
    """
    Local handle of an action of the remote thing. Stateless, invocations are tracked 
    with ``ActionRequest``.
    """

    __slots__ = ['device', 'affordance', '_validator']

    def __init__(self, device: "WoTDevice", affordance: ActionAffordance) -> None:
        self.device = device
        self.affordance = affordance
        self._validator = None

    @property
    def name(self) -> str:
        return self.affordance.name

    @property
    def input_schema(self) -> typing.Optional[JSON]:
        return self.affordance.input
    
    @property
    def output_schema(self) -> typing.Optional[JSON]:
        return self.affordance.output

    async def invoke(self, input: typing.Any = None) -> typing.Any:
        """
        invoke the action on the remote thing and return its output. 
        
        Raises
        ------
        jsonschema.ValidationError:
            if ``global_config.validate_schema_on_client`` is set and the input does not match the input schema
        InvokeError:
            if the remote thing failed the invocation
        """
        if global_config.validate_schema_on_client and self.input_schema is not None:
            if self._validator is None:
                self._validator = JSONSchemaValidator(self.input_schema)
            self._validator.validate(input)
        try:
            return await self.device.consumed_thing.invoke_action(self.name, input)
        except Exception as ex:
            raise InvokeError(self.name, ex) from ex

    def as_dict(self) -> JSON:
        description = self.affordance.asdict()
        description.pop('forms', None)
        description['name'] = self.name
        return description

    def __repr__(self) -> str:
        return f"WoTAction({self.device.id}.{self.name})"
    


class ActionRequest:
    """
    Record of one local action request, correlated with the remote invocation by its id. 
    Status moves from created to pending and then to completed or failed. 
    """

    __slots__ = ['device', 'id', 'name', 'input', 'status', 'output', 'error', 
                'time_requested', 'time_completed']

    def __init__(self, device: "WoTDevice", id: str, name: str, input: typing.Any = None) -> None:
        self.device = device
        self.id = id 
        self.name = name
        self.input = input 
        self.status = ActionStatus.CREATED
        self.output = None 
        self.error = None # type: typing.Optional[typing.Dict[str, typing.Any]]
        self.time_requested = _timestamp()
        self.time_completed = None # type: typing.Optional[str]

    def start(self) -> None:
        self.status = ActionStatus.PENDING

    def finish(self, output: typing.Any = None) -> None:
        self.status = ActionStatus.COMPLETED
        self.output = output
        self.time_completed = _timestamp()

    def fail(self, exc: BaseException) -> None:
        self.status = ActionStatus.FAILED
        self.error = format_exception_as_json(exc)
        self.time_completed = _timestamp()

    @property
    def done(self) -> bool:
        return self.status in (ActionStatus.COMPLETED, ActionStatus.FAILED)

    def as_dict(self) -> JSON:
        description = {
            'id': self.id,
            'device': self.device.id,
            'name': self.name,
            'status': str(self.status),
            'timeRequested': self.time_requested
        }
        if self.input is not None:
            description['input'] = self.input
        if self.output is not None:
            description['output'] = self.output
        if self.error is not None:
            description['error'] = self.error
        if self.time_completed is not None:
            description['timeCompleted'] = self.time_completed
        return description

    def __repr__(self) -> str:
        return f"ActionRequest({self.id}, {self.device.id}.{self.name}, {self.status})"



__all__ = [
    WoTAction.__name__,
    ActionRequest.__name__
]
