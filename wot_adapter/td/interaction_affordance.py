import typing
import jsonschema
from enum import Enum
from typing import ClassVar, Optional
from pydantic import ConfigDict, PrivateAttr, ValidationError

from .base import Schema
from .data_schema import DataSchema
from ..config import global_config
from ..constants import JSON, ResourceTypes
from ..exceptions import SchemaError
from ..schema_validators import check_data_schema



class InteractionAffordance(Schema):
    """
    Implements schema information common to all interaction affordances. 
    
    [Specification Definitions](https://www.w3.org/TR/wot-thing-description11/#interactionaffordance) <br>
    """
    title: Optional[str] = None 
    titles: Optional[typing.Dict[str, str]] = None
    description: Optional[str] = None
    descriptions: Optional[typing.Dict[str, str]] = None 
    forms: Optional[typing.List[JSON]] = None
    uriVariables: Optional[typing.Dict[str, JSON]] = None

    model_config = ConfigDict(extra="allow")
    td_key: ClassVar[str] = ''
    
    _name: Optional[str] = PrivateAttr(default=None)
    _thing_id: Optional[str] = PrivateAttr(default=None)
        
    @property
    def what(self) -> Enum:
        """Whether it is a property, action or event"""
        raise NotImplementedError("Unknown interaction affordance - implement in subclass of InteractionAffordance")
    
    @property
    def name(self) -> str:
        """Name of the interaction affordance used as key in the TD"""
        if self._name is None:
            raise AttributeError("name is not set for this interaction affordance")
        return self._name
    
    @property
    def thing_id(self) -> Optional[str]:
        """ID of the Thing Description declaring the interaction affordance, if the TD has one"""
        return self._thing_id
    
    def retrieve_form(self, op: str, default: typing.Any = None) -> JSON:
        """
        retrieve form for a certain operation, return default if not found

        Parameters
        ----------
        op: str
            operation for which the form is to be retrieved
        default: typing.Any, optional
            default value to return if form is not found, by default None. 
            One can make use of a sensible default value for one's logic.  

        Returns
        -------
        Dict[str, typing.Any]
            JSON representation of the form      
        """
        for form in self.forms or []:
            ops = form.get('op', None)
            if ops == op or (isinstance(ops, list) and op in ops):
                return form
        return default
    
    def check_schemas(self) -> None:
        """
        check the data schemas contained in the affordance against the JSON schema meta schema, 
        raises ``SchemaError`` if invalid.
        """
        raise NotImplementedError("check_schemas must be implemented in subclass of InteractionAffordance")

    @classmethod 
    def from_TD(cls, name: str, TD: JSON) -> typing.Union["PropertyAffordance", "ActionAffordance", "EventAffordance"]:
        """
        populate the schema from the TD and return it as the container object
        
        Parameters
        ----------
        name: str
            name of the interaction affordance used as key in the TD
        TD: JSON
            Thing Description JSON dictionary

        Returns
        -------
        typing.Union[PropertyAffordance, ActionAffordance, EventAffordance]

        Raises
        ------
        SchemaError:
            if the affordance is not found or is malformed
        """
        what = cls.td_key[:-1]
        fragment = (TD.get(cls.td_key, None) or {}).get(name, None) 
        if not isinstance(fragment, dict):
            raise SchemaError(f"{what} affordance '{name}' must be a JSON object, given type {type(fragment)}", 
                            what=what, name=name)
        try:
            affordance = cls.model_validate(fragment)
        except ValidationError as ex:
            raise SchemaError(f"invalid {what} affordance '{name}' - {ex.errors()[0]['msg']}", 
                            what=what, name=name) from ex
        affordance._name = name
        affordance._thing_id = TD.get("id", None)
        if global_config.validate_schemas:
            affordance.check_schemas()
        return affordance

    def _check_schema(self, schema: JSON, label: str) -> None:
        try:
            check_data_schema(schema)
        except jsonschema.SchemaError as ex:
            raise SchemaError(f"invalid {label} schema for {self.what.lower()} '{self._name}' - {ex.message}", 
                            what=self.what.lower(), name=self._name) from ex

    def __hash__(self):
        return hash(f"{self.thing_id}{self.td_key}{self.name}")

    def __str__(self):
        return f"{self.__class__.__name__}({self._name} of {self.thing_id})"
    
    def __eq__(self, value):
        if not isinstance(value, self.__class__):
            return False
        return self.thing_id == value.thing_id and self._name == value._name
    

   
class PropertyAffordance(InteractionAffordance, DataSchema):
    """
    Implements property affordance schema, i.e. a data schema with interaction metadata.

    [Schema](https://www.w3.org/TR/wot-thing-description11/#propertyaffordance) <br>
    """
    observable: Optional[bool] = None

    td_key: ClassVar[str] = 'properties'
    non_value_keys: ClassVar = DataSchema.non_value_keys + ('forms', 'uriVariables', 'observable')

    @property
    def what(self) -> Enum:
        return ResourceTypes.PROPERTY
    
    @property
    def readable(self) -> bool:
        """write only properties have no value to read or observe"""
        return not self.writeOnly

    @property
    def writable(self) -> bool:
        return not self.readOnly
    
    def check_schemas(self) -> None:
        self._check_schema(self.value_schema(), 'value')

 
class ActionAffordance(InteractionAffordance):
    """
    creates action affordance schema from actions.

    [Schema](https://www.w3.org/TR/wot-thing-description11/#actionaffordance) <br>
    """
    input: Optional[JSON] = None
    output: Optional[JSON] = None
    safe: Optional[bool] = None
    idempotent: Optional[bool] = None 
    synchronous: Optional[bool] = None 

    td_key: ClassVar[str] = 'actions'

    @property 
    def what(self):
        return ResourceTypes.ACTION
    
    def check_schemas(self) -> None:
        if self.input is not None:
            self._check_schema(self.input, 'input')
        if self.output is not None:
            self._check_schema(self.output, 'output')
          
    
class EventAffordance(InteractionAffordance):
    """
    creates event affordance schema from events. The payload schema is the `data` member, 
    data schema keys written directly on the event are accepted as payload schema when `data` is absent. 

    [Schema](https://www.w3.org/TR/wot-thing-description11/#eventaffordance) <br>
    """
    subscription: Optional[JSON] = None
    data: Optional[JSON] = None
    dataResponse: Optional[JSON] = None
    cancellation: Optional[JSON] = None

    td_key: ClassVar[str] = 'events'

    @property 
    def what(self):
        return ResourceTypes.EVENT
    
    @property
    def payload_schema(self) -> Optional[JSON]:
        """schema of the data pushed with each event"""
        if self.data is not None:
            return self.data
        extra = {key: value for key, value in (self.model_extra or {}).items() if not key.startswith('@')}
        return extra or None 
    
    def check_schemas(self) -> None:
        if self.payload_schema is not None:
            self._check_schema(self.payload_schema, 'payload')
