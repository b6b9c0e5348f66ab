import typing
import msgspec
from pydantic import ConfigDict, Field, ValidationError, field_validator

from .base import Schema
from ..constants import JSON
from ..exceptions import SchemaError



class ThingDescription(Schema):
    """
    Thing Description of W3 Web of Things standard as consumed by the adapter. 
    Refer standard - https://www.w3.org/TR/wot-thing-description11
    Refer schema - https://www.w3.org/TR/wot-thing-description11/#thing

    Interaction affordances are kept as raw JSON so that each affordance is parsed 
    separately, a malformed affordance only drops itself and not the whole thing. 
    """
    context: typing.Optional[typing.Any] = Field(default=None, alias='@context')
    type: typing.Optional[typing.Union[str, typing.List[str]]] = Field(default=None, alias='@type')
    id: typing.Optional[str] = None 
    title: typing.Optional[str] = None 
    titles: typing.Optional[typing.Dict[str, str]] = None
    description: typing.Optional[str] = None 
    descriptions: typing.Optional[typing.Dict[str, str]] = None
    properties: typing.Dict[str, typing.Any] = Field(default_factory=dict)
    actions: typing.Dict[str, typing.Any] = Field(default_factory=dict)
    events: typing.Dict[str, typing.Any] = Field(default_factory=dict)
    links: typing.Optional[typing.List[JSON]] = None 
    forms: typing.Optional[typing.List[JSON]] = None
    security: typing.Optional[typing.Union[str, typing.List[str]]] = None
    securityDefinitions: typing.Optional[JSON] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator('properties', 'actions', 'events', mode='before')
    @classmethod
    def empty_if_null(cls, value: typing.Any) -> typing.Any:
        return {} if value is None else value

    @property
    def capabilities(self) -> typing.List[str]:
        """semantic types (@type) of the thing as a list"""
        if self.type is None:
            return []
        if isinstance(self.type, str):
            return [self.type]
        return list(self.type)

    @classmethod
    def from_TD(cls, TD: typing.Union[JSON, "ThingDescription"]) -> "ThingDescription":
        """
        validate the root of a Thing Description given as JSON dictionary

        Raises
        ------
        SchemaError:
            if the TD is not a JSON object or its properties, actions or events are not JSON objects
        """
        if isinstance(TD, ThingDescription):
            return TD
        if not isinstance(TD, dict):
            raise SchemaError(f"Thing Description must be a JSON object, given type {type(TD)}")
        try:
            return cls.model_validate(TD)
        except ValidationError as ex:
            error = ex.errors()[0]
            location = '.'.join(str(loc) for loc in error['loc'])
            raise SchemaError(f"invalid Thing Description at '{location}' - {error['msg']}") from ex
        
    @classmethod
    def from_json(cls, text: typing.Union[str, bytes]) -> "ThingDescription":
        """decode a JSON Thing Description and validate it"""
        try:
            TD = msgspec.json.decode(text)
        except msgspec.DecodeError as ex:
            raise SchemaError(f"Thing Description is not valid JSON - {str(ex)}") from ex
        return cls.from_TD(TD)
