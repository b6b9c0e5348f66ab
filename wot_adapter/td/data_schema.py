from typing import Any, ClassVar, Optional
from pydantic import ConfigDict, field_validator

from .base import Schema
from ..constants import JSON, JSON_TYPES



class DataSchema(Schema):
    """
    implements data schema
    
    [Schema](https://www.w3.org/TR/wot-thing-description11/#sec-data-schema-vocabulary-definition)
    [Supported Fields](https://www.w3.org/TR/wot-thing-description11/#data-schema-fields)
    """
    title: Optional[str] = None
    titles: Optional[dict[str, str]] = None
    description: Optional[str] = None
    descriptions: Optional[dict[str, str]] = None
    const: Optional[Any] = None
    default: Optional[Any] = None 
    readOnly: Optional[bool] = None
    writeOnly: Optional[bool] = None # write only properties have no remote value to observe
    format: Optional[str] = None
    unit: Optional[str] = None
    type: Optional[str] = None
    enum: Optional[list[Any]] = None
    oneOf: Optional[list[JSON]] = None
    
    model_config = ConfigDict(extra="allow")

    # keys of the TD vocabulary which are not a part of the JSON schema of the value
    non_value_keys: ClassVar = ('titles', 'descriptions', 'unit', '@type')

    @field_validator('type')
    @classmethod
    def check_type(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in JSON_TYPES:
            raise ValueError(f"data schema type must be one of {', '.join(JSON_TYPES)}, given type {value}")
        return value

    def value_schema(self) -> JSON:
        """JSON schema to validate a value of this data schema"""
        return {key: value for key, value in self.asdict().items() if key not in self.non_value_keys}
