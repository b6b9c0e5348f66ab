import jsonschema

from ..constants import JSON



def check_data_schema(schema: JSON) -> None:
    """
    check a data schema against the JSON schema (draft 7) meta schema. 
    Raises ``jsonschema.SchemaError`` when the schema is invalid.
    """
    jsonschema.Draft7Validator.check_schema(schema)


class BaseSchemaValidator: # type definition
    """
    Base class for all schema validators. 
    Serves as a type definition. 
    """
    def __init__(self, schema: JSON) -> None:
        self.schema = schema

    def validate(self, data) -> None:
        """
        validate the data against the schema. 
        """
        raise NotImplementedError("validate method must be implemented by subclass")
    

class JSONSchemaValidator(BaseSchemaValidator):
    """
    JSON schema validator according to standard python JSON schema.
    Used to validate property values and action inputs against the Thing Description 
    before they are sent to the remote thing. 
    """
    
    def __init__(self, schema: JSON) -> None:
        check_data_schema(schema)
        super().__init__(schema)
        self.validator = jsonschema.Draft7Validator(schema)

    def validate(self, data) -> None:
        """validates and raises ``jsonschema.ValidationError`` directly to the caller"""
        self.validator.validate(data)

    def json(self) -> JSON:
        """allows JSON (de-)serializable of the instance itself"""
        return self.schema

    def __getstate__(self):
        return self.schema
    
    def __setstate__(self, schema):
        self.__init__(schema)
