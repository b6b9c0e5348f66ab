from .validators import BaseSchemaValidator, JSONSchemaValidator, check_data_schema
