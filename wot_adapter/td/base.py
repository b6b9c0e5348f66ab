from typing import Optional
from pydantic import BaseModel

from ..constants import JSON


class Schema(BaseModel):
    """
    Base model for all WoT schema; implements JSON and dictionary dumps which only carry 
    the fields present in the Thing Description.
    """

    def json(self, indent: Optional[int] = None) -> str:
        """Return the JSON representation of the schema"""
        return self.model_dump_json(by_alias=True, exclude_unset=True, indent=indent)

    def asdict(self) -> JSON:
        """Return the schema as a JSON compatible dictionary"""
        return self.model_dump(mode='json', by_alias=True, exclude_unset=True)
