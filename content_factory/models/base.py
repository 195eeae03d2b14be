"""
Base model shared by every API schema and persisted record.

Python attributes are snake_case; the wire format (HTTP bodies, model
responses and stored JSON) is camelCase.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """JSON-compatible dict with camelCase keys"""
        return self.model_dump(mode="json", by_alias=True)
