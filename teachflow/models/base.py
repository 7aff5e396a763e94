from typing import Any, Dict

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base for stored entities: snake_case in Python, camelCase in Mongo and JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        validate_default = True

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
