"""
Shared pydantic configuration for stored entities.

Fields are snake_case in Python and camelCase in documents and JSON bodies.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Year = Annotated[int, Field(ge=1900, le=2100)]


class EntityModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
