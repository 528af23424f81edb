"""Pydantic schema for serialized person records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PersonRecord(BaseModel):
    """A person as stored and exchanged (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    person_id: int = Field(description="Person ID")
    name: str = Field(description="Person's name")
    role: int | None = Field(
        default=None, description="Role inferred at save time; recomputed on load"
    )

    def to_slots(self) -> dict[str, Any]:
        """Return the slot record used to create the entity."""
        return self.model_dump(exclude_none=True)

    def to_dict(self) -> dict[str, Any]:
        """Return the plain record form."""
        return self.model_dump(by_alias=True, exclude_none=True)
