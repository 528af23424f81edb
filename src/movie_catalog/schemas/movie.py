"""Pydantic schema for serialized movie records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MovieRecord(BaseModel):
    """A movie as stored and exchanged.

    References are flattened to identifiers: ``directorId`` and ``about`` hold a
    person ID, ``actors`` the list of actor person IDs in insertion order.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    movie_id: int = Field(description="Movie ID")
    title: str = Field(description="Movie title")
    release_date: str = Field(description="Release date (YYYY-MM-DD)")
    director_id: int | None = Field(default=None, description="Director person ID")
    actors: list[int] = Field(default_factory=list, description="Actor person IDs")
    movie_genre: int | None = Field(default=None, description="Genre code")
    about: int | None = Field(default=None, description="Subject person ID of a biography")
    episode_title: str | None = Field(default=None, description="TV series episode title")
    episode_no: int | None = Field(default=None, description="TV series episode number")

    def to_slots(self) -> dict[str, Any]:
        """Return the slot record used to create the entity."""
        return self.model_dump(exclude_none=True)

    def to_dict(self) -> dict[str, Any]:
        """Return the plain record form."""
        return self.model_dump(by_alias=True, exclude_none=True)
