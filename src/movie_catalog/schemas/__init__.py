"""Pydantic schemas for serialized records."""

from movie_catalog.schemas.movie import MovieRecord
from movie_catalog.schemas.person import PersonRecord

__all__ = [
    "MovieRecord",
    "PersonRecord",
]
