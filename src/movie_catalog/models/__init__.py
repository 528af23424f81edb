"""SQLAlchemy ORM models."""

from movie_catalog.models.movie import MovieActorRow, MovieRow
from movie_catalog.models.person import PersonRow

__all__ = [
    "MovieActorRow",
    "MovieRow",
    "PersonRow",
]
