"""Catalog context owning the registries and their association index."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from movie_catalog.catalog.associations import AssociationIndex
from movie_catalog.catalog.movie import Movie, MovieRegistry
from movie_catalog.catalog.person import Person, PersonRegistry
from movie_catalog.storage import RecordKind

if TYPE_CHECKING:
    from movie_catalog.storage import CatalogStore

logger = logging.getLogger(__name__)


class Catalog:
    """People, movies and the references between them.

    A new catalog is empty; ``clear`` returns it to that state. Nothing is
    shared between catalog instances.
    """

    def __init__(self) -> None:
        self.associations = AssociationIndex()
        self.people = PersonRegistry(self)
        self.movies = MovieRegistry(self)

    def get_person(self, person_id: Any) -> Person:
        """Look up a person, raising NotFoundError if missing."""
        return self.people.get(person_id)

    def get_movie(self, movie_id: Any) -> Movie:
        """Look up a movie, raising NotFoundError if missing."""
        return self.movies.get(movie_id)

    def clear(self) -> None:
        """Remove every movie and person."""
        self.movies.clear()
        self.people.clear()
        self.associations.clear()

    async def load(self, store: CatalogStore) -> None:
        """Populate the registries from the store.

        People are loaded before movies so that movie references resolve.
        Records that fail validation are logged and skipped.
        """
        people = await store.load_all(RecordKind.PEOPLE)
        loaded = sum(1 for record in people.values() if self.people.load_record(record).ok)
        logger.info("%d of %d person records loaded.", loaded, len(people))

        movies = await store.load_all(RecordKind.MOVIES)
        loaded = sum(1 for record in movies.values() if self.movies.load_record(record).ok)
        logger.info("%d of %d movie records loaded.", loaded, len(movies))

    async def save(self, store: CatalogStore) -> bool:
        """Write both registries to the store."""
        saved_people = await store.save_all(RecordKind.PEOPLE, self.people.to_records())
        saved_movies = await store.save_all(RecordKind.MOVIES, self.movies.to_records())
        return saved_people and saved_movies
