"""Persistence of catalog records in a SQL database."""

import logging
from collections.abc import Mapping
from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from movie_catalog.database import session_scope
from movie_catalog.models.movie import MovieActorRow, MovieRow
from movie_catalog.models.person import PersonRow
from movie_catalog.schemas.movie import MovieRecord
from movie_catalog.schemas.person import PersonRecord

logger = logging.getLogger(__name__)


class RecordKind(StrEnum):
    """Kinds of records kept by the store."""

    PEOPLE = "people"
    MOVIES = "movies"


class StorageError(Exception):
    """Raised when records cannot be read from the database."""


class CatalogStore:
    """Load and save catalog records, one kind at a time.

    Records are plain dictionaries in the serialized form produced by
    ``PersonRecord.to_dict`` and ``MovieRecord.to_dict``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def load_all(self, kind: RecordKind) -> dict[int, dict[str, Any]]:
        """Return all stored records of a kind keyed by their ID.

        Raises:
            StorageError: If the database cannot be read.
        """
        try:
            async with session_scope(self._session_factory) as session:
                if kind is RecordKind.PEOPLE:
                    records = await self._load_people(session)
                else:
                    records = await self._load_movies(session)
        except SQLAlchemyError as e:
            raise StorageError(f"Error when reading {kind} records: {e}") from e

        logger.info("%d %s records read from storage.", len(records), kind)
        return records

    async def save_all(self, kind: RecordKind, records: Mapping[int, Mapping[str, Any]]) -> bool:
        """Replace all stored records of a kind.

        Returns:
            False if the records could not be written; nothing is changed then.
        """
        try:
            async with session_scope(self._session_factory) as session:
                if kind is RecordKind.PEOPLE:
                    await self._save_people(session, records)
                else:
                    await self._save_movies(session, records)
        except (SQLAlchemyError, ValidationError, ValueError) as e:
            logger.error("Error when writing %s records: %s", kind, e)
            return False

        logger.info("%d %s records saved.", len(records), kind)
        return True

    async def clear(self) -> None:
        """Delete every stored record."""
        async with session_scope(self._session_factory) as session:
            await session.execute(delete(MovieActorRow))
            await session.execute(delete(MovieRow))
            await session.execute(delete(PersonRow))

    @staticmethod
    async def _load_people(session: AsyncSession) -> dict[int, dict[str, Any]]:
        result = await session.execute(select(PersonRow).order_by(PersonRow.person_id))
        return {
            row.person_id: PersonRecord(
                person_id=row.person_id, name=row.name, role=row.role
            ).to_dict()
            for row in result.scalars().all()
        }

    @staticmethod
    async def _load_movies(session: AsyncSession) -> dict[int, dict[str, Any]]:
        result = await session.execute(
            select(MovieRow).options(selectinload(MovieRow.actors)).order_by(MovieRow.movie_id)
        )
        return {
            row.movie_id: MovieRecord(
                movie_id=row.movie_id,
                title=row.title,
                release_date=row.release_date.isoformat(),
                director_id=row.director_id,
                actors=[actor.person_id for actor in row.actors],
                movie_genre=row.movie_genre,
                about=row.about,
                episode_title=row.episode_title,
                episode_no=row.episode_no,
            ).to_dict()
            for row in result.scalars().all()
        }

    @staticmethod
    async def _save_people(session: AsyncSession, records: Mapping[int, Mapping[str, Any]]) -> None:
        await session.execute(delete(PersonRow))
        for record in records.values():
            person = PersonRecord.model_validate(record)
            session.add(PersonRow(person_id=person.person_id, name=person.name, role=person.role))

    @staticmethod
    async def _save_movies(session: AsyncSession, records: Mapping[int, Mapping[str, Any]]) -> None:
        await session.execute(delete(MovieActorRow))
        await session.execute(delete(MovieRow))
        for record in records.values():
            movie = MovieRecord.model_validate(record)
            session.add(
                MovieRow(
                    movie_id=movie.movie_id,
                    title=movie.title,
                    release_date=date.fromisoformat(movie.release_date[:10]),
                    director_id=movie.director_id,
                    movie_genre=movie.movie_genre,
                    about=movie.about,
                    episode_title=movie.episode_title,
                    episode_no=movie.episode_no,
                    actors=[
                        MovieActorRow(person_id=person_id, position=position)
                        for position, person_id in enumerate(movie.actors)
                    ],
                )
            )
