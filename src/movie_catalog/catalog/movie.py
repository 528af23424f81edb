"""Movie entity and movie registry.

A movie references people in three ways: as director, as actors and, for a
biography, as its subject (``about``). Director and actor references feed the
association index from which every person's role is inferred.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from movie_catalog.catalog.checks import (
    as_identifier,
    check_movie_genre,
    check_positive_integer,
    check_tv_series_fields,
    is_blank,
    is_integer_or_integer_string,
    parse_date,
    parse_genre,
    validate_date,
    validate_title,
)
from movie_catalog.catalog.enums import MovieGenre
from movie_catalog.catalog.person import Person, report_update
from movie_catalog.catalog.violations import (
    CheckResult,
    ConstraintViolation,
    MandatoryValueViolation,
    NotFoundError,
    NoViolation,
    RangeViolation,
    ReferentialIntegrityViolation,
    UniquenessViolation,
)
from movie_catalog.schemas.movie import MovieRecord

if TYPE_CHECKING:
    from movie_catalog.catalog.associations import AssociationIndex
    from movie_catalog.catalog.context import Catalog
    from movie_catalog.catalog.person import PersonRegistry

logger = logging.getLogger(__name__)

# A person is referenced either by its ID or by the entity itself
PersonRef = Person | int | str

_SLOT_NAMES = (
    "movie_id",
    "title",
    "release_date",
    "director_id",
    "actors",
    "movie_genre",
    "about",
    "episode_title",
    "episode_no",
)


def person_id_of(ref: PersonRef | None) -> Any:
    """Normalize a person reference to its raw ID."""
    if isinstance(ref, Person):
        return ref.person_id
    return ref


def _same_id(value: Any, current: int | None) -> bool:
    if is_blank(value):
        return current is None
    if not is_integer_or_integer_string(value):
        return False
    return as_identifier(value) == current


class Movie:
    """A movie with validated fields and person references.

    Fields are validated in declaration order and the first violation aborts
    construction. A movie only counts towards people's roles once it is
    registered.
    """

    def __init__(
        self,
        registry: MovieRegistry,
        *,
        movie_id: Any,
        title: Any,
        release_date: Any,
        director_id: PersonRef | None = None,
        actors: Iterable[PersonRef] | Mapping[Any, PersonRef] | None = None,
        movie_genre: Any = None,
        about: PersonRef | None = None,
        episode_title: Any = None,
        episode_no: Any = None,
    ) -> None:
        self._registry = registry
        self._registered = False
        registry.validate_movie_id(movie_id).raise_for_violation()
        self._movie_id = int(movie_id)
        self.title = title
        self.release_date = release_date

        self._director_id: int | None = None
        self._actors: dict[int, Person] = {}
        self.set_director(director_id)
        if isinstance(actors, Mapping):
            actors = actors.values()
        for ref in actors or ():
            self.add_actor(ref)

        self._movie_genre: MovieGenre | None = None
        self._about: int | None = None
        self._episode_title: str | None = None
        self._episode_no: int | None = None
        self.change_genre(
            movie_genre, about=about, episode_title=episode_title, episode_no=episode_no
        )

    @property
    def movie_id(self) -> int:
        return self._movie_id

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: Any) -> None:
        validate_title(value).raise_for_violation()
        self._title = value

    @property
    def release_date(self) -> date:
        return self._release_date

    @release_date.setter
    def release_date(self, value: Any) -> None:
        if isinstance(value, datetime):
            value = value.date()
        if isinstance(value, date):
            value = value.isoformat()
        validate_date(value).raise_for_violation()
        self._release_date = parse_date(value)

    @property
    def director_id(self) -> int | None:
        return self._director_id

    @property
    def director(self) -> Person | None:
        if self._director_id is None:
            return None
        return self._people.instances.get(self._director_id)

    @property
    def actor_ids(self) -> list[int]:
        return list(self._actors)

    @property
    def actors(self) -> list[Person]:
        return list(self._actors.values())

    @property
    def movie_genre(self) -> MovieGenre | None:
        return self._movie_genre

    @property
    def about(self) -> int | None:
        return self._about

    @property
    def episode_title(self) -> str | None:
        return self._episode_title

    @property
    def episode_no(self) -> int | None:
        return self._episode_no

    @property
    def _people(self) -> PersonRegistry:
        return self._registry.catalog.people

    @property
    def _associations(self) -> AssociationIndex:
        return self._registry.catalog.associations

    def has_release_date(self, value: Any) -> bool:
        """Return True if ``value`` denotes the current release date."""
        if isinstance(value, date):
            return value == self._release_date
        if not validate_date(value).ok:
            return False
        return parse_date(value) == self._release_date

    def set_director(self, ref: PersonRef | None) -> None:
        """Set or, with an empty reference, unset the director."""
        director_id = person_id_of(ref)
        if is_blank(director_id):
            self._release_director()
            return

        self._registry.validate_director(director_id).raise_for_violation()
        new_id = int(director_id)
        if new_id == self._director_id:
            return
        self._release_director()
        self._director_id = new_id
        if self._registered:
            self._associations.link_director(new_id)

    def _release_director(self) -> None:
        if self._director_id is not None and self._registered:
            self._associations.unlink_director(self._director_id)
        self._director_id = None

    def add_actor(self, ref: PersonRef) -> None:
        """Add a person to the actors; adding a present actor is a no-op."""
        person_id = person_id_of(ref)
        if is_blank(person_id):
            raise MandatoryValueViolation("An actor reference must be provided!")
        self._people.check_person_id_as_id_ref(person_id).raise_for_violation()

        key = int(person_id)
        if key in self._actors:
            return
        self._actors[key] = self._people.instances[key]
        if self._registered:
            self._associations.link_actor(key)

    def remove_actor(self, ref: PersonRef) -> None:
        """Remove a person from the actors; removing an absent actor is a no-op."""
        person_id = person_id_of(ref)
        if is_blank(person_id):
            raise MandatoryValueViolation("An actor reference must be provided!")
        self._people.check_person_id_as_id_ref(person_id).raise_for_violation()

        key = int(person_id)
        if self._actors.pop(key, None) is not None and self._registered:
            self._associations.unlink_actor(key)

    def change_genre(
        self,
        genre: Any,
        *,
        about: PersonRef | None = None,
        episode_title: Any = None,
        episode_no: Any = None,
    ) -> None:
        """Switch to ``genre`` (None for no genre) together with its fields.

        Fields belonging to other genres are cleared. Everything is checked
        before anything changes.
        """
        check_movie_genre(genre).raise_for_violation()
        new_genre = parse_genre(genre)
        about_id = person_id_of(about)
        self._registry.check_about(about_id, new_genre).raise_for_violation()
        check_tv_series_fields(episode_title, episode_no, new_genre).raise_for_violation()

        self._movie_genre = new_genre
        if new_genre is MovieGenre.BIOGRAPHY:
            self._about = int(about_id)
        else:
            self._about = None
        if new_genre is MovieGenre.TV_SERIES_EPISODE:
            self._episode_title = episode_title
            self._episode_no = int(episode_no)
        else:
            self._episode_title = None
            self._episode_no = None

    def _register(self) -> None:
        if self._director_id is not None:
            self._associations.link_director(self._director_id)
        for key in self._actors:
            self._associations.link_actor(key)
        self._registered = True

    def _unregister(self) -> None:
        if self._director_id is not None:
            self._associations.unlink_director(self._director_id)
        for key in self._actors:
            self._associations.unlink_actor(key)
        self._registered = False

    def _snapshot(self) -> dict[str, Any]:
        return {
            "title": self._title,
            "release_date": self._release_date,
            "director_id": self._director_id,
            "actors": dict(self._actors),
            "movie_genre": self._movie_genre,
            "about": self._about,
            "episode_title": self._episode_title,
            "episode_no": self._episode_no,
        }

    def _restore(self, snapshot: Mapping[str, Any]) -> None:
        registered = self._registered
        if registered:
            self._unregister()
        for name, value in snapshot.items():
            setattr(self, f"_{name}", value)
        self._actors = dict(snapshot["actors"])
        if registered:
            self._register()

    def to_record(self) -> MovieRecord:
        """Convert to the serialized record form with ID references."""
        return MovieRecord(
            movie_id=self._movie_id,
            title=self._title,
            release_date=self._release_date.isoformat(),
            director_id=self._director_id,
            actors=list(self._actors),
            movie_genre=int(self._movie_genre) if self._movie_genre is not None else None,
            about=self._about,
            episode_title=self._episode_title,
            episode_no=self._episode_no,
        )

    def __str__(self) -> str:
        text = f"Movie{{ ID: {self._movie_id}, title: {self._title}, date: {self._release_date}"
        if self._director_id is not None:
            text += f", director: {self._director_id}"
        return f"{text}, actors: {','.join(str(key) for key in self._actors)} }}"

    def __repr__(self) -> str:
        return f"Movie(movie_id={self._movie_id!r}, title={self._title!r})"


class MovieRegistry:
    """In-memory movie registry keyed by movie ID."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.instances: dict[int, Movie] = {}

    def validate_movie_id(self, movie_id: Any) -> CheckResult:
        """Check a movie ID used as the identifier of a new movie."""
        if is_blank(movie_id):
            return MandatoryValueViolation("A value for the movie ID must be provided!")
        result = check_positive_integer(movie_id, "Movie ID")
        if not result.ok:
            return result
        if int(movie_id) in self.instances:
            return UniquenessViolation("There is already a movie record with this movie ID!")
        return NoViolation()

    def validate_director(self, director_id: Any, required: bool = False) -> CheckResult:
        """Check an optional (or, if ``required``, mandatory) director reference."""
        if is_blank(director_id):
            if required:
                return MandatoryValueViolation("Setting a director is mandatory!")
            return NoViolation()
        return self.catalog.people.check_person_id_as_id_ref(director_id)

    def check_about(self, about: Any, genre: Any) -> CheckResult:
        """The subject person is mandatory for biographies and forbidden otherwise."""
        about = person_id_of(about)
        biography = check_movie_genre(genre).ok and parse_genre(genre) is MovieGenre.BIOGRAPHY
        if biography and is_blank(about):
            return MandatoryValueViolation("A biography must name the person it is about!")
        if not biography and not is_blank(about):
            return ConstraintViolation(
                "An 'about' person must not be provided if the movie is not a biography!"
            )
        return self.catalog.people.check_person_id_as_id_ref(about)

    def get(self, movie_id: Any) -> Movie:
        """Look up a movie.

        Raises:
            NotFoundError: If no movie has this ID.
        """
        movie = self.instances.get(as_identifier(movie_id))
        if movie is None:
            raise NotFoundError(f"There is no movie with ID {movie_id}")
        return movie

    def movies_with_actor(self, person_id: int) -> list[Movie]:
        return [movie for movie in self.instances.values() if person_id in movie._actors]

    def movies_directed_by(self, person_id: int) -> list[Movie]:
        return [movie for movie in self.instances.values() if movie.director_id == person_id]

    def movies_about(self, person_id: int) -> list[Movie]:
        return [movie for movie in self.instances.values() if movie.about == person_id]

    def add(self, slots: Mapping[str, Any]) -> CheckResult:
        """Create a movie from a slot record and register it.

        Nothing is registered if a check fails; the violation is logged and
        returned.
        """
        try:
            movie = Movie(self, **{name: slots.get(name) for name in _SLOT_NAMES})
        except ConstraintViolation as e:
            logger.warning("%s: %s", e.kind, e.message)
            return e

        movie._register()
        self.instances[movie.movie_id] = movie
        logger.info("%s created!", movie)
        return NoViolation()

    def update(self, slots: Mapping[str, Any]) -> CheckResult:
        """Apply changed fields to a registered movie, all or nothing.

        Recognized slots besides ``movie_id``: ``title``, ``release_date``,
        ``actor_ids_to_add``, ``actor_ids_to_remove``, ``director_id`` (empty
        to unset), ``movie_genre`` (empty to unset) and the genre fields
        ``about``, ``episode_title`` and ``episode_no``. Absent or None slots
        are left unchanged.
        """
        movie_id = slots.get("movie_id")
        movie = self.instances.get(as_identifier(movie_id))
        if movie is None:
            violation = ReferentialIntegrityViolation(f"There is no movie with ID {movie_id}!")
            logger.warning("%s: %s", violation.kind, violation.message)
            return violation

        snapshot = movie._snapshot()
        updated: list[str] = []
        try:
            title = slots.get("title")
            if title is not None and title != movie.title:
                movie.title = title
                updated.append("title")

            release_date = slots.get("release_date")
            if release_date is not None and not movie.has_release_date(release_date):
                movie.release_date = release_date
                updated.append("releaseDate")

            actor_ids_to_add = slots.get("actor_ids_to_add")
            if actor_ids_to_add:
                for ref in actor_ids_to_add:
                    movie.add_actor(ref)
                updated.append("actors(added)")

            actor_ids_to_remove = slots.get("actor_ids_to_remove")
            if actor_ids_to_remove:
                for ref in actor_ids_to_remove:
                    movie.remove_actor(ref)
                updated.append("actors(removed)")

            if "director_id" in slots:
                director_id = person_id_of(slots["director_id"])
                if not _same_id(director_id, movie.director_id):
                    movie.set_director(director_id)
                    updated.append("directorId")

            self._update_genre(movie, slots, updated)
        except ConstraintViolation as e:
            logger.warning("%s: %s", e.kind, e.message)
            movie._restore(snapshot)
            return e

        report_update("movie", movie.movie_id, updated)
        return NoViolation()

    @staticmethod
    def _update_genre(movie: Movie, slots: Mapping[str, Any], updated: list[str]) -> None:
        about = slots.get("about")
        episode_title = slots.get("episode_title")
        episode_no = slots.get("episode_no")

        if "movie_genre" in slots:
            check_movie_genre(slots["movie_genre"]).raise_for_violation()
            genre = parse_genre(slots["movie_genre"])
        else:
            genre = movie.movie_genre

        if genre != movie.movie_genre:
            # no genre -> genre, genre -> other genre, genre -> no genre.
            # Fields of any other genre are passed on so that they are rejected.
            movie.change_genre(
                genre, about=about, episode_title=episode_title, episode_no=episode_no
            )
            updated.append("movieGenre")
            return

        changed = []
        if about is not None and not _same_id(person_id_of(about), movie.about):
            changed.append("about")
        if episode_title is not None and episode_title != movie.episode_title:
            changed.append("episodeTitle")
        if episode_no is not None and not _same_id(episode_no, movie.episode_no):
            changed.append("episodeNo")
        if changed:
            movie.change_genre(
                genre,
                about=movie.about if about is None else about,
                episode_title=movie.episode_title if episode_title is None else episode_title,
                episode_no=movie.episode_no if episode_no is None else episode_no,
            )
            updated.extend(changed)

    def destroy(self, movie_id: Any) -> bool:
        """Delete a movie and release its director and actor references."""
        movie = self.instances.get(as_identifier(movie_id))
        if movie is None:
            logger.warning("There is no movie with ID %s in the catalog!", movie_id)
            return False
        movie._unregister()
        del self.instances[movie.movie_id]
        logger.info("%s deleted!", movie)
        return True

    def load_record(self, record: Mapping[str, Any]) -> CheckResult:
        """Register a movie from its serialized record form."""
        try:
            parsed = MovieRecord.model_validate(record)
        except ValidationError as e:
            logger.warning("ValidationError while deserializing movie record: %s", e)
            return RangeViolation(f"Malformed movie record ({e.error_count()} errors)")
        return self.add(parsed.to_slots())

    def to_records(self) -> dict[int, dict[str, Any]]:
        """Serialize all movies keyed by movie ID."""
        return {key: movie.to_record().to_dict() for key, movie in self.instances.items()}

    def clear(self) -> None:
        for movie in self.instances.values():
            movie._unregister()
        self.instances.clear()

    def __len__(self) -> int:
        return len(self.instances)
