"""Person entity and person registry."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from movie_catalog.catalog.checks import (
    as_identifier,
    check_name,
    check_role,
    is_blank,
    is_integer_or_integer_string,
    parse_role,
)
from movie_catalog.catalog.enums import PersonRole
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
from movie_catalog.schemas.person import PersonRecord

if TYPE_CHECKING:
    from movie_catalog.catalog.context import Catalog

logger = logging.getLogger(__name__)


def report_update(entity: str, identifier: object, properties: list[str]) -> None:
    """Log which properties an update changed."""
    if properties:
        ending = "ies" if len(properties) > 1 else "y"
        logger.info(
            "Propert%s %s modified for %s %s", ending, ",".join(properties), entity, identifier
        )
    else:
        logger.info("No property value changed for %s %s!", entity, identifier)


class Person:
    """A person that movies can reference as actor, director or biography subject.

    The role is not stored: it is inferred from the movies currently
    referencing the person.
    """

    def __init__(
        self, registry: PersonRegistry, *, person_id: Any, name: Any, role: Any = None
    ) -> None:
        self._registry = registry
        registry.check_person_id_as_id(person_id).raise_for_violation()
        self._person_id = int(person_id)
        self.name = name
        # A persisted role is only range-checked; it is recomputed from movies
        check_role(role).raise_for_violation()

    @property
    def person_id(self) -> int:
        return self._person_id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: Any) -> None:
        check_name(value).raise_for_violation()
        self._name = value

    @property
    def role(self) -> PersonRole | None:
        return self._registry.catalog.associations.role_for(self._person_id)

    def to_record(self) -> PersonRecord:
        """Convert to the serialized record form."""
        role = self.role
        return PersonRecord(
            person_id=self._person_id,
            name=self._name,
            role=int(role) if role is not None else None,
        )

    def __str__(self) -> str:
        role = self.role
        return (
            f"Person{{ ID: {self._person_id}, name: {self._name}, "
            f"role: {role.name if role is not None else '-'} }}"
        )

    def __repr__(self) -> str:
        return f"Person(person_id={self._person_id!r}, name={self._name!r})"


class PersonRegistry:
    """In-memory person registry keyed by person ID."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.instances: dict[int, Person] = {}

    @staticmethod
    def check_person_id(person_id: Any) -> CheckResult:
        """Check the format of a person ID; an empty value passes (optional reference)."""
        if is_blank(person_id):
            return NoViolation()
        if not is_integer_or_integer_string(person_id) or int(person_id) < 1:
            return RangeViolation("The person ID must be a positive integer!")
        return NoViolation()

    def check_person_id_as_id(self, person_id: Any) -> CheckResult:
        """Check a person ID used as the identifier of a new person."""
        result = self.check_person_id(person_id)
        if not result.ok:
            return result
        if is_blank(person_id):
            return MandatoryValueViolation("A positive integer value for the person ID is required!")
        if int(person_id) in self.instances:
            return UniquenessViolation("There is already a person record with this person ID!")
        return NoViolation()

    def check_person_id_as_id_ref(self, person_id: Any) -> CheckResult:
        """Check a person ID used as a reference to an existing person."""
        result = self.check_person_id(person_id)
        if result.ok and not is_blank(person_id) and int(person_id) not in self.instances:
            return ReferentialIntegrityViolation("There is no person record with this person ID!")
        return result

    def get(self, person_id: Any) -> Person:
        """Look up a person.

        Raises:
            NotFoundError: If no person has this ID.
        """
        person = self.instances.get(as_identifier(person_id))
        if person is None:
            raise NotFoundError(f"There is no person with ID {person_id}")
        return person

    def get_role_from_person_id(self, person_id: Any) -> PersonRole | None:
        """Return the inferred role of a registered person.

        Raises:
            NotFoundError: If no person has this ID.
        """
        return self.get(person_id).role

    def add(self, slots: Mapping[str, Any]) -> CheckResult:
        """Create a person from a slot record and register it.

        Nothing is registered if a check fails; the violation is logged and
        returned.
        """
        try:
            person = Person(
                self,
                person_id=slots.get("person_id"),
                name=slots.get("name"),
                role=slots.get("role"),
            )
        except ConstraintViolation as e:
            logger.warning("%s: %s", e.kind, e.message)
            return e

        self.instances[person.person_id] = person
        logger.info("Saved: %s", person.name)
        return NoViolation()

    def update(self, slots: Mapping[str, Any]) -> CheckResult:
        """Apply changed fields to a registered person, all or nothing."""
        person_id = slots.get("person_id")
        result = self.check_person_id_as_id_ref(person_id)
        if result.ok and is_blank(person_id):
            result = MandatoryValueViolation("A person ID must be provided for an update!")
        if not result.ok:
            logger.warning("%s: %s", result.kind, result.message)
            return result

        person = self.instances[int(person_id)]
        name_before = person.name
        updated: list[str] = []
        try:
            name = slots.get("name")
            if name is not None and name != person.name:
                person.name = name
                updated.append("name")

            role = slots.get("role")
            if role is not None:
                check_role(role).raise_for_violation()
                if parse_role(role) != person.role:
                    raise ConstraintViolation(
                        "The role of a person is inferred from the movies referencing them!"
                    )
        except ConstraintViolation as e:
            logger.warning("%s: %s", e.kind, e.message)
            person._name = name_before
            return e

        report_update("person", person.name, updated)
        return NoViolation()

    def destroy(self, person_id: Any) -> bool:
        """Delete a person and prune them from every movie's actors.

        Deletion is refused while the person directs a movie or is the subject
        of a biography.
        """
        key = as_identifier(person_id)
        person = self.instances.get(key)
        if person is None:
            logger.warning("There is no person with ID %s in the catalog!", person_id)
            return False

        movies = self.catalog.movies
        if self.catalog.associations.directing_count(key):
            titles = ", ".join(movie.title for movie in movies.movies_directed_by(key))
            logger.warning(
                "Person %s cannot be deleted as they direct the movie(s) %s.", person.name, titles
            )
            return False
        biographies = movies.movies_about(key)
        if biographies:
            titles = ", ".join(movie.title for movie in biographies)
            logger.warning(
                "Person %s cannot be deleted as they are the subject of %s.", person.name, titles
            )
            return False

        for movie in movies.movies_with_actor(key):
            movie.remove_actor(key)
        del self.instances[key]
        logger.info("Person %s deleted.", person.name)
        return True

    def load_record(self, record: Mapping[str, Any]) -> CheckResult:
        """Register a person from its serialized record form."""
        try:
            parsed = PersonRecord.model_validate(record)
        except ValidationError as e:
            logger.warning("ValidationError while deserializing person record: %s", e)
            return RangeViolation(f"Malformed person record ({e.error_count()} errors)")
        return self.add(parsed.to_slots())

    def to_records(self) -> dict[int, dict[str, Any]]:
        """Serialize all people keyed by person ID."""
        return {key: person.to_record().to_dict() for key, person in self.instances.items()}

    def clear(self) -> None:
        self.instances.clear()

    def __len__(self) -> int:
        return len(self.instances)
