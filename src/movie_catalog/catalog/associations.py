"""Back-reference counts from movies to the people they reference.

A person's role is never stored: it is derived from how many registered movies
list them as an actor and how many name them as director.
"""

from collections import Counter

from movie_catalog.catalog.enums import PersonRole


class AssociationIndex:
    """Acting and directing reference counts keyed by person id."""

    def __init__(self) -> None:
        self._acting: Counter[int] = Counter()
        self._directing: Counter[int] = Counter()

    def link_actor(self, person_id: int) -> None:
        self._acting[person_id] += 1

    def unlink_actor(self, person_id: int) -> None:
        self._decrement(self._acting, person_id)

    def link_director(self, person_id: int) -> None:
        self._directing[person_id] += 1

    def unlink_director(self, person_id: int) -> None:
        self._decrement(self._directing, person_id)

    def acting_count(self, person_id: int) -> int:
        """Number of registered movies listing the person as an actor."""
        return self._acting[person_id]

    def directing_count(self, person_id: int) -> int:
        """Number of registered movies directed by the person."""
        return self._directing[person_id]

    def role_for(self, person_id: int) -> PersonRole | None:
        """Infer the role of a person from the current counts."""
        acting = self._acting[person_id] > 0
        directing = self._directing[person_id] > 0
        if acting and directing:
            return PersonRole.ACTOR_AND_DIRECTOR
        if acting:
            return PersonRole.ACTOR
        if directing:
            return PersonRole.DIRECTOR
        return None

    def clear(self) -> None:
        self._acting.clear()
        self._directing.clear()

    @staticmethod
    def _decrement(counts: Counter[int], person_id: int) -> None:
        if counts[person_id] <= 1:
            counts.pop(person_id, None)
        else:
            counts[person_id] -= 1
