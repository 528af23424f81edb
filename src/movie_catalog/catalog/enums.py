"""Enumerations with 1-based integer codes."""

from enum import IntEnum


class PersonRole(IntEnum):
    """Role of a person, derived from the movies referencing them."""

    DIRECTOR = 1
    ACTOR = 2
    ACTOR_AND_DIRECTOR = 3


class MovieGenre(IntEnum):
    """Optional movie genre selecting genre-specific fields."""

    BIOGRAPHY = 1
    TV_SERIES_EPISODE = 2
