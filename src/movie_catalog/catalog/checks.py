"""Field checks that do not need a registry.

Every function returns a check result (``NoViolation`` or a violation) and has
no side effects. Checks within a function run in a fixed order and the first
failure wins.
"""

import re
from datetime import date, datetime
from typing import Any

from movie_catalog.catalog.enums import MovieGenre, PersonRole
from movie_catalog.catalog.violations import (
    CheckResult,
    ConstraintViolation,
    IntervalViolation,
    MandatoryValueViolation,
    NoViolation,
    PatternViolation,
    RangeViolation,
    StringLengthViolation,
)

# First public film screening (Lumière, Paris)
FIRST_SCREENING = date(1895, 12, 28)
MAX_TITLE_LENGTH = 120

_INTEGER_PATTERN = re.compile(r"^-?\d+$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def is_blank(value: Any) -> bool:
    """Return True for a missing value or an empty/whitespace string."""
    return value is None or (isinstance(value, str) and not value.strip())


def is_integer_or_integer_string(value: Any) -> bool:
    """Return True for an int (bool excluded) or a string holding one."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()) is not None


def check_positive_integer(value: Any, label: str) -> CheckResult:
    """Check that a non-empty value is a positive integer."""
    if not is_integer_or_integer_string(value):
        return RangeViolation(f"{label} {value!r} is not an integer!")
    if int(value) < 1:
        return RangeViolation(f"{label} must be a positive integer!")
    return NoViolation()


def validate_title(title: Any, label: str = "title") -> CheckResult:
    """Check a mandatory string of at most ``MAX_TITLE_LENGTH`` characters."""
    if is_blank(title):
        return MandatoryValueViolation(f"A {label} must be provided!")
    if not isinstance(title, str):
        return RangeViolation(f"The {label} must be a non-empty string!")
    if len(title) > MAX_TITLE_LENGTH:
        return StringLengthViolation(
            f"The {label} must not be longer than {MAX_TITLE_LENGTH} characters!"
        )
    return NoViolation()


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM:SS.mmmZ`` to its calendar date.

    Raises:
        ValueError: If the string does not denote a valid date or time.
    """
    text = value.strip()
    if "T" in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def validate_date(value: Any, today: date | None = None) -> CheckResult:
    """Check a release date string.

    Args:
        value: ISO date (``YYYY-MM-DD``) or UTC timestamp with milliseconds.
        today: Reference day for the upper bound; defaults to the current day.
    """
    if value is None or value == "":
        return MandatoryValueViolation("A release date must be provided!")
    if not isinstance(value, str) or not value.strip():
        return RangeViolation("The release date must be a non-empty string!")

    text = value.strip()
    if not (_DATE_PATTERN.match(text) or _TIMESTAMP_PATTERN.match(text)):
        return PatternViolation("The release date must have format YYYY-MM-DD!")
    try:
        parsed = parse_date(text)
    except ValueError:
        return PatternViolation(f"The release date {text} is not a valid date or time!")

    if parsed < FIRST_SCREENING:
        return IntervalViolation(
            f"The release date must not be earlier than {FIRST_SCREENING.isoformat()}!"
        )
    latest_year = (today or date.today()).year
    if parsed.year > latest_year:
        return IntervalViolation(f"The release date must not be later than the year {latest_year}!")
    return NoViolation()


def _check_enum_code(value: Any, enum: type[MovieGenre] | type[PersonRole], label: str) -> CheckResult:
    if is_blank(value):
        return NoViolation()
    if not is_integer_or_integer_string(value) or int(value) not in {m.value for m in enum}:
        return RangeViolation(f"Invalid value for {label}: {value!r}")
    return NoViolation()


def check_movie_genre(genre: Any) -> CheckResult:
    """Check an optional genre code."""
    return _check_enum_code(genre, MovieGenre, "genre")


def check_role(role: Any) -> CheckResult:
    """Check an optional role code."""
    return _check_enum_code(role, PersonRole, "role")


def parse_genre(genre: Any) -> MovieGenre | None:
    """Convert a checked genre code to its enum member (None when blank)."""
    if is_blank(genre):
        return None
    return MovieGenre(int(genre))


def parse_role(role: Any) -> PersonRole | None:
    """Convert a checked role code to its enum member (None when blank)."""
    if is_blank(role):
        return None
    return PersonRole(int(role))


def check_name(name: Any) -> CheckResult:
    """Check a person's name."""
    if is_blank(name):
        return MandatoryValueViolation("A name must be provided!")
    if not isinstance(name, str):
        return RangeViolation("The name must be a non-empty string!")
    return NoViolation()


def _is_tv_episode(genre: Any) -> bool:
    return check_movie_genre(genre).ok and parse_genre(genre) is MovieGenre.TV_SERIES_EPISODE


def check_episode_title(title: Any, genre: Any) -> CheckResult:
    """Episode title is mandatory for TV series episodes and forbidden otherwise."""
    tv_episode = _is_tv_episode(genre)
    if tv_episode and is_blank(title):
        return MandatoryValueViolation("A TV series episode must have an episode title!")
    if not tv_episode and not is_blank(title):
        return ConstraintViolation(
            "An episode title must not be provided if the movie is not a TV series episode!"
        )
    if tv_episode:
        return validate_title(title, "episode title")
    return NoViolation()


def check_episode_no(episode_no: Any, genre: Any) -> CheckResult:
    """Episode number is mandatory for TV series episodes and forbidden otherwise."""
    tv_episode = _is_tv_episode(genre)
    if tv_episode and is_blank(episode_no):
        return MandatoryValueViolation("A TV series episode must have an episode number!")
    if not tv_episode and not is_blank(episode_no):
        return ConstraintViolation(
            "An episode number must not be provided if the movie is not a TV series episode!"
        )
    if tv_episode:
        return check_positive_integer(episode_no, "Episode number")
    return NoViolation()


def check_tv_series_fields(title: Any, episode_no: Any, genre: Any) -> CheckResult:
    """Check both TV series episode fields, title first."""
    result = check_episode_title(title, genre)
    if not result.ok:
        return result
    return check_episode_no(episode_no, genre)


def as_identifier(value: Any) -> int | None:
    """Return the registry key for an id-like value, or None if it is not one."""
    if is_integer_or_integer_string(value):
        return int(value)
    return None
