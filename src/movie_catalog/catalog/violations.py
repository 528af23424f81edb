"""Constraint violation taxonomy shared by every field check.

Check functions return either a :class:`NoViolation` or an instance of one of
the :class:`ConstraintViolation` subclasses. Violations are exceptions, so a
setter that receives one can simply raise it.
"""

from enum import StrEnum
from typing import ClassVar


class ViolationKind(StrEnum):
    """Closed set of check outcomes."""

    NONE = "NoViolation"
    CONSTRAINT = "ConstraintViolation"
    MANDATORY_VALUE = "MandatoryValueViolation"
    RANGE = "RangeViolation"
    PATTERN = "PatternViolation"
    INTERVAL = "IntervalViolation"
    STRING_LENGTH = "StringLengthViolation"
    UNIQUENESS = "UniquenessViolation"
    REFERENTIAL_INTEGRITY = "ReferentialIntegrityViolation"


class NoViolation:
    """Successful check result."""

    kind: ClassVar[ViolationKind] = ViolationKind.NONE
    ok: ClassVar[bool] = True
    message: ClassVar[str] = ""

    def raise_for_violation(self) -> None:
        """Nothing to raise."""
        return None

    def __repr__(self) -> str:
        return "NoViolation()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoViolation)

    def __hash__(self) -> int:
        return hash(NoViolation)


class ConstraintViolation(Exception):
    """Base class for all violations.

    Also used directly for constraints that have no dedicated kind, such as a
    genre-specific field supplied for a movie of another genre.
    """

    kind: ClassVar[ViolationKind] = ViolationKind.CONSTRAINT
    ok: ClassVar[bool] = False

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def raise_for_violation(self) -> None:
        """Raise this violation."""
        raise self


class MandatoryValueViolation(ConstraintViolation):
    """Required value is missing or empty."""

    kind = ViolationKind.MANDATORY_VALUE


class RangeViolation(ConstraintViolation):
    """Value has the wrong type or lies outside its value range."""

    kind = ViolationKind.RANGE


class PatternViolation(ConstraintViolation):
    """Value does not have the required format."""

    kind = ViolationKind.PATTERN


class IntervalViolation(ConstraintViolation):
    """Value lies outside an allowed interval."""

    kind = ViolationKind.INTERVAL


class StringLengthViolation(ConstraintViolation):
    """String is longer than allowed."""

    kind = ViolationKind.STRING_LENGTH


class UniquenessViolation(ConstraintViolation):
    """Identifier collides with an existing one."""

    kind = ViolationKind.UNIQUENESS


class ReferentialIntegrityViolation(ConstraintViolation):
    """Referenced entity does not exist."""

    kind = ViolationKind.REFERENTIAL_INTEGRITY


CheckResult = NoViolation | ConstraintViolation


class CatalogError(Exception):
    """Base exception for catalog lookups."""


class NotFoundError(CatalogError):
    """Raised when an entity is not in its registry."""

    def __init__(self, message: str = "Entity not found") -> None:
        super().__init__(message)
