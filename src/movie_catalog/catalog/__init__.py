"""Entity validation, registries and association maintenance."""

from movie_catalog.catalog.associations import AssociationIndex
from movie_catalog.catalog.context import Catalog
from movie_catalog.catalog.enums import MovieGenre, PersonRole
from movie_catalog.catalog.movie import Movie, MovieRegistry, PersonRef, person_id_of
from movie_catalog.catalog.person import Person, PersonRegistry
from movie_catalog.catalog.violations import (
    CatalogError,
    CheckResult,
    ConstraintViolation,
    IntervalViolation,
    MandatoryValueViolation,
    NotFoundError,
    NoViolation,
    PatternViolation,
    RangeViolation,
    ReferentialIntegrityViolation,
    StringLengthViolation,
    UniquenessViolation,
    ViolationKind,
)

__all__ = [
    # Context and registries
    "AssociationIndex",
    "Catalog",
    "MovieRegistry",
    "PersonRegistry",
    # Entities
    "Movie",
    "MovieGenre",
    "Person",
    "PersonRef",
    "PersonRole",
    "person_id_of",
    # Violations
    "CatalogError",
    "CheckResult",
    "ConstraintViolation",
    "IntervalViolation",
    "MandatoryValueViolation",
    "NoViolation",
    "NotFoundError",
    "PatternViolation",
    "RangeViolation",
    "ReferentialIntegrityViolation",
    "StringLengthViolation",
    "UniquenessViolation",
    "ViolationKind",
]
