"""Test data for trying out the catalog."""

import logging

from movie_catalog.catalog.context import Catalog
from movie_catalog.storage import CatalogStore

logger = logging.getLogger(__name__)

SAMPLE_PEOPLE = [
    {"person_id": 1, "name": "Stephen Frears"},
    {"person_id": 2, "name": "George Lucas"},
    {"person_id": 3, "name": "Quentin Tarantino"},
    {"person_id": 5, "name": "Uma Thurman"},
    {"person_id": 6, "name": "John Travolta"},
    {"person_id": 7, "name": "Ewan McGregor"},
    {"person_id": 8, "name": "Natalie Portman"},
    {"person_id": 9, "name": "Keanu Reeves"},
]

SAMPLE_MOVIES = [
    {
        "movie_id": 1,
        "title": "Pulp Fiction",
        "release_date": "1994-05-12",
        "director_id": 3,
        "actors": [3, 5, 6],
    },
    {
        "movie_id": 2,
        "title": "Star Wars",
        "release_date": "1977-05-25",
        "director_id": 2,
        "actors": [7, 8],
    },
    {
        "movie_id": 3,
        "title": "Dangerous Liaisons",
        "release_date": "1988-12-16",
        "director_id": 1,
        "actors": [9, 5],
    },
]


def generate_test_data(catalog: Catalog) -> None:
    """Replace the catalog's contents with the sample people and movies."""
    catalog.clear()
    for slots in SAMPLE_PEOPLE:
        catalog.people.add(slots)
    for slots in SAMPLE_MOVIES:
        catalog.movies.add(slots)
    logger.info(
        "Test data generated: %d people, %d movies.", len(catalog.people), len(catalog.movies)
    )


async def clear_data(catalog: Catalog, store: CatalogStore) -> None:
    """Empty the catalog and delete all stored records."""
    catalog.clear()
    await store.clear()
    logger.info("All data cleared.")
