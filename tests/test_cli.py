"""Tests for the command line interface."""

import json
from typing import Any

import pytest
from typer.testing import CliRunner

from movie_catalog import __version__
from movie_catalog.cli import app

runner = CliRunner()


@pytest.fixture
def invoke(database_url: str):
    """Invoke the CLI against the test database."""

    def _invoke(*args: str, input: str | None = None) -> Any:
        return runner.invoke(app, ["--database-url", database_url, *args], input=input)

    return _invoke


def output(result: Any) -> Any:
    return json.loads(result.stdout)


def test_version(invoke) -> None:
    """Test the version command."""
    result = invoke("version")
    assert result.exit_code == 0
    assert output(result) == {"version": __version__}


def test_init_db(invoke) -> None:
    """Test creating the tables."""
    result = invoke("init-db")
    assert result.exit_code == 0
    assert output(result) == {"status": "ok"}


def test_seed_and_list(invoke) -> None:
    """Test seeding stores the sample data with inferred roles."""
    result = invoke("seed")
    assert result.exit_code == 0
    assert output(result) == {"people": 8, "movies": 3}

    people = output(invoke("people", "list"))
    roles = {person["personId"]: person.get("role") for person in people}
    assert roles[3] == 3
    assert roles[1] == 1
    assert roles[9] == 2

    movies = output(invoke("movies", "list"))
    assert [movie["title"] for movie in movies] == [
        "Pulp Fiction",
        "Star Wars",
        "Dangerous Liaisons",
    ]


class TestPeopleCommands:
    """Tests for the person commands."""

    def test_add_and_update(self, invoke) -> None:
        """Test a person is added and renamed."""
        assert invoke("people", "add", "--id", "4", "--name", "Sofia").exit_code == 0
        result = invoke("people", "update", "--id", "4", "--name", "Sofia Coppola")
        assert result.exit_code == 0
        assert output(result) == {"status": "updated", "personId": 4}
        assert output(invoke("people", "list")) == [{"personId": 4, "name": "Sofia Coppola"}]

    def test_add_duplicate(self, invoke) -> None:
        """Test a duplicate person ID is reported with its violation kind."""
        invoke("seed")
        result = invoke("people", "add", "--id", "1", "--name", "Other")
        assert result.exit_code == 1
        assert output(result)["kind"] == "UniquenessViolation"

    def test_delete_director_fails(self, invoke) -> None:
        """Test a director cannot be deleted."""
        invoke("seed")
        result = invoke("people", "delete", "--id", "2")
        assert result.exit_code == 1
        assert "could not be deleted" in output(result)["error"]

    def test_delete_actor(self, invoke) -> None:
        """Test deleting an actor removes them from the movies."""
        invoke("seed")
        assert invoke("people", "delete", "--id", "5").exit_code == 0
        movie = output(invoke("movies", "show", "--id", "1"))
        assert movie["actors"] == [3, 6]


class TestMovieCommands:
    """Tests for the movie commands."""

    def test_add_biography(self, invoke) -> None:
        """Test adding a biography by genre name."""
        invoke("seed")
        result = invoke(
            "movies", "add", "--id", "4", "--title", "The Queen",
            "--release-date", "2006-09-15", "--director", "1",
            "--genre", "Biography", "--about", "1",
        )
        assert result.exit_code == 0
        movie = output(invoke("movies", "show", "--id", "4"))
        assert movie["movieGenre"] == 1
        assert movie["about"] == 1

    def test_add_invalid_date(self, invoke) -> None:
        """Test a malformed release date is rejected."""
        result = invoke(
            "movies", "add", "--id", "4", "--title", "T", "--release-date", "12.05.1994"
        )
        assert result.exit_code == 1
        assert output(result)["kind"] == "PatternViolation"

    def test_update_with_unknown_actor(self, invoke) -> None:
        """Test a failing update changes nothing."""
        invoke("seed")
        result = invoke(
            "movies", "update", "--id", "2", "--title", "New Title", "--add-actor", "4"
        )
        assert result.exit_code == 1
        assert output(result)["kind"] == "ReferentialIntegrityViolation"
        assert output(invoke("movies", "show", "--id", "2"))["title"] == "Star Wars"

    def test_unset_director(self, invoke) -> None:
        """Test an empty director unsets it."""
        invoke("seed")
        assert invoke("movies", "update", "--id", "1", "--director", "").exit_code == 0
        assert "directorId" not in output(invoke("movies", "show", "--id", "1"))

    def test_update_with_malformed_director(self, invoke) -> None:
        """Test a non-numeric director is rejected on a movie without one."""
        invoke("seed")
        invoke("movies", "update", "--id", "1", "--director", "")
        result = invoke("movies", "update", "--id", "1", "--director", "abc")
        assert result.exit_code == 1
        assert output(result)["kind"] == "RangeViolation"

    def test_show_missing(self, invoke) -> None:
        """Test showing a missing movie fails."""
        result = invoke("movies", "show", "--id", "9")
        assert result.exit_code == 1
        assert "error" in output(result)

    def test_delete(self, invoke) -> None:
        """Test deleting a movie."""
        invoke("seed")
        assert invoke("movies", "delete", "--id", "3").exit_code == 0
        assert invoke("movies", "delete", "--id", "3").exit_code == 1


def test_clear_requires_confirmation(invoke) -> None:
    """Test clearing asks first and can be declined."""
    invoke("seed")
    result = invoke("clear", input="n\n")
    assert result.exit_code == 1
    assert len(output(invoke("movies", "list"))) == 3

    result = invoke("clear", "--yes")
    assert result.exit_code == 0
    assert output(invoke("movies", "list")) == []
