"""Command line interface.

Every command loads the catalog from the database, applies one operation and
writes the catalog back.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any, NoReturn, TypeVar

import typer

from movie_catalog import __version__
from movie_catalog.catalog import Catalog, CheckResult, MovieGenre, NotFoundError
from movie_catalog.config import get_settings
from movie_catalog.database import build_engine, build_session_factory, init_db
from movie_catalog.sample_data import clear_data, generate_test_data
from movie_catalog.storage import CatalogStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

app = typer.Typer(help="Movie catalog CLI", add_completion=False)
people_app = typer.Typer(help="Person commands", add_completion=False)
movies_app = typer.Typer(help="Movie commands", add_completion=False)
app.add_typer(people_app, name="people")
app.add_typer(movies_app, name="movies")


def _emit(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=True))


def _fail(message: str, kind: str | None = None) -> NoReturn:
    payload = {"error": message}
    if kind:
        payload["kind"] = kind
    _emit(payload)
    raise typer.Exit(code=1)


def _finish(result: CheckResult, payload: dict[str, Any]) -> None:
    if not result.ok:
        _fail(result.message, str(result.kind))
    _emit(payload)


def _genre_code(value: str) -> Any:
    """Map a genre name or code from the command line to a slot value."""
    text = value.strip()
    if text.lower() in ("", "none"):
        return ""
    for genre in MovieGenre:
        if text.replace("_", "").lower() == genre.name.replace("_", "").lower():
            return int(genre)
    return text


@asynccontextmanager
async def _open_store(ctx: typer.Context) -> AsyncIterator[CatalogStore]:
    engine = build_engine(ctx.obj["database_url"], echo=ctx.obj["echo"])
    try:
        await init_db(engine)
        yield CatalogStore(build_session_factory(engine))
    finally:
        await engine.dispose()


def _run(ctx: typer.Context, operation: Callable[[Catalog], T], save: bool = True) -> T:
    """Load the catalog, apply ``operation`` and save the catalog back."""

    async def runner() -> T:
        async with _open_store(ctx) as store:
            catalog = Catalog()
            await catalog.load(store)
            result = operation(catalog)
            if save and not await catalog.save(store):
                _fail("The catalog could not be saved")
            return result

    return asyncio.run(runner())


@app.callback()
def main(
    ctx: typer.Context,
    database_url: str | None = typer.Option(
        None, "--database-url", help="Database URL (defaults to DATABASE_URL)"
    ),
) -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    for warning in settings.validate_runtime_config():
        logger.warning("  - %s", warning)
    ctx.obj = {"database_url": database_url or settings.database_url, "echo": settings.debug}


@app.command("version")
def version() -> None:
    """Show the version."""
    _emit({"version": __version__})


@app.command("init-db")
def init_database(ctx: typer.Context) -> None:
    """Create the catalog tables."""

    async def runner() -> None:
        async with _open_store(ctx):
            pass

    asyncio.run(runner())
    _emit({"status": "ok"})


@app.command("seed")
def seed(ctx: typer.Context) -> None:
    """Replace the catalog with the sample people and movies."""

    def operation(catalog: Catalog) -> dict[str, int]:
        generate_test_data(catalog)
        return {"people": len(catalog.people), "movies": len(catalog.movies)}

    _emit(_run(ctx, operation))


@app.command("clear")
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete the entire catalog."""
    if not yes:
        typer.confirm("Do you really want to delete the entire catalog?", abort=True)

    async def runner() -> None:
        async with _open_store(ctx) as store:
            await clear_data(Catalog(), store)

    asyncio.run(runner())
    _emit({"status": "cleared"})


@people_app.command("list")
def list_people(ctx: typer.Context) -> None:
    """List all people with their inferred roles."""
    _emit(_run(ctx, lambda catalog: list(catalog.people.to_records().values()), save=False))


@people_app.command("add")
def add_person(
    ctx: typer.Context,
    person_id: int = typer.Option(..., "--id", help="Person ID"),
    name: str = typer.Option(..., "--name", help="Name"),
) -> None:
    """Add a person."""
    result = _run(ctx, lambda catalog: catalog.people.add({"person_id": person_id, "name": name}))
    _finish(result, {"status": "created", "personId": person_id})


@people_app.command("update")
def update_person(
    ctx: typer.Context,
    person_id: int = typer.Option(..., "--id", help="Person ID"),
    name: str | None = typer.Option(None, "--name", help="New name"),
) -> None:
    """Change a person's name."""
    result = _run(
        ctx, lambda catalog: catalog.people.update({"person_id": person_id, "name": name})
    )
    _finish(result, {"status": "updated", "personId": person_id})


@people_app.command("delete")
def delete_person(
    ctx: typer.Context,
    person_id: int = typer.Option(..., "--id", help="Person ID"),
) -> None:
    """Delete a person unless they direct a movie or are the subject of one."""
    if not _run(ctx, lambda catalog: catalog.people.destroy(person_id)):
        _fail(f"Person {person_id} could not be deleted")
    _emit({"status": "deleted", "personId": person_id})


@movies_app.command("list")
def list_movies(ctx: typer.Context) -> None:
    """List all movies."""
    _emit(_run(ctx, lambda catalog: list(catalog.movies.to_records().values()), save=False))


@movies_app.command("show")
def show_movie(
    ctx: typer.Context,
    movie_id: int = typer.Option(..., "--id", help="Movie ID"),
) -> None:
    """Show one movie."""
    try:
        record = _run(
            ctx, lambda catalog: catalog.get_movie(movie_id).to_record().to_dict(), save=False
        )
    except NotFoundError as e:
        _fail(str(e))
    _emit(record)


@movies_app.command("add")
def add_movie(
    ctx: typer.Context,
    movie_id: int = typer.Option(..., "--id", help="Movie ID"),
    title: str = typer.Option(..., "--title", help="Title"),
    release_date: str = typer.Option(..., "--release-date", help="Release date (YYYY-MM-DD)"),
    director: str | None = typer.Option(None, "--director", help="Director person ID"),
    actors: list[str] | None = typer.Option(None, "--actor", help="Actor person ID (repeatable)"),
    genre: str | None = typer.Option(None, "--genre", help="Biography or TvSeriesEpisode"),
    about: str | None = typer.Option(None, "--about", help="Subject person ID of a biography"),
    episode_title: str | None = typer.Option(None, "--episode-title", help="Episode title"),
    episode_no: str | None = typer.Option(None, "--episode-no", help="Episode number"),
) -> None:
    """Add a movie."""
    slots = {
        "movie_id": movie_id,
        "title": title,
        "release_date": release_date,
        "director_id": director,
        "actors": actors or [],
        "movie_genre": _genre_code(genre) if genre is not None else None,
        "about": about,
        "episode_title": episode_title,
        "episode_no": episode_no,
    }
    result = _run(ctx, lambda catalog: catalog.movies.add(slots))
    _finish(result, {"status": "created", "movieId": movie_id})


@movies_app.command("update")
def update_movie(
    ctx: typer.Context,
    movie_id: int = typer.Option(..., "--id", help="Movie ID"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    release_date: str | None = typer.Option(None, "--release-date", help="New release date"),
    add_actors: list[str] | None = typer.Option(None, "--add-actor", help="Actor to add"),
    remove_actors: list[str] | None = typer.Option(None, "--remove-actor", help="Actor to remove"),
    director: str | None = typer.Option(None, "--director", help="Director ID, empty to unset"),
    genre: str | None = typer.Option(None, "--genre", help="New genre, 'none' to unset"),
    about: str | None = typer.Option(None, "--about", help="Subject person ID of a biography"),
    episode_title: str | None = typer.Option(None, "--episode-title", help="Episode title"),
    episode_no: str | None = typer.Option(None, "--episode-no", help="Episode number"),
) -> None:
    """Change a movie; either every change applies or none does."""
    slots: dict[str, Any] = {
        "movie_id": movie_id,
        "title": title,
        "release_date": release_date,
        "actor_ids_to_add": add_actors,
        "actor_ids_to_remove": remove_actors,
        "about": about,
        "episode_title": episode_title,
        "episode_no": episode_no,
    }
    if director is not None:
        slots["director_id"] = director
    if genre is not None:
        slots["movie_genre"] = _genre_code(genre)

    result = _run(ctx, lambda catalog: catalog.movies.update(slots))
    _finish(result, {"status": "updated", "movieId": movie_id})


@movies_app.command("delete")
def delete_movie(
    ctx: typer.Context,
    movie_id: int = typer.Option(..., "--id", help="Movie ID"),
) -> None:
    """Delete a movie."""
    if not _run(ctx, lambda catalog: catalog.movies.destroy(movie_id)):
        _fail(f"Movie {movie_id} could not be deleted")
    _emit({"status": "deleted", "movieId": movie_id})
