"""Movie and movie actor ORM models."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_catalog.database import Base
from movie_catalog.models.person import utc_now


class MovieRow(Base):
    """Stored movie record.

    Person references are plain IDs; referential integrity is checked by the
    catalog when records are loaded, not by the database.
    """

    __tablename__ = "movies"

    movie_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(120))
    release_date: Mapped[date] = mapped_column(Date)
    director_id: Mapped[int | None] = mapped_column(nullable=True)
    movie_genre: Mapped[int | None] = mapped_column(nullable=True)
    about: Mapped[int | None] = mapped_column(nullable=True)
    episode_title: Mapped[str | None] = mapped_column(String(120), nullable=True)
    episode_no: Mapped[int | None] = mapped_column(nullable=True)
    saved_at: Mapped[datetime] = mapped_column(default=utc_now)

    # Relationships
    actors: Mapped[list[MovieActorRow]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
        order_by="MovieActorRow.position",
    )


class MovieActorRow(Base):
    """Actor reference of a stored movie."""

    __tablename__ = "movie_actors"

    id: Mapped[int] = mapped_column(primary_key=True)
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.movie_id", ondelete="CASCADE"), index=True
    )
    person_id: Mapped[int] = mapped_column(index=True)
    position: Mapped[int] = mapped_column(default=0)  # Insertion order in the actor set

    # Relationships
    movie: Mapped[MovieRow] = relationship(back_populates="actors")
