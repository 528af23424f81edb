"""Person ORM model."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from movie_catalog.database import Base


def utc_now() -> datetime:
    return datetime.now(UTC)


class PersonRow(Base):
    """Stored person record."""

    __tablename__ = "people"

    person_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255))
    # Informational: roles are recomputed from movies on load
    role: Mapped[int | None] = mapped_column(nullable=True)
    saved_at: Mapped[datetime] = mapped_column(default=utc_now)
