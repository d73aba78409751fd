"""SQLAlchemy ORM models.

This module defines the "favorites" table which stores the movies a user
marked from any card or detail page. Keeping it isolated here makes future
Alembic migrations simpler.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Favorite(Base):
    """One favorite movie, referenced by its catalog identifier."""

    __tablename__ = "favorites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Favorite(id={self.id}, movie_id={self.movie_id})"
