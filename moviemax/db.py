"""Database session management and repositories."""

from __future__ import annotations

from typing import Iterator

from sqlalchemy import create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from moviemax.core.config import get_settings
from moviemax.models import Base, Favorite


def create_db_engine(url: str) -> Engine:
    """Build an engine; SQLite connections may be shared across threadpool workers."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, future=True, connect_args=connect_args)


engine = create_db_engine(get_settings().database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_models(bind: Engine | None = None) -> None:
    """Create tables if they do not exist (handy for local dev)."""
    Base.metadata.create_all(bind=bind or engine)


def get_session() -> Iterator[Session]:
    """FastAPI-friendly dependency that manages commits/rollbacks."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class FavoriteRepository:
    """Favorite movie ids, kept in the order they were added."""

    def list_ids(self, session: Session) -> list[str]:
        query = select(Favorite.movie_id).order_by(Favorite.id)
        return list(session.execute(query).scalars())

    def contains(self, session: Session, movie_id: str) -> bool:
        query = select(Favorite.id).where(Favorite.movie_id == movie_id)
        return session.execute(query).first() is not None

    def toggle(self, session: Session, movie_id: str) -> bool:
        """Add the movie if absent, remove it otherwise; return the new membership."""

        if self.contains(session, movie_id):
            session.execute(delete(Favorite).where(Favorite.movie_id == movie_id))
            session.flush()
            return False
        session.add(Favorite(movie_id=movie_id))
        session.flush()
        return True
