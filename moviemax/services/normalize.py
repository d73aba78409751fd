"""Map OMDb records onto the application's movie shapes."""

from __future__ import annotations

import math

from moviemax.services.models import (
    BACKDROP_PLACEHOLDER,
    DEFAULT_GENRE,
    NO_DESCRIPTION,
    POSTER_PLACEHOLDER,
    UNKNOWN_DIRECTOR,
    UNKNOWN_DURATION,
    MovieDetail,
    MovieSummary,
)
from moviemax.services.omdb import NOT_AVAILABLE, OMDbDetailRecord, OMDbSearchRecord

MAX_CAST = 4


def _or_default(value: str, default: str) -> str:
    return default if value == NOT_AVAILABLE else value


def _parse_rating(raw: str) -> float:
    if raw == NOT_AVAILABLE:
        return 0.0
    try:
        rating = float(raw)
    except ValueError:
        return 0.0
    return rating if math.isfinite(rating) else 0.0


def _first_genre(raw: str) -> str:
    if raw == NOT_AVAILABLE:
        return DEFAULT_GENRE
    return raw.split(",")[0].strip() or DEFAULT_GENRE


def _split_cast(raw: str) -> tuple[str, ...]:
    if raw == NOT_AVAILABLE:
        return ()
    names = [name for name in raw.split(", ") if name]
    return tuple(names[:MAX_CAST])


def to_movie_summary(record: OMDbSearchRecord) -> MovieSummary:
    # The search endpoint carries neither rating nor genre.
    return MovieSummary(
        id=record.imdb_id,
        title=record.title,
        year=record.year,
        poster=_or_default(record.poster, POSTER_PLACEHOLDER),
        rating=0.0,
        genre=DEFAULT_GENRE,
    )


def to_movie_detail(record: OMDbDetailRecord) -> MovieDetail:
    plot = _or_default(record.plot, NO_DESCRIPTION)
    return MovieDetail(
        id=record.imdb_id,
        title=record.title,
        year=record.year,
        poster=_or_default(record.poster, POSTER_PLACEHOLDER),
        rating=_parse_rating(record.imdb_rating),
        genre=_first_genre(record.genre),
        description=plot,
        long_description=plot,
        backdrop=_or_default(record.poster, BACKDROP_PLACEHOLDER),
        duration=_or_default(record.runtime, UNKNOWN_DURATION),
        director=_or_default(record.director, UNKNOWN_DIRECTOR),
        cast=_split_cast(record.actors),
    )
