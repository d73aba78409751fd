"""Shared dataclasses for service layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, TypeVar

DEFAULT_GENRE = "Movie"
NO_DESCRIPTION = "No description available."
UNKNOWN_DIRECTOR = "Unknown"
UNKNOWN_DURATION = "N/A"
POSTER_PLACEHOLDER = "https://via.placeholder.com/300x450?text=No+Poster"
BACKDROP_PLACEHOLDER = "https://via.placeholder.com/1920x1080?text=No+Backdrop"


@dataclass(frozen=True, slots=True)
class MovieSummary:
    """Card-level movie data shown in rows, grids and search results."""

    id: str
    title: str
    year: str
    poster: str = POSTER_PLACEHOLDER
    rating: float = 0.0
    genre: str = DEFAULT_GENRE


@dataclass(frozen=True, slots=True)
class MovieDetail(MovieSummary):
    """Full movie data used by the detail page and the featured banner."""

    description: str = NO_DESCRIPTION
    long_description: str = NO_DESCRIPTION
    backdrop: str = BACKDROP_PLACEHOLDER
    duration: str = UNKNOWN_DURATION
    director: str = UNKNOWN_DIRECTOR
    cast: tuple[str, ...] = ()


M = TypeVar("M", bound=MovieSummary)


def unique_by_id(movies: Iterable[M]) -> list[M]:
    """Drop repeated identifiers, keeping the first occurrence and the order."""

    seen: set[str] = set()
    unique: list[M] = []
    for movie in movies:
        if movie.id in seen:
            continue
        seen.add(movie.id)
        unique.append(movie)
    return unique
