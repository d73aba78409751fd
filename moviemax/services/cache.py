"""In-memory movie cache owned by a catalog instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain

from moviemax.services.models import MovieDetail, MovieSummary, unique_by_id


@dataclass
class MovieCache:
    """Category rows, the merged feed, fetched details and the featured movie.

    Details are never evicted and the featured movie is never cleared once
    set. The cache counts as initialized as soon as ``trending`` holds
    anything.
    """

    trending: list[MovieSummary] = field(default_factory=list)
    action: list[MovieSummary] = field(default_factory=list)
    comedy: list[MovieSummary] = field(default_factory=list)
    all_movies: list[MovieSummary] = field(default_factory=list)
    details: dict[str, MovieDetail] = field(default_factory=dict)
    featured: MovieDetail | None = None

    @property
    def is_initialized(self) -> bool:
        return bool(self.trending)

    def set_categories(
        self,
        trending: list[MovieSummary],
        action: list[MovieSummary],
        comedy: list[MovieSummary],
    ) -> None:
        self.trending = list(trending)
        self.action = list(action)
        self.comedy = list(comedy)
        self.all_movies = unique_by_id(chain(self.trending, self.action, self.comedy))

    def get_detail(self, movie_id: str) -> MovieDetail | None:
        return self.details.get(movie_id)

    def store_detail(self, movie_id: str, detail: MovieDetail) -> None:
        self.details[movie_id] = detail

    def set_featured(self, detail: MovieDetail | None) -> None:
        if detail is not None:
            self.featured = detail
