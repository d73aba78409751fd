"""Movie catalog backed by OMDb with an in-memory cache in front of it."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Union

from pydantic import ValidationError

from moviemax.core.config import get_settings
from moviemax.services.cache import MovieCache
from moviemax.services.models import MovieDetail, MovieSummary, unique_by_id
from moviemax.services.normalize import to_movie_detail, to_movie_summary
from moviemax.services.omdb import (
    OMDbClient,
    OMDbDetailRecord,
    OMDbError,
    OMDbSearchRecord,
    is_success,
)
from moviemax.services.static_catalog import StaticCatalog


logger = logging.getLogger(__name__)

# Search terms standing in for the home feed rows.
SEED_TERMS = {
    "trending": "avengers",
    "action": "batman",
    "comedy": "hangover",
}
SIMILAR_LIMIT = 6


class OMDbCatalog:
    """Category rows, search and detail lookups served from OMDb.

    Every failure (transport, bad body, ``Response: "False"``, malformed
    record) is logged and turned into an empty list or ``None``.
    """

    def __init__(
        self,
        *,
        client: OMDbClient | None = None,
        cache: MovieCache | None = None,
        category_limit: int | None = None,
        search_limit: int | None = None,
    ) -> None:
        settings = get_settings()
        self.client = client or OMDbClient()
        self.cache = cache if cache is not None else MovieCache()
        self.category_limit = category_limit or settings.category_limit
        self.search_limit = search_limit or settings.search_limit

    async def fetch_by_category(self, seed_term: str, limit: int | None = None) -> list[MovieSummary]:
        limit = self.category_limit if limit is None else limit
        try:
            payload = await self.client.search(seed_term)
            if not is_success(payload):
                logger.info("OMDb search for %r returned nothing: %s", seed_term, payload.get("Error"))
                return []
            results = payload.get("Search") or []
            if not isinstance(results, list):
                raise OMDbError(f"unexpected Search field: {type(results).__name__}")
        except OMDbError as exc:
            logger.warning("Error fetching movies for %r: %s", seed_term, exc)
            return []
        movies: list[MovieSummary] = []
        for item in results[:limit]:
            try:
                movies.append(to_movie_summary(OMDbSearchRecord.model_validate(item)))
            except ValidationError as exc:
                logger.warning("Skipping malformed search record for %r: %s", seed_term, exc)
        return movies

    async def search(self, query: str, limit: int | None = None) -> list[MovieSummary]:
        """Free-text search; results carry each identifier once."""

        results = await self.fetch_by_category(query, self.search_limit if limit is None else limit)
        return unique_by_id(results)

    async def fetch_detail(self, movie_id: str) -> MovieDetail | None:
        cached = self.cache.get_detail(movie_id)
        if cached is not None:
            return cached
        # Concurrent misses for one id each hit the network; last write wins.
        try:
            payload = await self.client.lookup(movie_id)
            if not is_success(payload):
                logger.info("OMDb lookup for %s failed: %s", movie_id, payload.get("Error"))
                return None
            record = OMDbDetailRecord.model_validate(payload)
        except (OMDbError, ValidationError) as exc:
            logger.warning("Error fetching movie details for %s: %s", movie_id, exc)
            return None
        detail = to_movie_detail(record)
        self.cache.store_detail(movie_id, detail)
        return detail

    async def initialize_categories(self) -> MovieCache:
        if self.cache.is_initialized:
            return self.cache

        trending, action, comedy = await asyncio.gather(
            self.fetch_by_category(SEED_TERMS["trending"]),
            self.fetch_by_category(SEED_TERMS["action"]),
            self.fetch_by_category(SEED_TERMS["comedy"]),
        )
        self.cache.set_categories(trending, action, comedy)
        logger.info(
            "Loaded home rows: %d trending, %d action, %d comedy (%d unique)",
            len(trending),
            len(action),
            len(comedy),
            len(self.cache.all_movies),
        )

        if trending:
            self.cache.set_featured(await self.fetch_detail(trending[0].id))
        return self.cache

    async def similar_movies(self, movie: MovieDetail, limit: int = SIMILAR_LIMIT) -> list[MovieSummary]:
        results = await self.fetch_by_category(movie.genre.lower(), limit)
        return [candidate for candidate in results if candidate.id != movie.id]


Catalog = Union[OMDbCatalog, StaticCatalog]


async def load_favorites(catalog: Catalog, movie_ids: Iterable[str]) -> list[MovieDetail]:
    """Resolve favorite ids one by one, skipping the ones that cannot be found."""

    movies: list[MovieDetail] = []
    for movie_id in movie_ids:
        detail = await catalog.fetch_detail(movie_id)
        if detail is not None:
            movies.append(detail)
    return movies


def build_catalog(*, client: OMDbClient | None = None) -> Catalog:
    """Pick the data source named by ``MOVIEMAX_SOURCE``."""

    settings = get_settings()
    if settings.source == "static":
        logger.info("Serving the embedded static catalog")
        return StaticCatalog()
    return OMDbCatalog(client=client)
