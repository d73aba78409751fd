"""Thin async wrapper around the OMDb API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from moviemax.core.config import get_settings


logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


class OMDbError(Exception):
    """Raised when OMDb cannot be reached or answers with something other than JSON."""


class _OMDbRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class OMDbSearchRecord(_OMDbRecord):
    """One entry of the ``Search`` array returned for ``?s=`` queries."""

    title: str = Field(alias="Title")
    year: str = Field(default=NOT_AVAILABLE, alias="Year")
    imdb_id: str = Field(alias="imdbID")
    type: str = Field(default="movie", alias="Type")
    poster: str = Field(default=NOT_AVAILABLE, alias="Poster")


class OMDbRating(_OMDbRecord):
    source: str = Field(alias="Source")
    value: str = Field(alias="Value")


class OMDbDetailRecord(_OMDbRecord):
    """Flat record returned for ``?i=`` lookups.

    Missing keys default to the ``N/A`` sentinel so they share the
    per-field defaulting rules applied in the normalizer.
    """

    title: str = Field(alias="Title")
    year: str = Field(default=NOT_AVAILABLE, alias="Year")
    rated: str = Field(default=NOT_AVAILABLE, alias="Rated")
    released: str = Field(default=NOT_AVAILABLE, alias="Released")
    runtime: str = Field(default=NOT_AVAILABLE, alias="Runtime")
    genre: str = Field(default=NOT_AVAILABLE, alias="Genre")
    director: str = Field(default=NOT_AVAILABLE, alias="Director")
    writer: str = Field(default=NOT_AVAILABLE, alias="Writer")
    actors: str = Field(default=NOT_AVAILABLE, alias="Actors")
    plot: str = Field(default=NOT_AVAILABLE, alias="Plot")
    language: str = Field(default=NOT_AVAILABLE, alias="Language")
    country: str = Field(default=NOT_AVAILABLE, alias="Country")
    awards: str = Field(default=NOT_AVAILABLE, alias="Awards")
    poster: str = Field(default=NOT_AVAILABLE, alias="Poster")
    ratings: list[OMDbRating] = Field(default_factory=list, alias="Ratings")
    metascore: str = Field(default=NOT_AVAILABLE, alias="Metascore")
    imdb_rating: str = Field(default=NOT_AVAILABLE, alias="imdbRating")
    imdb_votes: str = Field(default=NOT_AVAILABLE, alias="imdbVotes")
    imdb_id: str = Field(alias="imdbID")
    type: str = Field(default="movie", alias="Type")
    dvd: str = Field(default=NOT_AVAILABLE, alias="DVD")
    box_office: str = Field(default=NOT_AVAILABLE, alias="BoxOffice")
    production: str = Field(default=NOT_AVAILABLE, alias="Production")
    website: str = Field(default=NOT_AVAILABLE, alias="Website")
    response: str = Field(default="True", alias="Response")


def is_success(payload: dict[str, Any]) -> bool:
    """OMDb signals logical failure in the body, not through the status code."""

    return payload.get("Response") == "True"


class OMDbClient:
    """Simple OMDb HTTP client using API key auth.

    No retries and no explicit timeout unless one is configured. A transport
    can be injected to stub the API in tests.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.omdb_api_key
        self.base_url = base_url or settings.omdb_base_url
        self.timeout = timeout if timeout is not None else settings.omdb_timeout
        self._transport = transport

    async def fetch(self, params: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise OMDbError("OMDB_API_KEY is not configured")
        query = {"apikey": self.api_key}
        query.update({k: v for k, v in params.items() if v is not None})
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.base_url, params=query)
        except httpx.HTTPError as exc:
            raise OMDbError(f"OMDb request failed: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise OMDbError(f"OMDb returned a non-JSON body (HTTP {response.status_code})") from exc
        if not isinstance(payload, dict):
            raise OMDbError(f"OMDb returned an unexpected payload: {type(payload).__name__}")
        logger.debug("OMDb payload for %s: %s", params, payload)
        return payload

    async def search(self, term: str) -> dict[str, Any]:
        """Search movies by free-text term."""

        return await self.fetch({"s": term, "type": "movie"})

    async def lookup(self, imdb_id: str) -> dict[str, Any]:
        """Fetch the full record for one identifier."""

        return await self.fetch({"i": imdb_id})
