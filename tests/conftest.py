from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from moviemax.core.config import get_settings
from moviemax.services.omdb import OMDbClient


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep a developer's .env or shell from leaking into tests
    monkeypatch.setenv("OMDB_API_KEY", "test-key")
    monkeypatch.setenv("MOVIEMAX_SOURCE", "omdb")
    monkeypatch.setenv("SEARCH_DEBOUNCE_SECONDS", "0.05")
    monkeypatch.delenv("OMDB_TIMEOUT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def search_record(imdb_id: str, title: str | None = None, **overrides: Any) -> dict[str, Any]:
    record = {
        "Title": title or f"Movie {imdb_id}",
        "Year": "2012",
        "imdbID": imdb_id,
        "Type": "movie",
        "Poster": f"https://m.media-amazon.com/images/{imdb_id}.jpg",
    }
    record.update(overrides)
    return record


def detail_record(imdb_id: str, **overrides: Any) -> dict[str, Any]:
    record = {
        "Title": "The Avengers",
        "Year": "2012",
        "Rated": "PG-13",
        "Released": "04 May 2012",
        "Runtime": "143 min",
        "Genre": "Action, Sci-Fi",
        "Director": "Joss Whedon",
        "Writer": "Joss Whedon, Zak Penn",
        "Actors": "Robert Downey Jr., Chris Evans, Scarlett Johansson, Mark Ruffalo, Chris Hemsworth",
        "Plot": "Earth's mightiest heroes must come together.",
        "Language": "English, Russian",
        "Country": "United States",
        "Awards": "Nominated for 1 Oscar.",
        "Poster": f"https://m.media-amazon.com/images/{imdb_id}.jpg",
        "Ratings": [{"Source": "Internet Movie Database", "Value": "8.0/10"}],
        "Metascore": "69",
        "imdbRating": "8.0",
        "imdbVotes": "1,456,000",
        "imdbID": imdb_id,
        "Type": "movie",
        "DVD": "N/A",
        "BoxOffice": "$623,357,910",
        "Production": "N/A",
        "Website": "N/A",
        "Response": "True",
    }
    record.update(overrides)
    return record


class FakeOMDb:
    """In-process stand-in for the OMDb endpoint."""

    def __init__(self) -> None:
        self.searches: dict[str, list[dict[str, Any]]] = {}
        self.details: dict[str, dict[str, Any]] = {}
        self.broken_terms: set[str] = set()
        self.requests: list[dict[str, str]] = []
        self.latency = 0.0

    def handler(self, request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        self.requests.append(params)
        if "s" in params:
            term = params["s"]
            if term in self.broken_terms:
                raise httpx.ConnectError("connection refused", request=request)
            results = self.searches.get(term)
            if not results:
                return httpx.Response(200, json={"Response": "False", "Error": "Movie not found!"})
            return httpx.Response(
                200,
                json={"Search": results, "totalResults": str(len(results)), "Response": "True"},
            )
        detail = self.details.get(params.get("i", ""))
        if detail is None:
            return httpx.Response(200, json={"Response": "False", "Error": "Incorrect IMDb ID."})
        return httpx.Response(200, json=detail)

    def add_search(self, term: str, ids: list[str]) -> None:
        self.searches[term] = [search_record(imdb_id) for imdb_id in ids]

    def add_detail(self, imdb_id: str, **overrides: Any) -> None:
        self.details[imdb_id] = detail_record(imdb_id, **overrides)

    async def async_handler(self, request: httpx.Request) -> httpx.Response:
        # yield to the loop like a real socket would
        await asyncio.sleep(self.latency)
        return self.handler(request)

    def client(self) -> OMDbClient:
        return OMDbClient(api_key="test-key", transport=httpx.MockTransport(self.async_handler))

    def search_requests(self) -> list[str]:
        return [params["s"] for params in self.requests if "s" in params]

    def lookup_requests(self) -> list[str]:
        return [params["i"] for params in self.requests if "i" in params]


@pytest.fixture
def omdb() -> FakeOMDb:
    return FakeOMDb()


@pytest.fixture
def make_search_record():
    return search_record


@pytest.fixture
def make_detail_record():
    return detail_record
