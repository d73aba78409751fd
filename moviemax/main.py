"""FastAPI entrypoint wiring the movie catalog, search sessions and favorites."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from sqlalchemy.orm import Session

from moviemax.core.config import get_settings
from moviemax.db import FavoriteRepository, get_session, init_models
from moviemax.services.catalog import Catalog, build_catalog, load_favorites
from moviemax.services.models import MovieDetail, MovieSummary
from moviemax.services.search import SearchSession, SearchState


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Ensure database tables before serving."""

    init_models()
    yield


app = FastAPI(title="MovieMax", lifespan=lifespan)
repo = FavoriteRepository()


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Return the process-wide catalog (and therefore its cache)."""

    return build_catalog()


class HomeResponse(BaseModel):
    trending: list[MovieSummary]
    action: list[MovieSummary]
    comedy: list[MovieSummary]
    featured: MovieDetail | None = None


class MovieDetailResponse(BaseModel):
    movie: MovieDetail
    similar: list[MovieSummary]


class FavoritesResponse(BaseModel):
    ids: list[str]
    movies: list[MovieDetail]


class FavoriteToggleResponse(BaseModel):
    movie_id: str
    favorite: bool


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "source": get_settings().source}


@app.get("/movies/home", response_model=HomeResponse)
async def home_feed(catalog: Catalog = Depends(get_catalog)) -> HomeResponse:
    """Category rows plus the featured banner; loads them on first call."""

    cache = await catalog.initialize_categories()
    return HomeResponse(
        trending=cache.trending,
        action=cache.action,
        comedy=cache.comedy,
        featured=cache.featured,
    )


@app.get("/movies/search", response_model=list[MovieSummary])
async def search_movies(
    q: str = Query(default="", description="Title, genre or year to look for"),
    catalog: Catalog = Depends(get_catalog),
) -> list[MovieSummary]:
    if not q.strip():
        return []
    return await catalog.search(q.strip())


@app.get("/movies/{movie_id}", response_model=MovieDetailResponse)
async def movie_detail(movie_id: str, catalog: Catalog = Depends(get_catalog)) -> MovieDetailResponse:
    movie = await catalog.fetch_detail(movie_id)
    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    similar = await catalog.similar_movies(movie)
    return MovieDetailResponse(movie=movie, similar=similar)


@app.get("/favorites", response_model=FavoritesResponse)
async def list_favorites(
    session: Session = Depends(get_session),
    catalog: Catalog = Depends(get_catalog),
) -> FavoritesResponse:
    ids = repo.list_ids(session)
    movies = await load_favorites(catalog, ids)
    return FavoritesResponse(ids=ids, movies=movies)


@app.post("/favorites/{movie_id}", response_model=FavoriteToggleResponse)
def toggle_favorite(movie_id: str, session: Session = Depends(get_session)) -> FavoriteToggleResponse:
    favorite = repo.toggle(session, movie_id)
    logger.info("Favorite %s %s", movie_id, "added" if favorite else "removed")
    return FavoriteToggleResponse(movie_id=movie_id, favorite=favorite)


@app.websocket("/search/ws")
async def search_socket(websocket: WebSocket, catalog: Catalog = Depends(get_catalog)) -> None:
    """Every text frame replaces the query; settled results are pushed back."""

    await websocket.accept()

    async def publish(query: str, results: list[MovieSummary]) -> None:
        await websocket.send_json(_search_event(query, SearchState.SETTLED, results))

    session = SearchSession(catalog.search, on_settled=publish)
    try:
        while True:
            query = await websocket.receive_text()
            if session.set_query(query) is SearchState.IDLE:
                await websocket.send_json(_search_event(query, SearchState.IDLE, []))
    except WebSocketDisconnect:
        logger.debug("Search socket closed")
    finally:
        session.close()


def _search_event(query: str, state: SearchState, results: list[MovieSummary]) -> dict:
    return {"query": query, "state": state.value, "results": jsonable_encoder(results)}
