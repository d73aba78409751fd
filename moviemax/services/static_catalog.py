"""Embedded movie catalog used when no metadata API is configured."""

from __future__ import annotations

from moviemax.services.cache import MovieCache
from moviemax.services.models import MovieDetail, MovieSummary, unique_by_id

_UNSPLASH = "https://images.unsplash.com/photo-{photo}?crop=entropy&cs=tinysrgb&fit=max&fm=jpg&ixid={ixid}&ixlib=rb-4.1.0&q=80&w=1080"
ACTION_POSTER = _UNSPLASH.format(
    photo="1739891251370-05b62a54697b",
    ixid="M3w3Nzg4Nzd8MHwxfHNlYXJjaHwxfHxtb3ZpZSUyMHBvc3RlciUyMGFjdGlvbnxlbnwxfHx8fDE3NTk1MzIxMjl8MA",
)
COMEDY_POSTER = _UNSPLASH.format(
    photo="1572700432881-42c60fe8c869",
    ixid="M3w3Nzg4Nzd8MHwxfHNlYXJjaHwxfHxtb3ZpZSUyMHBvc3RlciUyMGNvbWVkeXxlbnwxfHx8fDE3NTk0ODA4MTR8MA",
)
DRAMA_POSTER = _UNSPLASH.format(
    photo="1572700432881-42c60fe8c869",
    ixid="M3w3Nzg4Nzd8MHwxfHNlYXJjaHwxfHxtb3ZpZSUyMHBvc3RlciUyMGRyYW1hfGVufDF8fHx8MTc1OTQ4Mjc2NHww",
)
THEATER_BACKDROP = _UNSPLASH.format(
    photo="1524712245354-2c4e5e7121c0",
    ixid="M3w3Nzg4Nzd8MHwxfHNlYXJjaHwxfHxjaW5lbWElMjBtb3ZpZSUyMHRoZWF0ZXJ8ZW58MXx8fHwxNzU5NDg3MjgxfDA",
)

ALL_MOVIES: list[MovieSummary] = [
    MovieSummary(id="1", title="The Epic Adventure", year="2024", poster=ACTION_POSTER, rating=8.5, genre="Action"),
    MovieSummary(id="2", title="Comedy Central", year="2024", poster=COMEDY_POSTER, rating=7.8, genre="Comedy"),
    MovieSummary(id="3", title="Drama Heights", year="2023", poster=DRAMA_POSTER, rating=9.1, genre="Drama"),
    MovieSummary(id="4", title="Space Odyssey", year="2024", poster=ACTION_POSTER, rating=8.2, genre="Sci-Fi"),
    MovieSummary(id="5", title="Romance Boulevard", year="2023", poster=COMEDY_POSTER, rating=7.5, genre="Romance"),
    MovieSummary(id="6", title="Horror Night", year="2024", poster=DRAMA_POSTER, rating=7.2, genre="Horror"),
    MovieSummary(id="7", title="Thunder Strike", year="2024", poster=ACTION_POSTER, rating=8.0, genre="Action"),
    MovieSummary(id="8", title="Fast Lane", year="2023", poster=ACTION_POSTER, rating=7.7, genre="Action"),
    MovieSummary(id="9", title="Combat Zone", year="2024", poster=ACTION_POSTER, rating=8.3, genre="Action"),
    MovieSummary(id="10", title="Hero Rising", year="2023", poster=ACTION_POSTER, rating=7.9, genre="Action"),
    MovieSummary(id="11", title="Battle Royale", year="2024", poster=ACTION_POSTER, rating=8.1, genre="Action"),
    MovieSummary(id="12", title="Laugh Out Loud", year="2024", poster=COMEDY_POSTER, rating=8.2, genre="Comedy"),
    MovieSummary(id="13", title="Funny Business", year="2023", poster=COMEDY_POSTER, rating=7.6, genre="Comedy"),
    MovieSummary(id="14", title="Comic Relief", year="2024", poster=COMEDY_POSTER, rating=7.9, genre="Comedy"),
    MovieSummary(id="15", title="Jokes Apart", year="2023", poster=COMEDY_POSTER, rating=8.0, genre="Comedy"),
]

FEATURED_MOVIE = MovieDetail(
    id="1",
    title="The Epic Adventure",
    year="2024",
    poster=ACTION_POSTER,
    rating=8.5,
    genre="Action",
    description=(
        "An incredible journey through uncharted territories that will keep you on the edge of your seat. "
        "Follow our heroes as they discover new worlds and face impossible challenges."
    ),
    long_description=(
        "In this epic tale of courage and discovery, our protagonists embark on a quest that will test "
        "their limits and redefine their understanding of reality. With stunning visuals and heart-pounding "
        "action sequences, this film delivers an unforgettable cinematic experience that combines "
        "cutting-edge technology with timeless storytelling."
    ),
    backdrop=THEATER_BACKDROP,
    duration="2h 15m",
    director="John Anderson",
    cast=("Emma Stone", "Ryan Gosling", "Michael Shannon", "John Goodman"),
)

MOVIE_DETAILS: dict[str, MovieDetail] = {FEATURED_MOVIE.id: FEATURED_MOVIE}


def _matches(movie: MovieSummary, query: str) -> bool:
    needle = query.lower()
    return needle in movie.title.lower() or needle in movie.genre.lower() or query in movie.year


class StaticCatalog:
    """Same operations as the OMDb catalog, answered from the embedded data."""

    def __init__(self, *, cache: MovieCache | None = None) -> None:
        self.cache = cache if cache is not None else MovieCache()

    async def fetch_by_category(self, seed_term: str, limit: int | None = None) -> list[MovieSummary]:
        results = [movie for movie in ALL_MOVIES if _matches(movie, seed_term)]
        return results if limit is None else results[:limit]

    async def search(self, query: str, limit: int | None = None) -> list[MovieSummary]:
        if not query.strip():
            return []
        return unique_by_id(await self.fetch_by_category(query, limit))

    async def fetch_detail(self, movie_id: str) -> MovieDetail | None:
        cached = self.cache.get_detail(movie_id)
        if cached is not None:
            return cached
        detail = MOVIE_DETAILS.get(movie_id)
        if detail is not None:
            self.cache.store_detail(movie_id, detail)
        return detail

    async def initialize_categories(self) -> MovieCache:
        if self.cache.is_initialized:
            return self.cache
        self.cache.set_categories(
            ALL_MOVIES[:6],
            [movie for movie in ALL_MOVIES if movie.genre == "Action"],
            [movie for movie in ALL_MOVIES if movie.genre == "Comedy"],
        )
        self.cache.set_featured(FEATURED_MOVIE)
        return self.cache

    async def similar_movies(self, movie: MovieDetail, limit: int = 6) -> list[MovieSummary]:
        results = await self.fetch_by_category(movie.genre.lower(), limit)
        return [candidate for candidate in results if candidate.id != movie.id]
