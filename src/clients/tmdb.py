import logging
from datetime import date

import httpx
from pydantic import BaseModel, field_validator

from config import settings
from constants.tmdb import DETAIL_PATH, GENRES_PATH, POPULAR_PATH, TOP_RATED_PATH

logger = logging.getLogger(__name__)


class TMDbGenre(BaseModel):
    id: int
    name: str


class MovieSummary(BaseModel):
    id: int
    title: str = ""
    vote_average: float = 0.0
    vote_count: int = 0
    popularity: float = 0.0


class MovieDetail(MovieSummary):
    overview: str | None = None
    release_date: date | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    original_language: str | None = None
    original_title: str | None = None
    adult: bool = False
    runtime: int | None = None
    budget: int = 0
    revenue: int = 0
    tagline: str | None = None
    genres: list[TMDbGenre] = []

    @field_validator("release_date", mode="before")
    @classmethod
    def _blank_release_date(cls, value):
        # TMDb sends "" for unknown dates
        return value or None

    @field_validator("budget", "revenue", mode="before")
    @classmethod
    def _null_amount(cls, value):
        return value or 0


class MovieListing(BaseModel):
    page: int = 1
    results: list[MovieSummary] = []
    total_pages: int | None = None


class GenreListing(BaseModel):
    genres: list[TMDbGenre] = []


class TMDbClient:
    """Async client for the TMDb v3 endpoints the catalog sync relies on."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        language: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or settings.TMDB_API_KEY
        self.base_url = base_url or settings.TMDB_BASE_URL
        self.language = language or settings.TMDB_LANGUAGE
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.TMDB_TIMEOUT,
            transport=transport or httpx.AsyncHTTPTransport(retries=settings.TMDB_RETRIES),
        )

    async def __aenter__(self) -> "TMDbClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get(self, path: str, **params) -> dict:
        params = {"api_key": self.api_key, "language": self.language, **params}
        response = await self.client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def list_popular(self, page: int = 1) -> MovieListing:
        try:
            data = await self._get(POPULAR_PATH, page=page)
        except httpx.HTTPError as e:
            logger.error("Failed to fetch popular movies (page %d): %s", page, e)
            raise
        return MovieListing.model_validate(data)

    async def list_top_rated(self, page: int = 1) -> MovieListing:
        try:
            data = await self._get(TOP_RATED_PATH, page=page)
        except httpx.HTTPError as e:
            logger.error("Failed to fetch top rated movies (page %d): %s", page, e)
            raise
        return MovieListing.model_validate(data)

    async def get_detail(self, tmdb_id: int) -> MovieDetail:
        try:
            data = await self._get(DETAIL_PATH.format(tmdb_id=tmdb_id))
        except httpx.HTTPError as e:
            logger.error("Failed to fetch details for TMDb id %d: %s", tmdb_id, e)
            raise
        return MovieDetail.model_validate(data)

    async def list_genres(self) -> GenreListing:
        try:
            data = await self._get(GENRES_PATH)
        except httpx.HTTPError as e:
            logger.error("Failed to fetch genres: %s", e)
            raise
        return GenreListing.model_validate(data)
