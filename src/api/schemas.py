from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from constants.catalog import MAX_SCORE, MIN_SCORE
from constants.tmdb import IMAGE_BASE_URL
from models.watchlist import WatchlistType


class APIModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class GenreOut(APIModel):
    id: int
    tmdb_id: int
    name: str


class MovieOut(APIModel):
    id: int
    tmdb_id: int
    title: str
    overview: str | None
    release_date: date | None
    poster_path: str | None
    backdrop_path: str | None
    vote_average: float
    vote_count: int
    popularity: float
    original_language: str | None
    original_title: str | None
    adult: bool
    active: bool
    runtime: int | None
    budget: int
    revenue: int
    tagline: str | None
    genres: list[GenreOut] = []

    @computed_field
    @property
    def poster_url(self) -> str | None:
        if not self.poster_path:
            return None
        return f"{IMAGE_BASE_URL}/w500{self.poster_path}"


class RatedMovieOut(MovieOut):
    average_rating: float = 0.0


class UserOut(APIModel):
    id: int
    username: str


class RatingOut(APIModel):
    id: int
    user_id: int
    movie_id: int
    score: float
    review: str | None
    created_at: datetime


class MovieRatingOut(RatingOut):
    user: UserOut


class RatingWithMovieOut(RatingOut):
    movie: MovieOut


class MovieDetailOut(RatedMovieOut):
    ratings: list[MovieRatingOut] = []


class PageMeta(APIModel):
    total: int
    page: int
    limit: int
    total_pages: int


class MoviePageOut(APIModel):
    data: list[RatedMovieOut]
    meta: PageMeta


class RatingCreate(APIModel):
    movie_id: int = Field(gt=0)
    score: float = Field(ge=MIN_SCORE, le=MAX_SCORE)
    review: str | None = None


class RatingUpdate(APIModel):
    score: float | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    review: str | None = None


class AverageRatingOut(APIModel):
    average_rating: float


class WatchlistCreate(APIModel):
    movie_id: int = Field(gt=0)
    type: WatchlistType = WatchlistType.WATCHLIST


class WatchlistEntryOut(APIModel):
    id: int
    user_id: int
    movie_id: int
    type: WatchlistType
    created_at: datetime


class WatchlistItemOut(WatchlistEntryOut):
    movie: MovieOut


class WatchlistCheckOut(APIModel):
    is_in_watchlist: bool


class WatchlistStatsOut(APIModel):
    total_watchlist: int
    total_favorites: int


class MessageOut(APIModel):
    message: str
