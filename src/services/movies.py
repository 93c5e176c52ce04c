import logging
import math
from dataclasses import dataclass

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from constants.catalog import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DEFAULT_SORT,
    DEFAULT_SORT_ORDER,
    MAX_LIMIT,
    SORT_FIELDS,
    SORT_ORDERS,
)
from core.errors import invalid, not_found
from core.result import Result
from core.sanitization import LIKE_ESCAPE, contains_pattern, sanitize_search
from models.genre import Genre
from models.movie import Movie
from models.rating import Rating
from services.aggregates import average_rating

logger = logging.getLogger(__name__)


@dataclass
class RatedMovie:
    movie: Movie
    average_rating: float


@dataclass
class MoviePage:
    items: list[RatedMovie]
    total: int
    page: int
    limit: int
    total_pages: int


def resolve_sort(sort_by: str | None, sort_order: str | None) -> tuple[str, str]:
    """Map user-facing sort options onto a Movie attribute and a direction.

    Unknown fields fall back to popularity, unknown directions to DESC.
    """
    field = SORT_FIELDS.get(sort_by or "", SORT_FIELDS[DEFAULT_SORT])
    order = (sort_order or DEFAULT_SORT_ORDER).upper()
    if order not in SORT_ORDERS:
        order = DEFAULT_SORT_ORDER
    return field, order


class MovieService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_movies(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        search: str | None = None,
        genre_ids: list[int] | None = None,
        sort_by: str | None = DEFAULT_SORT,
        sort_order: str | None = DEFAULT_SORT_ORDER,
    ) -> Result[MoviePage]:
        if page < 1:
            return Result.fail(invalid("page must be >= 1"))
        if not 1 <= limit <= MAX_LIMIT:
            return Result.fail(invalid(f"limit must be between 1 and {MAX_LIMIT}"))

        stmt = select(Movie).where(Movie.active.is_(True))

        term = sanitize_search(search)
        if term:
            pattern = contains_pattern(term)
            stmt = stmt.where(
                or_(
                    Movie.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Movie.overview.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        if genre_ids:
            # EXISTS keeps one row per movie even when several genres match
            stmt = stmt.where(Movie.genres.any(Genre.id.in_(genre_ids)))

        total = await self.db.scalar(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        )

        field, order = resolve_sort(sort_by, sort_order)
        column = getattr(Movie, field)
        stmt = (
            stmt.options(selectinload(Movie.genres))
            .order_by(column.asc() if order == "ASC" else column.desc(), Movie.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        movies = list(result.scalars().all())

        items = []
        for movie in movies:
            items.append(RatedMovie(movie, await average_rating(self.db, movie.id)))

        return Result.ok(
            MoviePage(
                items=items,
                total=total or 0,
                page=page,
                limit=limit,
                total_pages=math.ceil((total or 0) / limit),
            )
        )

    async def get_movie(self, movie_id: int) -> Result[RatedMovie]:
        # Inactive movies stay reachable by direct lookup
        movie = await self.db.scalar(
            select(Movie)
            .where(Movie.id == movie_id)
            .options(
                selectinload(Movie.genres),
                selectinload(Movie.ratings).selectinload(Rating.user),
            )
        )
        if not movie:
            logger.info("Movie lookup missed: id=%d", movie_id)
            return Result.fail(not_found(f"Movie with ID {movie_id} not found"))

        return Result.ok(RatedMovie(movie, await average_rating(self.db, movie.id)))

    async def get_movie_by_tmdb_id(self, tmdb_id: int) -> Result[Movie]:
        movie = await self.db.scalar(
            select(Movie)
            .where(Movie.tmdb_id == tmdb_id)
            .options(selectinload(Movie.genres))
        )
        if not movie:
            logger.info("Movie lookup missed: tmdb_id=%d", tmdb_id)
            return Result.fail(not_found(f"Movie with TMDB ID {tmdb_id} not found"))
        return Result.ok(movie)
