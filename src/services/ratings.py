import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from constants.catalog import MAX_SCORE, MIN_SCORE
from core.errors import ServiceError, conflict, forbidden, invalid, not_found
from core.result import Result
from models.movie import Movie
from models.rating import Rating
from models.user import User
from services.aggregates import average_rating

logger = logging.getLogger(__name__)

ALREADY_RATED = "You have already rated this movie"


def check_score(score: float) -> ServiceError | None:
    if not MIN_SCORE <= score <= MAX_SCORE:
        return invalid(f"Rating must be between {MIN_SCORE:g} and {MAX_SCORE:g}")
    return None


class RatingService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        user_id: int,
        movie_id: int,
        score: float,
        review: str | None = None,
    ) -> Result[Rating]:
        error = check_score(score)
        if error:
            return Result.fail(error)

        if not await self.db.get(Movie, movie_id):
            return Result.fail(not_found(f"Movie with ID {movie_id} not found"))
        if not await self.db.get(User, user_id):
            return Result.fail(not_found(f"User with ID {user_id} not found"))

        existing = await self.db.scalar(
            select(Rating.id).where(Rating.user_id == user_id, Rating.movie_id == movie_id)
        )
        if existing:
            return Result.fail(conflict(ALREADY_RATED))

        rating = Rating(
            user_id=user_id,
            movie_id=movie_id,
            score=round(score, 1),
            review=review,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(rating)
        except IntegrityError:
            # Lost a race with a concurrent insert for the same pair
            logger.info("Duplicate rating rejected: user=%d movie=%d", user_id, movie_id)
            return Result.fail(conflict(ALREADY_RATED))
        return Result.ok(rating)

    async def update(
        self,
        user_id: int,
        rating_id: int,
        score: float | None = None,
        review: str | None = None,
    ) -> Result[Rating]:
        rating = await self.db.get(Rating, rating_id)
        if not rating:
            return Result.fail(not_found(f"Rating with ID {rating_id} not found"))
        if rating.user_id != user_id:
            return Result.fail(forbidden("You can only update your own ratings"))

        if score is not None:
            error = check_score(score)
            if error:
                return Result.fail(error)
            rating.score = round(score, 1)
        if review is not None:
            rating.review = review

        await self.db.flush()
        return Result.ok(rating)

    async def delete(self, user_id: int, rating_id: int) -> Result[None]:
        rating = await self.db.get(Rating, rating_id)
        if not rating:
            return Result.fail(not_found(f"Rating with ID {rating_id} not found"))
        if rating.user_id != user_id:
            return Result.fail(forbidden("You can only delete your own ratings"))

        await self.db.delete(rating)
        await self.db.flush()
        return Result.ok(None)

    async def list_by_user(self, user_id: int) -> list[Rating]:
        result = await self.db.execute(
            select(Rating)
            .where(Rating.user_id == user_id)
            .options(selectinload(Rating.movie).selectinload(Movie.genres))
            .order_by(Rating.created_at.desc(), Rating.id.desc())
        )
        return list(result.scalars().all())

    async def list_by_movie(self, movie_id: int) -> list[Rating]:
        result = await self.db.execute(
            select(Rating)
            .where(Rating.movie_id == movie_id)
            .options(selectinload(Rating.user))
            .order_by(Rating.created_at.desc(), Rating.id.desc())
        )
        return list(result.scalars().all())

    async def average(self, movie_id: int) -> float:
        return await average_rating(self.db, movie_id)

    async def get_user_rating_for_movie(self, user_id: int, movie_id: int) -> Rating | None:
        return await self.db.scalar(
            select(Rating)
            .where(Rating.user_id == user_id, Rating.movie_id == movie_id)
            .options(selectinload(Rating.user), selectinload(Rating.movie))
        )
