from fastapi import APIRouter, Depends

from api.dependencies import current_user_id, limit_writes, verify_gateway_secret
from api.schemas import (
    AverageRatingOut,
    MessageOut,
    MovieRatingOut,
    RatingCreate,
    RatingOut,
    RatingUpdate,
    RatingWithMovieOut,
)
from core.database import get_db
from services.ratings import RatingService

router = APIRouter(
    prefix="/ratings",
    tags=["ratings"],
    dependencies=[Depends(verify_gateway_secret)],
)


@router.post("", response_model=RatingOut, status_code=201, dependencies=[Depends(limit_writes)])
async def create_rating(body: RatingCreate, user_id: int = Depends(current_user_id)):
    async with get_db() as db:
        result = await RatingService(db).create(
            user_id=user_id,
            movie_id=body.movie_id,
            score=body.score,
            review=body.review,
        )
    return RatingOut.model_validate(result.unwrap())


@router.put("/{rating_id}", response_model=RatingOut, dependencies=[Depends(limit_writes)])
async def update_rating(
    rating_id: int, body: RatingUpdate, user_id: int = Depends(current_user_id)
):
    async with get_db() as db:
        result = await RatingService(db).update(
            user_id=user_id,
            rating_id=rating_id,
            score=body.score,
            review=body.review,
        )
    return RatingOut.model_validate(result.unwrap())


@router.delete("/{rating_id}", response_model=MessageOut, dependencies=[Depends(limit_writes)])
async def delete_rating(rating_id: int, user_id: int = Depends(current_user_id)):
    async with get_db() as db:
        result = await RatingService(db).delete(user_id=user_id, rating_id=rating_id)
    result.unwrap()
    return MessageOut(message="Rating deleted successfully")


@router.get("/my-ratings", response_model=list[RatingWithMovieOut])
async def my_ratings(user_id: int = Depends(current_user_id)):
    async with get_db() as db:
        ratings = await RatingService(db).list_by_user(user_id)
    return [RatingWithMovieOut.model_validate(r) for r in ratings]


@router.get("/movie/{movie_id}", response_model=list[MovieRatingOut])
async def movie_ratings(movie_id: int):
    async with get_db() as db:
        ratings = await RatingService(db).list_by_movie(movie_id)
    return [MovieRatingOut.model_validate(r) for r in ratings]


@router.get("/movie/{movie_id}/average", response_model=AverageRatingOut)
async def movie_average(movie_id: int):
    async with get_db() as db:
        average = await RatingService(db).average(movie_id)
    return AverageRatingOut(average_rating=average)


@router.get("/movie/{movie_id}/my-rating", response_model=MovieRatingOut | None)
async def my_rating_for_movie(movie_id: int, user_id: int = Depends(current_user_id)):
    async with get_db() as db:
        rating = await RatingService(db).get_user_rating_for_movie(user_id, movie_id)
    if rating is None:
        return None
    return MovieRatingOut.model_validate(rating)
