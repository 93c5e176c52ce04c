from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import verify_gateway_secret
from api.schemas import MovieDetailOut, MovieOut, MoviePageOut, PageMeta, RatedMovieOut
from constants.catalog import DEFAULT_LIMIT, DEFAULT_PAGE, DEFAULT_SORT, DEFAULT_SORT_ORDER, MAX_LIMIT
from core.database import get_db
from services.movies import MovieService, RatedMovie

router = APIRouter(
    prefix="/movies",
    tags=["movies"],
    dependencies=[Depends(verify_gateway_secret)],
)


def parse_genre_ids(raw: str | None) -> list[int] | None:
    """Parse the `genres` CSV query value ("28,12") into ids."""
    if not raw:
        return None
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise HTTPException(
            status_code=422, detail="genres must be a comma-separated list of integers"
        )


def _rated(item: RatedMovie, schema: type[RatedMovieOut] = RatedMovieOut) -> RatedMovieOut:
    return schema.model_validate(item.movie).model_copy(
        update={"average_rating": item.average_rating}
    )


@router.get("", response_model=MoviePageOut)
async def list_movies(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    search: str | None = Query(None),
    genres: str | None = Query(None),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    sort_order: str = Query(DEFAULT_SORT_ORDER, alias="sortOrder", pattern="^(ASC|DESC|asc|desc)$"),
):
    genre_ids = parse_genre_ids(genres)

    async with get_db() as db:
        result = await MovieService(db).list_movies(
            page=page,
            limit=limit,
            search=search,
            genre_ids=genre_ids,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    movie_page = result.unwrap()

    return MoviePageOut(
        data=[_rated(item) for item in movie_page.items],
        meta=PageMeta(
            total=movie_page.total,
            page=movie_page.page,
            limit=movie_page.limit,
            total_pages=movie_page.total_pages,
        ),
    )


@router.get("/tmdb/{tmdb_id}", response_model=MovieOut)
async def get_movie_by_tmdb_id(tmdb_id: int):
    async with get_db() as db:
        result = await MovieService(db).get_movie_by_tmdb_id(tmdb_id)
    return MovieOut.model_validate(result.unwrap())


@router.get("/{movie_id}", response_model=MovieDetailOut)
async def get_movie(movie_id: int):
    async with get_db() as db:
        result = await MovieService(db).get_movie(movie_id)
    return _rated(result.unwrap(), MovieDetailOut)
