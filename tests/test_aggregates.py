import pytest

from models.watchlist import WatchlistType
from services.aggregates import average_rating, is_in_list, watchlist_stats


async def test_average_rating_unrated_is_zero(db, add_movie):
    movie = await add_movie()
    assert await average_rating(db, movie.id) == 0.0


async def test_average_rating_is_mean(db, add_movie, add_user, add_rating):
    movie = await add_movie()
    for i, score in enumerate([8, 9, 10]):
        await add_rating(await add_user(f"user{i}"), movie, score)

    assert await average_rating(db, movie.id) == 9.0


async def test_average_rating_one_decimal_scores(db, add_movie, add_user, add_rating):
    movie = await add_movie()
    scores = [7.5, 8.2, 6.1]
    for i, score in enumerate(scores):
        await add_rating(await add_user(f"user{i}"), movie, score)

    assert await average_rating(db, movie.id) == pytest.approx(sum(scores) / len(scores))


async def test_average_rating_ignores_other_movies(db, add_movie, add_user, add_rating):
    movie, other = await add_movie(), await add_movie()
    user = await add_user()
    await add_rating(user, movie, 4)
    await add_rating(user, other, 10)

    assert await average_rating(db, movie.id) == 4.0


async def test_watchlist_stats_empty(db, add_user):
    user = await add_user()
    assert await watchlist_stats(db, user.id) == {"total_watchlist": 0, "total_favorites": 0}


async def test_watchlist_stats_counts_per_type(db, add_movie, add_user, add_entry):
    user, other = await add_user("alice"), await add_user("bob")
    movies = [await add_movie() for _ in range(3)]
    await add_entry(user, movies[0], WatchlistType.WATCHLIST)
    await add_entry(user, movies[1], WatchlistType.WATCHLIST)
    await add_entry(user, movies[2], WatchlistType.FAVORITE)
    await add_entry(other, movies[0], WatchlistType.FAVORITE)

    assert await watchlist_stats(db, user.id) == {"total_watchlist": 2, "total_favorites": 1}


async def test_is_in_list(db, add_movie, add_user, add_entry):
    user = await add_user()
    movie, other = await add_movie(), await add_movie()
    await add_entry(user, movie, WatchlistType.FAVORITE)

    assert await is_in_list(db, user.id, movie.id) is True
    assert await is_in_list(db, user.id, movie.id, WatchlistType.FAVORITE) is True
    assert await is_in_list(db, user.id, movie.id, WatchlistType.WATCHLIST) is False
    assert await is_in_list(db, user.id, other.id) is False
