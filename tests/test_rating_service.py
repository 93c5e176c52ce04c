from unittest.mock import AsyncMock, patch

from sqlalchemy import func, select

from core.errors import ErrorKind
from models.movie import Movie
from models.rating import Rating
from services.ratings import RatingService


async def test_create_rating(db, add_movie, add_user):
    movie, user = await add_movie(), await add_user()

    rating = (await RatingService(db).create(user.id, movie.id, 8.46, review="Great")).unwrap()

    assert rating.id is not None
    assert rating.score == 8.5
    assert rating.review == "Great"


async def test_second_rating_for_same_pair_conflicts(db, add_movie, add_user):
    movie, user = await add_movie(), await add_user()
    service = RatingService(db)
    await service.create(user.id, movie.id, 7)

    result = await service.create(user.id, movie.id, 9)

    assert result.error.kind == ErrorKind.CONFLICT
    assert await db.scalar(select(func.count(Rating.id))) == 1


async def test_racing_insert_keeps_earlier_session_work(db, add_movie, add_user):
    movie, alice, bob = await add_movie(), await add_user(), await add_user("bob")
    service = RatingService(db)
    await service.create(alice.id, movie.id, 7)
    kept = (await service.create(bob.id, movie.id, 6)).unwrap()

    # Pre-check misses, as if the other insert landed after it
    with patch.object(db, "scalar", AsyncMock(return_value=None)):
        result = await service.create(alice.id, movie.id, 9)

    assert result.error.kind == ErrorKind.CONFLICT
    assert await db.scalar(select(func.count(Rating.id))) == 2
    assert (await db.get(Rating, kept.id)).score == 6


async def test_score_out_of_range(db, add_movie, add_user):
    movie, user = await add_movie(), await add_user()
    service = RatingService(db)

    for score in (0.9, 10.1, -3):
        result = await service.create(user.id, movie.id, score)
        assert result.error.kind == ErrorKind.VALIDATION


async def test_missing_movie_or_user(db, add_movie, add_user):
    movie, user = await add_movie(), await add_user()
    service = RatingService(db)

    assert (await service.create(user.id, 999, 5)).error.kind == ErrorKind.NOT_FOUND
    assert (await service.create(999, movie.id, 5)).error.kind == ErrorKind.NOT_FOUND


async def test_update_own_rating(db, add_movie, add_user, add_rating):
    user = await add_user()
    rating = await add_rating(user, await add_movie(), 5)

    updated = (await RatingService(db).update(user.id, rating.id, score=9, review="Grew on me")).unwrap()

    assert updated.id == rating.id
    assert (updated.score, updated.review) == (9, "Grew on me")


async def test_update_keeps_unset_fields(db, add_movie, add_user, add_rating):
    user = await add_user()
    rating = await add_rating(user, await add_movie(), 5, review="Meh")

    updated = (await RatingService(db).update(user.id, rating.id, score=6)).unwrap()

    assert updated.review == "Meh"


async def test_update_someone_elses_rating_is_forbidden(db, add_movie, add_user, add_rating):
    owner, intruder = await add_user("owner"), await add_user("intruder")
    rating = await add_rating(owner, await add_movie(), 5)

    result = await RatingService(db).update(intruder.id, rating.id, score=1)

    assert result.error.kind == ErrorKind.FORBIDDEN
    assert rating.score == 5


async def test_update_missing_and_invalid(db, add_movie, add_user, add_rating):
    user = await add_user()
    rating = await add_rating(user, await add_movie(), 5)
    service = RatingService(db)

    assert (await service.update(user.id, 999, score=5)).error.kind == ErrorKind.NOT_FOUND
    assert (await service.update(user.id, rating.id, score=11)).error.kind == ErrorKind.VALIDATION


async def test_delete_rating(db, add_movie, add_user, add_rating):
    owner, intruder = await add_user("owner"), await add_user("intruder")
    rating = await add_rating(owner, await add_movie(), 5)
    service = RatingService(db)

    assert (await service.delete(intruder.id, rating.id)).error.kind == ErrorKind.FORBIDDEN
    assert (await service.delete(owner.id, rating.id)).is_ok
    assert (await service.delete(owner.id, rating.id)).error.kind == ErrorKind.NOT_FOUND


async def test_list_by_user_and_movie(db, add_movie, add_user, add_rating):
    alice, bob = await add_user("alice"), await add_user("bob")
    first, second = await add_movie(title="First"), await add_movie(title="Second")
    await add_rating(alice, first, 6)
    await add_rating(alice, second, 7)
    await add_rating(bob, first, 8)
    db.expunge_all()
    service = RatingService(db)

    mine = await service.list_by_user(alice.id)
    assert [r.movie.title for r in mine] == ["Second", "First"]

    for_first = await service.list_by_movie(first.id)
    assert {r.user.username for r in for_first} == {"alice", "bob"}

    assert await service.average(first.id) == 7.0
    assert (await service.get_user_rating_for_movie(bob.id, first.id)).score == 8
    assert await service.get_user_rating_for_movie(bob.id, second.id) is None


async def test_deleting_movie_cascades_to_ratings(db, add_movie, add_user, add_rating):
    movie = await add_movie()
    await add_rating(await add_user(), movie, 5)

    await db.delete(await db.get(Movie, movie.id))
    await db.flush()

    assert await db.scalar(select(func.count(Rating.id))) == 0
