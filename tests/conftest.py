import os

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("TMDB_API_KEY", "test-tmdb")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("GATEWAY_SECRET", "test-secret")
os.environ.setdefault("SYNC_ENABLED", "false")

from contextlib import asynccontextmanager  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.database import enable_sqlite_foreign_keys  # noqa: E402
from models import Base, Genre, Movie, Rating, User, WatchlistEntry  # noqa: E402


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    maker = async_sessionmaker(engine, expire_on_commit=False)

    @asynccontextmanager
    async def factory():
        async with maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return factory


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def add_movie(db):
    counter = {"tmdb_id": 1000}

    async def _add(**fields) -> Movie:
        counter["tmdb_id"] += 1
        fields.setdefault("tmdb_id", counter["tmdb_id"])
        fields.setdefault("title", f"Movie {fields['tmdb_id']}")
        genres = fields.pop("genres", [])
        movie = Movie(genres=genres, **fields)
        db.add(movie)
        await db.flush()
        return movie

    return _add


@pytest.fixture
def add_user(db):
    async def _add(username: str = "alice") -> User:
        user = User(email=f"{username}@example.com", username=username)
        db.add(user)
        await db.flush()
        return user

    return _add


@pytest.fixture
def add_genre(db):
    async def _add(tmdb_id: int, name: str) -> Genre:
        genre = Genre(tmdb_id=tmdb_id, name=name)
        db.add(genre)
        await db.flush()
        return genre

    return _add


@pytest.fixture
def add_rating(db):
    async def _add(user: User, movie: Movie, score: float, review: str | None = None) -> Rating:
        rating = Rating(user_id=user.id, movie_id=movie.id, score=score, review=review)
        db.add(rating)
        await db.flush()
        return rating

    return _add


@pytest.fixture
def add_entry(db):
    async def _add(user: User, movie: Movie, type) -> WatchlistEntry:
        entry = WatchlistEntry(user_id=user.id, movie_id=movie.id, type=type)
        db.add(entry)
        await db.flush()
        return entry

    return _add
