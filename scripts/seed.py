"""Seed script: sample users, ratings and watchlist entries over synced movies."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from sqlalchemy import select  # noqa: E402

from core.database import get_db  # noqa: E402
from models.movie import Movie  # noqa: E402
from models.user import User  # noqa: E402
from models.watchlist import WatchlistType  # noqa: E402
from services.ratings import RatingService  # noqa: E402
from services.watchlist import WatchlistService  # noqa: E402


async def seed():
    async with get_db() as db:
        users = [
            User(email="marie@example.com", username="marie"),
            User(email="paul@example.com", username="paul"),
            User(email="lucas@example.com", username="lucas"),
        ]
        for u in users:
            db.add(u)
        await db.flush()

        result = await db.execute(
            select(Movie).where(Movie.active.is_(True)).order_by(Movie.popularity.desc()).limit(3)
        )
        movies = list(result.scalars().all())
        if not movies:
            print("No movies yet: start the app once so the catalog sync can run.")
            return

        ratings = RatingService(db)
        scores = [(8.0, 9.5, 7.0), (6.5, 8.0, 9.0), (10.0, 7.5, 8.5)]
        created = 0
        for movie, movie_scores in zip(movies, scores):
            for user, score in zip(users, movie_scores):
                if (await ratings.create(user.id, movie.id, score)).is_ok:
                    created += 1

        watchlist = WatchlistService(db)
        await watchlist.add(users[0].id, movies[0].id, WatchlistType.FAVORITE)
        await watchlist.add(users[1].id, movies[-1].id)

        print("Database seeded with sample data!")
        print(f"  {len(users)} users")
        print(f"  {created} ratings over {len(movies)} movies")
        print("  2 watchlist entries")


if __name__ == "__main__":
    asyncio.run(seed())
