import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.errors import conflict, forbidden, not_found
from core.result import Result
from models.movie import Movie
from models.user import User
from models.watchlist import WatchlistEntry, WatchlistType
from services.aggregates import is_in_list, watchlist_stats

logger = logging.getLogger(__name__)


def already_listed(type: WatchlistType) -> str:
    label = "favorites" if type == WatchlistType.FAVORITE else "watchlist"
    return f"Movie is already in your {label}"


class WatchlistService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self,
        user_id: int,
        movie_id: int,
        type: WatchlistType = WatchlistType.WATCHLIST,
    ) -> Result[WatchlistEntry]:
        """Put a movie on the user's watchlist or favorites.

        A user holds at most one entry per movie: asking for the other list
        moves the existing entry, asking for the same list is a conflict.
        """
        if not await self.db.get(Movie, movie_id):
            return Result.fail(not_found(f"Movie with ID {movie_id} not found"))
        if not await self.db.get(User, user_id):
            return Result.fail(not_found(f"User with ID {user_id} not found"))

        existing = await self.db.scalar(
            select(WatchlistEntry).where(
                WatchlistEntry.user_id == user_id,
                WatchlistEntry.movie_id == movie_id,
            )
        )
        if existing:
            if existing.type == type:
                return Result.fail(conflict(already_listed(type)))
            existing.type = type
            await self.db.flush()
            return Result.ok(existing)

        entry = WatchlistEntry(user_id=user_id, movie_id=movie_id, type=type)
        try:
            async with self.db.begin_nested():
                self.db.add(entry)
        except IntegrityError:
            logger.info("Duplicate watchlist entry rejected: user=%d movie=%d", user_id, movie_id)
            return Result.fail(conflict(already_listed(type)))
        return Result.ok(entry)

    async def remove(self, user_id: int, entry_id: int) -> Result[None]:
        entry = await self.db.get(WatchlistEntry, entry_id)
        if not entry:
            return Result.fail(not_found(f"Watchlist item with ID {entry_id} not found"))
        if entry.user_id != user_id:
            return Result.fail(forbidden("You can only remove items from your own watchlist"))

        await self.db.delete(entry)
        await self.db.flush()
        return Result.ok(None)

    async def list_for_user(
        self, user_id: int, type: WatchlistType | None = None
    ) -> list[WatchlistEntry]:
        stmt = (
            select(WatchlistEntry)
            .where(WatchlistEntry.user_id == user_id)
            .options(selectinload(WatchlistEntry.movie).selectinload(Movie.genres))
            .order_by(WatchlistEntry.created_at.desc(), WatchlistEntry.id.desc())
        )
        if type is not None:
            stmt = stmt.where(WatchlistEntry.type == type)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def is_in_list(
        self, user_id: int, movie_id: int, type: WatchlistType | None = None
    ) -> bool:
        return await is_in_list(self.db, user_id, movie_id, type)

    async def stats(self, user_id: int) -> dict[str, int]:
        return await watchlist_stats(self.db, user_id)
