from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.rating import Rating
from models.watchlist import WatchlistEntry, WatchlistType


async def average_rating(db: AsyncSession, movie_id: int) -> float:
    """Mean of every score given to a movie, 0.0 when nobody rated it."""
    average = await db.scalar(
        select(func.avg(Rating.score)).where(Rating.movie_id == movie_id)
    )
    return float(average) if average is not None else 0.0


async def watchlist_stats(db: AsyncSession, user_id: int) -> dict[str, int]:
    result = await db.execute(
        select(WatchlistEntry.type, func.count(WatchlistEntry.id))
        .where(WatchlistEntry.user_id == user_id)
        .group_by(WatchlistEntry.type)
    )
    counts = dict(result.all())
    return {
        "total_watchlist": counts.get(WatchlistType.WATCHLIST, 0),
        "total_favorites": counts.get(WatchlistType.FAVORITE, 0),
    }


async def is_in_list(
    db: AsyncSession,
    user_id: int,
    movie_id: int,
    type: WatchlistType | None = None,
) -> bool:
    stmt = select(WatchlistEntry.id).where(
        WatchlistEntry.user_id == user_id,
        WatchlistEntry.movie_id == movie_id,
    )
    if type is not None:
        stmt = stmt.where(WatchlistEntry.type == type)
    return await db.scalar(stmt.limit(1)) is not None
