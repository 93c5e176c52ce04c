import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clients.tmdb import TMDbClient
from core.database import get_db
from models.genre import Genre

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class GenreReconciler:
    """Mirror the TMDb genre taxonomy locally, keyed by TMDb id.

    Only missing genres are inserted; upstream renames are not propagated.
    """

    def __init__(self, client: TMDbClient, session_factory: SessionFactory = get_db):
        self.client = client
        self.session_factory = session_factory

    async def sync_genres(self) -> int:
        """Return the number of genres created.

        Each genre is committed on its own. The first error is logged and ends
        the run; genres saved before it are kept for the next run to build on.
        """
        created = 0
        try:
            logger.info("Syncing genres from TMDb...")
            listing = await self.client.list_genres()

            for item in listing.genres:
                async with self.session_factory() as db:
                    existing = await db.scalar(select(Genre).where(Genre.tmdb_id == item.id))
                    if existing:
                        continue
                    db.add(Genre(tmdb_id=item.id, name=item.name))
                created += 1

            logger.info(
                "Synced %d genres from TMDb (%d new)", len(listing.genres), created
            )
        except Exception as e:
            logger.error("Failed to sync genres from TMDb after %d new: %s", created, e)
        return created
