import asyncio
import logging
from datetime import datetime, timedelta

from clients.tmdb import TMDbClient
from config import settings
from services.catalog_sync import CatalogReconciler
from services.genre_sync import GenreReconciler

logger = logging.getLogger(__name__)


def seconds_until(hour: int, now: datetime | None = None) -> float:
    """Seconds from `now` (server-local) to the next occurrence of `hour`:00."""
    now = now or datetime.now()
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


async def run_sync(client: TMDbClient) -> None:
    # Genres first so new movies can be associated with them
    await GenreReconciler(client).sync_genres()
    await CatalogReconciler(client).sync_movies()


class CatalogSyncScheduler:
    """Owns the background task that runs the sync at startup and then daily."""

    def __init__(self, hour: int | None = None):
        self.hour = settings.SYNC_HOUR if hour is None else hour
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self._task is not None:
            raise RuntimeError("Catalog sync scheduler already started")
        self._task = asyncio.create_task(self._loop(), name="catalog-sync")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _loop(self) -> None:
        async with TMDbClient() as client:
            while True:
                try:
                    await run_sync(client)
                except Exception as e:
                    logger.error("Catalog sync run failed: %s", e)

                delay = seconds_until(self.hour)
                logger.info("Next catalog sync in %.0f seconds", delay)
                await asyncio.sleep(delay)
