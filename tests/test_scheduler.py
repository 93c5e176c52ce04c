import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.scheduler import CatalogSyncScheduler, run_sync, seconds_until


def test_seconds_until_later_today():
    now = datetime(2026, 3, 1, 0, 30)
    assert seconds_until(2, now) == 90 * 60


def test_seconds_until_tomorrow():
    now = datetime(2026, 3, 1, 3, 0)
    assert seconds_until(2, now) == 23 * 3600


def test_seconds_until_exactly_now_waits_a_day():
    now = datetime(2026, 3, 1, 2, 0)
    assert seconds_until(2, now) == 24 * 3600


@patch("core.scheduler.CatalogReconciler")
@patch("core.scheduler.GenreReconciler")
async def test_run_sync_does_genres_first(mock_genres_cls, mock_movies_cls):
    calls = []
    mock_genres_cls.return_value.sync_genres = AsyncMock(side_effect=lambda: calls.append("genres"))
    mock_movies_cls.return_value.sync_movies = AsyncMock(side_effect=lambda: calls.append("movies"))
    client = MagicMock()

    await run_sync(client)

    assert calls == ["genres", "movies"]
    mock_genres_cls.assert_called_once_with(client)
    mock_movies_cls.assert_called_once_with(client)


@patch("core.scheduler.seconds_until", return_value=3600)
@patch("core.scheduler.run_sync", new_callable=AsyncMock)
@patch("core.scheduler.TMDbClient")
async def test_scheduler_runs_once_at_start(mock_client_cls, mock_run_sync, _mock_delay):
    mock_client_cls.return_value.__aenter__ = AsyncMock(return_value=MagicMock())
    mock_client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    scheduler = CatalogSyncScheduler(hour=4)

    scheduler.start()
    await asyncio.sleep(0.01)
    assert scheduler.running
    await scheduler.stop()

    mock_run_sync.assert_awaited_once()
    assert not scheduler.running


async def test_scheduler_cannot_start_twice():
    scheduler = CatalogSyncScheduler(hour=4)
    with patch.object(CatalogSyncScheduler, "_loop", new=AsyncMock()):
        scheduler.start()
        with pytest.raises(RuntimeError):
            scheduler.start()
        await scheduler.stop()


async def test_stop_without_start_is_noop():
    await CatalogSyncScheduler(hour=4).stop()


@pytest.mark.parametrize("enabled", [True, False])
async def test_lifespan_starts_scheduler_only_when_sync_enabled(monkeypatch, enabled):
    from config import settings
    from main import app, lifespan

    monkeypatch.setattr(settings, "SYNC_ENABLED", enabled)
    with patch("main.engine") as engine, patch("main.CatalogSyncScheduler") as mock_cls:
        engine.begin.return_value.__aenter__ = AsyncMock(return_value=AsyncMock())
        engine.begin.return_value.__aexit__ = AsyncMock(return_value=False)
        engine.dispose = AsyncMock()
        scheduler = mock_cls.return_value
        scheduler.hour = 2
        scheduler.stop = AsyncMock()

        async with lifespan(app):
            assert app.state.sync_scheduler is scheduler

    assert scheduler.start.called is enabled
    scheduler.stop.assert_awaited_once()
