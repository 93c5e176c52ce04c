import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from api.health import router as health_router
from api.movies import router as movies_router
from api.ratings import router as ratings_router
from api.watchlist import router as watchlist_router
from config import settings
from core.database import engine
from core.scheduler import CatalogSyncScheduler
from models import Base

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Runs once now, then daily; request serving does not wait for it
    scheduler = CatalogSyncScheduler()
    if settings.SYNC_ENABLED:
        scheduler.start()
        logger.info("Catalog sync scheduled daily at %02d:00 (server time)", scheduler.hour)
    app.state.sync_scheduler = scheduler

    yield

    await scheduler.stop()
    await engine.dispose()


app = FastAPI(title="Movie Catalog", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["X-Gateway-Secret", "X-User-Id", "Content-Type"],
    allow_credentials=True,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response


app.add_middleware(SecurityHeadersMiddleware)

app.include_router(health_router)
app.include_router(movies_router)
app.include_router(ratings_router)
app.include_router(watchlist_router)
