import logging
from dataclasses import dataclass

from sqlalchemy import select

from clients.tmdb import MovieDetail, MovieListing, MovieSummary, TMDbClient
from config import settings
from core.database import get_db
from models.genre import Genre
from models.movie import Movie
from services.genre_sync import SessionFactory

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    created: int = 0
    updated: int = 0
    failed: int = 0
    aborted: bool = False


class CatalogReconciler:
    """Bring local movies in line with TMDb's popular and top rated listings.

    Existing movies only get their vote and popularity figures refreshed from
    the listing summary. Runtime, budget, revenue, tagline and genres come from
    the detail endpoint and are written once, when the movie is created.
    """

    def __init__(
        self,
        client: TMDbClient,
        session_factory: SessionFactory = get_db,
        popular_pages: int | None = None,
        top_rated_pages: int | None = None,
    ):
        self.client = client
        self.session_factory = session_factory
        self.popular_pages = popular_pages if popular_pages is not None else settings.SYNC_POPULAR_PAGES
        self.top_rated_pages = (
            top_rated_pages if top_rated_pages is not None else settings.SYNC_TOP_RATED_PAGES
        )

    async def sync_movies(self) -> SyncReport:
        report = SyncReport()
        logger.info("Syncing movies from TMDb...")

        listings = [
            ("popular", self.client.list_popular, self.popular_pages),
            ("top rated", self.client.list_top_rated, self.top_rated_pages),
        ]
        for name, fetch_page, pages in listings:
            for page in range(1, pages + 1):
                try:
                    listing: MovieListing = await fetch_page(page)
                except Exception as e:
                    # Provider unreachable: keep what is already saved, stop this run
                    logger.error("Aborting movie sync at %s page %d: %s", name, page, e)
                    report.aborted = True
                    return report
                await self._save_movies(listing.results, report)

        logger.info(
            "Synced movies from TMDb: %d created, %d updated, %d failed",
            report.created,
            report.updated,
            report.failed,
        )
        return report

    async def _save_movies(self, summaries: list[MovieSummary], report: SyncReport) -> None:
        for summary in summaries:
            try:
                created = await self._save_movie(summary)
            except Exception as e:
                logger.error("Failed to save movie %d: %s", summary.id, e)
                report.failed += 1
                continue
            if created:
                report.created += 1
            else:
                report.updated += 1

    async def _save_movie(self, summary: MovieSummary) -> bool:
        """Find-or-create one movie in its own transaction. True when created."""
        async with self.session_factory() as db:
            movie = await db.scalar(select(Movie).where(Movie.tmdb_id == summary.id))
            if movie:
                apply_summary(movie, summary)
                await db.flush()
                return False

            detail = await self.client.get_detail(summary.id)
            movie = movie_from_detail(detail)
            db.add(movie)
            await db.flush()

            genre_ids = [g.id for g in detail.genres]
            if genre_ids:
                # Genres not synced yet are left out of the association
                result = await db.execute(select(Genre).where(Genre.tmdb_id.in_(genre_ids)))
                movie.genres = list(result.scalars().all())
                await db.flush()
            return True


def apply_summary(movie: Movie, summary: MovieSummary) -> None:
    movie.vote_average = summary.vote_average
    movie.vote_count = summary.vote_count
    movie.popularity = summary.popularity


def movie_from_detail(detail: MovieDetail) -> Movie:
    return Movie(
        tmdb_id=detail.id,
        title=detail.title,
        overview=detail.overview,
        release_date=detail.release_date,
        poster_path=detail.poster_path,
        backdrop_path=detail.backdrop_path,
        vote_average=detail.vote_average,
        vote_count=detail.vote_count,
        popularity=detail.popularity,
        original_language=detail.original_language,
        original_title=detail.original_title,
        adult=detail.adult,
        runtime=detail.runtime,
        budget=detail.budget,
        revenue=detail.revenue,
        tagline=detail.tagline,
        genres=[],
    )
