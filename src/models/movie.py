from datetime import date

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, UpdatedAtMixin
from models.genre import Genre

movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column("movie_id", ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Movie(UpdatedAtMixin, Base):
    __tablename__ = "movies"

    tmdb_id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    poster_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    backdrop_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    vote_average: Mapped[float] = mapped_column(
        Numeric(3, 1, asdecimal=False), nullable=False, default=0
    )
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    popularity: Mapped[float] = mapped_column(
        Numeric(10, 1, asdecimal=False), nullable=False, default=0
    )
    original_language: Mapped[str | None] = mapped_column(String(5), nullable=True)
    original_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    adult: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    runtime: Mapped[int | None] = mapped_column(Integer, nullable=True)
    budget: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    revenue: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    tagline: Mapped[str | None] = mapped_column(Text, nullable=True)

    genres: Mapped[list[Genre]] = relationship(secondary=movie_genres)
    ratings: Mapped[list["Rating"]] = relationship(  # noqa: F821
        back_populates="movie", cascade="all, delete-orphan", passive_deletes=True
    )
    watchlist_entries: Mapped[list["WatchlistEntry"]] = relationship(  # noqa: F821
        back_populates="movie", cascade="all, delete-orphan", passive_deletes=True
    )
