import enum

from sqlalchemy import Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class WatchlistType(str, enum.Enum):
    WATCHLIST = "watchlist"
    FAVORITE = "favorite"


class WatchlistEntry(Base):
    __tablename__ = "user_watchlist"
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_watchlist_user_movie"),
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[WatchlistType] = mapped_column(
        Enum(
            WatchlistType,
            name="watchlist_type",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=WatchlistType.WATCHLIST,
    )

    user: Mapped["User"] = relationship(back_populates="watchlist_entries")  # noqa: F821
    movie: Mapped["Movie"] = relationship(back_populates="watchlist_entries")  # noqa: F821
