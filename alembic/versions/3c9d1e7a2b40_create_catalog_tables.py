"""create catalog tables

Revision ID: 3c9d1e7a2b40
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c9d1e7a2b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now())
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        *_timestamps(updated=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("username", sa.String(100), nullable=False),
    )
    op.create_table(
        "genres",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        *_timestamps(),
        sa.Column("tmdb_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )
    op.create_index("ix_genres_tmdb_id", "genres", ["tmdb_id"], unique=True)

    op.create_table(
        "movies",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        *_timestamps(),
        sa.Column("tmdb_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("overview", sa.Text(), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("poster_path", sa.String(255), nullable=True),
        sa.Column("backdrop_path", sa.String(255), nullable=True),
        sa.Column("vote_average", sa.Numeric(3, 1), nullable=False, server_default="0"),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("popularity", sa.Numeric(10, 1), nullable=False, server_default="0"),
        sa.Column("original_language", sa.String(5), nullable=True),
        sa.Column("original_title", sa.String(255), nullable=True),
        sa.Column("adult", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("runtime", sa.Integer(), nullable=True),
        sa.Column("budget", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("revenue", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("tagline", sa.Text(), nullable=True),
    )
    op.create_index("ix_movies_tmdb_id", "movies", ["tmdb_id"], unique=True)
    op.create_index("ix_movies_active", "movies", ["active"])

    op.create_table(
        "movie_genres",
        sa.Column(
            "movie_id",
            sa.Integer(),
            sa.ForeignKey("movies.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "genre_id",
            sa.Integer(),
            sa.ForeignKey("genres.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        *_timestamps(updated=False),
        sa.Column(
            "user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "movie_id", sa.Integer(), sa.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("score", sa.Numeric(3, 1), nullable=False),
        sa.Column("review", sa.Text(), nullable=True),
        sa.UniqueConstraint("user_id", "movie_id", name="uq_rating_user_movie"),
    )
    op.create_index("ix_ratings_user_id", "ratings", ["user_id"])
    op.create_index("ix_ratings_movie_id", "ratings", ["movie_id"])

    watchlist_type = sa.Enum("watchlist", "favorite", name="watchlist_type")
    op.create_table(
        "user_watchlist",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        *_timestamps(updated=False),
        sa.Column(
            "user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "movie_id", sa.Integer(), sa.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("type", watchlist_type, nullable=False, server_default="watchlist"),
        sa.UniqueConstraint("user_id", "movie_id", name="uq_watchlist_user_movie"),
    )
    op.create_index("ix_user_watchlist_user_id", "user_watchlist", ["user_id"])
    op.create_index("ix_user_watchlist_movie_id", "user_watchlist", ["movie_id"])


def downgrade() -> None:
    op.drop_table("user_watchlist")
    sa.Enum(name="watchlist_type").drop(op.get_bind(), checkfirst=True)
    op.drop_table("ratings")
    op.drop_table("movie_genres")
    op.drop_table("movies")
    op.drop_table("genres")
    op.drop_table("users")
