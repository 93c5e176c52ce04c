from models.base import Base
from models.genre import Genre
from models.movie import Movie, movie_genres
from models.rating import Rating
from models.user import User
from models.watchlist import WatchlistEntry, WatchlistType

__all__ = ["Base", "Genre", "Movie", "movie_genres", "Rating", "User", "WatchlistEntry", "WatchlistType"]
