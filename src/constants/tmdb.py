POPULAR_PATH = "/movie/popular"
TOP_RATED_PATH = "/movie/top_rated"
DETAIL_PATH = "/movie/{tmdb_id}"
GENRES_PATH = "/genre/movie/list"

IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
