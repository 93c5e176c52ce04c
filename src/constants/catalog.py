DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50

# sortBy query value -> Movie attribute
SORT_FIELDS = {
    "title": "title",
    "release_date": "release_date",
    "vote_average": "vote_average",
    "popularity": "popularity",
}
DEFAULT_SORT = "popularity"

SORT_ORDERS = ("ASC", "DESC")
DEFAULT_SORT_ORDER = "DESC"

MIN_SCORE = 1.0
MAX_SCORE = 10.0
