from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    TMDB_API_KEY: str
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_LANGUAGE: str = "en-US"
    TMDB_TIMEOUT: float = 10.0
    TMDB_RETRIES: int = 2

    # Shared with the gateway that validates user tokens
    GATEWAY_SECRET: str

    SYNC_ENABLED: bool = True  # covers both the startup run and the daily runs
    SYNC_HOUR: int = 2  # server-local hour of the daily catalog sync
    SYNC_POPULAR_PAGES: int = 5
    SYNC_TOP_RATED_PAGES: int = 3

    RATE_LIMIT_PER_MINUTE: int = 30
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:8080"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
