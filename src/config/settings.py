"""Application settings loaded from environment variables via pydantic-settings.

Values are read from, in priority order:

  1. Environment variables, e.g. ``YOUTUBE_API_KEY=AIza...``
  2. A ``.env`` file in the working directory (local development)
  3. The defaults declared below

Field ``youtube_api_key`` maps to env var ``YOUTUBE_API_KEY``; matching is
case-insensitive.  The ``.env`` file is never committed.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.text_normalizer import MAX_QUERY_LENGTH

CACHE_TTL_SECONDS = 60 * 60 * 24 * 7


class Settings(BaseSettings):
    """songCache application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Cache store ===
    # "redis" for deployments, "memory" for local runs without a Redis server.
    cache_backend: str = "redis"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl_seconds: int = CACHE_TTL_SECONDS
    max_query_length: int = MAX_QUERY_LENGTH
    memory_cache_max_size: int = 10_000

    # === Resolver ===
    # Empty string = "not configured"; the resolver reports itself unavailable.
    youtube_api_key: str = ""
    youtube_api_base_url: str = "https://www.googleapis.com/youtube/v3"
    http_timeout_seconds: float = 10.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_missing_credentials(self) -> list[str]:
        """Return env var names that are required but left empty."""
        missing: list[str] = []
        if not self.youtube_api_key:
            missing.append("YOUTUBE_API_KEY")
        if self.cache_backend == "redis" and not self.redis_url:
            missing.append("REDIS_URL")
        return missing
