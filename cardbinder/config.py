from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "cardbinder"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./data/collection.db"

    # Base URL of the collection service. None means static hosting:
    # the store never tries the remote and goes straight to the local cache.
    collection_api_url: str | None = None
    remote_timeout: float = 10.0

    local_cache_path: Path = Path("data") / "local_collection.json"
    catalog_dir: Path = Path("data")


settings = Settings()


# =============================================================================
# CATALOG FILES
# =============================================================================

# Tried in order; the first one that loads wins
PRIMARY_CATALOG_FILENAME = "sets.json"
FALLBACK_CATALOG_FILENAME = "sets_api.json"
