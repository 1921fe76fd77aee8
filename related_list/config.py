"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "Related List API"
    database_url: str = "sqlite+pysqlite:///./related_list.db"
    default_currency_code: str = "USD"
    default_page_size: int = 10
    max_row_selection: int = 100

    search_debounce_ms: int = 300
    resize_debounce_ms: int = 250
    flow_close_grace_ms: int = 100

    row_number_column_width_px: int = 60
    action_column_width_px: int = 80
    heavy_column_width_px: int = 255
    even_split_max_columns: int = 4
    light_mode_max_columns: int = 5
    default_container_width_px: int = 1200

    discard_stale_fetches: bool = False

    model_config = SettingsConfigDict(
        env_prefix="RELATED_LIST_",
        env_file=str(_PROJECT_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
