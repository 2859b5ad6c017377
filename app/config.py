"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class ListingConfig(BaseSettings):
    default_page_size: int = 12
    max_page_size: int = 100
    autocomplete_limit: int = 8
    autocomplete_min_chars: int = 2


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/reviews.db"
    log_level: str = "INFO"
    session_cookie_name: str = "session_token"
    session_max_age_days: int = 7
    listing: ListingConfig = Field(default_factory=ListingConfig)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "BR_",
        "env_nested_delimiter": "__",
    }


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    kwargs = {}
    if "database" in y:
        kwargs["database_url"] = y["database"].get("url", Settings.model_fields["database_url"].default)
    if "logging" in y:
        kwargs["log_level"] = y["logging"].get("level", "INFO")
    if "listing" in y:
        kwargs["listing"] = ListingConfig(**y["listing"])
    return Settings(**kwargs)
