"""Host Settings — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting is overridable with a WEBFOCUS_-prefixed environment variable
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - name/port here only seed AppConfiguration when the host is built without one
    - views_dir/static_dir default to the directories shipped inside the package
"""

import os
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class Settings(BaseSettings):
    """Host settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WEBFOCUS_", env_file=".env", case_sensitive=False,
        extra="ignore",
    )

    # Host
    name: str = "App Name"
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Views and assets
    views_dir: str = os.path.join(PACKAGE_DIR, "views")
    static_dir: str = os.path.join(PACKAGE_DIR, "static")
    view_extension: str = ".html"

    @field_validator("view_extension")
    @classmethod
    def ensure_leading_dot(cls, v: str) -> str:
        return v if v.startswith(".") else f".{v}"

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
