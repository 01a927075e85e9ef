"""
app/settings.py

Central configuration for the search API.
- Index location, static asset mount, listen address, and query defaults.
- Uses pydantic-settings so values can be overridden via environment variables or a `.env` file.
- An optional YAML runtime file (path in SEARCH_RUNTIME) overlays the environment.
- Import `get_settings()` anywhere in the project to access shared config.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.services.query_builders import QueryOptions


class Settings(BaseSettings):
    """
    Settings model holding the index location, HTTP surface, and query defaults.
    Values can be customized by setting environment variables or editing `.env`.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---------- Index ----------
    index_dir: Path = Path("data/index")        # Pre-built Whoosh index directory
    index_name: Optional[str] = None            # Whoosh index name inside the directory
    id_field: str = "id"                        # Stored field used as the hit id

    # ---------- HTTP ----------
    host: str = "0.0.0.0"
    port: int = 8080
    static_dir: Optional[Path] = None           # Archive/asset directory; unset = no static mount
    static_prefix: str = "/static"
    log_level: str = "INFO"

    # ---------- Query defaults ----------
    fuzziness: int = Field(2, ge=0)             # Max edit distance for /fuzzy
    facet_name: str = "Date"
    facet_field: str = "Date"
    max_query_length: int = Field(256, ge=1)
    search_timeout: float = Field(10.0, ge=0)   # Seconds; 0 disables the limit

    @field_validator("static_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = "/" + value.strip("/")
        if value == "/":
            raise ValueError("static_prefix cannot be the site root")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    def query_options(self) -> QueryOptions:
        return QueryOptions(
            fuzziness=self.fuzziness,
            facet_name=self.facet_name,
            facet_field=self.facet_field,
        )


def _load_runtime(cfg_path: str | Path) -> Dict[str, Any]:
    p = Path(cfg_path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"Runtime config not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(cfg_path: str | Path | None = None) -> Settings:
    """Build Settings from the environment, overlaid by the YAML runtime file if one is named."""
    cfg_path = cfg_path or os.environ.get("SEARCH_RUNTIME")
    overrides = _load_runtime(cfg_path) if cfg_path else {}
    return Settings(**overrides)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
