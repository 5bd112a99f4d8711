"""Runtime configuration for rssriver."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rssriver.fields import DIALECTS


class Settings(BaseSettings):
    """Environment-backed configuration model."""

    model_config = SettingsConfigDict(env_prefix="rssriver_", env_file=".env", case_sensitive=False)

    environment: Literal["dev", "test", "prod"] = "dev"

    # Document type and mapping flavour used when registering the index
    default_type: str = "page"
    mapping_dialect: str = "legacy"

    # Ingestion-run tag stamped on documents; unset means no `river` field
    river_name: str | None = None
    max_entries: int = 500

    chroma_persist_dir: Path = Path("./.chroma")
    chroma_collection: str = "rssriver"
    chroma_host: str | None = None
    chroma_port: int | None = None
    chroma_ssl: bool = False
    # Dimension of the hash vectors stored alongside documents
    embedding_dim: int = 64

    # Security
    api_key: str | None = None  # if set, required in X-API-Key header

    @field_validator("mapping_dialect")
    @classmethod
    def _known_dialect(cls, value: str) -> str:
        if value not in DIALECTS:
            raise ValueError(f"mapping_dialect must be one of {', '.join(DIALECTS)}")
        return value

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


@lru_cache(maxsize=1)
def _cached_settings() -> Settings:
    return Settings()


def get_settings(override: Optional[dict[str, object]] = None) -> Settings:
    """Return settings, optionally overriding values without mutating cache."""

    if override:
        return Settings(**override)
    return _cached_settings()
