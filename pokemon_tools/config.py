import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from pokemon_tools.enums import LanguageId

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


def default_cache_dir() -> Path:
    return Path.home() / ".cache" / "pokelookup"


class Settings(BaseModel):
    """Runtime settings, read from the environment (and a local .env file)."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="PokéAPI root URL")
    cache_dir: Optional[Path] = Field(
        default_factory=default_cache_dir,
        description="Directory for cached JSON responses. None disables caching.",
    )
    cache_ttl: int = Field(
        default=0,
        ge=0,
        description="Seconds before a cached response is stale. 0 keeps it forever.",
    )
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")
    language: str = Field(default="en", description="Default language id for names")
    log_level: str = Field(default="WARNING", description="Root logging level")

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v):
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v):
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return v

    @field_validator("language")
    @classmethod
    def known_language(cls, v):
        if v not in {language.value for language in LanguageId}:
            raise ValueError(f"unknown language id: {v}")
        return v

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        values = {}
        if os.getenv("POKEAPI_BASE_URL"):
            values["base_url"] = os.getenv("POKEAPI_BASE_URL")
        if os.getenv("POKELOOKUP_CACHE_DIR"):
            values["cache_dir"] = Path(os.getenv("POKELOOKUP_CACHE_DIR")).expanduser()
        if os.getenv("POKELOOKUP_CACHE_TTL"):
            values["cache_ttl"] = os.getenv("POKELOOKUP_CACHE_TTL")
        if os.getenv("POKELOOKUP_TIMEOUT"):
            values["timeout"] = os.getenv("POKELOOKUP_TIMEOUT")
        if os.getenv("POKELOOKUP_LANG"):
            values["language"] = os.getenv("POKELOOKUP_LANG")
        if os.getenv("POKELOOKUP_LOG_LEVEL"):
            values["log_level"] = os.getenv("POKELOOKUP_LOG_LEVEL")
        return cls(**values)
