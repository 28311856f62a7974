"""Runtime settings from the environment; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env only when present (e.g. local dev); does not override existing env
load_dotenv()

ENV_PREFIX = "PALLET_OPTIMIZER_"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    cache_size: int = Field(default=128, ge=0, description="Max cached optimization results (0 disables)")
    cache_ttl: Optional[float] = Field(default=None, gt=0, description="Seconds before a cached result expires")
    log_level: str = Field(default="INFO")
    cors_origin_regex: Optional[str] = Field(default=None, description="Allowed browser origins for the API")


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings() -> Settings:
    """Read settings from PALLET_OPTIMIZER_* environment variables."""
    values = {
        "cache_size": _env("CACHE_SIZE"),
        "cache_ttl": _env("CACHE_TTL"),
        "log_level": _env("LOG_LEVEL"),
        "cors_origin_regex": _env("CORS_ORIGIN_REGEX"),
    }
    return Settings(**{k: v for k, v in values.items() if v is not None})


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or load_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
