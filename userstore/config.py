"""Environment-driven settings, loaded from a local .env file."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv


@dataclass
class Settings:
    postgres_uri: Optional[str]
    pool_min: int = 1
    pool_max: int = 5
    log_level: str = "INFO"
    log_dir: Optional[str] = "logs"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Load .env (without overriding the real environment) and read settings."""
    load_dotenv(env_file or find_dotenv(usecwd=True))

    return Settings(
        postgres_uri=os.environ.get("POSTGRES_URI"),
        pool_min=int(os.environ.get("USERSTORE_POOL_MIN", "1")),
        pool_max=int(os.environ.get("USERSTORE_POOL_MAX", "5")),
        log_level=os.environ.get("USERSTORE_LOG_LEVEL", "INFO").upper(),
        # empty USERSTORE_LOG_DIR disables file logging
        log_dir=os.environ.get("USERSTORE_LOG_DIR", "logs") or None,
    )
