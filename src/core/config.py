"""Application settings, read from the environment (a local .env file is picked up as well)."""

import os
from dataclasses import dataclass
from typing import Self

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./checkers.db"


@dataclass(frozen=True)
class Settings:
    database_url: str
    echo_sql: bool
    log_level: str

    @classmethod
    def from_env(cls) -> Self:
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            echo_sql=os.getenv("SQL_ECHO", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


settings = Settings.from_env()
