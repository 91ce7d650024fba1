from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Settings:
    database_url: str = "sqlite:///./poolmarks.db"
    default_stake: int = 100
    default_chalk_fee: int = 30
    default_table_fee: int = 20
    recent_sessions: int = 5
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./poolmarks.db"),
        default_stake=int(os.getenv("POOLMARKS_DEFAULT_STAKE", "100")),
        default_chalk_fee=int(os.getenv("POOLMARKS_CHALK_FEE", "30")),
        default_table_fee=int(os.getenv("POOLMARKS_TABLE_FEE", "20")),
        recent_sessions=int(os.getenv("POOLMARKS_RECENT_SESSIONS", "5")),
        log_level=os.getenv("POOLMARKS_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = load_settings()
