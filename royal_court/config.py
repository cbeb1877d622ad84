import os
from functools import lru_cache

from pydantic_settings import BaseSettings

# Hosting platforms set PORT without a prefix -- map it to the
# COURT_-prefixed name that pydantic-settings expects.
if "PORT" in os.environ and "COURT_PORT" not in os.environ:
    os.environ["COURT_PORT"] = os.environ["PORT"]


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]
    LOG_LEVEL: str = "INFO"

    # Directory of *.json petition documents; empty means the bundled content
    EVENTS_DIR: str = ""
    # Seed for the session random generator; None draws from the OS
    SEED: int | None = None
    # Live sessions kept in memory before the oldest is dropped
    MAX_SESSIONS: int = 1000

    # Default game tunables, overridable per session
    DAILY_CAPACITY: int = 5
    ACTIONS_PER_DAY: int = 3
    DAYS_PETITIONERS_WAIT: int = 2
    MIN_TAX: int = 0
    MAX_TAX: int = 30
    STARTING_TAX: int = 10
    LOVE_LOST_AT_MAX_TAX: float = 5.0
    STARTING_MONEY: float = 100.0
    WIN_THRESHOLD: float = 100.0
    LOSS_THRESHOLD: float = -100.0
    MONEY_LOSS_INCLUSIVE: bool = False

    RULER_NAME: str = "Aldric"
    RULER_TITLE: str = "King"

    model_config = {"env_prefix": "COURT_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
