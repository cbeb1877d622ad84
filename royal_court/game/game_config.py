"""Per-session game configuration."""
from pydantic import BaseModel, ConfigDict, Field, model_validator

from royal_court.config import Settings
from royal_court.game import constants as C
from royal_court.game.catalog import Consequence


def _default_ignored_consequences() -> tuple[Consequence, ...]:
    return tuple(Consequence.model_validate(c) for c in C.IGNORED_PETITION_CONSEQUENCES)


class GameConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    daily_capacity: int = Field(5, ge=0)
    actions_per_day: int = Field(3, ge=1)
    # Petitioners leave once they have waited longer than this many days
    wait_limit: int = Field(2, ge=0)
    min_tax: int = 0
    max_tax: int = 30
    starting_tax: int = 10
    love_lost_at_max_tax: float = 5.0
    ignored_petition_consequences: tuple[Consequence, ...] = Field(
        default_factory=_default_ignored_consequences
    )
    starting_money: float = 100.0
    win_threshold: float = 100.0
    loss_threshold: float = -100.0
    # True: lose at money <= 0, False: lose only below zero
    money_loss_inclusive: bool = False
    ruler_name: str = "Aldric"
    ruler_title: str = "King"

    @model_validator(mode="after")
    def _check_bounds(self) -> "GameConfig":
        if self.min_tax >= self.max_tax:
            raise ValueError("min_tax must be below max_tax")
        if not self.min_tax <= self.starting_tax <= self.max_tax:
            raise ValueError("starting_tax must lie within the tax bounds")
        if self.loss_threshold >= self.win_threshold:
            raise ValueError("loss_threshold must be below win_threshold")
        return self

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "GameConfig":
        values = {
            "daily_capacity": settings.DAILY_CAPACITY,
            "actions_per_day": settings.ACTIONS_PER_DAY,
            "wait_limit": settings.DAYS_PETITIONERS_WAIT,
            "min_tax": settings.MIN_TAX,
            "max_tax": settings.MAX_TAX,
            "starting_tax": settings.STARTING_TAX,
            "love_lost_at_max_tax": settings.LOVE_LOST_AT_MAX_TAX,
            "starting_money": settings.STARTING_MONEY,
            "win_threshold": settings.WIN_THRESHOLD,
            "loss_threshold": settings.LOSS_THRESHOLD,
            "money_loss_inclusive": settings.MONEY_LOSS_INCLUSIVE,
            "ruler_name": settings.RULER_NAME,
            "ruler_title": settings.RULER_TITLE,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
