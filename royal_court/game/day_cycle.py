"""Day cycle -- taxes, the new day, and the morning court.

``advance`` drives one day change through the session's named operations:

1. Collect tax (skipped on the very first day).
2. Increment the day and reset the action budget.
3. Refill the court; every petitioner who gave up waiting applies the
   ignored-petition penalty.

Each operation ends with a terminal-condition check, so the cycle stops
as soon as the game is over.
"""
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from royal_court.game.consequence_engine import Resolution
from royal_court.game.scheduler import PetitionInstance

if TYPE_CHECKING:
    from royal_court.game.state_machine import GameSession

log = logging.getLogger(__name__)


def tax_love_cost(rate: int, min_tax: int, max_tax: int, love_lost_at_max_tax: float) -> int:
    """Love lost for one day of taxes at *rate*."""
    return round(love_lost_at_max_tax * (rate - min_tax) / (max_tax - min_tax))


@dataclass
class DayReport:
    day: int = 0
    tax_collected: float = 0
    love_lost_to_tax: float = 0
    ignored: list[PetitionInstance] = field(default_factory=list)
    penalties: list[Resolution] = field(default_factory=list)
    under_capacity: bool = False


def advance(game: "GameSession") -> DayReport:
    report = DayReport()

    if game.status.day > 0:
        report.tax_collected, report.love_lost_to_tax = game.collect_tax()
        if game.is_over:
            report.day = game.status.day
            return report

    game.begin_day()
    report.day = game.status.day
    if game.is_over:
        return report

    refill = game.refill_court()
    report.under_capacity = refill.under_capacity
    for instance in refill.evicted:
        report.ignored.append(instance)
        report.penalties.append(game.ignore_petition(instance))
        if game.is_over:
            break

    log.info(
        "Day %d begins: %d in court, %d ignored",
        report.day, len(game.pool.court), len(report.ignored),
    )
    return report
