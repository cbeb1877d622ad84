"""Game state machine -- one ruler's reign from setup to game over.

``GameSession`` is the only owner of ``Status``.  Stats change only
through its named operations (``collect_tax``, ``begin_day``,
``refill_court``, ``ignore_petition``, ``apply_consequences``), and each
of them ends with a terminal-condition check.  Player actions
(``select_choice``, ``advance_day``, ``set_tax_rate``) validate
everything before touching any state.

Terminal conditions, first match wins:

1. love <= loss threshold       -> Lost
2. respect <= loss threshold    -> Lost
3. money < 0 (or <= 0)          -> Lost
4. love >= win threshold        -> Won
5. respect >= win threshold     -> Won
6. no petitioner can ever come  -> Lost
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from royal_court.game import constants as C
from royal_court.game import day_cycle
from royal_court.game.catalog import Consequence, EventDefinition
from royal_court.game.consequence_engine import ConsequenceEngine, Resolution
from royal_court.game.errors import GameOverError, InvalidActionError
from royal_court.game.game_config import GameConfig
from royal_court.game.scheduler import EventPool, PetitionInstance, RefillResult
from royal_court.game.status import Status

log = logging.getLogger(__name__)


class Phase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Result(str, Enum):
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Outcome:
    result: Result
    day: int
    cause: str


class GameSession:
    def __init__(
        self,
        catalog: Sequence[EventDefinition],
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.catalog = tuple(catalog)
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.engine = ConsequenceEngine(self.rng)
        self.phase = Phase.SETUP
        self.outcome: Outcome | None = None
        self.status = Status()
        self.pool = EventPool((), self.rng)
        self.event_log: list[str] = []
        self.last_report: day_cycle.DayReport | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> day_cycle.DayReport:
        """Set up a fresh reign and open the first day's court."""
        cfg = self.config
        self.status = Status(
            money=cfg.starting_money,
            tax_rate=cfg.starting_tax,
            name=cfg.ruler_name,
            title=cfg.ruler_title,
        )
        self.pool = EventPool(self.catalog, self.rng)
        self.outcome = None
        self.event_log = []
        self.phase = Phase.PLAYING
        log.info(
            "Reign of %s %s begins with %d petitions",
            cfg.ruler_title, cfg.ruler_name, len(self.pool),
        )
        self._check_terminal()
        if self.is_over:
            self.last_report = day_cycle.DayReport()
        else:
            self.last_report = day_cycle.advance(self)
        return self.last_report

    def restart(self) -> day_cycle.DayReport:
        return self.start()

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def _require_playing(self) -> None:
        if self.phase is Phase.GAME_OVER:
            raise GameOverError("The game is over")
        if self.phase is not Phase.PLAYING:
            raise InvalidActionError("The game has not started")

    def _log(self, line: str) -> None:
        self.event_log.append(f"Day {self.status.day}: {line}")
        del self.event_log[:-C.EVENT_LOG_LIMIT]

    # ------------------------------------------------------------------
    # Terminal conditions
    # ------------------------------------------------------------------

    def evaluate_terminal(self) -> Outcome | None:
        """Return the outcome the current state implies, if any."""
        s, cfg = self.status, self.config
        if s.love <= cfg.loss_threshold:
            return Outcome(Result.LOST, s.day, C.CAUSE_LOVE_LOST)
        if s.respect <= cfg.loss_threshold:
            return Outcome(Result.LOST, s.day, C.CAUSE_RESPECT_LOST)
        broke = s.money <= 0 if cfg.money_loss_inclusive else s.money < 0
        if broke:
            return Outcome(Result.LOST, s.day, C.CAUSE_MONEY_LOST)
        if s.love >= cfg.win_threshold:
            return Outcome(Result.WON, s.day, C.CAUSE_LOVE_WON)
        if s.respect >= cfg.win_threshold:
            return Outcome(Result.WON, s.day, C.CAUSE_RESPECT_WON)
        if self.pool.is_exhausted():
            return Outcome(Result.LOST, s.day, C.CAUSE_NO_SUBJECTS)
        return None

    def _check_terminal(self) -> None:
        if self.is_over:
            return
        outcome = self.evaluate_terminal()
        if outcome is None:
            return
        self.outcome = outcome
        self.phase = Phase.GAME_OVER
        self.status.game_over = True
        self._log(outcome.cause)
        log.info(
            "Game over on day %d: %s (%s) %s",
            outcome.day, outcome.result.value, outcome.cause, self.status,
        )

    # ------------------------------------------------------------------
    # Named mutations
    # ------------------------------------------------------------------

    def collect_tax(self) -> tuple[float, int]:
        self._require_playing()
        cfg = self.config
        rate = self.status.tax_rate
        love_lost = day_cycle.tax_love_cost(
            rate, cfg.min_tax, cfg.max_tax, cfg.love_lost_at_max_tax
        )
        self.status.money += rate
        self.status.love -= love_lost
        self._log(f"Collected {rate} gold in taxes; the people's love fell by {love_lost}.")
        log.info("Tax collected: +%d money, -%d love", rate, love_lost)
        self._check_terminal()
        return rate, love_lost

    def begin_day(self) -> None:
        self._require_playing()
        self.status.day += 1
        self.status.actions_left = self.config.actions_per_day
        self._check_terminal()

    def refill_court(self) -> RefillResult:
        self._require_playing()
        result = self.pool.refill_court(self.config.daily_capacity, self.config.wait_limit)
        self._check_terminal()
        return result

    def apply_consequences(self, consequences: Iterable[Consequence]) -> Resolution:
        self._require_playing()
        resolution = self.engine.apply(consequences, self.status)
        self._check_terminal()
        return resolution

    def ignore_petition(self, instance: PetitionInstance) -> Resolution:
        self._log(f"{instance.definition.character} grew tired of waiting and left.")
        return self.apply_consequences(self.config.ignored_petition_consequences)

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------

    def select_choice(self, petition_id: int, choice_index: int) -> Resolution:
        """Answer a petition in court.  Rejected without side effects if invalid."""
        self._require_playing()
        instance = self.pool.get_in_court(petition_id)
        choices = instance.definition.choices
        if not 0 <= choice_index < len(choices):
            raise InvalidActionError(
                f"Petition {petition_id} has no choice {choice_index}"
            )
        if self.status.actions_left <= 0:
            raise InvalidActionError("No actions left today")
        choice = choices[choice_index]
        if not self.engine.can_afford(choice, self.status):
            raise InvalidActionError("The treasury cannot afford that")

        log.debug("Petition %d: selected choice %d", petition_id, choice_index)
        self.pool.resolve(instance, lethal=choice.lethal)
        self.status.actions_left -= 1
        self._log(f"{instance.definition.character}: {choice.description}")
        return self.apply_consequences(choice.consequences)

    def advance_day(self) -> day_cycle.DayReport:
        self._require_playing()
        self.last_report = day_cycle.advance(self)
        return self.last_report

    def set_tax_rate(self, rate: int) -> None:
        self._require_playing()
        cfg = self.config
        if not cfg.min_tax <= rate <= cfg.max_tax:
            raise InvalidActionError(
                f"Tax rate must be between {cfg.min_tax} and {cfg.max_tax}"
            )
        self.status.tax_rate = rate
        self._check_terminal()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def petition_view(self, instance: PetitionInstance) -> dict:
        event = instance.definition
        return {
            "id": instance.id,
            "character": event.character,
            "description": event.description,
            "days_waited": instance.days_waited,
            "choices": [
                {
                    "index": i,
                    "description": choice.description,
                    "affordable": self.engine.can_afford(choice, self.status),
                }
                for i, choice in enumerate(event.choices)
            ],
        }

    def inspect_petition(self, petition_id: int) -> dict:
        return self.petition_view(self.pool.get_in_court(petition_id))

    def court_listing(self) -> list[dict]:
        return [self.petition_view(p) for p in self.pool.court]

    def court_summary(self) -> str:
        return C.COURT_SUMMARY.format(count=len(self.pool.court))
