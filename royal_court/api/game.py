"""REST API endpoints for playing a reign: court, choices, days and taxes."""
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from royal_court.config import get_settings
from royal_court.game import constants as C
from royal_court.game.catalog import Consequence, EventDefinition, load_default_catalog
from royal_court.game.errors import GameOverError, InvalidActionError
from royal_court.game.game_config import GameConfig
from royal_court.game.sessions import SessionManager, sessions
from royal_court.game.state_machine import GameSession

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/game", tags=["game"])


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

@lru_cache
def get_catalog() -> tuple[EventDefinition, ...]:
    return load_default_catalog(get_settings().EVENTS_DIR)


def get_sessions() -> SessionManager:
    return sessions


def _get_game(session_id: str, registry: SessionManager) -> GameSession:
    game = registry.get(session_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


def _reject(exc: InvalidActionError) -> HTTPException:
    if isinstance(exc, GameOverError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class NewGameRequest(BaseModel):
    seed: int | None = None
    daily_capacity: int | None = None
    actions_per_day: int | None = None
    wait_limit: int | None = None
    min_tax: int | None = None
    max_tax: int | None = None
    starting_tax: int | None = None
    love_lost_at_max_tax: float | None = None
    ignored_petition_consequences: list[Consequence] | None = None
    starting_money: float | None = None
    win_threshold: float | None = None
    loss_threshold: float | None = None
    money_loss_inclusive: bool | None = None
    ruler_name: str | None = None
    ruler_title: str | None = None


class ChooseRequest(BaseModel):
    petition_id: int
    choice_index: int


class TaxRequest(BaseModel):
    rate: int


class ChoiceView(BaseModel):
    index: int
    description: str
    affordable: bool


class PetitionView(BaseModel):
    id: int
    character: str
    description: str
    days_waited: int
    choices: list[ChoiceView]


class StatusView(BaseModel):
    day: int
    actions_left: int
    tax_rate: int
    money: float
    love: float
    respect: float
    game_over: bool
    name: str
    title: str


class OutcomeView(BaseModel):
    result: str
    day: int
    cause: str


class GameView(BaseModel):
    session_id: str
    phase: str
    status: StatusView
    court: list[PetitionView]
    summary: str
    outcome: OutcomeView | None = None
    recent_events: list[str]


class DeltaView(BaseModel):
    field: str
    before: float
    after: float
    delta: float


class ChoiceResponse(GameView):
    deltas: list[DeltaView]
    issues: list[str]


class DayResponse(GameView):
    tax_collected: float
    love_lost_to_tax: float
    ignored: list[str]
    under_capacity: bool


def _view(session_id: str, game: GameSession) -> dict:
    outcome = None
    if game.outcome is not None:
        outcome = OutcomeView(
            result=game.outcome.result.value,
            day=game.outcome.day,
            cause=game.outcome.cause,
        )
    return {
        "session_id": session_id,
        "phase": game.phase.value,
        "status": StatusView(**game.status.as_dict()),
        "court": [PetitionView(**p) for p in game.court_listing()],
        "summary": game.court_summary(),
        "outcome": outcome,
        "recent_events": game.event_log[-C.RECENT_EVENTS_SHOWN:],
    }


def _day_response(session_id: str, game: GameSession, report) -> DayResponse:
    return DayResponse(
        **_view(session_id, game),
        tax_collected=report.tax_collected,
        love_lost_to_tax=report.love_lost_to_tax,
        ignored=[p.definition.character for p in report.ignored],
        under_capacity=report.under_capacity,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.post("/new", response_model=DayResponse)
async def new_game(
    req: NewGameRequest,
    catalog: tuple[EventDefinition, ...] = Depends(get_catalog),
    registry: SessionManager = Depends(get_sessions),
):
    settings = get_settings()
    overrides = req.model_dump(exclude={"seed"}, exclude_none=True)
    if req.ignored_petition_consequences is not None:
        overrides["ignored_petition_consequences"] = tuple(req.ignored_petition_consequences)
    try:
        config = GameConfig.from_settings(settings, **overrides)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    seed = req.seed if req.seed is not None else settings.SEED
    session_id, game = registry.create(catalog, config, seed=seed)
    report = game.last_report
    return _day_response(session_id, game, report)


@router.get("/{session_id}", response_model=GameView)
async def get_game(session_id: str, registry: SessionManager = Depends(get_sessions)):
    game = _get_game(session_id, registry)
    return GameView(**_view(session_id, game))


@router.get("/{session_id}/petitions/{petition_id}", response_model=PetitionView)
async def get_petition(
    session_id: str,
    petition_id: int,
    registry: SessionManager = Depends(get_sessions),
):
    """Open one petition from the court without answering it."""
    game = _get_game(session_id, registry)
    try:
        return PetitionView(**game.inspect_petition(petition_id))
    except InvalidActionError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.post("/{session_id}/choose", response_model=ChoiceResponse)
async def choose(
    session_id: str,
    req: ChooseRequest,
    registry: SessionManager = Depends(get_sessions),
):
    game = _get_game(session_id, registry)
    try:
        resolution = game.select_choice(req.petition_id, req.choice_index)
    except InvalidActionError as exc:
        log.warning("Rejected choice in session %s: %s", session_id, exc)
        raise _reject(exc)

    return ChoiceResponse(
        **_view(session_id, game),
        deltas=[
            DeltaView(field=d.resource.value, before=d.before, after=d.after, delta=d.delta)
            for d in resolution.deltas
        ],
        issues=[str(issue) for issue in resolution.issues],
    )


@router.post("/{session_id}/advance", response_model=DayResponse)
async def advance_day(session_id: str, registry: SessionManager = Depends(get_sessions)):
    game = _get_game(session_id, registry)
    try:
        report = game.advance_day()
    except InvalidActionError as exc:
        raise _reject(exc)
    return _day_response(session_id, game, report)


@router.post("/{session_id}/tax", response_model=GameView)
async def set_tax(
    session_id: str,
    req: TaxRequest,
    registry: SessionManager = Depends(get_sessions),
):
    game = _get_game(session_id, registry)
    try:
        game.set_tax_rate(req.rate)
    except InvalidActionError as exc:
        raise _reject(exc)
    return GameView(**_view(session_id, game))


@router.post("/{session_id}/restart", response_model=DayResponse)
async def restart_game(session_id: str, registry: SessionManager = Depends(get_sessions)):
    """Begin a new reign in the same session."""
    game = _get_game(session_id, registry)
    report = game.restart()
    return _day_response(session_id, game, report)


@router.delete("/{session_id}")
async def delete_game(session_id: str, registry: SessionManager = Depends(get_sessions)):
    if not registry.remove(session_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"status": "deleted"}
