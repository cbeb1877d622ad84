"""In-memory registry of running game sessions."""
import logging
import random
import uuid
from typing import Sequence

from royal_court.config import settings
from royal_court.game.catalog import EventDefinition
from royal_court.game.game_config import GameConfig
from royal_court.game.state_machine import GameSession

log = logging.getLogger(__name__)


class SessionManager:
    """Holds live sessions, keyed by a random id.

    Once *max_sessions* are held, creating another drops the oldest.
    """

    def __init__(self, max_sessions: int = settings.MAX_SESSIONS):
        self.max_sessions = max_sessions
        self.sessions: dict[str, GameSession] = {}

    def create(
        self,
        catalog: Sequence[EventDefinition],
        config: GameConfig,
        seed: int | None = None,
    ) -> tuple[str, GameSession]:
        while self.sessions and len(self.sessions) >= self.max_sessions:
            oldest = next(iter(self.sessions))
            del self.sessions[oldest]
            log.info("Session limit reached, dropped oldest session %s", oldest)

        session_id = str(uuid.uuid4())
        game = GameSession(catalog, config, random.Random(seed))
        self.sessions[session_id] = game
        game.start()
        log.info("Created session %s (seed=%s)", session_id, seed)
        return session_id, game

    def get(self, session_id: str) -> GameSession | None:
        return self.sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None


sessions = SessionManager()
