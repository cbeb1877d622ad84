"""Tests for the in-memory session registry."""
from royal_court.game.game_config import GameConfig
from royal_court.game.sessions import SessionManager


def test_create_and_remove(catalog):
    registry = SessionManager(max_sessions=5)

    session_id, game = registry.create(catalog, GameConfig(), seed=1)

    assert registry.get(session_id) is game
    assert game.status.day == 1
    assert registry.remove(session_id)
    assert registry.get(session_id) is None
    assert not registry.remove(session_id)


def test_oldest_session_is_dropped_at_limit(catalog):
    registry = SessionManager(max_sessions=2)

    first, _ = registry.create(catalog, GameConfig(), seed=1)
    second, _ = registry.create(catalog, GameConfig(), seed=2)
    third, _ = registry.create(catalog, GameConfig(), seed=3)

    assert registry.get(first) is None
    assert registry.get(second) is not None
    assert registry.get(third) is not None
    assert len(registry.sessions) == 2
