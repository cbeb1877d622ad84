import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from royal_court.api.game import get_catalog, get_sessions
from royal_court.game import catalog as event_catalog
from royal_court.game.sessions import SessionManager
from royal_court.main import create_app

TEST_SEED = 1234


def _consequence(field, low, high=None):
    return {"field": field, "minChange": low, "maxChange": low if high is None else high}


SAMPLE_DOCUMENTS = [
    {
        "events": [
            {
                "character": "Farmer Hob",
                "description": "My fields are flooded.",
                "choices": [
                    {"description": "Give grain", "consequences": [
                        _consequence("money", -10), _consequence("love", 5, 10),
                    ]},
                    {"description": "Refuse", "consequences": [_consequence("love", -6, -2)]},
                ],
            },
            {
                "character": "Widow Marta",
                "description": "Send my son home.",
                "choices": [
                    {"description": "Release him", "consequences": [
                        _consequence("love", 4, 8), _consequence("respect", -4, -1),
                    ]},
                    {"description": "Refuse", "consequences": [_consequence("love", -8, -4)]},
                ],
            },
            {
                "character": "Old Tam",
                "description": "Caught poaching.",
                "choices": [
                    {"description": "Mercy", "consequences": [_consequence("love", 2, 5)]},
                    {"description": "Hang him", "lethal": True, "consequences": [
                        _consequence("respect", 5, 10),
                    ]},
                ],
            },
        ]
    },
    {
        "events": [
            {
                "character": "Duke Reynard",
                "description": "Fund my fortress.",
                "choices": [
                    {"description": "Fund it", "consequences": [
                        _consequence("money", -40), _consequence("respect", 6, 12),
                    ]},
                    {"description": "Decline", "consequences": [_consequence("respect", -6, -2)]},
                ],
            },
            {
                "character": "Lady Isolde",
                "description": "A gift for a council seat.",
                "choices": [
                    {"description": "Accept", "consequences": [_consequence("gold", 30)]},
                ],
            },
            {
                "character": "The Jester",
                "description": "A joke for your Majesty.",
                "choices": [
                    {"description": "Laugh", "consequences": [_consequence("love", 500)]},
                    {"description": "Scowl", "consequences": [_consequence("respect", -1)]},
                ],
            },
        ]
    },
]


@pytest.fixture
def sample_documents():
    return [dict(doc) for doc in SAMPLE_DOCUMENTS]


@pytest.fixture
def catalog(sample_documents):
    return event_catalog.load(sample_documents)


@pytest.fixture
def rng():
    return random.Random(TEST_SEED)


@pytest_asyncio.fixture
async def client(catalog):
    registry = SessionManager()

    app = create_app()
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_sessions] = lambda: registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
