"""Event catalog -- immutable petition content loaded once per process.

Each source document is JSON shaped like::

    {"events": [{"character": "...", "description": "...",
                 "choices": [{"description": "...",
                              "consequences": [{"field": "love",
                                                "minChange": -5,
                                                "maxChange": 5}]}]}]}

Documents are concatenated in the order given.  Duplicate events are kept
as independent copies.  Unknown or missing keys fail the whole load.
"""
import logging
from pathlib import Path
from typing import Any, Iterable, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from royal_court.game.errors import CatalogError

log = logging.getLogger(__name__)

BUNDLED_EVENTS_DIR = Path(__file__).resolve().parent.parent / "data" / "events"

Document = Union[str, bytes, dict]


class _Content(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class Consequence(_Content):
    field: str
    min_change: float = Field(alias="minChange")
    max_change: float = Field(alias="maxChange")

    @model_validator(mode="after")
    def _check_range(self) -> "Consequence":
        if self.min_change > self.max_change:
            raise ValueError(
                f"minChange {self.min_change:g} is above maxChange {self.max_change:g}"
            )
        return self

    @property
    def is_fixed(self) -> bool:
        return self.min_change == self.max_change


class Choice(_Content):
    description: str
    consequences: tuple[Consequence, ...] = ()
    # Lethal choices remove the petitioner from the game for good
    lethal: bool = False


class EventDefinition(_Content):
    character: str
    description: str
    choices: tuple[Choice, ...]


class EventDocument(_Content):
    events: tuple[EventDefinition, ...]


def _parse(document: Document, name: str) -> EventDocument:
    try:
        if isinstance(document, dict):
            return EventDocument.model_validate(document)
        return EventDocument.model_validate_json(document)
    except ValidationError as exc:
        raise CatalogError(f"Invalid event document {name}: {exc}") from exc


def load(documents: Iterable[Document], names: Iterable[str] | None = None) -> tuple[EventDefinition, ...]:
    """Parse *documents* and return every event they define, in order.

    Raises CatalogError if any document does not match the schema or if
    no events are defined at all.
    """
    documents = list(documents)
    names = list(names) if names is not None else [f"#{i}" for i in range(len(documents))]

    events: list[EventDefinition] = []
    for document, name in zip(documents, names):
        parsed = _parse(document, name)
        events.extend(parsed.events)
        log.debug("Loaded %d events from %s", len(parsed.events), name)

    if not events:
        raise CatalogError("No events defined in any document")

    log.info("Catalog loaded: %d events from %d documents", len(events), len(documents))
    return tuple(events)


def load_directory(path: Union[str, Path]) -> tuple[EventDefinition, ...]:
    """Load every ``*.json`` document under *path*, sorted by file name."""
    directory = Path(path)
    if not directory.is_dir():
        raise CatalogError(f"Events directory not found: {directory}")

    files = sorted(directory.glob("*.json"))
    documents: list[Any] = []
    for file in files:
        try:
            documents.append(file.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CatalogError(f"Cannot read {file.name}: {exc}") from exc

    return load(documents, names=[f.name for f in files])


def load_default_catalog(events_dir: str = "") -> tuple[EventDefinition, ...]:
    """Load the configured events directory, or the bundled content."""
    return load_directory(events_dir or BUNDLED_EVENTS_DIR)

