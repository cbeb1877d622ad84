"""Exceptions raised by the game core."""
from dataclasses import dataclass


class CatalogError(Exception):
    """Petition content could not be loaded."""


class InvalidActionError(Exception):
    """The requested action is not allowed; nothing was changed."""


class GameOverError(InvalidActionError):
    """The session has ended and accepts no further actions."""


@dataclass(frozen=True)
class DataIntegrityError:
    """A consequence that was skipped because its data is unusable.

    Reported alongside a resolution rather than raised, so the rest of the
    choice still applies.
    """

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"
