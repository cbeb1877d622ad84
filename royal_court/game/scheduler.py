"""Event pool scheduler -- rotates petitions through the court.

Every loaded event becomes one ``PetitionInstance`` in a single arena.  Each
instance carries a bucket tag, and the scheduler keeps one ordered index
per bucket over the arena:

- UNSEEN: waiting to be drawn
- COURT:  currently petitioning the ruler
- SEEN:   resolved or ignored; recycled into UNSEEN once UNSEEN runs dry
- DEAD:   resolved with a lethal choice; never drawn again

All moves go through ``_move`` so the tag and the indexes never disagree.
Draws from UNSEEN are uniform without replacement, so no petition repeats
until every other recyclable one has been seen.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from royal_court.game.catalog import EventDefinition
from royal_court.game.errors import InvalidActionError

log = logging.getLogger(__name__)


class Bucket(str, Enum):
    UNSEEN = "unseen"
    COURT = "court"
    SEEN = "seen"
    DEAD = "dead"


@dataclass
class PetitionInstance:
    id: int
    definition: EventDefinition
    bucket: Bucket = Bucket.UNSEEN
    days_waited: int = 0


@dataclass
class RefillResult:
    """What happened during one refill pass."""

    evicted: list[PetitionInstance] = field(default_factory=list)
    drawn: list[PetitionInstance] = field(default_factory=list)
    recycled: int = 0
    # True when the pool ran dry before the court reached capacity
    under_capacity: bool = False


class EventPool:
    """Owns every petition instance for one session and all four buckets."""

    def __init__(self, events: Iterable[EventDefinition], rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self._arena: list[PetitionInstance] = []
        # dicts used as insertion-ordered sets of arena ids
        self._index: dict[Bucket, dict[int, None]] = {b: {} for b in Bucket}
        for definition in events:
            instance = PetitionInstance(id=len(self._arena), definition=definition)
            self._arena.append(instance)
            self._index[Bucket.UNSEEN][instance.id] = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._arena)

    def bucket(self, which: Bucket) -> list[PetitionInstance]:
        return [self._arena[i] for i in self._index[which]]

    def count(self, which: Bucket) -> int:
        return len(self._index[which])

    @property
    def court(self) -> list[PetitionInstance]:
        return self.bucket(Bucket.COURT)

    def get(self, petition_id: int) -> PetitionInstance:
        if not 0 <= petition_id < len(self._arena):
            raise InvalidActionError(f"No such petition: {petition_id}")
        return self._arena[petition_id]

    def get_in_court(self, petition_id: int) -> PetitionInstance:
        instance = self.get(petition_id)
        if instance.bucket is not Bucket.COURT:
            raise InvalidActionError(f"Petition {petition_id} is not waiting in court")
        return instance

    def is_exhausted(self) -> bool:
        """True when no petition can ever reach the court again."""
        return not (
            self._index[Bucket.COURT]
            or self._index[Bucket.UNSEEN]
            or self._index[Bucket.SEEN]
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _move(self, instance: PetitionInstance, to: Bucket) -> None:
        del self._index[instance.bucket][instance.id]
        instance.bucket = to
        self._index[to][instance.id] = None

    def refill_court(self, capacity: int, wait_limit: int) -> RefillResult:
        """Age the court by one day, evict the impatient, then top it up.

        Petitioners whose ``days_waited`` exceeds *wait_limit* are moved to
        SEEN and returned so the caller can apply the ignored-petition
        penalty.  The court is then filled from UNSEEN up to *capacity*,
        recycling SEEN into UNSEEN whenever UNSEEN is empty.  If both are
        empty the court stays under capacity.
        """
        result = RefillResult()

        for instance in self.court:
            instance.days_waited += 1
            if instance.days_waited > wait_limit:
                self._move(instance, Bucket.SEEN)
                result.evicted.append(instance)

        while self.count(Bucket.COURT) < capacity:
            if self._index[Bucket.UNSEEN]:
                unseen = list(self._index[Bucket.UNSEEN])
                instance = self._arena[self.rng.choice(unseen)]
                instance.days_waited = 0
                self._move(instance, Bucket.COURT)
                result.drawn.append(instance)
            elif self._index[Bucket.SEEN]:
                seen = self.bucket(Bucket.SEEN)
                for instance in seen:
                    self._move(instance, Bucket.UNSEEN)
                result.recycled += len(seen)
                log.info("Recycled %d seen petitions back into the pool", len(seen))
            else:
                result.under_capacity = True
                log.warning(
                    "Court under capacity: %d of %d petitioners, pool is empty",
                    self.count(Bucket.COURT), capacity,
                )
                break

        return result

    def resolve(self, instance: PetitionInstance, lethal: bool = False) -> None:
        """Remove a petition from court after the ruler has answered it."""
        if instance.bucket is not Bucket.COURT:
            raise InvalidActionError(f"Petition {instance.id} is not waiting in court")
        self._move(instance, Bucket.DEAD if lethal else Bucket.SEEN)
