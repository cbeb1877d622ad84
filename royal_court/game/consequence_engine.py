"""Consequence engine -- turns a choice into stat changes.

Consequences are sampled independently and applied in declaration order,
so a later consequence on the same field sees the earlier one's result.
A consequence whose field is unknown, or a money consequence with a
random range, is skipped and reported; the rest of the choice still
applies.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Iterable

from royal_court.game.catalog import Choice, Consequence
from royal_court.game.constants import Resource, resource_for_field
from royal_court.game.errors import DataIntegrityError
from royal_court.game.status import Status

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppliedDelta:
    resource: Resource
    before: float
    after: float

    @property
    def delta(self) -> float:
        return self.after - self.before


@dataclass
class Resolution:
    deltas: list[AppliedDelta] = field(default_factory=list)
    issues: list[DataIntegrityError] = field(default_factory=list)


class ConsequenceEngine:
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def sample(self, consequence: Consequence) -> float:
        """Draw one delta from ``[min_change, max_change)``."""
        low, high = consequence.min_change, consequence.max_change
        if low == high:
            return low
        return low + self.rng.random() * (high - low)

    def adjust(self, current: float, consequence: Consequence) -> float:
        return current + self.sample(consequence)

    def _check(self, consequence: Consequence) -> tuple[Resource | None, DataIntegrityError | None]:
        resource = resource_for_field(consequence.field)
        if resource is None:
            return None, DataIntegrityError(consequence.field, "unrecognised consequence field")
        if resource is Resource.MONEY and not consequence.is_fixed:
            return None, DataIntegrityError(
                consequence.field,
                f"money consequences must be fixed, got [{consequence.min_change:g}, {consequence.max_change:g})",
            )
        return resource, None

    def apply(self, consequences: Iterable[Consequence], status: Status) -> Resolution:
        """Apply *consequences* to *status* in order."""
        resolution = Resolution()
        for consequence in consequences:
            resource, issue = self._check(consequence)
            if issue is not None:
                log.error("Skipping consequence: %s", issue)
                resolution.issues.append(issue)
                continue
            before = status.get(resource)
            after = self.adjust(before, consequence)
            status.set(resource, after)
            resolution.deltas.append(AppliedDelta(resource, before, after))
        return resolution

    def resolve_choice(self, choice: Choice, status: Status) -> Resolution:
        return self.apply(choice.consequences, status)

    def can_afford(self, choice: Choice, status: Status) -> bool:
        """Whether picking *choice* cannot push money below zero.

        Fixed money consequences are summed in order; love and respect never
        gate a choice.
        """
        projected = status.money
        for consequence in choice.consequences:
            if resource_for_field(consequence.field) is not Resource.MONEY:
                continue
            if not consequence.is_fixed:
                log.error(
                    "Randomised money consequence on choice %r ignored for affordability",
                    choice.description,
                )
                continue
            projected += consequence.min_change
            if projected < 0:
                return False
        return True
