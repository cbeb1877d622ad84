from dataclasses import asdict, dataclass

from royal_court.game.constants import Resource


@dataclass
class Status:
    """Resource snapshot for one session."""

    money: float = 100.0
    love: float = 0.0
    respect: float = 0.0
    day: int = 0
    actions_left: int = 0
    tax_rate: int = 0
    game_over: bool = False
    name: str = ""
    title: str = ""

    def get(self, resource: Resource) -> float:
        return getattr(self, resource.value)

    def set(self, resource: Resource, value: float) -> None:
        setattr(self, resource.value, value)

    def as_dict(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"Status {{ Day: {self.day}, Money: {self.money:g}, "
            f"Love: {self.love:g}, Respect: {self.respect:g} }}"
        )
