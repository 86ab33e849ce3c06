"""Weighted spawn tables for monsters and items."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from burrow.game.entities import get_entity_kind

if TYPE_CHECKING:
    from burrow.util.rng import RNG


@dataclass(frozen=True)
class SpawnTable:
    """A categorical distribution over entity kind names.

    Weights are relative; they do not need to sum to one. Entry order is kept
    so that draws are reproducible for a given random stream.
    """

    entries: tuple[tuple[str, float], ...]

    def __post_init__(self) -> None:
        if not self.entries:
            raise ValueError("Spawn table needs at least one entry")
        for name, weight in self.entries:
            if weight <= 0:
                raise ValueError(f"Spawn weight for {name!r} must be positive")
            # Fail at definition time rather than mid-generation.
            get_entity_kind(name)

    @classmethod
    def from_weights(
        cls, weights: dict[str, float] | Iterable[tuple[str, float]]
    ) -> SpawnTable:
        items = weights.items() if isinstance(weights, dict) else weights
        return cls(tuple((name, float(weight)) for name, weight in items))

    @property
    def kinds(self) -> list[str]:
        return [name for name, _ in self.entries]

    @property
    def weights(self) -> list[float]:
        return [weight for _, weight in self.entries]

    def probability(self, name: str) -> float:
        total = sum(self.weights)
        return sum(w for n, w in self.entries if n == name) / total

    def draw(self, rng: RNG) -> str:
        return rng.choices(self.kinds, weights=self.weights)[0]


MONSTER_SPAWN_TABLE = SpawnTable.from_weights({"Orc": 0.8, "Troll": 0.2})

ITEM_SPAWN_TABLE = SpawnTable.from_weights(
    {
        "Potion of Health": 0.7,
        "Fireball Scroll": 0.1,
        "Confusion Scroll": 0.1,
        "Lightning Scroll": 0.1,
    }
)
