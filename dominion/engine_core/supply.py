"""
Supply - The shared bank of card piles.

Counts only ever go down. The game ends once the game-end pile
(Province) is empty or enough piles are empty.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .errors import NotInSupplyError, SupplyExhaustedError

DEFAULT_GAME_END_PILE = "Province"
DEFAULT_EMPTY_PILE_THRESHOLD = 3


@dataclass
class Supply:
    """
    Remaining count per card kind.

    `initial_counts` records the seeded values; a pile never holds
    more than it started with.
    """
    counts: dict[str, int]
    initial_counts: dict[str, int] = field(default_factory=dict)
    game_end_pile: str = DEFAULT_GAME_END_PILE
    empty_pile_threshold: int = DEFAULT_EMPTY_PILE_THRESHOLD

    def __post_init__(self):
        for kind, count in self.counts.items():
            if count < 0:
                raise ValueError(f"Supply pile {kind} has negative count {count}")
        if self.game_end_pile not in self.counts:
            raise ValueError(f"Supply has no {self.game_end_pile} pile")
        if self.empty_pile_threshold < 1:
            raise ValueError("empty_pile_threshold must be >= 1")
        if not self.initial_counts:
            self.initial_counts = dict(self.counts)

    def __contains__(self, kind: object) -> bool:
        return kind in self.counts

    @property
    def piles(self) -> list[str]:
        return list(self.counts)

    def remaining(self, kind: str) -> int:
        """Cards left in a pile (0 for kinds without a pile)."""
        return self.counts.get(kind, 0)

    def purchase(self, kind: str) -> str:
        """
        Take one card off a pile.

        Returns the kind so the caller can place it in the buyer's
        discard pile.
        """
        if kind not in self.counts:
            raise NotInSupplyError(f"{kind} is not in the supply")
        if self.counts[kind] <= 0:
            raise SupplyExhaustedError(f"The {kind} pile is empty")
        self.counts[kind] -= 1
        return kind

    def gain(self, kind: str) -> str | None:
        """Take one card for an effect; None when the pile is empty or missing."""
        if self.remaining(kind) <= 0:
            return None
        return self.purchase(kind)

    def empty_piles(self) -> int:
        return sum(1 for count in self.counts.values() if count == 0)

    def is_game_over(self) -> bool:
        if self.counts[self.game_end_pile] == 0:
            return True
        return self.empty_piles() >= self.empty_pile_threshold
