"""
Effect DSL - Operation-Based Card Effects

This module defines the DSL for describing what a card does when played.
An effect is an ordered sequence of primitive operations drawn from a
closed set of tagged variants. Effects are:
- Data-only: a new card is a new descriptor, never new engine code
- Ordered: operations run strictly in sequence
- Deterministic: given the same state, rng and choices, same result

Key design decisions:
- Each operation is a frozen dataclass tagged with an OpType
- The resolver dispatches on OpType, not on the card
- Player choices are never callbacks; operations that need input
  suspend the resolver with a PendingChoice
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


class OpType(Enum):
    """Tags for the closed operation set."""
    # Counters
    DRAW_CARDS = "draw_cards"
    GAIN_ACTIONS = "gain_actions"
    GAIN_BUYS = "gain_buys"
    GAIN_COINS = "gain_coins"

    # Attacks
    OTHER_PLAYERS_DISCARD_TO = "other_players_discard_to"

    # Card movement
    GAIN_CARD = "gain_card"
    TRASH_CARD = "trash_card"
    TOPDECK_FROM_HAND = "topdeck_from_hand"
    SIFT_TOP_CARDS = "sift_top_cards"


class TargetType(Enum):
    """Which players an operation affects."""
    SELF = "self"
    OTHER_PLAYERS = "other_players"


class GainDestination(Enum):
    """Where a gained card lands."""
    DISCARD = "discard"
    HAND = "hand"
    DECK = "deck"


@dataclass(frozen=True)
class DrawCards:
    """+N Cards."""
    n: int
    op_type: ClassVar[OpType] = OpType.DRAW_CARDS
    target: ClassVar[TargetType] = TargetType.SELF


@dataclass(frozen=True)
class GainActions:
    """+N Actions."""
    n: int
    op_type: ClassVar[OpType] = OpType.GAIN_ACTIONS
    target: ClassVar[TargetType] = TargetType.SELF


@dataclass(frozen=True)
class GainBuys:
    """+N Buys."""
    n: int
    op_type: ClassVar[OpType] = OpType.GAIN_BUYS
    target: ClassVar[TargetType] = TargetType.SELF


@dataclass(frozen=True)
class GainCoins:
    """+N coins. A treasure's whole descriptor is a single GainCoins."""
    n: int
    op_type: ClassVar[OpType] = OpType.GAIN_COINS
    target: ClassVar[TargetType] = TargetType.SELF


@dataclass(frozen=True)
class OtherPlayersDiscardTo:
    """Each other player discards down to N cards in hand."""
    n: int
    op_type: ClassVar[OpType] = OpType.OTHER_PLAYERS_DISCARD_TO
    target: ClassVar[TargetType] = TargetType.OTHER_PLAYERS


@dataclass(frozen=True)
class GainCard:
    """
    Gain a card from the supply.

    Exactly one of the three forms is used:
    - kind: gain that specific card (skipped if its pile is empty)
    - max_cost: the player picks any pile costing at most max_cost
    - cost_above_trashed: the player picks a pile costing at most the
      cost of the card trashed earlier in this effect plus this amount
    """
    kind: str | None = None
    max_cost: int | None = None
    cost_above_trashed: int | None = None
    destination: GainDestination = GainDestination.DISCARD
    op_type: ClassVar[OpType] = OpType.GAIN_CARD
    target: ClassVar[TargetType] = TargetType.SELF

    @property
    def is_choice(self) -> bool:
        return self.kind is None


@dataclass(frozen=True)
class TrashCard:
    """
    Trash cards from hand.

    With optional=False the player must trash exactly `count` cards
    (or the whole hand, if smaller). With optional=True, 0..count.
    """
    count: int = 1
    optional: bool = False
    op_type: ClassVar[OpType] = OpType.TRASH_CARD
    target: ClassVar[TargetType] = TargetType.SELF


@dataclass(frozen=True)
class TopdeckFromHand:
    """Put a card from hand onto the deck."""
    op_type: ClassVar[OpType] = OpType.TOPDECK_FROM_HAND
    target: ClassVar[TargetType] = TargetType.SELF


@dataclass(frozen=True)
class SiftTopCards:
    """Look at the top N cards of the deck; trash, discard or keep each."""
    n: int
    op_type: ClassVar[OpType] = OpType.SIFT_TOP_CARDS
    target: ClassVar[TargetType] = TargetType.SELF


Operation = Union[
    DrawCards,
    GainActions,
    GainBuys,
    GainCoins,
    OtherPlayersDiscardTo,
    GainCard,
    TrashCard,
    TopdeckFromHand,
    SiftTopCards,
]


@dataclass(frozen=True)
class EffectDescriptor:
    """
    The complete on-play behaviour of a card.

    Resolved operation by operation, with player choices injected
    whenever an operation suspends.
    """
    operations: tuple[Operation, ...] = field(default_factory=tuple)
    description: str = ""

    def __len__(self) -> int:
        return len(self.operations)

    def __iter__(self):
        return iter(self.operations)

    @property
    def is_empty(self) -> bool:
        return len(self.operations) == 0

    def coin_value(self) -> int:
        """Total coins produced by GainCoins operations."""
        return sum(op.n for op in self.operations if op.op_type == OpType.GAIN_COINS)


# ============================================================================
# Factory functions for common effect patterns
# ============================================================================

def effect(*operations: Operation, description: str = "") -> EffectDescriptor:
    """Build a descriptor from operations in play order."""
    return EffectDescriptor(operations=tuple(operations), description=description)


def treasure_effect(value: int) -> EffectDescriptor:
    """Create the descriptor for a treasure worth `value` coins."""
    return effect(GainCoins(value), description=f"+${value}")


def cantrip(*extra: Operation, cards: int = 1, actions: int = 1) -> EffectDescriptor:
    """+cards Cards, +actions Actions, followed by any extra operations."""
    ops: list[Operation] = []
    if cards:
        ops.append(DrawCards(cards))
    if actions:
        ops.append(GainActions(actions))
    ops.extend(extra)
    return effect(*ops)
