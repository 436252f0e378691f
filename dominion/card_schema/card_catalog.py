"""
Card Catalog - Static registry of card definitions.

A CardDefinition is the immutable description of a card kind:
its cost, its type tags and the effect it has when played.
Runtime zones only ever hold card names; the catalog maps a
name back to its definition.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .effect_dsl import EffectDescriptor


class CardType(Enum):
    """Type tags that decide when (and whether) a card can be played."""
    TREASURE = "Treasure"
    ACTION = "Action"
    VICTORY = "Victory"
    CURSE = "Curse"


@dataclass(frozen=True)
class CardDefinition:
    """
    Definition of a card kind.

    The name is the card's identity: two copies of Silver are
    indistinguishable and share one definition.
    """
    name: str
    cost: int
    types: frozenset[CardType]
    effect: EffectDescriptor = field(default_factory=EffectDescriptor)
    victory_points: int = 0
    description: str = ""

    def has_type(self, card_type: CardType) -> bool:
        return card_type in self.types

    @property
    def is_action(self) -> bool:
        return CardType.ACTION in self.types

    @property
    def is_treasure(self) -> bool:
        return CardType.TREASURE in self.types

    @property
    def is_playable(self) -> bool:
        return self.is_action or self.is_treasure

    @property
    def treasure_value(self) -> int:
        """Coins produced when played as a treasure (0 for non-treasures)."""
        if not self.is_treasure:
            return 0
        return self.effect.coin_value()


@dataclass
class CardCatalog:
    """
    Registry of every card kind a game may use.

    Shared read-only between game instances: nothing in the
    engine mutates a catalog after it is built.
    """
    catalog_id: str
    cards: dict[str, CardDefinition] = field(default_factory=dict)

    @classmethod
    def from_cards(cls, catalog_id: str, cards: Iterable[CardDefinition]) -> CardCatalog:
        return cls(catalog_id=catalog_id, cards={card.name: card for card in cards})

    def get_card(self, name: str) -> CardDefinition | None:
        """Get a card definition by name."""
        return self.cards.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.cards

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def names(self) -> list[str]:
        return list(self.cards)

    def cards_of_type(self, card_type: CardType) -> list[CardDefinition]:
        return [card for card in self.cards.values() if card.has_type(card_type)]

    def cost_of(self, name: str) -> int:
        """Cost of a card; KeyError for unknown names."""
        return self.cards[name].cost
