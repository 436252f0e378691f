"""
Base Set Cards - Card definitions for the base game.

Every card is data: cost, type tags and an effect descriptor made
of DSL operations. Adding a card means adding an entry here.

Card structure:
- Cost in coins
- Types (Treasure, Action, Victory, Curse)
- Effect (operations run in order when played)
- Victory points (counted at game end)
"""

from __future__ import annotations

from ...card_schema.card_catalog import CardDefinition, CardType
from ...card_schema.effect_dsl import (
    DrawCards,
    GainActions,
    GainBuys,
    GainCard,
    GainCoins,
    GainDestination,
    OtherPlayersDiscardTo,
    SiftTopCards,
    TopdeckFromHand,
    TrashCard,
    cantrip,
    effect,
    treasure_effect,
)

T = CardType


def _treasure(name: str, cost: int, value: int) -> CardDefinition:
    return CardDefinition(
        name=name,
        cost=cost,
        types=frozenset({T.TREASURE}),
        effect=treasure_effect(value),
        description=f"${value}",
    )


def _victory(name: str, cost: int, points: int) -> CardDefinition:
    return CardDefinition(
        name=name,
        cost=cost,
        types=frozenset({T.VICTORY}),
        victory_points=points,
        description=f"{points} VP",
    )


def _action(name: str, cost: int, description: str, *ops) -> CardDefinition:
    return CardDefinition(
        name=name,
        cost=cost,
        types=frozenset({T.ACTION}),
        effect=effect(*ops, description=description),
        description=description,
    )


# ============================================================================
# Basic cards
# ============================================================================

COPPER = _treasure("Copper", 0, 1)
SILVER = _treasure("Silver", 3, 2)
GOLD = _treasure("Gold", 6, 3)

ESTATE = _victory("Estate", 2, 1)
DUCHY = _victory("Duchy", 5, 3)
PROVINCE = _victory("Province", 8, 6)

CURSE = CardDefinition(
    name="Curse",
    cost=0,
    types=frozenset({T.CURSE}),
    victory_points=-1,
    description="-1 VP",
)


# ============================================================================
# Kingdom cards
# ============================================================================

CHAPEL = _action(
    "Chapel", 2,
    "Trash up to 4 cards from your hand.",
    TrashCard(count=4, optional=True),
)

MOAT = _action(
    "Moat", 2,
    "+2 Cards.",
    DrawCards(2),
)

VILLAGE = _action(
    "Village", 3,
    "+1 Card. +2 Actions.",
    DrawCards(1), GainActions(2),
)

WORKSHOP = _action(
    "Workshop", 3,
    "Gain a card costing up to $4.",
    GainCard(max_cost=4),
)

MILITIA = _action(
    "Militia", 4,
    "+$2. Each other player discards down to 3 cards in hand.",
    GainCoins(2), OtherPlayersDiscardTo(3),
)

SMITHY = _action(
    "Smithy", 4,
    "+3 Cards.",
    DrawCards(3),
)

REMODEL = _action(
    "Remodel", 4,
    "Trash a card from your hand. Gain a card costing up to $2 more than it.",
    TrashCard(), GainCard(cost_above_trashed=2),
)

FESTIVAL = _action(
    "Festival", 5,
    "+2 Actions. +1 Buy. +$2.",
    GainActions(2), GainBuys(1), GainCoins(2),
)

LABORATORY = CardDefinition(
    name="Laboratory",
    cost=5,
    types=frozenset({T.ACTION}),
    effect=cantrip(cards=2),
    description="+2 Cards. +1 Action.",
)

MARKET = CardDefinition(
    name="Market",
    cost=5,
    types=frozenset({T.ACTION}),
    effect=cantrip(GainBuys(1), GainCoins(1)),
    description="+1 Card. +1 Action. +1 Buy. +$1.",
)

SENTRY = CardDefinition(
    name="Sentry",
    cost=5,
    types=frozenset({T.ACTION}),
    effect=cantrip(SiftTopCards(2)),
    description=(
        "+1 Card. +1 Action. Look at the top 2 cards of your deck. "
        "Trash and/or discard any number of them. Put the rest back on top."
    ),
)

ARTISAN = _action(
    "Artisan", 6,
    "Gain a card to your hand costing up to $5. Put a card from your hand onto your deck.",
    GainCard(max_cost=5, destination=GainDestination.HAND), TopdeckFromHand(),
)


# ============================================================================
# Card Collection
# ============================================================================

BASIC_CARDS: list[CardDefinition] = [
    COPPER, SILVER, GOLD,
    ESTATE, DUCHY, PROVINCE,
    CURSE,
]

KINGDOM_CARDS: list[CardDefinition] = [
    CHAPEL,
    MOAT,
    VILLAGE,
    WORKSHOP,
    MILITIA,
    SMITHY,
    REMODEL,
    FESTIVAL,
    LABORATORY,
    MARKET,
    SENTRY,
    ARTISAN,
]

BASE_CARDS: list[CardDefinition] = BASIC_CARDS + KINGDOM_CARDS

# The ten piles used when no kingdom is configured
DEFAULT_KINGDOM: list[str] = [
    "Moat",
    "Village",
    "Militia",
    "Smithy",
    "Remodel",
    "Festival",
    "Sentry",
    "Market",
    "Laboratory",
    "Artisan",
]


def get_card_by_name(name: str) -> CardDefinition | None:
    """Look up a card by name."""
    for card in BASE_CARDS:
        if card.name == name:
            return card
    return None
