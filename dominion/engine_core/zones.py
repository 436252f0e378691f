"""
Zones - Ordered card containers and the draw/reshuffle mechanics.

A zone holds card names. For the deck, the end of the list is the
top: the next card drawn is cards[-1].
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
import random


@dataclass
class Zone:
    """
    A named, ordered pile of cards.

    Can represent: deck, hand, discard, played, trash.
    """
    name: str
    cards: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def top(self) -> str | None:
        return self.cards[-1] if self.cards else None

    def add(self, card: str):
        """Put a card on top."""
        self.cards.append(card)

    def extend(self, cards: list[str]):
        self.cards.extend(cards)

    def pop_top(self) -> str | None:
        """Remove and return the top card, or None if empty."""
        if not self.cards:
            return None
        return self.cards.pop()

    def take(self, index: int) -> str:
        """Remove the card at index."""
        return self.cards.pop(index)

    def take_indices(self, indices: list[int]) -> list[str]:
        """Remove several cards at once, returned in zone order."""
        wanted = set(indices)
        taken = [card for i, card in enumerate(self.cards) if i in wanted]
        self.cards = [card for i, card in enumerate(self.cards) if i not in wanted]
        return taken

    def clear(self) -> list[str]:
        """Empty the zone, returning what it held."""
        cards, self.cards = self.cards, []
        return cards

    def contains(self, card: str) -> bool:
        return card in self.cards

    def count_of(self, card: str) -> int:
        return self.cards.count(card)

    def counts(self) -> Counter:
        return Counter(self.cards)


def reshuffle_into_deck(deck: Zone, discard: Zone, rng: random.Random) -> int:
    """
    Shuffle the whole discard pile and place it under the deck.

    The discard is moved in one step and left empty. Returns the
    number of cards moved.
    """
    cards = discard.clear()
    rng.shuffle(cards)
    deck.cards = cards + deck.cards
    return len(cards)


def draw_into(hand: Zone, deck: Zone, discard: Zone, n: int, rng: random.Random) -> list[str]:
    """
    Draw up to n cards from deck into hand, reshuffling when needed.

    Stops early, without error, when deck and discard are both empty.
    """
    drawn: list[str] = []
    while len(drawn) < n:
        if deck.is_empty:
            if discard.is_empty:
                break
            reshuffle_into_deck(deck, discard, rng)
        card = deck.pop_top()
        hand.add(card)
        drawn.append(card)
    return drawn


def peek_top(deck: Zone, discard: Zone, n: int, rng: random.Random) -> list[str]:
    """
    Look at up to n cards on top of the deck without moving them.

    If the deck is short, the discard is reshuffled underneath it first.
    The first card returned is the top card.
    """
    if len(deck) < n and not discard.is_empty:
        reshuffle_into_deck(deck, discard, rng)
    return deck.cards[::-1][:n]
