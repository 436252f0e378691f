"""
Tests for player zones.

Tests:
- Drawing from the top of the deck
- Reshuffling the discard pile
- Partial draws
- Peeking without moving cards
"""

import random

from ..engine_core.state import PlayerState
from ..engine_core.zones import Zone, draw_into, peek_top, reshuffle_into_deck


def _player(deck=(), hand=(), discard=()) -> PlayerState:
    return PlayerState(
        player_id="p0",
        name="Player 1",
        deck=Zone(name="deck", cards=list(deck)),
        hand=Zone(name="hand", cards=list(hand)),
        discard=Zone(name="discard", cards=list(discard)),
    )


class TestZone:
    """Tests for Zone helpers."""

    def test_top_is_last(self):
        """The top of a zone is its last card."""
        zone = Zone(name="deck", cards=["Copper", "Silver"])

        assert zone.top == "Silver"
        assert zone.pop_top() == "Silver"
        assert zone.cards == ["Copper"]

    def test_pop_top_empty(self):
        """Popping an empty zone gives None."""
        assert Zone(name="deck").pop_top() is None

    def test_take_indices_keeps_zone_order(self):
        """Taken cards come back in zone order."""
        zone = Zone(name="hand", cards=["Copper", "Estate", "Silver", "Gold"])

        taken = zone.take_indices([3, 1])

        assert taken == ["Estate", "Gold"]
        assert zone.cards == ["Copper", "Silver"]

    def test_clear_returns_cards(self):
        """Clearing a zone returns what it held."""
        zone = Zone(name="played", cards=["Village", "Smithy"])

        assert zone.clear() == ["Village", "Smithy"]
        assert zone.is_empty


class TestDraw:
    """Tests for draw and reshuffle."""

    def test_draws_from_top(self):
        """Drawing takes the top card first."""
        player = _player(deck=["Copper", "Estate", "Gold"])

        drawn = player.draw(1, random.Random(0))

        assert drawn == ["Gold"]
        assert player.hand.cards == ["Gold"]
        assert player.deck.cards == ["Copper", "Estate"]

    def test_no_reshuffle_while_deck_has_cards(self):
        """The discard is left alone while the deck has cards."""
        player = _player(deck=["Copper"], discard=["Silver", "Gold"])

        player.draw(1, random.Random(0))

        assert player.hand.cards == ["Copper"]
        assert player.discard.cards == ["Silver", "Gold"]

    def test_reshuffles_when_deck_runs_out(self):
        """The discard is shuffled in once the deck runs out."""
        player = _player(deck=["Copper"], discard=["Silver", "Gold", "Estate"])

        drawn = player.draw(3, random.Random(0))

        assert drawn[0] == "Copper"
        assert len(drawn) == 3
        assert player.discard.is_empty
        assert len(player.deck) == 1
        assert sorted(player.hand.cards + player.deck.cards) == ["Copper", "Estate", "Gold", "Silver"]

    def test_partial_draw_is_not_an_error(self):
        """Drawing more cards than exist draws what there is."""
        player = _player(deck=["Copper"], discard=["Estate"])

        drawn = player.draw(5, random.Random(0))

        assert sorted(drawn) == ["Copper", "Estate"]
        assert player.deck.is_empty
        assert player.discard.is_empty

    def test_draw_from_nothing(self):
        """Drawing with no cards anywhere draws nothing."""
        player = _player()

        assert player.draw(3, random.Random(0)) == []

    def test_never_more_than_n(self):
        """A draw never returns more cards than asked for."""
        player = _player(deck=["Copper"] * 4, discard=["Estate"] * 4)

        for n in range(0, 6):
            before = len(player.hand)
            drawn = player.draw(n, random.Random(n))
            assert len(drawn) <= n
            assert len(player.hand) == before + len(drawn)

    def test_reshuffle_is_seed_determined(self):
        """Reshuffles depend only on the RNG seed."""
        cards = ["Copper", "Silver", "Gold", "Estate", "Duchy"]
        first = _player(discard=cards)
        second = _player(discard=cards)

        assert first.draw(5, random.Random(7)) == second.draw(5, random.Random(7))

    def test_reshuffle_puts_discard_under_deck(self):
        """Reshuffled cards go under what is left of the deck."""
        deck = Zone(name="deck", cards=["Gold"])
        discard = Zone(name="discard", cards=["Copper", "Copper"])

        moved = reshuffle_into_deck(deck, discard, random.Random(0))

        assert moved == 2
        assert deck.top == "Gold"
        assert discard.is_empty


class TestPeek:
    """Tests for looking at the top of the deck."""

    def test_peek_does_not_move_cards(self):
        """Peeking leaves the deck as it was."""
        deck = Zone(name="deck", cards=["Copper", "Estate", "Gold"])
        discard = Zone(name="discard")

        assert peek_top(deck, discard, 2, random.Random(0)) == ["Gold", "Estate"]
        assert deck.cards == ["Copper", "Estate", "Gold"]

    def test_peek_reshuffles_short_deck(self):
        """Peeking past the deck reshuffles the discard in."""
        deck = Zone(name="deck", cards=["Gold"])
        discard = Zone(name="discard", cards=["Copper"])

        looked = peek_top(deck, discard, 2, random.Random(0))

        assert looked == ["Gold", "Copper"]
        assert discard.is_empty

    def test_peek_with_too_few_cards(self):
        """Peeking returns only the cards that exist."""
        deck = Zone(name="deck", cards=["Gold"])

        assert peek_top(deck, Zone(name="discard"), 2, random.Random(0)) == ["Gold"]
