"""
Tests for state snapshots and scoring.
"""

import pytest
from pydantic import ValidationError

from ..engine_core.snapshot import GameSnapshot, build_snapshot, compute_scores


class TestSnapshot:
    """The read-only query view."""

    def test_contents(self, game):
        """The snapshot shows turn, phase, counters and players."""
        snap = game.snapshot()

        assert isinstance(snap, GameSnapshot)
        assert snap.game_id == "test_game"
        assert snap.turn_number == 1
        assert snap.phase == "action"
        assert snap.current_player_idx == 0
        assert (snap.counters.actions, snap.counters.buys, snap.counters.coins) == (1, 1, 0)
        assert snap.supply["Province"] == 8
        assert snap.trash == []
        assert snap.pending_choice is None
        assert not snap.game_over
        assert snap.players[0].is_current
        assert not snap.players[1].is_current
        assert all(p.total_cards == 10 for p in snap.players)

    def test_deck_lists_next_draw_first(self, game, rig):
        """Decks are listed with the next draw first."""
        rig(game.state, deck=["Copper", "Silver", "Gold"])

        snap = game.snapshot()

        assert snap.players[0].deck == ["Gold", "Silver", "Copper"]
        game.state.current_player.draw(1, game.state.rng)
        assert game.state.current_player.hand.cards[-1] == "Gold"

    def test_pending_choice_shown(self, game, rig):
        """A pending choice appears in the snapshot."""
        rig(game.state, hand=["Militia", "Copper", "Copper", "Estate", "Estate"])
        game.play_card(0)

        choice = game.snapshot().pending_choice

        assert choice.player_idx == 1
        assert choice.choice_type == "discard"
        assert choice.source_card == "Militia"
        assert choice.min_choices == 2

    def test_frozen(self, game):
        """Snapshots cannot be changed."""
        snap = game.snapshot()

        with pytest.raises(ValidationError):
            snap.turn_number = 5

    def test_detached_from_state(self, game):
        """Editing a snapshot's lists does not touch the game."""
        snap = game.snapshot()

        snap.players[0].hand.append("Province")
        snap.supply["Province"] = 0

        assert "Province" not in game.state.players[0].hand.cards
        assert game.supply_remaining("Province") == 8

    def test_query_has_no_side_effects(self, game):
        """Queries do not change the game or its RNG."""
        rng_state = game.state.rng.getstate()
        first = game.snapshot()
        game.legal_actions()
        game.scores()

        assert game.snapshot() == first
        assert game.state.rng.getstate() == rng_state

    def test_serializable(self, game):
        """Snapshots dump and load without loss."""
        data = game.snapshot().model_dump()

        assert data["players"][0]["name"] == "Player 1"
        assert GameSnapshot.model_validate(data) == game.snapshot()

    def test_build_from_state(self, game, catalog):
        """build_snapshot matches Game.snapshot."""
        assert build_snapshot(game.state, catalog) == game.snapshot()


class TestScores:
    """Victory points over every zone."""

    def test_starting_scores(self, game):
        """Each player starts with three points."""
        assert game.scores() == [3, 3]
        assert game.snapshot().scores == [3, 3]

    def test_all_zones_count(self, game, catalog, rig):
        """Cards in every zone count towards the score."""
        rig(game.state, hand=["Province"], deck=["Duchy"], discard=["Curse", "Estate"])
        game.state.players[0].played.cards = ["Estate"]

        assert compute_scores(game.state, catalog)[0] == 6 + 3 - 1 + 1 + 1

    def test_trash_does_not_count(self, game, rig):
        """Trashed cards no longer score."""
        rig(game.state, hand=["Remodel", "Estate"], deck=[], discard=[])
        game.play_card(0)
        game.resolve_choice([0])
        game.resolve_choice(["Copper"])

        assert game.scores()[0] == 0

    def test_tie_goes_to_fewer_turns(self, make_game, to_buy_phase):
        """On equal points the player with fewer turns wins."""
        game = make_game(supply_overrides={"Duchy": 2}, empty_pile_threshold=1)
        game.end_turn()
        to_buy_phase(game, coins=5)
        game.buy("Duchy")
        to_buy_phase(game, coins=5)
        game.buy("Duchy")

        assert game.is_game_over()
        assert game.scores() == [6, 6]
        assert game.winners() == [1]
