"""
Tests for legal action generation.

Tests:
- Actions offered per phase
- Deduplication of equivalent plays and choices
- Every generated action is accepted by the reducer
"""

import random

from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import is_legal, legal_actions
from ..engine_core.reducer import apply_action


def _types(actions):
    return [a.action_type for a in actions]


def _assert_all_accepted(catalog, state, actions):
    for action in actions:
        result = apply_action(catalog, state, action)
        assert result.success, f"{action.describe()}: {result.error}"


class TestPhases:
    """What is offered in each phase."""

    def test_action_phase_without_actions(self, game, rig):
        """With no action cards in hand only phase control is offered."""
        rig(game.state, hand=["Copper", "Copper", "Estate", "Copper", "Estate"])

        actions = game.legal_actions()

        assert _types(actions) == [ActionType.END_PHASE, ActionType.END_TURN]

    def test_action_phase_plays(self, game, rig):
        """Action cards in hand are offered as plays."""
        rig(game.state, hand=["Smithy", "Village", "Smithy", "Copper", "Estate"])

        plays = [a for a in game.legal_actions() if a.action_type == ActionType.PLAY_CARD]

        assert [a.payload.hand_index for a in plays] == [0, 1]

    def test_no_plays_without_actions(self, game, rig):
        """Action cards are not offered once actions run out."""
        rig(game.state, hand=["Smithy", "Village", "Copper"])
        game.state.counters.actions = 0

        assert ActionType.PLAY_CARD not in _types(game.legal_actions())

    def test_treasure_phase(self, game, rig):
        """Each distinct treasure in hand is offered once."""
        rig(game.state, hand=["Copper", "Silver", "Copper", "Estate", "Gold"])
        game.end_phase()

        actions = game.legal_actions()
        plays = [a.payload.hand_index for a in actions if a.action_type == ActionType.PLAY_CARD]

        assert plays == [0, 1, 4]
        assert ActionType.END_TURN in _types(actions)

    def test_buy_phase_broke(self, game, to_buy_phase):
        """With no coins only zero-cost piles can be bought."""
        to_buy_phase(game, coins=0)

        actions = game.legal_actions()
        buys = sorted(a.payload.card_name for a in actions if a.action_type == ActionType.BUY)

        assert buys == ["Copper", "Curse"]
        assert ActionType.END_TURN not in _types(actions)
        assert ActionType.END_PHASE in _types(actions)

    def test_buy_phase_rich(self, game, to_buy_phase):
        """Every affordable pile is offered with enough coins."""
        to_buy_phase(game, coins=8)

        buys = [a for a in game.legal_actions() if a.action_type == ActionType.BUY]

        assert len(buys) == len(game.state.supply.piles)

    def test_empty_piles_not_offered(self, make_game, to_buy_phase):
        """Empty piles are never offered as buys."""
        game = make_game(supply_overrides={"Curse": 0})
        to_buy_phase(game, coins=0)

        buys = [a.payload.card_name for a in game.legal_actions() if a.action_type == ActionType.BUY]

        assert buys == ["Copper"]

    def test_all_accepted(self, game, catalog, rig, to_buy_phase):
        """Every generated action is accepted by the reducer."""
        rig(game.state, hand=["Village", "Militia", "Copper", "Silver", "Estate"])
        _assert_all_accepted(catalog, game.state, game.legal_actions())

        to_buy_phase(game, coins=6)
        _assert_all_accepted(catalog, game.state, game.legal_actions())


class TestChoices:
    """Answers to pending choices."""

    def test_only_answers_while_pending(self, game, rig):
        """While a choice is pending only its answers are offered."""
        rig(game.state, hand=["Militia", "Copper", "Copper", "Estate", "Estate"])
        game.play_card(0)

        actions = game.legal_actions()

        assert actions
        assert set(_types(actions)) == {ActionType.RESOLVE_CHOICE}
        assert all(a.payload.player_idx == 1 for a in actions)

    def test_discard_answers_deduplicated(self, game, catalog, rig):
        """Discards picking the same cards are listed once."""
        rig(game.state, hand=["Militia", "Copper", "Copper", "Estate", "Estate"])
        rig(game.state, player_idx=1, hand=["Copper", "Copper", "Copper", "Estate", "Estate"])
        game.play_card(0)

        actions = game.legal_actions()

        assert len(actions) == 3
        _assert_all_accepted(catalog, game.state, actions)

    def test_chapel_answers(self, make_game, catalog, rig):
        """Chapel answers are listed once per distinct set of trashed cards."""
        game = make_game(kingdom=["Chapel", "Village", "Smithy"])
        rig(game.state, hand=["Chapel", "Copper", "Estate", "Estate", "Copper"])
        game.play_card(0)

        actions = game.legal_actions()

        assert len(actions) == 9
        _assert_all_accepted(catalog, game.state, actions)

    def test_gain_answers(self, game, catalog, rig):
        """A gain choice offers one answer per allowed pile."""
        rig(game.state, hand=["Remodel", "Estate"])
        game.play_card(0)
        game.resolve_choice([0])

        actions = game.legal_actions()

        assert len(actions) == len(game.state.choice_required.options)
        _assert_all_accepted(catalog, game.state, actions)

    def test_sift_answers(self, game, catalog, rig):
        """Sentry offers every decision for each looked-at card."""
        rig(
            game.state,
            hand=["Sentry", "Copper"],
            deck=["Silver", "Copper", "Estate", "Gold"],
        )
        game.play_card(0)

        actions = game.legal_actions()

        assert len(actions) == 9
        _assert_all_accepted(catalog, game.state, actions)


class TestIsLegal:
    """Tests for is_legal."""

    def test_unaffordable_buy(self, game, catalog, to_buy_phase):
        """Buys costing more than the coins available are not legal."""
        to_buy_phase(game, coins=0)

        assert not is_legal(catalog, game.state, Action.buy("Gold"))
        assert is_legal(catalog, game.state, Action.buy("Copper"))

    def test_equivalent_play_index(self, game, catalog, rig):
        """Any index holding a playable card is legal."""
        rig(game.state, hand=["Copper", "Estate", "Copper"])
        game.end_phase()

        assert is_legal(catalog, game.state, Action.play_card(2))
        assert not is_legal(catalog, game.state, Action.play_card(1))
        assert not is_legal(catalog, game.state, Action.play_card(7))

    def test_equivalent_choice(self, game, catalog, rig):
        """Answers are compared by the cards they pick."""
        rig(game.state, hand=["Militia", "Copper", "Copper", "Estate", "Estate"])
        rig(game.state, player_idx=1, hand=["Copper", "Copper", "Copper", "Estate", "Estate"])
        game.play_card(0)

        assert is_legal(catalog, game.state, Action.resolve_choice([2, 4]))
        assert not is_legal(catalog, game.state, Action.resolve_choice([0]))
        assert not is_legal(catalog, game.state, Action.resolve_choice([0, 0]))

    def test_nothing_legal_after_game_end(self, make_game, catalog, to_buy_phase):
        """Nothing is legal once the game is over."""
        game = make_game(supply_overrides={"Province": 1})
        to_buy_phase(game, coins=8)
        game.buy("Province")

        assert legal_actions(catalog, game.state) == []
        assert not is_legal(catalog, game.state, Action.end_turn())

    def test_end_turn_in_buy_phase(self, game, catalog, to_buy_phase):
        """end_turn is legal in the buy phase even though it is not listed."""
        to_buy_phase(game, coins=0)

        assert is_legal(catalog, game.state, Action.end_turn())
        assert apply_action(catalog, game.state, Action.end_turn()).success

    def test_wrong_player_not_legal(self, game, catalog):
        """Naming a player who is not expected to act is never legal."""
        action = Action.end_phase(player_idx=1)

        assert not is_legal(catalog, game.state, action)
        assert not apply_action(catalog, game.state, action).success
        assert is_legal(catalog, game.state, Action.end_phase(player_idx=0))

    def test_choice_owner_checked(self, game, catalog, rig):
        """Only the player the choice waits on may answer it."""
        rig(game.state, hand=["Militia", "Copper", "Copper", "Estate", "Estate"])
        rig(game.state, player_idx=1, hand=["Copper", "Copper", "Copper", "Estate", "Estate"])
        game.play_card(0)

        assert is_legal(catalog, game.state, Action.resolve_choice([3, 4], player_idx=1))
        assert not is_legal(catalog, game.state, Action.resolve_choice([3, 4], player_idx=0))

    def test_agrees_with_reducer(self, game, catalog):
        """Over a random game, is_legal matches what the reducer accepts."""
        rng = random.Random(3)
        candidates = [
            Action.end_phase(), Action.end_turn(), Action.buy("Silver"),
            Action.play_card(0), Action.end_phase(player_idx=1),
        ]
        for _ in range(120):
            if game.is_game_over():
                break
            for action in candidates:
                accepted = apply_action(catalog, game.state, action).success
                assert is_legal(catalog, game.state, action) == accepted, action.describe()
            options = game.legal_actions()
            game.apply(rng.choice(options))
