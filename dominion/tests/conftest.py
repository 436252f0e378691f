"""
Pytest fixtures for engine tests.
"""

import random

import pytest

from ..card_schema import CardCatalog
from ..config import GameConfig
from ..engine_core.game import Game
from ..engine_core.state import GameState, TurnPhase
from ..games.base_set import create_base_catalog


@pytest.fixture
def catalog() -> CardCatalog:
    """The base set catalog."""
    return create_base_catalog()


@pytest.fixture
def config() -> GameConfig:
    """A seeded 2-player configuration."""
    return GameConfig(seed=42)


@pytest.fixture
def game(catalog: CardCatalog, config: GameConfig) -> Game:
    """A fresh 2-player game, player 0 in the action phase."""
    return Game.new(config, catalog=catalog, game_id="test_game")


@pytest.fixture
def make_game(catalog: CardCatalog):
    """Factory for games with a custom configuration."""
    def _make(**overrides) -> Game:
        overrides.setdefault("seed", 42)
        return Game.new(GameConfig(**overrides), catalog=catalog, game_id="test_game")
    return _make


@pytest.fixture
def rig():
    """
    Replace a player's zones with known contents.

    Deck lists are in zone order: the last card is drawn first.
    """
    def _rig(
        state: GameState,
        player_idx: int = 0,
        hand: list[str] | None = None,
        deck: list[str] | None = None,
        discard: list[str] | None = None,
    ) -> GameState:
        player = state.players[player_idx]
        if hand is not None:
            player.hand.cards = list(hand)
        if deck is not None:
            player.deck.cards = list(deck)
        if discard is not None:
            player.discard.cards = list(discard)
        return state
    return _rig


@pytest.fixture
def to_buy_phase():
    """Advance a game from the action phase straight to the buy phase with given coins."""
    def _advance(game: Game, coins: int = 0) -> Game:
        assert game.state.phase == TurnPhase.ACTION
        assert game.end_phase().success
        assert game.end_phase().success
        game.state.counters.coins = coins
        return game
    return _advance


def play_randomly(game: Game, seed: int, max_steps: int = 2000) -> int:
    """Drive a game with uniformly random legal actions; returns steps taken."""
    chooser = random.Random(seed)
    steps = 0
    while not game.is_game_over() and steps < max_steps:
        actions = game.legal_actions()
        result = game.apply(chooser.choice(actions))
        assert result.success, result.error
        steps += 1
    return steps
