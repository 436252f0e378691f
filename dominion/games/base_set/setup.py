"""
Base Game Setup - Creates initial game state.

This module handles:
- Building the standard supply for the player count
- Starting decks (7 Copper + 3 Estate by default)
- Shuffling with seed for determinism
- Initial draw of a hand for every player

The setup follows the base game rules for 2-4 players.
"""

from __future__ import annotations
import logging
import random
import uuid
from typing import TYPE_CHECKING

from ...engine_core.phases import start_turn
from ...engine_core.state import GameState, PlayerState
from ...engine_core.supply import Supply
from ...engine_core.zones import Zone
from ...card_schema.card_catalog import CardType
from .catalog import create_base_catalog

if TYPE_CHECKING:
    from ...card_schema import CardCatalog
    from ...config import GameConfig

logger = logging.getLogger(__name__)

KINGDOM_PILE_SIZE = 10


def standard_supply_counts(config: GameConfig, catalog: CardCatalog) -> dict[str, int]:
    """
    Pile sizes for the configured player count.

    Copper is 60 less the starting Coppers, victory piles are 8 with
    two players and 12 otherwise, Curses are 10 per opponent.
    """
    n = config.num_players
    victory_count = 8 if n == 2 else 12
    counts = {
        "Copper": max(0, 60 - config.starting_deck.get("Copper", 0) * n),
        "Silver": 40,
        "Gold": 30,
        "Estate": victory_count,
        "Duchy": victory_count,
        "Province": victory_count,
        "Curse": 10 * (n - 1),
    }
    for name in config.kingdom:
        card = catalog.get_card(name)
        counts[name] = victory_count if card and card.has_type(CardType.VICTORY) else KINGDOM_PILE_SIZE
    counts.update(config.supply_overrides)
    return counts


def setup_base_game(
    config: GameConfig | None = None,
    catalog: CardCatalog | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        config: Game configuration (defaults to a 2-player game)
        catalog: Card catalog (creates the base set if not provided)
        game_id: Identifier for the game (random if not provided)

    Returns:
        Initial GameState, first player in the action phase
    """
    if config is None:
        from ...config import GameConfig
        config = GameConfig()
    catalog = catalog or create_base_catalog()

    _check_names(config, catalog)

    # Set up random with seed for determinism
    rng = random.Random(config.seed)

    counts = standard_supply_counts(config, catalog)
    supply = Supply(counts=counts, empty_pile_threshold=config.empty_pile_threshold)
    if supply.is_game_over():
        raise ValueError("Configured supply already meets the game-end condition")

    players = _create_players(config, rng)

    state = GameState(
        game_id=game_id or f"game_{uuid.uuid4().hex[:12]}",
        catalog_id=catalog.catalog_id,
        supply=supply,
        players=players,
        hand_size=config.hand_size,
        random_seed=config.seed,
        rng=rng,
    )
    state.metadata["first_player"] = config.first_player
    start_turn(state, config.first_player)

    logger.debug(
        "Set up %s: %d players, kingdom %s",
        state.game_id, config.num_players, ", ".join(config.kingdom),
    )
    return state


def _check_names(config: GameConfig, catalog: CardCatalog):
    """Every configured card must exist in the catalog."""
    referenced = (
        list(config.kingdom)
        + list(config.supply_overrides)
        + list(config.starting_deck)
    )
    unknown = sorted({name for name in referenced if name not in catalog})
    if unknown:
        raise ValueError(f"Unknown card(s) in configuration: {', '.join(unknown)}")


def _create_players(config: GameConfig, rng: random.Random) -> list[PlayerState]:
    """Create players with shuffled starting decks and an opening hand."""
    players = []
    for i, name in enumerate(config.names()):
        deck_cards = [
            card_name
            for card_name, count in config.starting_deck.items()
            for _ in range(count)
        ]
        rng.shuffle(deck_cards)
        player = PlayerState(
            player_id=f"p{i}",
            name=name,
            deck=Zone(name="deck", cards=deck_cards),
        )
        player.draw(config.hand_size, rng)
        players.append(player)
    return players
