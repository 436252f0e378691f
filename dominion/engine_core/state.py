"""
Game State - The complete state of one game.

Design principles:
- Self-contained: each GameState owns its rng, so independent games
  never share anything and can run side by side
- Mutated only through the reducer, which works on a clone
- Serializable to a read-only snapshot for clients and agents
"""

from __future__ import annotations
from collections import Counter
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import random

from .supply import Supply
from .zones import Zone, draw_into


class TurnPhase(Enum):
    """Per-turn phases, cyclic across players."""
    ACTION = "action"
    TREASURE = "treasure"
    BUY = "buy"
    CLEANUP = "cleanup"


class GameStatus(Enum):
    """High-level game status."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class TurnCounters:
    """Resources of the active player, reset every turn."""
    actions: int = 1
    buys: int = 1
    coins: int = 0

    def reset(self):
        self.actions = 1
        self.buys = 1
        self.coins = 0


@dataclass
class PlayerState:
    """
    State for a single player: four ordered zones.

    Deck top is the end of the list. Played holds this turn's
    cards only and is emptied during cleanup.
    """
    player_id: str
    name: str
    deck: Zone = field(default_factory=lambda: Zone(name="deck"))
    hand: Zone = field(default_factory=lambda: Zone(name="hand"))
    discard: Zone = field(default_factory=lambda: Zone(name="discard"))
    played: Zone = field(default_factory=lambda: Zone(name="played"))

    @property
    def zones(self) -> tuple[Zone, Zone, Zone, Zone]:
        return self.deck, self.hand, self.discard, self.played

    def draw(self, n: int, rng: random.Random) -> list[str]:
        """Draw up to n cards, reshuffling discard into deck as needed."""
        return draw_into(self.hand, self.deck, self.discard, n, rng)

    def all_cards(self) -> list[str]:
        """Every card the player owns, across all zones."""
        cards: list[str] = []
        for zone in self.zones:
            cards.extend(zone.cards)
        return cards

    def card_counts(self) -> Counter:
        return Counter(self.all_cards())

    def count_of(self, kind: str) -> int:
        return sum(zone.count_of(kind) for zone in self.zones)

    @property
    def total_cards(self) -> int:
        return sum(len(zone) for zone in self.zones)


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    catalog_id: str
    supply: Supply

    # Players
    players: list[PlayerState] = field(default_factory=list)
    current_player_idx: int = 0

    # Turn structure
    status: GameStatus = GameStatus.PLAYING
    phase: TurnPhase = TurnPhase.ACTION
    counters: TurnCounters = field(default_factory=TurnCounters)
    turn_number: int = 1
    hand_size: int = 5

    # Shared zones
    trash: Zone = field(default_factory=lambda: Zone(name="trash"))

    # Effect resolution state
    pending_effects: list[Any] = field(default_factory=list)  # EffectContext stack
    choice_required: Any | None = None  # PendingChoice if waiting for input

    # History (append-only, shared between clones)
    action_history: list[Any] = field(default_factory=list)
    log: list[str] = field(default_factory=list)

    # Random source for determinism
    random_seed: int | None = None
    rng: random.Random = field(default_factory=random.Random)

    # Metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    def get_player(self, player_idx: int) -> PlayerState:
        return self.players[player_idx]

    def other_player_indices(self, player_idx: int) -> list[int]:
        """Every other player, in turn order starting after player_idx."""
        return [
            (player_idx + offset) % self.num_players
            for offset in range(1, self.num_players)
        ]

    def clone(self) -> GameState:
        """
        Deep copy the state.

        Recorded actions are never modified, so the copied history holds
        the same Action objects in a new list. Appending to the clone
        never shows up in the original.
        """
        memo = {id(action): action for action in self.action_history}
        return deepcopy(self, memo)
