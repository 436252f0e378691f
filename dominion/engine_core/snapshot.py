"""
Snapshot - Read-only view of a game for clients and agents.

Snapshots are pydantic models built from a GameState. They are frozen,
hold plain data only (names, counts, strings) and never share mutable
objects with the state they were built from, so callers can keep or
serialize them (model_dump / model_dump_json) freely.
"""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, Field

from .state import GameState, PlayerState
from ..card_schema import CardCatalog


class PendingChoiceInfo(BaseModel):
    """A decision the engine is waiting on."""
    choice_id: str
    player_idx: int
    choice_type: str = Field(description="discard, trash, topdeck, gain or sift")
    prompt: str
    options: list[str] = Field(default_factory=list)
    min_choices: int = 1
    max_choices: int = 1
    source_card: Optional[str] = None

    model_config = {"frozen": True}


class CountersInfo(BaseModel):
    """The active player's turn resources."""
    actions: int
    buys: int
    coins: int

    model_config = {"frozen": True}


class PlayerInfo(BaseModel):
    """One player's zones, in full."""
    player_idx: int
    player_id: str
    name: str
    deck: list[str] = Field(
        default_factory=list, description="Next card to be drawn first"
    )
    hand: list[str] = Field(default_factory=list)
    discard: list[str] = Field(default_factory=list)
    played: list[str] = Field(default_factory=list)
    score: int = 0
    is_current: bool = False

    model_config = {"frozen": True}

    @property
    def total_cards(self) -> int:
        return len(self.deck) + len(self.hand) + len(self.discard) + len(self.played)


class GameSnapshot(BaseModel):
    """Complete public view of a game at one point in time."""
    game_id: str
    turn_number: int
    phase: str
    current_player_idx: int
    counters: CountersInfo
    supply: dict[str, int] = Field(default_factory=dict)
    trash: list[str] = Field(default_factory=list)
    players: list[PlayerInfo] = Field(default_factory=list)
    pending_choice: Optional[PendingChoiceInfo] = None
    game_over: bool = False
    empty_piles: int = 0

    model_config = {"frozen": True}

    @property
    def scores(self) -> list[int]:
        return [player.score for player in self.players]


def player_score(player: PlayerState, catalog: CardCatalog) -> int:
    """Victory points over every card a player owns."""
    total = 0
    for name in player.all_cards():
        card = catalog.get_card(name)
        if card is not None:
            total += card.victory_points
    return total


def compute_scores(state: GameState, catalog: CardCatalog) -> list[int]:
    """Scores in player order."""
    return [player_score(player, catalog) for player in state.players]


def build_snapshot(state: GameState, catalog: CardCatalog) -> GameSnapshot:
    """Build a GameSnapshot; the state is not modified."""
    players = [
        PlayerInfo(
            player_idx=idx,
            player_id=player.player_id,
            name=player.name,
            deck=list(reversed(player.deck.cards)),
            hand=list(player.hand.cards),
            discard=list(player.discard.cards),
            played=list(player.played.cards),
            score=player_score(player, catalog),
            is_current=idx == state.current_player_idx,
        )
        for idx, player in enumerate(state.players)
    ]

    pending = None
    choice = state.choice_required
    if choice is not None:
        pending = PendingChoiceInfo(
            choice_id=choice.choice_id,
            player_idx=choice.player_idx,
            choice_type=choice.choice_type.value,
            prompt=choice.prompt,
            options=list(choice.options),
            min_choices=choice.min_choices,
            max_choices=choice.max_choices,
            source_card=choice.source_card,
        )

    return GameSnapshot(
        game_id=state.game_id,
        turn_number=state.turn_number,
        phase=state.phase.value,
        current_player_idx=state.current_player_idx,
        counters=CountersInfo(
            actions=state.counters.actions,
            buys=state.counters.buys,
            coins=state.counters.coins,
        ),
        supply=dict(state.supply.counts),
        trash=list(state.trash.cards),
        players=players,
        pending_choice=pending,
        game_over=state.is_game_over,
        empty_piles=state.supply.empty_piles(),
    )
