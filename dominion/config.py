"""
Game Configuration - Everything needed to set up a game.

Validated with pydantic at construction: a malformed configuration is a
programmer error and raises pydantic.ValidationError before any game
state exists.
"""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .games.base_set.cards import DEFAULT_KINGDOM

MIN_PLAYERS = 2
MAX_PLAYERS = 4


class GameConfig(BaseModel):
    """Configuration for one game."""
    num_players: int = Field(2, ge=MIN_PLAYERS, le=MAX_PLAYERS)
    player_names: Optional[list[str]] = Field(
        None, description="Display names; defaults to Player 1, Player 2, ..."
    )
    kingdom: list[str] = Field(
        default_factory=lambda: list(DEFAULT_KINGDOM),
        description="Action piles in the supply",
    )
    seed: Optional[int] = Field(None, description="Seed for reproducible games")
    supply_overrides: dict[str, int] = Field(
        default_factory=dict, description="Replace the standard count of any pile"
    )
    starting_deck: dict[str, int] = Field(
        default_factory=lambda: {"Copper": 7, "Estate": 3},
        description="Cards each player starts with",
    )
    hand_size: int = Field(5, ge=1)
    empty_pile_threshold: int = Field(3, ge=1)
    first_player: int = Field(0, ge=0)

    model_config = {"frozen": True}

    @field_validator("kingdom")
    @classmethod
    def _kingdom_unique(cls, kingdom: list[str]) -> list[str]:
        if len(set(kingdom)) != len(kingdom):
            raise ValueError("kingdom contains duplicate cards")
        return kingdom

    @field_validator("supply_overrides", "starting_deck")
    @classmethod
    def _counts_non_negative(cls, counts: dict[str, int]) -> dict[str, int]:
        for name, count in counts.items():
            if count < 0:
                raise ValueError(f"{name} has negative count {count}")
        return counts

    @model_validator(mode="after")
    def _players_consistent(self) -> GameConfig:
        if self.first_player >= self.num_players:
            raise ValueError("first_player must be a valid player index")
        if self.player_names is not None and len(self.player_names) != self.num_players:
            raise ValueError("player_names must name every player")
        return self

    def names(self) -> list[str]:
        if self.player_names is not None:
            return list(self.player_names)
        return [f"Player {i + 1}" for i in range(self.num_players)]
