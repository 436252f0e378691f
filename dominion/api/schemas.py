"""
Pydantic Schemas for the API - Request/response models for game hosting.

These models define the contract between a client (UI, bot runner,
training harness) and the engine. Game state itself is returned as the
engine's GameSnapshot.

Error Codes:
- Every GameError code (INVALID_PHASE, INSUFFICIENT_COINS, ...): the
  command was rejected and the game is unchanged
- GAME_NOT_FOUND: Game id does not exist or the game was ended
- VALIDATION_ERROR: Request could not be turned into a command
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from ..config import GameConfig
from ..engine_core.action import Action
from ..engine_core.snapshot import GameSnapshot, PendingChoiceInfo


# =============================================================================
# Enums
# =============================================================================

class CommandType(str, Enum):
    """Commands a client can submit."""
    PLAY_CARD = "play_card"
    BUY = "buy"
    END_PHASE = "end_phase"
    END_TURN = "end_turn"
    RESOLVE_CHOICE = "resolve_choice"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_PHASE = "INVALID_PHASE"
    UNPLAYABLE_CARD = "UNPLAYABLE_CARD"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    NO_ACTIONS_REMAINING = "NO_ACTIONS_REMAINING"
    INSUFFICIENT_BUYS = "INSUFFICIENT_BUYS"
    INSUFFICIENT_COINS = "INSUFFICIENT_COINS"
    SUPPLY_EXHAUSTED = "SUPPLY_EXHAUSTED"
    UNKNOWN_CARD_NAME = "UNKNOWN_CARD_NAME"
    NOT_IN_SUPPLY = "NOT_IN_SUPPLY"
    PENDING_CHOICE = "PENDING_CHOICE"
    NO_PENDING_CHOICE = "NO_PENDING_CHOICE"
    INVALID_CHOICE = "INVALID_CHOICE"
    WRONG_PLAYER = "WRONG_PLAYER"
    GAME_OVER = "GAME_OVER"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game."""
    config: GameConfig = Field(default_factory=GameConfig)
    game_id: Optional[str] = Field(None, description="Chosen id; generated if omitted")


class CommandRequest(BaseModel):
    """
    A single command for a game.

    Which fields are required depends on the command:
    play_card needs hand_index, buy needs card_name,
    resolve_choice needs selection.
    """
    command: CommandType
    player_idx: Optional[int] = Field(None, description="Acting player; checked when given")
    hand_index: Optional[int] = Field(None, ge=0)
    card_name: Optional[str] = None
    selection: Optional[list[Any]] = Field(
        None, description="Hand indices, a pile name, or one sift decision per card"
    )

    @model_validator(mode="after")
    def _fields_for_command(self) -> "CommandRequest":
        if self.command == CommandType.PLAY_CARD and self.hand_index is None:
            raise ValueError("play_card requires hand_index")
        if self.command == CommandType.BUY and not self.card_name:
            raise ValueError("buy requires card_name")
        if self.command == CommandType.RESOLVE_CHOICE and self.selection is None:
            raise ValueError("resolve_choice requires selection")
        return self

    def to_action(self) -> Action:
        """Convert to an engine Action."""
        if self.command == CommandType.PLAY_CARD:
            return Action.play_card(self.hand_index, player_idx=self.player_idx)
        if self.command == CommandType.BUY:
            return Action.buy(self.card_name, player_idx=self.player_idx)
        if self.command == CommandType.END_PHASE:
            return Action.end_phase(player_idx=self.player_idx)
        if self.command == CommandType.END_TURN:
            return Action.end_turn(player_idx=self.player_idx)
        return Action.resolve_choice(self.selection, player_idx=self.player_idx)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameResponse(BaseModel):
    """Current state of a game."""
    game_id: str
    state: GameSnapshot
    scores: list[int] = Field(default_factory=list)
    legal_actions: list[str] = Field(
        default_factory=list, description="Short forms, e.g. 'buy(Silver)'"
    )
    winners: Optional[list[int]] = Field(None, description="Set once the game is over")
    api_version: str = "v1"


class CommandResponse(BaseModel):
    """Outcome of one command."""
    game_id: str
    success: bool
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    changes: list[str] = Field(default_factory=list)
    pending_choice: Optional[PendingChoiceInfo] = None
    state: GameSnapshot
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """Response listing hosted games."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after removing a game."""
    success: bool
    game_id: str
