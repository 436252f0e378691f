"""
Action System - Commands, payloads, and results.

Actions are the only way to change a game:
1. Card plays (play the card at a hand index)
2. Buys (by card name)
3. Phase control (end phase, end turn)
4. Choice resolution while an effect is suspended

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING
import operator

if TYPE_CHECKING:
    from .errors import GameError
    from .state import GameState


class ActionType(Enum):
    """Types of player commands."""
    PLAY_CARD = "play_card"
    BUY = "buy"
    END_PHASE = "end_phase"
    END_TURN = "end_turn"
    RESOLVE_CHOICE = "resolve_choice"


def as_index(value: Any) -> int | None:
    """
    Coerce an integer-like index (including numpy integers) to int.

    Returns None for bools and anything that is not integer-like.
    """
    if isinstance(value, bool):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the command parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    # Issuing player; None means "whoever is expected to act"
    player_idx: int | None = None

    # PLAY_CARD
    hand_index: int | None = None

    # BUY
    card_name: str | None = None

    # RESOLVE_CHOICE: hand indices, card names or sift decisions
    choice_values: list[Any] | None = None


@dataclass
class Action:
    """
    A complete command to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def play_card(cls, hand_index: int, player_idx: int | None = None) -> Action:
        """Factory for playing the card at hand_index."""
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(player_idx=player_idx, hand_index=hand_index),
        )

    @classmethod
    def buy(cls, card_name: str, player_idx: int | None = None) -> Action:
        """Factory for buy action."""
        return cls(
            action_type=ActionType.BUY,
            payload=ActionPayload(player_idx=player_idx, card_name=card_name),
        )

    @classmethod
    def end_phase(cls, player_idx: int | None = None) -> Action:
        return cls(
            action_type=ActionType.END_PHASE,
            payload=ActionPayload(player_idx=player_idx),
        )

    @classmethod
    def end_turn(cls, player_idx: int | None = None) -> Action:
        return cls(
            action_type=ActionType.END_TURN,
            payload=ActionPayload(player_idx=player_idx),
        )

    @classmethod
    def resolve_choice(cls, selection: list[Any], player_idx: int | None = None) -> Action:
        """Factory for choice response."""
        return cls(
            action_type=ActionType.RESOLVE_CHOICE,
            payload=ActionPayload(player_idx=player_idx, choice_values=list(selection)),
        )

    def describe(self) -> str:
        """Short human-readable form, e.g. 'buy(Silver)'."""
        p = self.payload
        if self.action_type == ActionType.PLAY_CARD:
            return f"play_card({p.hand_index})"
        if self.action_type == ActionType.BUY:
            return f"buy({p.card_name})"
        if self.action_type == ActionType.RESOLVE_CHOICE:
            return f"resolve_choice({p.choice_values})"
        return f"{self.action_type.value}()"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - The error kind (if failed)
    - Human-readable changes
    """
    success: bool
    new_state: GameState | None = None
    error: str | None = None
    error_code: str | None = None
    exception: GameError | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    # For effect resolution
    pending_choice: Any | None = None

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        exception: GameError | None = None,
    ) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code, exception=exception)

    @classmethod
    def from_error(cls, exc: GameError) -> ActionResult:
        return cls.failure(exc.message, error_code=exc.code, exception=exc)

    @classmethod
    def success_with_state(
        cls,
        state: GameState,
        changes: list[str] | None = None,
        pending_choice: Any | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            pending_choice=pending_choice,
        )
