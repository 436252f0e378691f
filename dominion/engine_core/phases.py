"""
Turn Phase Machine - Phase state and legal transitions.

    ACTION -> TREASURE -> BUY -> CLEANUP -> (next player) ACTION

Every transition out of ACTION and TREASURE is explicit. BUY ends on an
explicit command or when the last buy is spent. CLEANUP has no command
of its own: entering it runs it and starts the next player's turn.
"""

from __future__ import annotations
import logging

from .errors import InvalidPhaseError
from .state import GameState, TurnPhase

logger = logging.getLogger(__name__)

NEXT_PHASE: dict[TurnPhase, TurnPhase] = {
    TurnPhase.ACTION: TurnPhase.TREASURE,
    TurnPhase.TREASURE: TurnPhase.BUY,
    TurnPhase.BUY: TurnPhase.CLEANUP,
}


def require_phase(state: GameState, *phases: TurnPhase, doing: str = "do that"):
    """Raise InvalidPhaseError unless the game is in one of `phases`."""
    if state.phase not in phases:
        allowed = " or ".join(p.value for p in phases)
        raise InvalidPhaseError(
            f"Cannot {doing} in the {state.phase.value} phase (needs {allowed})"
        )


def advance_phase(state: GameState) -> list[str]:
    """
    Move to the next phase.

    Advancing out of BUY runs cleanup and hands the turn over.
    """
    if state.phase not in NEXT_PHASE:
        raise InvalidPhaseError(f"No transition out of the {state.phase.value} phase")

    previous = state.phase
    state.phase = NEXT_PHASE[previous]
    changes = [f"{state.current_player.name} ended the {previous.value} phase"]

    if state.phase == TurnPhase.CLEANUP:
        changes.extend(run_cleanup(state))
    return changes


def end_turn(state: GameState) -> list[str]:
    """Skip whatever phases remain and clean up."""
    state.phase = TurnPhase.CLEANUP
    changes = [f"{state.current_player.name} ended their turn"]
    changes.extend(run_cleanup(state))
    return changes


def run_cleanup(state: GameState) -> list[str]:
    """
    Cleanup: discard hand and played cards, draw a new hand,
    pass the turn to the next player.
    """
    player = state.current_player
    player.discard.extend(player.played.clear())
    player.discard.extend(player.hand.clear())
    drawn = player.draw(state.hand_size, state.rng)

    changes = [f"{player.name} cleaned up and drew {len(drawn)} card(s)"]
    start_turn(state, (state.current_player_idx + 1) % state.num_players)
    state.turn_number += 1
    changes.append(f"Turn {state.turn_number}: {state.current_player.name} to play")
    logger.debug("Turn %d begins for player %d", state.turn_number, state.current_player_idx)
    return changes


def start_turn(state: GameState, player_idx: int):
    """Reset the turn resources and enter the action phase."""
    state.current_player_idx = player_idx
    state.counters.reset()
    state.phase = TurnPhase.ACTION
