"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Holds the GameState (players, supply, trash, turn counters)
2. Generates legal actions
3. Applies actions via the reducer
4. Resolves card effects step-by-step, pausing on player choices
5. Exposes read-only snapshots of the state
"""

from .errors import GameError
from .zones import Zone
from .supply import Supply
from .state import GameState, GameStatus, PlayerState, TurnCounters, TurnPhase
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, is_legal, legal_actions
from .effect_resolver import ChoiceType, EffectResolver, EffectContext, PendingChoice
from .snapshot import GameSnapshot, build_snapshot, compute_scores
from .game import Game

__all__ = [
    "GameError",
    "Zone",
    "Supply",
    "GameState",
    "GameStatus",
    "PlayerState",
    "TurnCounters",
    "TurnPhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "is_legal",
    "legal_actions",
    "ChoiceType",
    "EffectResolver",
    "EffectContext",
    "PendingChoice",
    "GameSnapshot",
    "build_snapshot",
    "compute_scores",
    "Game",
]
