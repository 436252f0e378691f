"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- (state, action) -> new_state; the input state is never touched
- Validates before applying
- Returns ActionResult with success/failure
- Delegates card effects to EffectResolver
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .action import Action, ActionType, ActionResult, as_index
from .effect_resolver import EffectResolver
from .errors import (
    CardNotInHandError,
    GameError,
    GameOverError,
    InsufficientBuysError,
    InsufficientCoinsError,
    InvalidPhaseError,
    NoActionsRemainingError,
    NoPendingChoiceError,
    PendingChoiceError,
    UnknownCardNameError,
    UnplayableCardError,
    WrongPlayerError,
)
from .phases import advance_phase, end_turn, require_phase, run_cleanup
from .state import GameState, GameStatus, TurnPhase
from ..card_schema import CardCatalog

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The catalog provides card definitions for validation.
    """
    catalog: CardCatalog
    resolver: EffectResolver = field(init=False)

    def __post_init__(self):
        self.resolver = EffectResolver(catalog=self.catalog)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error. On failure the
        given state is exactly as it was.
        """
        try:
            self._validate_action(state, action)
            handler = self._get_handler(action.action_type)
            new_state = state.clone()
            changes = handler(new_state, action)
        except GameError as e:
            logger.debug("Rejected %s: [%s] %s", action.describe(), e.code, e.message)
            return ActionResult.from_error(e)

        changes.extend(self._check_game_end(new_state))

        new_state.action_history.append(action)
        new_state.log.extend(changes)
        logger.debug("Applied %s for player %d", action.describe(), state.current_player_idx)
        return ActionResult.success_with_state(
            new_state,
            changes=changes,
            pending_choice=new_state.choice_required,
        )

    def _validate_action(self, state: GameState, action: Action):
        check_can_act(state, action)

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.BUY: self._handle_buy,
            ActionType.END_PHASE: self._handle_end_phase,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.RESOLVE_CHOICE: self._handle_resolve_choice,
        }
        return handlers[action_type]

    def _handle_play_card(self, state: GameState, action: Action) -> list[str]:
        """
        Handle playing a card from hand.

        All checks run before the card leaves the hand.
        """
        player = state.current_player
        hand_index = as_index(action.payload.hand_index)
        if hand_index is None or not 0 <= hand_index < len(player.hand):
            raise CardNotInHandError(f"No card at hand index {action.payload.hand_index!r}")

        card_name = player.hand.cards[hand_index]
        card = self.catalog.get_card(card_name)
        if card is None or not card.is_playable:
            raise UnplayableCardError(f"{card_name} cannot be played")

        if state.phase == TurnPhase.ACTION and card.is_action:
            if state.counters.actions < 1:
                raise NoActionsRemainingError(f"No actions left to play {card_name}")
            player.played.add(player.hand.take(hand_index))
            state.counters.actions -= 1
        elif state.phase == TurnPhase.TREASURE and card.is_treasure:
            player.played.add(player.hand.take(hand_index))
        elif card.is_action:
            raise InvalidPhaseError(f"{card_name} is an Action; play it in the action phase")
        else:
            raise InvalidPhaseError(f"{card_name} is a Treasure; play it in the treasure phase")

        changes = [f"{player.name} played {card_name}"]
        effect_changes, _ = self.resolver.begin_effect(state, card_name, state.current_player_idx)
        changes.extend(effect_changes)
        return changes

    def _handle_buy(self, state: GameState, action: Action) -> list[str]:
        """Handle buying a card from the supply."""
        require_phase(state, TurnPhase.BUY, doing="buy")
        counters = state.counters
        if counters.buys < 1:
            raise InsufficientBuysError("No buys left this turn")

        card_name = action.payload.card_name
        card = self.catalog.get_card(card_name) if isinstance(card_name, str) else None
        if card is None:
            raise UnknownCardNameError(f"Unknown card: {card_name!r}")
        if counters.coins < card.cost:
            raise InsufficientCoinsError(card.cost, counters.coins, card_name)

        state.supply.purchase(card_name)
        counters.buys -= 1
        counters.coins -= card.cost
        player = state.current_player
        player.discard.add(card_name)
        changes = [f"{player.name} bought {card_name}"]

        if counters.buys == 0 and not state.supply.is_game_over():
            state.phase = TurnPhase.CLEANUP
            changes.extend(run_cleanup(state))
        return changes

    def _handle_end_phase(self, state: GameState, action: Action) -> list[str]:
        """Handle explicit end of the current phase."""
        return advance_phase(state)

    def _handle_end_turn(self, state: GameState, action: Action) -> list[str]:
        """Handle end of turn from any phase, advance to next player."""
        return end_turn(state)

    def _handle_resolve_choice(self, state: GameState, action: Action) -> list[str]:
        """Handle choice response during effect resolution."""
        changes, _ = self.resolver.provide_choice(state, action.payload.choice_values)
        return changes

    def _check_game_end(self, state: GameState) -> list[str]:
        """End the game once the supply says so."""
        if not state.supply.is_game_over():
            return []
        state.status = GameStatus.GAME_OVER
        state.choice_required = None
        state.pending_effects.clear()
        logger.info("Game %s over on turn %d", state.game_id, state.turn_number)
        return ["Game over"]


def check_can_act(state: GameState, action: Action):
    """
    Validate checks shared by every command.

    Raises a GameError if the command cannot be considered at all.
    Phase and resource checks are left to the handlers.
    """
    if state.status == GameStatus.GAME_OVER:
        raise GameOverError("Game is over - no actions allowed")

    choice = state.choice_required
    if action.action_type == ActionType.RESOLVE_CHOICE:
        if choice is None:
            raise NoPendingChoiceError("No choice pending")
        expected_player = choice.player_idx
    else:
        if choice is not None:
            raise PendingChoiceError(
                f"Player {choice.player_idx} must first resolve: {choice.prompt}"
            )
        expected_player = state.current_player_idx

    player_idx = action.payload.player_idx
    if player_idx is not None and player_idx != expected_player:
        raise WrongPlayerError(f"Player {player_idx} cannot act now; waiting on player {expected_player}")


def apply_action(catalog: CardCatalog, state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(catalog=catalog)
    return reducer.apply(state, action)
