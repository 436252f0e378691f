"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Agents to enumerate possible moves (and build action masks)
2. Clients to show available actions
3. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types.
Plays and choices that lead to identical outcomes (the same card name
at two hand indices) are only listed once.
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations, product

from .action import Action, ActionType, as_index
from .effect_resolver import ChoiceType, INDEX_CHOICES, PendingChoice, SIFT_DECISIONS
from .errors import GameError
from .reducer import check_can_act
from .state import GameState, TurnPhase
from ..card_schema import CardCatalog


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the current game state.

    Uses the CardCatalog to decide which cards are playable and
    affordable.
    """
    catalog: CardCatalog

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for whoever must act next.

        Returns a list of fully-specified Action objects.
        """
        if state.is_game_over:
            return []

        # If waiting for a choice, only choice actions are legal
        if state.choice_required:
            return self._generate_choice_actions(state.choice_required)

        actions: list[Action] = []
        if state.phase == TurnPhase.ACTION:
            actions.extend(self._generate_play_actions(state, TurnPhase.ACTION))
        elif state.phase == TurnPhase.TREASURE:
            actions.extend(self._generate_play_actions(state, TurnPhase.TREASURE))
        elif state.phase == TurnPhase.BUY:
            actions.extend(self._generate_buy_actions(state))

        actions.append(Action.end_phase())
        if state.phase != TurnPhase.BUY:
            actions.append(Action.end_turn())
        return actions

    def _generate_play_actions(self, state: GameState, phase: TurnPhase) -> list[Action]:
        """One play per distinct playable card in hand."""
        if phase == TurnPhase.ACTION and state.counters.actions < 1:
            return []

        actions = []
        seen: set[str] = set()
        for index, name in enumerate(state.current_player.hand):
            if name in seen:
                continue
            card = self.catalog.get_card(name)
            if card is None:
                continue
            playable = card.is_action if phase == TurnPhase.ACTION else card.is_treasure
            if playable:
                seen.add(name)
                actions.append(Action.play_card(index))
        return actions

    def _generate_buy_actions(self, state: GameState) -> list[Action]:
        """One buy per affordable, non-empty supply pile."""
        if state.counters.buys < 1:
            return []
        actions = []
        for name in state.supply.piles:
            card = self.catalog.get_card(name)
            if card is None or state.supply.remaining(name) <= 0:
                continue
            if card.cost <= state.counters.coins:
                actions.append(Action.buy(name))
        return actions

    def _generate_choice_actions(self, choice: PendingChoice) -> list[Action]:
        """Generate every distinct answer to a pending choice."""
        player = choice.player_idx

        if choice.choice_type in INDEX_CHOICES:
            actions = []
            seen: set[tuple[str, ...]] = set()
            indices = range(len(choice.options))
            for size in range(choice.min_choices, choice.max_choices + 1):
                for picked in combinations(indices, size):
                    key = tuple(sorted(choice.options[i] for i in picked))
                    if key in seen:
                        continue
                    seen.add(key)
                    actions.append(Action.resolve_choice(list(picked), player_idx=player))
            return actions

        if choice.choice_type == ChoiceType.GAIN:
            return [Action.resolve_choice([name], player_idx=player) for name in choice.options]

        # SIFT: every trash/discard/keep assignment
        return [
            Action.resolve_choice(list(decisions), player_idx=player)
            for decisions in product(SIFT_DECISIONS, repeat=len(choice.options))
        ]


def legal_actions(catalog: CardCatalog, state: GameState) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator(catalog=catalog)
    return generator.generate(state)


def is_legal(catalog: CardCatalog, state: GameState, action: Action) -> bool:
    """
    Check if a specific action would be accepted.

    Agrees with the reducer: its shared checks run first, and phase
    control is always allowed once they pass; the generator lists end_turn only where it differs
    from end_phase.
    """
    try:
        check_can_act(state, action)
    except GameError:
        return False
    if action.action_type in (ActionType.END_PHASE, ActionType.END_TURN):
        return True

    for legal in legal_actions(catalog, state):
        if legal.action_type != action.action_type:
            continue
        if action.action_type == ActionType.PLAY_CARD:
            hand = state.current_player.hand.cards
            index = as_index(action.payload.hand_index)
            if index is not None and 0 <= index < len(hand):
                if hand[legal.payload.hand_index] == hand[index]:
                    return True
        elif action.action_type == ActionType.BUY:
            if legal.payload.card_name == action.payload.card_name:
                return True
        elif action.action_type == ActionType.RESOLVE_CHOICE:
            choice = state.choice_required
            if _choice_key(choice, legal) == _choice_key(choice, action):
                return True
    return False


def _choice_key(choice: PendingChoice, action: Action) -> tuple | None:
    """Outcome-equivalence key: index answers compare by the cards they pick."""
    values = action.payload.choice_values or []
    if choice.choice_type in INDEX_CHOICES:
        values = [as_index(i) for i in values]
        valid = all(
            i is not None and 0 <= i < len(choice.options) for i in values
        ) and len(set(values)) == len(values)
        if not valid:
            return None
        return tuple(sorted(choice.options[i] for i in values))
    return tuple(values)
