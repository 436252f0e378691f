"""
Effect Resolver - Step-based interpreter for card effects.

This module resolves a played card's EffectDescriptor against the
game state, including:
- Counter operations (+Cards, +Actions, +Buys, +coins)
- Attacks on every other player, in turn order
- Supply gains and trashing
- Player choices

The resolver keeps its effect stack inside the GameState and processes
operations one at a time, suspending with a PendingChoice whenever
player input is required. While a choice is outstanding the reducer
accepts nothing but the resolving choice.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
import logging

from .action import as_index
from .errors import InvalidChoiceError, NoPendingChoiceError
from .state import GameState, PlayerState
from .zones import peek_top
from ..card_schema import CardCatalog
from ..card_schema.effect_dsl import (
    EffectDescriptor,
    GainDestination,
    Operation,
    OpType,
)

logger = logging.getLogger(__name__)


class ChoiceType(Enum):
    """What a pending choice asks for."""
    DISCARD = "discard"  # hand indices
    TRASH = "trash"  # hand indices
    TOPDECK = "topdeck"  # hand index
    GAIN = "gain"  # supply pile name
    SIFT = "sift"  # one decision per looked-at card


INDEX_CHOICES = frozenset({ChoiceType.DISCARD, ChoiceType.TRASH, ChoiceType.TOPDECK})

SIFT_TRASH = "trash"
SIFT_DISCARD = "discard"
SIFT_KEEP = "keep"
SIFT_DECISIONS = (SIFT_TRASH, SIFT_DISCARD, SIFT_KEEP)


@dataclass
class PendingChoice:
    """
    Represents a choice that must be made by a player.

    This is returned to the client/agent when the resolver needs input.
    For index choices, `options` is the chooser's hand and the answer is
    a list of indices into it.
    """
    choice_id: str
    player_idx: int
    choice_type: ChoiceType
    prompt: str
    options: list[str]
    min_choices: int = 1
    max_choices: int = 1

    # Context for the choice
    source_card: str | None = None
    source_step: int | None = None

    @property
    def optional(self) -> bool:
        return self.min_choices == 0


@dataclass
class EffectContext:
    """
    Context for resolving one card's effect.

    `step_state` belongs to the current operation and is cleared when
    the resolver moves on; `variables` live for the whole effect.
    """
    card_name: str
    effect: EffectDescriptor
    source_player_idx: int
    current_step_index: int = 0
    step_state: dict[str, Any] = field(default_factory=dict)
    variables: dict[str, Any] = field(default_factory=dict)

    @property
    def current_operation(self) -> Operation:
        return self.effect.operations[self.current_step_index]


@dataclass
class StepResult:
    """Outcome of running one operation."""
    pending_choice: PendingChoice | None = None
    changes: list[str] = field(default_factory=list)

    @property
    def needs_choice(self) -> bool:
        return self.pending_choice is not None


@dataclass
class EffectResolver:
    """
    Resolves effects operation by operation.

    The resolver is stateless: the effect stack and any pending choice
    live in the GameState it is handed.
    """
    catalog: CardCatalog

    def begin_effect(
        self,
        state: GameState,
        card_name: str,
        source_player_idx: int,
    ) -> tuple[list[str], PendingChoice | None]:
        """
        Begin resolving a played card's effect.

        Returns (changes, pending_choice or None).
        """
        card = self.catalog.get_card(card_name)
        context = EffectContext(
            card_name=card_name,
            effect=card.effect,
            source_player_idx=source_player_idx,
        )
        state.pending_effects.append(context)
        return self._continue_resolution(state)

    def provide_choice(
        self,
        state: GameState,
        selection: list[Any],
    ) -> tuple[list[str], PendingChoice | None]:
        """
        Provide a choice to continue resolution.

        The selection is fully validated before anything moves.
        """
        choice = state.choice_required
        if choice is None:
            raise NoPendingChoiceError("No choice pending")

        values = self._validate_choice(choice, selection)
        context = state.pending_effects[-1]
        changes = self._apply_choice(state, context, choice, values)
        state.choice_required = None

        more, pending = self._continue_resolution(state)
        return changes + more, pending

    def _continue_resolution(
        self,
        state: GameState,
    ) -> tuple[list[str], PendingChoice | None]:
        """
        Continue resolving effects until complete or a choice is needed.
        """
        changes: list[str] = []
        while state.pending_effects:
            context = state.pending_effects[-1]

            while context.current_step_index < len(context.effect):
                result = self._resolve_step(state, context, context.current_operation)
                changes.extend(result.changes)

                if result.needs_choice:
                    state.choice_required = result.pending_choice
                    logger.debug(
                        "%s waits on player %d: %s",
                        context.card_name,
                        result.pending_choice.player_idx,
                        result.pending_choice.choice_type.value,
                    )
                    return changes, result.pending_choice

                context.current_step_index += 1
                context.step_state = {}

            state.pending_effects.pop()

        return changes, None

    def _resolve_step(
        self,
        state: GameState,
        context: EffectContext,
        op: Operation,
    ) -> StepResult:
        """
        Resolve a single operation.

        Returns StepResult indicating outcome.
        """
        handlers: dict[OpType, Callable[[GameState, EffectContext, Any], StepResult]] = {
            OpType.DRAW_CARDS: self._step_draw_cards,
            OpType.GAIN_ACTIONS: self._step_gain_actions,
            OpType.GAIN_BUYS: self._step_gain_buys,
            OpType.GAIN_COINS: self._step_gain_coins,
            OpType.OTHER_PLAYERS_DISCARD_TO: self._step_other_players_discard_to,
            OpType.GAIN_CARD: self._step_gain_card,
            OpType.TRASH_CARD: self._step_trash_card,
            OpType.TOPDECK_FROM_HAND: self._step_topdeck_from_hand,
            OpType.SIFT_TOP_CARDS: self._step_sift_top_cards,
        }
        return handlers[op.op_type](state, context, op)

    # ------------------------------------------------------------------
    # Counter operations
    # ------------------------------------------------------------------

    def _step_draw_cards(self, state: GameState, context: EffectContext, op) -> StepResult:
        player = state.get_player(context.source_player_idx)
        drawn = player.draw(op.n, state.rng)
        return StepResult(changes=[f"{player.name} drew {len(drawn)} card(s)"])

    def _step_gain_actions(self, state: GameState, context: EffectContext, op) -> StepResult:
        state.counters.actions += op.n
        return StepResult(changes=[f"+{op.n} action(s)"])

    def _step_gain_buys(self, state: GameState, context: EffectContext, op) -> StepResult:
        state.counters.buys += op.n
        return StepResult(changes=[f"+{op.n} buy(s)"])

    def _step_gain_coins(self, state: GameState, context: EffectContext, op) -> StepResult:
        state.counters.coins += op.n
        return StepResult(changes=[f"+${op.n}"])

    # ------------------------------------------------------------------
    # Choice operations
    # ------------------------------------------------------------------

    def _step_other_players_discard_to(
        self, state: GameState, context: EffectContext, op
    ) -> StepResult:
        """
        Each other player, in turn order, discards down to op.n cards.

        Victims already at or below the limit are skipped; the rest get
        one choice each.
        """
        if "victims" not in context.step_state:
            context.step_state["victims"] = state.other_player_indices(context.source_player_idx)

        victims: list[int] = context.step_state["victims"]
        while victims:
            victim_idx = victims.pop(0)
            victim = state.get_player(victim_idx)
            excess = len(victim.hand) - op.n
            if excess > 0:
                return StepResult(pending_choice=self._make_choice(
                    context,
                    victim_idx,
                    ChoiceType.DISCARD,
                    f"{victim.name}: discard {excess} card(s), down to {op.n}",
                    options=list(victim.hand.cards),
                    min_choices=excess,
                    max_choices=excess,
                ))
        return StepResult()

    def _step_gain_card(self, state: GameState, context: EffectContext, op) -> StepResult:
        if context.step_state.get("resolved"):
            return StepResult()

        player = state.get_player(context.source_player_idx)
        if op.kind is not None:
            if state.supply.gain(op.kind) is None:
                return StepResult(changes=[f"No {op.kind} left for {player.name} to gain"])
            _place_gained(player, op.kind, op.destination)
            return StepResult(changes=[f"{player.name} gained {op.kind}"])

        if op.max_cost is not None:
            limit = op.max_cost
        else:
            trashed_cost = context.variables.get("trashed_cost")
            if trashed_cost is None:
                return StepResult(changes=["Nothing was trashed, so nothing is gained"])
            limit = trashed_cost + op.cost_above_trashed

        options = self._gainable(state, limit)
        if not options:
            return StepResult(changes=[f"No card costing up to ${limit} left to gain"])

        return StepResult(pending_choice=self._make_choice(
            context,
            context.source_player_idx,
            ChoiceType.GAIN,
            f"{player.name}: gain a card costing up to ${limit}",
            options=options,
        ))

    def _step_trash_card(self, state: GameState, context: EffectContext, op) -> StepResult:
        if context.step_state.get("resolved"):
            return StepResult()

        player = state.get_player(context.source_player_idx)
        if player.hand.is_empty:
            return StepResult(changes=[f"{player.name} has nothing to trash"])

        max_choices = min(op.count, len(player.hand))
        min_choices = 0 if op.optional else max_choices
        return StepResult(pending_choice=self._make_choice(
            context,
            context.source_player_idx,
            ChoiceType.TRASH,
            f"{player.name}: trash {'up to ' if op.optional else ''}{max_choices} card(s)",
            options=list(player.hand.cards),
            min_choices=min_choices,
            max_choices=max_choices,
        ))

    def _step_topdeck_from_hand(self, state: GameState, context: EffectContext, op) -> StepResult:
        if context.step_state.get("resolved"):
            return StepResult()

        player = state.get_player(context.source_player_idx)
        if player.hand.is_empty:
            return StepResult(changes=[f"{player.name} has nothing to put on their deck"])

        return StepResult(pending_choice=self._make_choice(
            context,
            context.source_player_idx,
            ChoiceType.TOPDECK,
            f"{player.name}: put a card from your hand onto your deck",
            options=list(player.hand.cards),
        ))

    def _step_sift_top_cards(self, state: GameState, context: EffectContext, op) -> StepResult:
        if context.step_state.get("resolved"):
            return StepResult()

        player = state.get_player(context.source_player_idx)
        looked_at = peek_top(player.deck, player.discard, op.n, state.rng)
        if not looked_at:
            return StepResult(changes=[f"{player.name} has no cards to look at"])

        return StepResult(pending_choice=self._make_choice(
            context,
            context.source_player_idx,
            ChoiceType.SIFT,
            f"{player.name}: trash, discard or keep each of {', '.join(looked_at)}",
            options=looked_at,
            min_choices=len(looked_at),
            max_choices=len(looked_at),
        ))

    # ------------------------------------------------------------------
    # Choices
    # ------------------------------------------------------------------

    def _make_choice(
        self,
        context: EffectContext,
        player_idx: int,
        choice_type: ChoiceType,
        prompt: str,
        options: list[str],
        min_choices: int = 1,
        max_choices: int = 1,
    ) -> PendingChoice:
        return PendingChoice(
            choice_id=f"{context.card_name}:{context.current_step_index}:{player_idx}",
            player_idx=player_idx,
            choice_type=choice_type,
            prompt=prompt,
            options=options,
            min_choices=min_choices,
            max_choices=max_choices,
            source_card=context.card_name,
            source_step=context.current_step_index,
        )

    def _validate_choice(self, choice: PendingChoice, selection: Any) -> list[Any]:
        """Check a selection against the pending choice; raises InvalidChoiceError."""
        if not isinstance(selection, (list, tuple)):
            raise InvalidChoiceError("Selection must be a list")
        values = list(selection)

        if not choice.min_choices <= len(values) <= choice.max_choices:
            if choice.min_choices == choice.max_choices:
                expected = str(choice.min_choices)
            else:
                expected = f"{choice.min_choices}-{choice.max_choices}"
            raise InvalidChoiceError(f"Expected {expected} selection(s), got {len(values)}")

        if choice.choice_type in INDEX_CHOICES:
            indices = []
            for value in values:
                index = as_index(value)
                if index is None:
                    raise InvalidChoiceError(f"Hand index must be an integer, got {value!r}")
                if not 0 <= index < len(choice.options):
                    raise InvalidChoiceError(f"Hand index {index} out of range")
                indices.append(index)
            values = indices
            if len(set(values)) != len(values):
                raise InvalidChoiceError("Hand indices must be distinct")

        elif choice.choice_type == ChoiceType.GAIN:
            if values[0] not in choice.options:
                raise InvalidChoiceError(f"{values[0]!r} is not one of the cards you may gain")

        elif choice.choice_type == ChoiceType.SIFT:
            for value in values:
                if value not in SIFT_DECISIONS:
                    raise InvalidChoiceError(
                        f"Decision must be one of {', '.join(SIFT_DECISIONS)}, got {value!r}"
                    )

        return values

    def _apply_choice(
        self,
        state: GameState,
        context: EffectContext,
        choice: PendingChoice,
        values: list[Any],
    ) -> list[str]:
        player = state.get_player(choice.player_idx)

        if choice.choice_type == ChoiceType.DISCARD:
            cards = player.hand.take_indices(values)
            player.discard.extend(cards)
            return [f"{player.name} discarded {', '.join(cards)}"]

        context.step_state["resolved"] = True

        if choice.choice_type == ChoiceType.TRASH:
            cards = player.hand.take_indices(values)
            state.trash.extend(cards)
            if not cards:
                return [f"{player.name} trashed nothing"]
            context.variables["trashed_cost"] = max(self.catalog.cost_of(c) for c in cards)
            return [f"{player.name} trashed {', '.join(cards)}"]

        if choice.choice_type == ChoiceType.TOPDECK:
            card = player.hand.take(values[0])
            player.deck.add(card)
            return [f"{player.name} put {card} onto their deck"]

        if choice.choice_type == ChoiceType.GAIN:
            kind = values[0]
            state.supply.gain(kind)
            _place_gained(player, kind, context.current_operation.destination)
            return [f"{player.name} gained {kind}"]

        # SIFT: the looked-at cards are still on top of the deck
        kept: list[str] = []
        changes = []
        for card, decision in zip(choice.options, values):
            player.deck.pop_top()
            if decision == SIFT_TRASH:
                state.trash.add(card)
                changes.append(f"{player.name} trashed {card}")
            elif decision == SIFT_DISCARD:
                player.discard.add(card)
                changes.append(f"{player.name} discarded {card}")
            else:
                kept.append(card)
        for card in reversed(kept):
            player.deck.add(card)
        if kept:
            changes.append(f"{player.name} put back {len(kept)} card(s)")
        return changes

    def _gainable(self, state: GameState, max_cost: int) -> list[str]:
        """Supply piles with cards left costing at most max_cost."""
        return [
            kind for kind in state.supply.piles
            if state.supply.remaining(kind) > 0
            and kind in self.catalog
            and self.catalog.cost_of(kind) <= max_cost
        ]


def _place_gained(player: PlayerState, kind: str, destination: GainDestination):
    if destination == GainDestination.HAND:
        player.hand.add(kind)
    elif destination == GainDestination.DECK:
        player.deck.add(kind)
    else:
        player.discard.add(kind)
