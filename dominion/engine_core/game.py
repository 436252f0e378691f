"""
Game - One running game behind a small command/query surface.

Wraps a GameState, the reducer and the action generator. Commands go
through apply(); a successful command replaces the held state, a
rejected one leaves it exactly as it was and reports why.

Usage:
    game = Game.new(GameConfig(seed=7))
    game.end_phase()                 # into the treasure phase
    game.play_card(0)
    game.end_phase()                 # into the buy phase
    result = game.buy("Silver")
    if not result.success:
        print(result.error_code, result.error)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .action import Action, ActionResult
from .action_generator import ActionGenerator
from .reducer import Reducer
from .snapshot import GameSnapshot, build_snapshot, compute_scores
from .state import GameState, TurnPhase
from ..card_schema import CardCatalog

if TYPE_CHECKING:
    from ..config import GameConfig


@dataclass
class Game:
    """A single game instance; owns its state and nothing global."""
    catalog: CardCatalog
    state: GameState
    reducer: Reducer = field(init=False)
    generator: ActionGenerator = field(init=False)

    def __post_init__(self):
        self.reducer = Reducer(catalog=self.catalog)
        self.generator = ActionGenerator(catalog=self.catalog)

    @classmethod
    def new(
        cls,
        config: GameConfig | None = None,
        catalog: CardCatalog | None = None,
        game_id: str | None = None,
    ) -> Game:
        """Set up a fresh base-set game."""
        from ..games.base_set import create_base_catalog, setup_base_game

        catalog = catalog or create_base_catalog()
        state = setup_base_game(config, catalog, game_id=game_id)
        return cls(catalog=catalog, state=state)

    @property
    def game_id(self) -> str:
        return self.state.game_id

    # =========================================================================
    # Commands
    # =========================================================================

    def apply(self, action: Action) -> ActionResult:
        """Apply a command; the held state advances only on success."""
        result = self.reducer.apply(self.state, action)
        if result.success:
            self.state = result.new_state
        return result

    def play_card(self, hand_index: int, player_idx: int | None = None) -> ActionResult:
        return self.apply(Action.play_card(hand_index, player_idx=player_idx))

    def buy(self, card_name: str, player_idx: int | None = None) -> ActionResult:
        return self.apply(Action.buy(card_name, player_idx=player_idx))

    def end_phase(self, player_idx: int | None = None) -> ActionResult:
        return self.apply(Action.end_phase(player_idx=player_idx))

    def end_turn(self, player_idx: int | None = None) -> ActionResult:
        return self.apply(Action.end_turn(player_idx=player_idx))

    def resolve_choice(self, selection: list[Any], player_idx: int | None = None) -> ActionResult:
        return self.apply(Action.resolve_choice(selection, player_idx=player_idx))

    def play_all_treasures(self) -> list[ActionResult]:
        """Play every treasure in hand, entering the treasure phase if needed."""
        results = []
        if self.state.phase == TurnPhase.ACTION:
            results.append(self.end_phase())
        hand = self.state.current_player.hand
        for index in reversed(range(len(hand))):
            card = self.catalog.get_card(hand.cards[index])
            if card is not None and card.is_treasure:
                results.append(self.play_card(index))
        return results

    # =========================================================================
    # Queries
    # =========================================================================

    def legal_actions(self) -> list[Action]:
        return self.generator.generate(self.state)

    def snapshot(self) -> GameSnapshot:
        return build_snapshot(self.state, self.catalog)

    def scores(self) -> list[int]:
        return compute_scores(self.state, self.catalog)

    def is_game_over(self) -> bool:
        return self.state.is_game_over

    def winners(self) -> list[int]:
        """
        Indices of the leading players.

        Ties are broken in favour of whoever had fewer turns; with
        equal turns the tie stands.
        """
        scores = self.scores()
        best = max(scores)
        leaders = [i for i, score in enumerate(scores) if score == best]
        if len(leaders) == 1:
            return leaders
        turns = {i: self._turns_taken(i) for i in leaders}
        fewest = min(turns.values())
        return [i for i in leaders if turns[i] == fewest]

    def supply_remaining(self, card_name: str) -> int:
        return self.state.supply.remaining(card_name)

    def _turns_taken(self, player_idx: int) -> int:
        """Turns a player has started and finished (the final turn counts)."""
        first = self.state.metadata.get("first_player", 0)
        completed = self.state.turn_number - 1
        if self.state.is_game_over:
            completed += 1
        offset = (player_idx - first) % self.state.num_players
        return max(0, (completed - offset + self.state.num_players - 1) // self.state.num_players)
