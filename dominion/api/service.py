"""
API Service - Business logic layer between clients and the engine.

The service:
1. Creates games from a GameConfig
2. Translates command requests to engine actions
3. Keeps many independent games, keyed by game id
4. Formats responses (snapshots, scores, legal actions)

This layer is framework-agnostic: any HTTP or RPC front end can call it.
Games share nothing, so commands for different games may run on
different threads; commands for the same game are serialized.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import threading
import uuid

from .schemas import (
    CommandRequest,
    CommandResponse,
    CreateGameRequest,
    EndGameResponse,
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GameResponse,
)
from ..card_schema import CardCatalog
from ..engine_core.game import Game
from ..games.base_set import create_base_catalog

logger = logging.getLogger(__name__)


@dataclass
class HostedGame:
    """A game plus the lock that serializes its commands."""
    game: Game
    lock: threading.Lock = field(default_factory=threading.Lock)


@dataclass
class GameService:
    """
    Hosts games for clients.

    Usage:
        service = GameService()
        created = service.create_game(CreateGameRequest())
        response = service.submit_command(
            created.game_id, CommandRequest(command="end_phase")
        )
    """
    catalog: CardCatalog = field(default_factory=create_base_catalog)
    _games: dict[str, HostedGame] = field(default_factory=dict)
    _registry_lock: threading.Lock = field(default_factory=threading.Lock)

    def create_game(self, request: CreateGameRequest | None = None) -> GameResponse:
        """
        Create a new game.

        Raises ValueError if the id is taken or the configuration
        names cards the catalog does not have.
        """
        request = request or CreateGameRequest()
        game_id = request.game_id or f"game_{uuid.uuid4().hex[:12]}"
        game = Game.new(request.config, catalog=self.catalog, game_id=game_id)

        with self._registry_lock:
            if game_id in self._games:
                raise ValueError(f"Game {game_id} already exists")
            self._games[game_id] = HostedGame(game=game)

        logger.info(
            "Created game %s (%d players, seed=%s)",
            game_id, request.config.num_players, request.config.seed,
        )
        return self._game_response(game)

    def submit_command(
        self,
        game_id: str,
        request: CommandRequest,
    ) -> CommandResponse | ErrorResponse:
        """
        Apply one command to a game.

        Rejected commands come back with success=False and an error
        code; the game is unchanged.
        """
        hosted = self._get(game_id)
        if hosted is None:
            return self._not_found(game_id)

        with hosted.lock:
            result = hosted.game.apply(request.to_action())
            snapshot = hosted.game.snapshot()

        if not result.success:
            logger.debug("Game %s rejected %s: %s", game_id, request.command.value, result.error_code)
            return CommandResponse(
                game_id=game_id,
                success=False,
                error=result.error,
                error_code=ErrorCode(result.error_code),
                pending_choice=snapshot.pending_choice,
                state=snapshot,
            )

        if snapshot.game_over:
            logger.info("Game %s finished, scores %s", game_id, snapshot.scores)
        return CommandResponse(
            game_id=game_id,
            success=True,
            changes=list(result.state_changes),
            pending_choice=snapshot.pending_choice,
            state=snapshot,
        )

    def get_state(self, game_id: str) -> GameResponse | ErrorResponse:
        """Get the current state of a game."""
        hosted = self._get(game_id)
        if hosted is None:
            return self._not_found(game_id)
        with hosted.lock:
            return self._game_response(hosted.game)

    def end_game(self, game_id: str) -> EndGameResponse:
        """Remove a game; its state is discarded."""
        with self._registry_lock:
            removed = self._games.pop(game_id, None)
        if removed is not None:
            logger.info("Ended game %s", game_id)
        return EndGameResponse(success=removed is not None, game_id=game_id)

    def list_games(self) -> GameListResponse:
        """List hosted game ids."""
        with self._registry_lock:
            games = list(self._games)
        return GameListResponse(games=games, count=len(games))

    def get_game(self, game_id: str) -> Game | None:
        """Direct access to a hosted Game (for in-process agents)."""
        hosted = self._get(game_id)
        return hosted.game if hosted else None

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _get(self, game_id: str) -> HostedGame | None:
        with self._registry_lock:
            return self._games.get(game_id)

    def _game_response(self, game: Game) -> GameResponse:
        """Convert a Game to a GameResponse."""
        snapshot = game.snapshot()
        return GameResponse(
            game_id=game.game_id,
            state=snapshot,
            scores=snapshot.scores,
            legal_actions=[action.describe() for action in game.legal_actions()],
            winners=game.winners() if snapshot.game_over else None,
        )

    def _not_found(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {game_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
            details={"game_id": game_id},
        )
