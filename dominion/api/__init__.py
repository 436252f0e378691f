"""
API Module - Hosting games for clients.

Clients:
1. Create a game from a GameConfig
2. Submit commands (play, buy, end phase, end turn, resolve choice)
3. Read snapshots, scores and legal actions
4. End the game when done

All state is in memory and scoped to the hosting GameService.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    CommandRequest,
    # Responses
    CommandResponse,
    GameResponse,
    GameListResponse,
    EndGameResponse,
    ErrorResponse,
    # Enums
    CommandType,
    ErrorCode,
)
from .service import GameService, HostedGame

__all__ = [
    # Requests
    "CreateGameRequest",
    "CommandRequest",
    # Responses
    "CommandResponse",
    "GameResponse",
    "GameListResponse",
    "EndGameResponse",
    "ErrorResponse",
    # Enums
    "CommandType",
    "ErrorCode",
    # Service
    "GameService",
    "HostedGame",
]
