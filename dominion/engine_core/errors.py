"""
Game Errors - Rejections of player commands.

Every error here is non-fatal: the reducer catches it and returns a
failure ActionResult, leaving the game state untouched. Each kind
carries a stable `code` for agents that match on results.
"""

from __future__ import annotations


class GameError(Exception):
    """Base class for a rejected command."""
    code = "GAME_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPhaseError(GameError):
    """Command not legal in the current turn phase."""
    code = "INVALID_PHASE"


class UnplayableCardError(InvalidPhaseError):
    """Victory and Curse cards can never be played."""
    code = "UNPLAYABLE_CARD"


class CardNotInHandError(GameError):
    code = "CARD_NOT_IN_HAND"


class NoActionsRemainingError(GameError):
    code = "NO_ACTIONS_REMAINING"


class InsufficientBuysError(GameError):
    code = "INSUFFICIENT_BUYS"


class InsufficientCoinsError(GameError):
    code = "INSUFFICIENT_COINS"

    def __init__(self, required: int, available: int, card_name: str = ""):
        target = f" for {card_name}" if card_name else ""
        super().__init__(f"Not enough coins{target}: required {required}, had {available}")
        self.required = required
        self.available = available


class SupplyExhaustedError(GameError):
    code = "SUPPLY_EXHAUSTED"


class UnknownCardNameError(GameError):
    code = "UNKNOWN_CARD_NAME"


class NotInSupplyError(UnknownCardNameError):
    """The card exists but has no pile in this game's supply."""
    code = "NOT_IN_SUPPLY"


class PendingChoiceError(GameError):
    """A command other than ResolveChoice while a choice is outstanding."""
    code = "PENDING_CHOICE"


class NoPendingChoiceError(GameError):
    code = "NO_PENDING_CHOICE"


class InvalidChoiceError(GameError):
    code = "INVALID_CHOICE"


class WrongPlayerError(GameError):
    code = "WRONG_PLAYER"


class GameOverError(GameError):
    code = "GAME_OVER"
