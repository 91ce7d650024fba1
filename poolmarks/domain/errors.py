from __future__ import annotations


class DomainValidationError(ValueError):
    """Raised when a session or settlement rule is violated."""

    code = "validation_error"

    def __init__(self, message: str, **details: object) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class MissingWinner(DomainValidationError):
    code = "missing_winner"


class UnknownPlayer(DomainValidationError):
    code = "unknown_player"


class InvalidCarryAmount(DomainValidationError):
    code = "invalid_carry_amount"


class NoActiveGame(DomainValidationError):
    code = "no_active_game"


class InsufficientPlayers(DomainValidationError):
    code = "insufficient_players"


class InvalidSettings(DomainValidationError):
    code = "invalid_settings"


class DuplicatePlayer(DomainValidationError):
    code = "duplicate_player"


class PlayerHasHistory(DomainValidationError):
    code = "player_has_history"


class GameInProgress(DomainValidationError):
    code = "game_in_progress"


class NoActiveSession(DomainValidationError):
    code = "no_active_session"


class SessionNotFound(DomainValidationError):
    code = "session_not_found"
