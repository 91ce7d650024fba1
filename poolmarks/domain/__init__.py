from .carry_forward import LoserSettlement, Resolution, resolve_loser, resolve_losers, winner_delta
from .errors import (
    DomainValidationError,
    DuplicatePlayer,
    GameInProgress as GameInProgressError,
    InsufficientPlayers,
    InvalidCarryAmount,
    InvalidSettings,
    MissingWinner,
    NoActiveGame,
    NoActiveSession,
    PlayerHasHistory,
    SessionNotFound,
    UnknownPlayer,
)
from .ledger import GameOutcome, Player, adjust_balance, apply_game_outcome, find_player, new_player
from .session import (
    CarryForward,
    Fees,
    GameInProgress,
    GameRecord,
    GameResult,
    Session,
    SessionSettings,
    add_player,
    begin_game,
    create_session,
    normalize_player,
    remove_player,
    rename_player,
    select_winner,
    set_carry_forward,
    toggle_paid,
    unique_preserve_order,
    update_settings,
)
from .settlement import SettlementResult, settle_game, validate_result, winner_payout
from .summary import PlayerStanding, SessionSummary, player_standings, summarize
from .tracker import (
    BalanceAdjusted,
    GameCancelled,
    GameConfirmed,
    GameEnded,
    GameStarted,
    PlayerAdded,
    PlayerRemoved,
    PlayerRenamed,
    ResultEdited,
    SessionClosed,
    SessionOpened,
    SettingsUpdated,
    TrackerEvent,
    TrackerState,
    TrackerStatus,
    apply_event,
)

__all__ = [
    "BalanceAdjusted",
    "CarryForward",
    "DomainValidationError",
    "DuplicatePlayer",
    "Fees",
    "GameCancelled",
    "GameConfirmed",
    "GameEnded",
    "GameInProgress",
    "GameInProgressError",
    "GameOutcome",
    "GameRecord",
    "GameResult",
    "GameStarted",
    "InsufficientPlayers",
    "InvalidCarryAmount",
    "InvalidSettings",
    "LoserSettlement",
    "MissingWinner",
    "NoActiveGame",
    "NoActiveSession",
    "Player",
    "PlayerAdded",
    "PlayerHasHistory",
    "PlayerRemoved",
    "PlayerRenamed",
    "PlayerStanding",
    "Resolution",
    "ResultEdited",
    "Session",
    "SessionClosed",
    "SessionNotFound",
    "SessionOpened",
    "SessionSettings",
    "SessionSummary",
    "SettingsUpdated",
    "SettlementResult",
    "TrackerEvent",
    "TrackerState",
    "TrackerStatus",
    "UnknownPlayer",
    "add_player",
    "adjust_balance",
    "apply_event",
    "apply_game_outcome",
    "begin_game",
    "create_session",
    "find_player",
    "new_player",
    "normalize_player",
    "player_standings",
    "remove_player",
    "rename_player",
    "resolve_loser",
    "resolve_losers",
    "select_winner",
    "set_carry_forward",
    "settle_game",
    "summarize",
    "toggle_paid",
    "unique_preserve_order",
    "update_settings",
    "validate_result",
    "winner_delta",
    "winner_payout",
]
