from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Union

from . import ledger
from . import session as sessions
from .errors import GameInProgress as GameInProgressError
from .errors import NoActiveGame, NoActiveSession
from .session import GameInProgress, GameResult, Session, SessionSettings
from .settlement import SettlementResult, settle_game


class TrackerStatus(str, Enum):
    IDLE = "idle"
    SESSION_ACTIVE = "session_active"
    GAME_IN_PROGRESS = "game_in_progress"
    AWAITING_RESULT = "awaiting_result"


@dataclass(frozen=True)
class TrackerState:
    session: Session | None = None
    game: GameInProgress | None = None
    pending: GameResult | None = None
    last_settlement: SettlementResult | None = None

    @property
    def status(self) -> TrackerStatus:
        if self.session is None:
            return TrackerStatus.IDLE
        if self.game is None:
            return TrackerStatus.SESSION_ACTIVE
        if self.pending is None:
            return TrackerStatus.GAME_IN_PROGRESS
        return TrackerStatus.AWAITING_RESULT


@dataclass(frozen=True)
class SessionOpened:
    session: Session


@dataclass(frozen=True)
class SessionClosed:
    pass


@dataclass(frozen=True)
class GameStarted:
    at: datetime


@dataclass(frozen=True)
class GameEnded:
    pass


@dataclass(frozen=True)
class ResultEdited:
    result: GameResult


@dataclass(frozen=True)
class GameConfirmed:
    at: datetime


@dataclass(frozen=True)
class GameCancelled:
    pass


@dataclass(frozen=True)
class PlayerAdded:
    name: str


@dataclass(frozen=True)
class PlayerRemoved:
    name: str


@dataclass(frozen=True)
class PlayerRenamed:
    old_name: str
    new_name: str


@dataclass(frozen=True)
class SettingsUpdated:
    stake: int
    chalk_fee: int
    table_fee: int


@dataclass(frozen=True)
class BalanceAdjusted:
    name: str
    balance: int


TrackerEvent = Union[
    SessionOpened,
    SessionClosed,
    GameStarted,
    GameEnded,
    ResultEdited,
    GameConfirmed,
    GameCancelled,
    PlayerAdded,
    PlayerRemoved,
    PlayerRenamed,
    SettingsUpdated,
    BalanceAdjusted,
]

_GAME_EVENTS = (ResultEdited, GameConfirmed, GameCancelled)


def apply_event(state: TrackerState, event: TrackerEvent) -> TrackerState:
    """Apply a tracker event and return the next state; the input is never changed."""
    if isinstance(event, SessionOpened):
        return TrackerState(session=event.session)
    if isinstance(event, SessionClosed):
        return TrackerState()

    session = _require_session(state)

    if isinstance(event, _GAME_EVENTS):
        if state.game is None:
            raise NoActiveGame("no game in progress")
        if isinstance(event, ResultEdited):
            return replace(state, pending=event.result)
        if isinstance(event, GameCancelled):
            return replace(state, game=None, pending=None)
        settlement = settle_game(session, state.game, state.pending or GameResult(), ended_at=event.at)
        return TrackerState(
            session=replace(session, players=settlement.players, games=session.games + (settlement.record,)),
            last_settlement=settlement,
        )

    if isinstance(event, GameEnded):
        if state.status is not TrackerStatus.GAME_IN_PROGRESS:
            raise NoActiveGame("no game in progress")
        return replace(state, pending=GameResult())

    if state.game is not None:
        raise GameInProgressError(
            f"game {state.game.game_number} is in progress",
            game_number=state.game.game_number,
        )

    if isinstance(event, GameStarted):
        return replace(state, game=sessions.begin_game(session, started_at=event.at), pending=None)
    if isinstance(event, PlayerAdded):
        return replace(state, session=sessions.add_player(session, event.name))
    if isinstance(event, PlayerRemoved):
        return replace(state, session=sessions.remove_player(session, event.name))
    if isinstance(event, PlayerRenamed):
        return replace(state, session=sessions.rename_player(session, event.old_name, event.new_name))
    if isinstance(event, SettingsUpdated):
        settings = SessionSettings(stake=event.stake, chalk_fee=event.chalk_fee, table_fee=event.table_fee)
        return replace(state, session=sessions.update_settings(session, settings))
    if isinstance(event, BalanceAdjusted):
        players = ledger.adjust_balance(session.players, event.name, event.balance)
        return replace(state, session=replace(session, players=players))

    raise TypeError(f"unsupported tracker event: {event!r}")


def _require_session(state: TrackerState) -> Session:
    if state.session is None:
        raise NoActiveSession("no session is active")
    return state.session
