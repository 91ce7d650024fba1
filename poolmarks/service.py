from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from poolmarks.config import Settings
from poolmarks.domain import (
    BalanceAdjusted,
    DomainValidationError,
    GameCancelled,
    GameConfirmed,
    GameEnded,
    GameInProgressError,
    GameResult,
    GameStarted,
    PlayerAdded,
    PlayerRemoved,
    PlayerRenamed,
    PlayerStanding,
    ResultEdited,
    Session,
    SessionNotFound,
    SessionOpened,
    SessionSettings,
    SessionSummary,
    SettingsUpdated,
    TrackerEvent,
    TrackerState,
    apply_event,
    create_session,
    player_standings,
    select_winner,
    set_carry_forward,
    summarize,
    toggle_paid,
)
from poolmarks.storage.repository import SessionRepository

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionService:
    """Runs tracker events against stored sessions.

    The game in progress and its pending result live only in memory, so only
    sessions with a running game are kept here; the others are read back from
    the repository. The session document is persisted whenever an event
    changes it.
    """

    def __init__(
        self,
        repo: SessionRepository,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.repo = repo
        self.settings = settings or Settings()
        self.clock = clock
        self._states: dict[str, TrackerState] = {}

    def create_session(
        self,
        players: Iterable[str],
        stake: int | None = None,
        chalk_fee: int | None = None,
        table_fee: int | None = None,
    ) -> TrackerState:
        session_settings = SessionSettings(
            stake=self.settings.default_stake if stake is None else stake,
            chalk_fee=self.settings.default_chalk_fee if chalk_fee is None else chalk_fee,
            table_fee=self.settings.default_table_fee if table_fee is None else table_fee,
        )
        session = create_session(
            players,
            session_settings,
            started_at=self.clock(),
            label=f"Session_{self.repo.count() + 1}",
        )
        self.repo.add(session)
        state = apply_event(TrackerState(), SessionOpened(session))
        logger.info("session %s created with %d players", session.label, len(session.players))
        return state

    def recent_sessions(self, limit: int | None = None) -> list[Session]:
        """Most recent sessions, newest first."""
        limit = self.settings.recent_sessions if limit is None else limit
        return list(reversed(self.repo.list_sessions(limit=limit)))

    def get_state(self, session_id: str) -> TrackerState:
        state = self._states.get(session_id)
        if state is not None:
            return state
        session = self.repo.get(session_id)
        if session is None:
            raise SessionNotFound(f"session {session_id} not found", id=session_id)
        return apply_event(TrackerState(), SessionOpened(session))

    def get_session(self, session_id: str) -> Session:
        session = self.get_state(session_id).session
        if session is None:
            raise SessionNotFound(f"session {session_id} not found", id=session_id)
        return session

    def start_game(self, session_id: str) -> TrackerState:
        return self._dispatch(session_id, GameStarted(at=self.clock()))

    def end_game(self, session_id: str) -> TrackerState:
        return self._dispatch(session_id, GameEnded())

    def cancel_game(self, session_id: str) -> TrackerState:
        return self._dispatch(session_id, GameCancelled())

    def edit_result(
        self,
        session_id: str,
        *,
        winner: str | None = None,
        paid_players: Iterable[str] = (),
        carry_forwards: dict[str, int] | None = None,
    ) -> TrackerState:
        """Replace the pending result with the values from the result form."""
        result = select_winner(GameResult(), winner)
        for player in paid_players:
            if player not in result.paid_players:
                result = toggle_paid(result, player)
        for player, amount in (carry_forwards or {}).items():
            result = set_carry_forward(result, player, amount)
        return self._dispatch(session_id, ResultEdited(result))

    def confirm_game(self, session_id: str) -> TrackerState:
        state = self._dispatch(session_id, GameConfirmed(at=self.clock()))
        settlement = state.last_settlement
        if settlement is not None:
            logger.info(
                "game %d confirmed: winner=%s payout=%d fees=%d",
                settlement.record.game_number,
                settlement.record.winner,
                settlement.winner_payout,
                settlement.total_fees,
            )
        return state

    def add_player(self, session_id: str, name: str) -> TrackerState:
        return self._dispatch(session_id, PlayerAdded(name))

    def remove_player(self, session_id: str, name: str) -> TrackerState:
        return self._dispatch(session_id, PlayerRemoved(name))

    def rename_player(self, session_id: str, old_name: str, new_name: str) -> TrackerState:
        return self._dispatch(session_id, PlayerRenamed(old_name, new_name))

    def update_settings(self, session_id: str, stake: int, chalk_fee: int, table_fee: int) -> TrackerState:
        return self._dispatch(session_id, SettingsUpdated(stake=stake, chalk_fee=chalk_fee, table_fee=table_fee))

    def adjust_balance(self, session_id: str, name: str, balance: int) -> TrackerState:
        state = self._dispatch(session_id, BalanceAdjusted(name, balance))
        logger.info("balance of %s in session %s set to %d", name, session_id, balance)
        return state

    def summary(self, session_id: str) -> SessionSummary:
        return summarize(self.get_session(session_id))

    def standings(self, session_id: str) -> list[PlayerStanding]:
        return player_standings(self.get_session(session_id))

    def import_sessions(self, payloads: Iterable[dict[str, Any]]) -> list[Session]:
        payloads = list(payloads)
        busy = sorted({payload.get("id") for payload in payloads} & self._states.keys())
        if busy:
            raise GameInProgressError(f"finish the running game before importing: {', '.join(busy)}", sessions=busy)
        sessions = self.repo.import_payloads(payloads)
        logger.info("imported %d sessions", len(sessions))
        return sessions

    def _dispatch(self, session_id: str, event: TrackerEvent) -> TrackerState:
        state = self.get_state(session_id)
        try:
            new_state = apply_event(state, event)
        except DomainValidationError as exc:
            logger.warning("%s rejected for session %s: %s", type(event).__name__, session_id, exc)
            raise
        if new_state.session is not None and new_state.session is not state.session:
            self.repo.save(new_state.session)
        if new_state.game is None:
            self._states.pop(session_id, None)
        else:
            self._states[session_id] = new_state
        return new_state
