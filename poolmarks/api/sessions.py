from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from poolmarks.api.errors import domain_error
from poolmarks.api.schemas import (
    AddPlayerRequest,
    AdjustBalanceRequest,
    CreateSessionRequest,
    GameResultRequest,
    ImportSessionsRequest,
    RenamePlayerRequest,
    SessionListItem,
    SessionStateResponse,
    UpdateSettingsRequest,
)
from poolmarks.domain import DomainValidationError, Session, TrackerState
from poolmarks.runtime import get_service
from poolmarks.service import SessionService

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _state_response(state: TrackerState) -> SessionStateResponse:
    return SessionStateResponse.model_validate(
        {
            "status": state.status.value,
            "session": state.session,
            "current_game": state.game,
            "pending_result": state.pending,
        },
        from_attributes=True,
    )


def _list_item(session: Session) -> SessionListItem:
    return SessionListItem(
        id=session.id,
        label=session.label,
        start_time=session.start_time,
        players=list(session.player_names),
        games_played=len(session.games),
    )


@router.post(
    "",
    response_model=SessionStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a new pool session",
)
def create_session(
    payload: CreateSessionRequest,
    service: SessionService = Depends(get_service),
) -> SessionStateResponse:
    try:
        state = service.create_session(
            payload.players,
            stake=payload.stake,
            chalk_fee=payload.chalk_fee,
            table_fee=payload.table_fee,
        )
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return _state_response(state)


@router.get("", response_model=list[SessionListItem], summary="Recent sessions, newest first")
def list_sessions(
    limit: int | None = Query(default=None, ge=1),
    service: SessionService = Depends(get_service),
) -> list[SessionListItem]:
    return [_list_item(session) for session in service.recent_sessions(limit)]


@router.post(
    "/import",
    response_model=list[SessionListItem],
    status_code=status.HTTP_201_CREATED,
    summary="Import a stored session list",
)
def import_sessions(
    payload: ImportSessionsRequest,
    service: SessionService = Depends(get_service),
) -> list[SessionListItem]:
    try:
        sessions = service.import_sessions(payload.sessions)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise domain_error(DomainValidationError(f"malformed session document: {exc}")) from exc
    return [_list_item(session) for session in sessions]


@router.get("/{session_id}", response_model=SessionStateResponse, summary="Session with its tracker state")
def get_session(session_id: str, service: SessionService = Depends(get_service)) -> SessionStateResponse:
    try:
        return _state_response(service.get_state(session_id))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc


@router.post(
    "/{session_id}/players",
    response_model=SessionStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a player mid-session",
)
def add_player(
    session_id: str,
    payload: AddPlayerRequest,
    service: SessionService = Depends(get_service),
) -> SessionStateResponse:
    try:
        return _state_response(service.add_player(session_id, payload.name))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc


@router.delete("/{session_id}/players/{name}", response_model=SessionStateResponse, summary="Remove a player")
def remove_player(session_id: str, name: str, service: SessionService = Depends(get_service)) -> SessionStateResponse:
    try:
        return _state_response(service.remove_player(session_id, name))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc


@router.patch("/{session_id}/players/{name}", response_model=SessionStateResponse, summary="Rename a player")
def rename_player(
    session_id: str,
    name: str,
    payload: RenamePlayerRequest,
    service: SessionService = Depends(get_service),
) -> SessionStateResponse:
    try:
        return _state_response(service.rename_player(session_id, name, payload.name))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc


@router.put(
    "/{session_id}/players/{name}/balance",
    response_model=SessionStateResponse,
    summary="Override a player's balance",
)
def adjust_balance(
    session_id: str,
    name: str,
    payload: AdjustBalanceRequest,
    service: SessionService = Depends(get_service),
) -> SessionStateResponse:
    try:
        return _state_response(service.adjust_balance(session_id, name, payload.balance))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc


@router.patch("/{session_id}/settings", response_model=SessionStateResponse, summary="Change stake and fees")
def update_settings(
    session_id: str,
    payload: UpdateSettingsRequest,
    service: SessionService = Depends(get_service),
) -> SessionStateResponse:
    try:
        state = service.update_settings(session_id, payload.stake, payload.chalk_fee, payload.table_fee)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return _state_response(state)


@router.post(
    "/{session_id}/games",
    response_model=SessionStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start the next game",
)
def start_game(session_id: str, service: SessionService = Depends(get_service)) -> SessionStateResponse:
    try:
        return _state_response(service.start_game(session_id))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc


@router.post("/{session_id}/games/current/end", response_model=SessionStateResponse, summary="End the current game")
def end_game(session_id: str, service: SessionService = Depends(get_service)) -> SessionStateResponse:
    try:
        return _state_response(service.end_game(session_id))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc


@router.put(
    "/{session_id}/games/current/result",
    response_model=SessionStateResponse,
    summary="Enter the pending game result",
)
def edit_result(
    session_id: str,
    payload: GameResultRequest,
    service: SessionService = Depends(get_service),
) -> SessionStateResponse:
    try:
        state = service.edit_result(
            session_id,
            winner=payload.winner,
            paid_players=payload.paid_players,
            carry_forwards={entry.player: entry.amount for entry in payload.carry_forwards},
        )
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return _state_response(state)


@router.post(
    "/{session_id}/games/current/confirm",
    response_model=SessionStateResponse,
    summary="Confirm the result and settle balances",
)
def confirm_game(session_id: str, service: SessionService = Depends(get_service)) -> SessionStateResponse:
    try:
        return _state_response(service.confirm_game(session_id))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc


@router.delete("/{session_id}/games/current", response_model=SessionStateResponse, summary="Discard the current game")
def cancel_game(session_id: str, service: SessionService = Depends(get_service)) -> SessionStateResponse:
    try:
        return _state_response(service.cancel_game(session_id))
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
