from fastapi import APIRouter, Depends

from poolmarks.api.errors import domain_error
from poolmarks.api.schemas import BalanceEntry, PlayerStandingSchema, SummaryResponse
from poolmarks.domain import DomainValidationError
from poolmarks.runtime import get_service
from poolmarks.service import SessionService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/sessions/{session_id}/summary", response_model=SummaryResponse)
def session_summary(session_id: str, service: SessionService = Depends(get_service)) -> SummaryResponse:
    try:
        summary = service.summary(session_id)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc

    return SummaryResponse(
        session_id=session_id,
        total_games=summary.total_games,
        total_pot=summary.total_pot,
        total_fees=summary.total_fees,
        outstanding=summary.outstanding,
        credits=[BalanceEntry(name=player.name, balance=player.balance) for player in summary.credits],
        debts=[BalanceEntry(name=player.name, balance=player.balance) for player in summary.debts],
        credits_total=summary.credits_total,
        debts_total=summary.debts_total,
    )


@router.get("/sessions/{session_id}/players", response_model=list[PlayerStandingSchema])
def session_players(session_id: str, service: SessionService = Depends(get_service)) -> list[PlayerStandingSchema]:
    try:
        standings = service.standings(session_id)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return [PlayerStandingSchema.model_validate(standing) for standing in standings]
