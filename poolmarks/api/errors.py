from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from poolmarks.domain import (
    DomainValidationError,
    GameInProgressError,
    NoActiveGame,
    NoActiveSession,
    SessionNotFound,
)


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def domain_error(exc: DomainValidationError) -> HTTPException:
    if isinstance(exc, SessionNotFound):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (NoActiveGame, GameInProgressError, NoActiveSession)):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return api_error(code=exc.code, message=exc.message, details=exc.details or None, status_code=status_code)
