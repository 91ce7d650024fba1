from __future__ import annotations

from poolmarks.config import settings
from poolmarks.service import SessionService
from poolmarks.storage.database import SessionLocal, init_db
from poolmarks.storage.repository import SessionRepository

init_db()
repo = SessionRepository(SessionLocal)
service = SessionService(repo, settings)


def get_service() -> SessionService:
    return service
