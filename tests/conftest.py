from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from poolmarks.config import Settings
from poolmarks.service import SessionService
from poolmarks.storage.database import init_db, make_session_factory
from poolmarks.storage.repository import SessionRepository


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 3, 1, 19, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def repo() -> SessionRepository:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    return SessionRepository(make_session_factory(engine))


@pytest.fixture
def service(repo: SessionRepository) -> SessionService:
    return SessionService(repo, Settings(), clock=FakeClock())
