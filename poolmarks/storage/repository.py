from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session as DbSession, sessionmaker

from poolmarks.domain import Session
from poolmarks.storage.codec import session_from_payload, session_to_payload
from poolmarks.storage.models import SessionRow


class SessionRepository:
    """Stores whole session documents, kept in creation order."""

    def __init__(self, session_factory: sessionmaker[DbSession]) -> None:
        self._session_factory = session_factory

    def count(self) -> int:
        with self._session_factory() as db:
            return int(db.execute(select(func.count(SessionRow.id))).scalar_one())

    def add(self, session: Session) -> Session:
        with self._session_factory() as db:
            position = self._next_position(db)
            db.add(
                SessionRow(
                    id=session.id,
                    position=position,
                    label=session.label,
                    payload=session_to_payload(session),
                )
            )
            db.commit()
        return session

    def save(self, session: Session) -> Session:
        with self._session_factory() as db:
            row = db.get(SessionRow, session.id)
            if row is None:
                raise ValueError(f"session {session.id} not found")
            row.label = session.label
            row.payload = session_to_payload(session)
            db.commit()
        return session

    def get(self, session_id: str) -> Session | None:
        with self._session_factory() as db:
            row = db.get(SessionRow, session_id)
            if row is None:
                return None
            return session_from_payload(row.payload)

    def list_sessions(self, limit: int | None = None) -> list[Session]:
        """Sessions in creation order; with ``limit`` only the most recent ones."""
        with self._session_factory() as db:
            stmt = select(SessionRow).order_by(SessionRow.position.desc())
            if limit is not None:
                stmt = stmt.limit(limit)
            rows = db.scalars(stmt).all()
            return [session_from_payload(row.payload) for row in reversed(rows)]

    def import_payloads(self, payloads: Iterable[dict[str, Any]]) -> list[Session]:
        """Append a stored session list, keeping its order; known ids are replaced."""
        imported: list[Session] = []
        with self._session_factory() as db:
            position = self._next_position(db)
            for payload in payloads:
                session = session_from_payload(payload)
                row = db.get(SessionRow, session.id)
                if row is None:
                    db.add(
                        SessionRow(
                            id=session.id,
                            position=position,
                            label=session.label,
                            payload=session_to_payload(session),
                        )
                    )
                    db.flush()
                    position += 1
                else:
                    row.label = session.label
                    row.payload = session_to_payload(session)
                imported.append(session)
            db.commit()
        return imported

    @staticmethod
    def _next_position(db: DbSession) -> int:
        current = db.execute(select(func.max(SessionRow.position))).scalar_one()
        return 0 if current is None else int(current) + 1
