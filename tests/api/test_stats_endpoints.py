import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from poolmarks.main import app
from poolmarks.runtime import get_service
from poolmarks.service import SessionService


@pytest.fixture
def client(service: SessionService):
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_summary_after_two_games(client: TestClient, service: SessionService) -> None:
    session_id = service.create_session(["a", "b", "c"], stake=100, chalk_fee=30, table_fee=20).session.id
    for winner in ("a", "b"):
        service.start_game(session_id)
        service.edit_result(session_id, winner=winner)
        service.confirm_game(session_id)

    response = client.get(f"/stats/sessions/{session_id}/summary")

    assert response.status_code == 200
    data = response.json()
    assert data["total_games"] == 2
    assert data["total_pot"] == 600
    assert data["total_fees"] == 100
    # a: +150 -100, b: -100 +150, c: -200
    assert data["outstanding"] == 300
    assert data["credits"] == [{"name": "a", "balance": 50}, {"name": "b", "balance": 50}]
    assert data["debts"] == [{"name": "c", "balance": -200}]
    assert data["credits_total"] == 100
    assert data["debts_total"] == 200

    players = client.get(f"/stats/sessions/{session_id}/players").json()
    assert players[2] == {"name": "c", "balance": -200, "wins": 0, "losses": 2, "games_played": 2}


def test_summary_unknown_session(client: TestClient) -> None:
    response = client.get("/stats/sessions/missing/summary")

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "session_not_found"
