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


def _create(client: TestClient) -> str:
    response = client.post(
        "/sessions",
        json={"players": ["Otieno", "Wanjiru", "Kamau", "Achieng"], "stake": 100, "chalk_fee": 30, "table_fee": 20},
    )
    assert response.status_code == 201
    return response.json()["session"]["id"]


def test_game_lifecycle_contract(client: TestClient) -> None:
    session_id = _create(client)

    start = client.post(f"/sessions/{session_id}/games")
    assert start.status_code == 201
    assert start.json()["status"] == "game_in_progress"
    assert start.json()["current_game"]["game_number"] == 1

    end = client.post(f"/sessions/{session_id}/games/current/end")
    assert end.json()["status"] == "awaiting_result"

    result = client.put(
        f"/sessions/{session_id}/games/current/result",
        json={
            "winner": "Otieno",
            "paid_players": ["Wanjiru"],
            "carry_forwards": [{"player": "Kamau", "amount": 40}],
        },
    )
    assert result.status_code == 200
    assert result.json()["pending_result"]["winner"] == "Otieno"

    confirm = client.post(f"/sessions/{session_id}/games/current/confirm")
    assert confirm.status_code == 200
    body = confirm.json()
    assert body["status"] == "session_active"
    assert body["current_game"] is None
    balances = {p["name"]: p["balance"] for p in body["session"]["players"]}
    assert balances == {"Otieno": 250, "Wanjiru": 0, "Kamau": -60, "Achieng": -100}
    game = body["session"]["games"][0]
    assert game["fees"] == {"chalk": 30, "table": 20}
    assert game["carry_forwards"] == [{"player": "Kamau", "amount": 40}]


def test_confirm_without_winner_error_shape(client: TestClient) -> None:
    session_id = _create(client)
    client.post(f"/sessions/{session_id}/games")

    response = client.post(f"/sessions/{session_id}/games/current/confirm")

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert set(detail.keys()) == {"code", "message", "details"}
    assert detail["code"] == "missing_winner"
    assert client.get(f"/sessions/{session_id}").json()["status"] == "game_in_progress"


def test_invalid_carry_amount(client: TestClient) -> None:
    session_id = _create(client)
    client.post(f"/sessions/{session_id}/games")
    client.put(
        f"/sessions/{session_id}/games/current/result",
        json={"winner": "Otieno", "carry_forwards": [{"player": "Kamau", "amount": 150}]},
    )

    response = client.post(f"/sessions/{session_id}/games/current/confirm")

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "invalid_carry_amount"


def test_cancel_game_consumes_no_number(client: TestClient) -> None:
    session_id = _create(client)
    client.post(f"/sessions/{session_id}/games")

    cancel = client.delete(f"/sessions/{session_id}/games/current")
    assert cancel.status_code == 200
    assert cancel.json()["session"]["games"] == []

    restart = client.post(f"/sessions/{session_id}/games")
    assert restart.json()["current_game"]["game_number"] == 1


def test_conflicts_and_not_found(client: TestClient) -> None:
    session_id = _create(client)

    no_game = client.post(f"/sessions/{session_id}/games/current/confirm")
    assert no_game.status_code == 409
    assert no_game.json()["detail"]["code"] == "no_active_game"

    client.post(f"/sessions/{session_id}/games")
    locked = client.patch(f"/sessions/{session_id}/settings", json={"stake": 50, "chalk_fee": 0, "table_fee": 0})
    assert locked.status_code == 409
    assert locked.json()["detail"]["code"] == "game_in_progress"

    missing = client.get("/sessions/nope")
    assert missing.status_code == 404
    assert missing.json()["detail"]["code"] == "session_not_found"


def test_player_endpoints(client: TestClient) -> None:
    session_id = _create(client)

    added = client.post(f"/sessions/{session_id}/players", json={"name": "Mwangi"})
    assert added.status_code == 201

    duplicate = client.post(f"/sessions/{session_id}/players", json={"name": "Mwangi"})
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"]["code"] == "duplicate_player"

    renamed = client.patch(f"/sessions/{session_id}/players/Mwangi", json={"name": "Njeri"})
    assert "Njeri" in [p["name"] for p in renamed.json()["session"]["players"]]

    balance = client.put(f"/sessions/{session_id}/players/Njeri/balance", json={"balance": 75})
    assert {p["name"]: p["balance"] for p in balance.json()["session"]["players"]}["Njeri"] == 75

    removed = client.delete(f"/sessions/{session_id}/players/Achieng")
    assert removed.status_code == 200
    assert "Achieng" not in [p["name"] for p in removed.json()["session"]["players"]]


def test_removing_below_two_players_rejected(client: TestClient) -> None:
    response = client.post("/sessions", json={"players": ["a", "b"]})
    session_id = response.json()["session"]["id"]

    removed = client.delete(f"/sessions/{session_id}/players/a")

    assert removed.status_code == 400
    assert removed.json()["detail"]["code"] == "insufficient_players"
    assert len(client.get(f"/sessions/{session_id}").json()["session"]["players"]) == 2


def test_create_session_validation(client: TestClient) -> None:
    assert client.post("/sessions", json={"players": ["solo", " "]}).status_code == 422

    duplicates = client.post("/sessions", json={"players": ["solo", "solo"]})
    assert duplicates.status_code == 400
    assert duplicates.json()["detail"]["code"] == "insufficient_players"


def test_list_and_import(client: TestClient) -> None:
    _create(client)
    imported = client.post(
        "/sessions/import",
        json={"sessions": [{"id": "Session_old", "players": [{"name": "x"}, {"name": "y"}], "games": []}]},
    )
    assert imported.status_code == 201

    listed = client.get("/sessions", params={"limit": 5})
    assert [item["label"] for item in listed.json()] == ["Session_old", "Session_1"]

    malformed = client.post("/sessions/import", json={"sessions": [{"players": [{"balance": 3}]}]})
    assert malformed.status_code == 400
