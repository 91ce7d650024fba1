from datetime import datetime

from poolmarks.domain import CarryForward, Fees, GameRecord, Player, Session
from poolmarks.storage.codec import parse_time, session_from_payload, session_to_payload


def test_legacy_document_without_optional_fields() -> None:
    payload = {
        "id": "Session_1",
        "startTime": "3/1/2025, 7:00:00 PM",
        "players": [
            {"name": "Otieno", "balance": 250, "totalWins": 1, "totalLosses": 0},
            {"name": "Kamau", "balance": -100, "totalWins": 0, "totalLosses": 1},
        ],
        "games": [
            {
                "gameNumber": 1,
                "players": ["Otieno", "Kamau"],
                "stake": 100,
                "winner": "Otieno",
                "startTime": "3/1/2025, 7:00:00 PM",
                "endTime": "3/1/2025, 7:20:00 PM",
            }
        ],
        "currentStake": 100,
        "chalkFee": 30,
        "tableFee": 20,
    }

    session = session_from_payload(payload)

    assert session.id == "Session_1"
    assert session.label == "Session_1"
    assert session.start_time == datetime(2025, 3, 1, 19, 0, 0)
    assert [p.name for p in session.players] == ["Otieno", "Kamau"]
    assert all(p.id for p in session.players)
    game = session.games[0]
    assert game.paid_players == ()
    assert game.player_ids == ()
    assert game.carry_forwards == ()
    assert game.fees == Fees(chalk=0, table=0)
    assert game.end_time == datetime(2025, 3, 1, 19, 20, 0)


def test_payload_keeps_stored_shape() -> None:
    session = Session(
        id="abc",
        label="Session_2",
        start_time=datetime(2025, 3, 1, 19, 0, 0),
        players=(Player(name="a", balance=-60, total_losses=1, id="p1"), Player(name="b", id="p2")),
        current_stake=100,
        chalk_fee=30,
        table_fee=20,
        games=(
            GameRecord(
                id="g1",
                game_number=1,
                players=("a", "b"),
                stake=100,
                winner="b",
                player_ids=("p1", "p2"),
                carry_forwards=(CarryForward(player="a", amount=40),),
                fees=Fees(chalk=30, table=20),
            ),
        ),
    )

    payload = session_to_payload(session)

    assert payload["players"][0] == {"id": "p1", "name": "a", "balance": -60, "totalWins": 0, "totalLosses": 1}
    assert payload["games"][0]["carryForwards"] == [{"player": "a", "amount": 40}]
    assert payload["games"][0]["fees"] == {"chalk": 30, "table": 20}
    assert payload["games"][0]["paidPlayers"] == []
    assert payload["games"][0]["playerIds"] == ["p1", "p2"]
    assert session_from_payload(payload) == session


def test_parse_time_tolerates_unknown_formats() -> None:
    assert parse_time(None) is None
    assert parse_time("") is None
    assert parse_time("yesterday evening") is None
    assert parse_time("2025-03-01T19:00:00") == datetime(2025, 3, 1, 19, 0, 0)
