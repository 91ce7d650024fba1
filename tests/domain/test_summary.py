from dataclasses import replace
from datetime import datetime

from poolmarks.domain import Fees, GameRecord, Player, Session, player_standings, summarize


def _session() -> Session:
    return Session(
        start_time=datetime(2025, 3, 1, 19, 0, 0),
        players=(
            Player(name="a", balance=250, total_wins=1),
            Player(name="b", balance=0, total_losses=1),
            Player(name="c", balance=-60, total_losses=1),
            Player(name="d", balance=-100, total_losses=1),
        ),
        current_stake=100,
        chalk_fee=30,
        table_fee=20,
        games=(
            GameRecord(game_number=1, players=("a", "b", "c", "d"), stake=100, winner="a", fees=Fees(30, 20)),
            GameRecord(game_number=2, players=("a", "b", "c"), stake=50, winner="b", fees=Fees(10, 0)),
        ),
    )


def test_summary_totals() -> None:
    summary = summarize(_session())

    assert summary.total_games == 2
    assert summary.total_pot == 400 + 150
    assert summary.total_fees == 60
    assert summary.outstanding == 410
    assert [p.name for p in summary.credits] == ["a"]
    assert [p.name for p in summary.debts] == ["c", "d"]
    assert summary.credits_total == 250
    assert summary.debts_total == 160


def test_summary_of_records_without_fees() -> None:
    session = replace(_session(), games=(GameRecord(game_number=1, players=("a", "b"), stake=100, winner="a"),))

    summary = summarize(session)

    assert summary.total_fees == 0
    assert summary.total_pot == 200


def test_empty_session_summary() -> None:
    session = replace(_session(), games=(), players=(Player(name="a"), Player(name="b")))

    summary = summarize(session)

    assert (summary.total_games, summary.total_pot, summary.total_fees, summary.outstanding) == (0, 0, 0, 0)
    assert summary.credits == () and summary.debts == ()


def test_player_standings() -> None:
    standings = player_standings(_session())

    assert [(s.name, s.balance, s.wins, s.losses, s.games_played) for s in standings][:2] == [
        ("a", 250, 1, 0, 1),
        ("b", 0, 0, 1, 1),
    ]
