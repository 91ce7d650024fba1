"""Conversion between domain sessions and the stored session document.

The document uses the camelCase shape the browser kept in local storage, so a
legacy ``poolSessions`` export can be imported as is. Records written before a
field existed may lack ``fees``, ``carryForwards``, ``paidPlayers`` or ids;
absence means empty or zero.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from poolmarks.domain import CarryForward, Fees, GameRecord, Player, Session
from poolmarks.domain.ledger import new_id

# toLocaleString() renderings seen in legacy exports
_LEGACY_TIME_FORMATS = ("%m/%d/%Y, %I:%M:%S %p", "%d/%m/%Y, %H:%M:%S", "%d.%m.%Y, %H:%M:%S")


def format_time(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def parse_time(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _LEGACY_TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def player_to_payload(player: Player) -> dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "balance": player.balance,
        "totalWins": player.total_wins,
        "totalLosses": player.total_losses,
    }


def player_from_payload(data: dict[str, Any]) -> Player:
    return Player(
        id=data.get("id") or new_id(),
        name=data["name"],
        balance=int(data.get("balance", 0)),
        total_wins=int(data.get("totalWins", 0)),
        total_losses=int(data.get("totalLosses", 0)),
    )


def game_to_payload(game: GameRecord) -> dict[str, Any]:
    return {
        "id": game.id,
        "gameNumber": game.game_number,
        "players": list(game.players),
        "playerIds": list(game.player_ids),
        "stake": game.stake,
        "winner": game.winner,
        "paidPlayers": list(game.paid_players),
        "carryForwards": [{"player": entry.player, "amount": entry.amount} for entry in game.carry_forwards],
        "fees": {"chalk": game.fees.chalk, "table": game.fees.table},
        "startTime": format_time(game.start_time),
        "endTime": format_time(game.end_time),
    }


def game_from_payload(data: dict[str, Any]) -> GameRecord:
    fees = data.get("fees") or {}
    return GameRecord(
        id=data.get("id") or new_id(),
        game_number=int(data["gameNumber"]),
        players=tuple(data.get("players") or ()),
        player_ids=tuple(data.get("playerIds") or ()),
        stake=int(data["stake"]),
        winner=data["winner"],
        paid_players=tuple(data.get("paidPlayers") or ()),
        carry_forwards=tuple(
            CarryForward(player=entry["player"], amount=int(entry.get("amount", 0)))
            for entry in data.get("carryForwards") or ()
        ),
        fees=Fees(chalk=int(fees.get("chalk", 0)), table=int(fees.get("table", 0))),
        start_time=parse_time(data.get("startTime")),
        end_time=parse_time(data.get("endTime")),
    )


def session_to_payload(session: Session) -> dict[str, Any]:
    return {
        "id": session.id,
        "label": session.label,
        "startTime": format_time(session.start_time),
        "players": [player_to_payload(player) for player in session.players],
        "games": [game_to_payload(game) for game in session.games],
        "currentStake": session.current_stake,
        "chalkFee": session.chalk_fee,
        "tableFee": session.table_fee,
    }


def session_from_payload(data: dict[str, Any]) -> Session:
    # legacy documents used the display label ("Session_3") as their id
    legacy_id = data.get("id") or new_id()
    return Session(
        id=legacy_id,
        label=data.get("label") or str(legacy_id),
        start_time=parse_time(data.get("startTime")),
        players=tuple(player_from_payload(player) for player in data.get("players") or ()),
        games=tuple(game_from_payload(game) for game in data.get("games") or ()),
        current_stake=int(data.get("currentStake", 0)),
        chalk_fee=int(data.get("chalkFee", 0)),
        table_fee=int(data.get("tableFee", 0)),
    )
