from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, Tuple

from .errors import (
    DomainValidationError,
    DuplicatePlayer,
    InsufficientPlayers,
    InvalidSettings,
    PlayerHasHistory,
)
from .ledger import Player, find_player, new_id, new_player

MIN_PLAYERS = 2


@dataclass(frozen=True)
class SessionSettings:
    stake: int
    chalk_fee: int
    table_fee: int

    def __post_init__(self) -> None:
        if self.stake <= 0:
            raise InvalidSettings("stake must be positive", stake=self.stake)
        if self.chalk_fee < 0:
            raise InvalidSettings("chalk_fee must not be negative", chalk_fee=self.chalk_fee)
        if self.table_fee < 0:
            raise InvalidSettings("table_fee must not be negative", table_fee=self.table_fee)

    @property
    def total_fees(self) -> int:
        return self.chalk_fee + self.table_fee


@dataclass(frozen=True)
class Fees:
    chalk: int = 0
    table: int = 0

    @property
    def total(self) -> int:
        return self.chalk + self.table


@dataclass(frozen=True)
class CarryForward:
    player: str
    amount: int


@dataclass(frozen=True)
class GameResult:
    winner: str | None = None
    paid_players: Tuple[str, ...] = ()
    carry_forwards: Tuple[CarryForward, ...] = ()

    def carried_amount(self, player: str) -> int | None:
        for entry in self.carry_forwards:
            if entry.player == player:
                return entry.amount
        return None


@dataclass(frozen=True)
class GameRecord:
    game_number: int
    players: Tuple[str, ...]
    stake: int
    winner: str
    paid_players: Tuple[str, ...] = ()
    carry_forwards: Tuple[CarryForward, ...] = ()
    fees: Fees = field(default_factory=Fees)
    start_time: datetime | None = None
    end_time: datetime | None = None
    id: str = field(default_factory=new_id)
    player_ids: Tuple[str, ...] = ()

    @property
    def pot(self) -> int:
        return self.stake * len(self.players)

    def involves(self, player: Player) -> bool:
        # Records stored before ids were kept only know the names.
        if self.player_ids:
            return player.id in self.player_ids
        return player.name in self.players


@dataclass(frozen=True)
class GameInProgress:
    game_number: int
    players: Tuple[str, ...]
    stake: int
    start_time: datetime
    player_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Session:
    start_time: datetime | None
    players: Tuple[Player, ...]
    current_stake: int
    chalk_fee: int
    table_fee: int
    games: Tuple[GameRecord, ...] = ()
    label: str = ""
    id: str = field(default_factory=new_id)

    @property
    def settings(self) -> SessionSettings:
        return SessionSettings(stake=self.current_stake, chalk_fee=self.chalk_fee, table_fee=self.table_fee)

    @property
    def player_names(self) -> Tuple[str, ...]:
        return tuple(player.name for player in self.players)


def normalize_player(name: str) -> str:
    value = name.strip()
    if not value:
        raise DomainValidationError("player name must be non-empty", player=name)
    return value


def unique_preserve_order(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        if not name.strip():
            continue
        normalized = normalize_player(name)
        if normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def create_session(
    names: Iterable[str],
    settings: SessionSettings,
    *,
    started_at: datetime,
    label: str = "",
) -> Session:
    """Start a session from the names typed into the form; blanks are skipped."""
    players = unique_preserve_order(names)
    if len(players) < MIN_PLAYERS:
        raise InsufficientPlayers("at least 2 players required to start a session", players=players)
    return Session(
        start_time=started_at,
        players=tuple(new_player(name) for name in players),
        current_stake=settings.stake,
        chalk_fee=settings.chalk_fee,
        table_fee=settings.table_fee,
        label=label,
    )


def add_player(session: Session, name: str) -> Session:
    name = normalize_player(name)
    if name in session.player_names:
        raise DuplicatePlayer(f"player already in session: {name}", player=name)
    return replace(session, players=session.players + (new_player(name),))


def remove_player(session: Session, name: str) -> Session:
    target = find_player(session.players, name)
    if any(game.involves(target) for game in session.games):
        raise PlayerHasHistory(f"{name} already played in this session", player=name)
    if len(session.players) - 1 < MIN_PLAYERS:
        raise InsufficientPlayers("need at least 2 players in session", player=name)
    return replace(session, players=tuple(player for player in session.players if player.id != target.id))


def rename_player(session: Session, old_name: str, new_name: str) -> Session:
    target = find_player(session.players, old_name)
    new_name = normalize_player(new_name)
    if new_name == old_name:
        return session
    if new_name in session.player_names:
        raise DuplicatePlayer(f"player already in session: {new_name}", player=new_name)
    return replace(
        session,
        players=tuple(
            replace(player, name=new_name) if player.id == target.id else player for player in session.players
        ),
    )


def update_settings(session: Session, settings: SessionSettings) -> Session:
    return replace(
        session,
        current_stake=settings.stake,
        chalk_fee=settings.chalk_fee,
        table_fee=settings.table_fee,
    )


def begin_game(session: Session, *, started_at: datetime) -> GameInProgress:
    return GameInProgress(
        game_number=len(session.games) + 1,
        players=session.player_names,
        stake=session.current_stake,
        start_time=started_at,
        player_ids=tuple(player.id for player in session.players),
    )


def select_winner(result: GameResult, winner: str | None) -> GameResult:
    """Pick the winner; the winner is dropped from the losers' carry entries."""
    return replace(
        result,
        winner=winner,
        carry_forwards=tuple(entry for entry in result.carry_forwards if entry.player != winner),
    )


def toggle_paid(result: GameResult, player: str) -> GameResult:
    if player in result.paid_players:
        return replace(result, paid_players=tuple(name for name in result.paid_players if name != player))
    return replace(result, paid_players=result.paid_players + (player,))


def set_carry_forward(result: GameResult, player: str, amount: int) -> GameResult:
    """Set (or clear, with 0) the single carry-forward entry for a player."""
    entries = tuple(entry for entry in result.carry_forwards if entry.player != player)
    if amount:
        entries += (CarryForward(player=player, amount=amount),)
    return replace(result, carry_forwards=entries)
