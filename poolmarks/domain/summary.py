"""Read-side projections over a session's ledger and history."""

from __future__ import annotations

from dataclasses import dataclass

from .ledger import Player
from .session import Session


@dataclass(frozen=True)
class SessionSummary:
    total_games: int
    total_pot: int
    total_fees: int
    outstanding: int
    credits: tuple[Player, ...]
    debts: tuple[Player, ...]

    @property
    def credits_total(self) -> int:
        return sum(player.balance for player in self.credits)

    @property
    def debts_total(self) -> int:
        return -sum(player.balance for player in self.debts)


@dataclass(frozen=True)
class PlayerStanding:
    name: str
    balance: int
    wins: int
    losses: int
    games_played: int


def summarize(session: Session) -> SessionSummary:
    return SessionSummary(
        total_games=len(session.games),
        total_pot=sum(game.pot for game in session.games),
        total_fees=sum(game.fees.total for game in session.games),
        outstanding=sum(abs(player.balance) for player in session.players),
        credits=tuple(player for player in session.players if player.balance > 0),
        debts=tuple(player for player in session.players if player.balance < 0),
    )


def player_standings(session: Session) -> list[PlayerStanding]:
    return [
        PlayerStanding(
            name=player.name,
            balance=player.balance,
            wins=player.total_wins,
            losses=player.total_losses,
            games_played=player.games_played,
        )
        for player in session.players
    ]
