"""Player ledger: running balances and win/loss tallies.

Balances are signed integers. A positive balance means the group owes the
player, a negative one means the player owes the group.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from uuid import uuid4

from .errors import DomainValidationError, UnknownPlayer


def new_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class Player:
    name: str
    balance: int = 0
    total_wins: int = 0
    total_losses: int = 0
    id: str = field(default_factory=new_id)

    @property
    def games_played(self) -> int:
        return self.total_wins + self.total_losses


@dataclass(frozen=True)
class GameOutcome:
    """Balance deltas and counter bumps produced by one confirmed game."""

    winner: str
    losers: tuple[str, ...]
    deltas: Mapping[str, int]

    def __post_init__(self) -> None:
        if self.winner in self.losers:
            raise DomainValidationError("winner cannot also be a loser", winner=self.winner)


def new_player(name: str) -> Player:
    return Player(name=name)


def find_player(players: Sequence[Player], name: str) -> Player:
    for player in players:
        if player.name == name:
            return player
    raise UnknownPlayer(f"unknown player: {name}", player=name)


def apply_game_outcome(players: Sequence[Player], outcome: GameOutcome) -> tuple[Player, ...]:
    """Apply one game's outcome to every affected player as a single batch.

    All referenced names are resolved before anything is rebuilt, so an
    unknown name leaves the ledger exactly as it was.
    """
    known = {player.name for player in players}
    referenced = [outcome.winner, *outcome.losers, *outcome.deltas]
    unknown = sorted({name for name in referenced if name not in known})
    if unknown:
        raise UnknownPlayer(f"unknown players in outcome: {', '.join(unknown)}", players=unknown)

    losers = set(outcome.losers)
    updated: list[Player] = []
    for player in players:
        delta = outcome.deltas.get(player.name, 0)
        if player.name == outcome.winner:
            player = replace(player, balance=player.balance + delta, total_wins=player.total_wins + 1)
        elif player.name in losers:
            player = replace(player, balance=player.balance + delta, total_losses=player.total_losses + 1)
        elif delta:
            player = replace(player, balance=player.balance + delta)
        updated.append(player)
    return tuple(updated)


def adjust_balance(players: Sequence[Player], name: str, new_balance: int) -> tuple[Player, ...]:
    """Overwrite a player's balance (administrative correction)."""
    find_player(players, name)
    return tuple(
        replace(player, balance=new_balance) if player.name == name else player for player in players
    )
