"""Domain logic for settling a finished game against the session ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .carry_forward import LoserSettlement, Resolution, resolve_losers, winner_delta
from .errors import InvalidCarryAmount, MissingWinner, NoActiveGame, UnknownPlayer
from .ledger import GameOutcome, Player, apply_game_outcome
from .session import Fees, GameInProgress, GameRecord, GameResult, Session


@dataclass(frozen=True)
class SettlementResult:
    players: tuple[Player, ...]
    record: GameRecord
    total_fees: int
    winner_payout: int
    deltas: dict[str, int]
    losers: tuple[LoserSettlement, ...]

    def resolution_of(self, player: str) -> Resolution | None:
        for loser in self.losers:
            if loser.player == player:
                return loser.resolution
        return None


def validate_result(
    session: Session,
    game: GameInProgress | None,
    result: GameResult,
) -> tuple[GameInProgress, str]:
    """Check a pending result before anything is mutated; returns the game and its winner."""
    if game is None:
        raise NoActiveGame("no game in progress")
    if not result.winner:
        raise MissingWinner("select a winner before confirming", game_number=game.game_number)

    known = set(session.player_names)
    referenced = [result.winner, *result.paid_players, *(entry.player for entry in result.carry_forwards)]
    unknown = sorted({name for name in referenced if name not in known})
    if unknown:
        raise UnknownPlayer(f"unknown players in result: {', '.join(unknown)}", players=unknown)

    carried = [entry.player for entry in result.carry_forwards]
    repeated = sorted({name for name in carried if carried.count(name) > 1})
    if repeated:
        raise InvalidCarryAmount(
            f"one carry-forward entry per player: {', '.join(repeated)}",
            players=repeated,
        )
    return game, result.winner


def winner_payout(players_count: int, stake: int, fees: Fees) -> int:
    return players_count * stake - fees.total


def settle_game(
    session: Session,
    game: GameInProgress | None,
    result: GameResult,
    *,
    ended_at: datetime,
) -> SettlementResult:
    game, winner = validate_result(session, game, result)

    fees = Fees(chalk=session.chalk_fee, table=session.table_fee)
    stake = game.stake
    payout = winner_payout(len(game.players), stake, fees)

    losers = tuple(resolve_losers([name for name in game.players if name != winner], stake=stake, result=result))
    deltas = {winner: winner_delta(winner, payout=payout, stake=stake, result=result)}
    deltas.update({loser.player: loser.delta for loser in losers})

    players = apply_game_outcome(
        session.players,
        GameOutcome(winner=winner, losers=tuple(loser.player for loser in losers), deltas=deltas),
    )
    record = GameRecord(
        game_number=game.game_number,
        players=game.players,
        stake=stake,
        winner=winner,
        paid_players=result.paid_players,
        carry_forwards=result.carry_forwards,
        fees=fees,
        start_time=game.start_time,
        end_time=ended_at,
        player_ids=game.player_ids,
    )
    return SettlementResult(
        players=players,
        record=record,
        total_fees=fees.total,
        winner_payout=payout,
        deltas=deltas,
        losers=losers,
    )
