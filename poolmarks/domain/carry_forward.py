"""Resolution of each loser's stake obligation for one game.

This module is the single place where the settlement formula lives:

* paid immediately: no balance change, the cash settles it off-ledger;
* carried forward ``a`` (``0 < a <= stake``): only ``stake - a`` becomes debt,
  ``a`` rolls into a later game;
* neither: the whole stake becomes debt.

The winner owes their own stake too, which is taken out of the payout unless
the winner is listed among the paid players.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidCarryAmount
from .session import GameResult


class Resolution(str, Enum):
    PAID = "paid"
    CARRIED = "carried"
    DEBT = "debt"


@dataclass(frozen=True)
class LoserSettlement:
    player: str
    resolution: Resolution
    carried: int
    delta: int


def check_carry_amount(player: str, amount: int, stake: int) -> None:
    if amount < 0 or amount > stake:
        raise InvalidCarryAmount(
            f"carry-forward for {player} must be between 0 and {stake}",
            player=player,
            amount=amount,
            stake=stake,
        )


def resolve_loser(player: str, *, stake: int, paid: bool, carried: int | None) -> LoserSettlement:
    if carried is not None:
        check_carry_amount(player, carried, stake)
    if paid and carried:
        raise InvalidCarryAmount(
            f"{player} cannot be both paid and carried forward",
            player=player,
            amount=carried,
        )

    if paid:
        return LoserSettlement(player=player, resolution=Resolution.PAID, carried=0, delta=0)
    if carried:
        return LoserSettlement(player=player, resolution=Resolution.CARRIED, carried=carried, delta=-(stake - carried))
    return LoserSettlement(player=player, resolution=Resolution.DEBT, carried=0, delta=-stake)


def resolve_losers(losers: Iterable[str], *, stake: int, result: GameResult) -> list[LoserSettlement]:
    paid = set(result.paid_players)
    return [
        resolve_loser(player, stake=stake, paid=player in paid, carried=result.carried_amount(player))
        for player in losers
    ]


def winner_delta(winner: str, *, payout: int, stake: int, result: GameResult) -> int:
    if result.carried_amount(winner) is not None:
        raise InvalidCarryAmount(f"winner {winner} cannot carry forward", player=winner)
    if winner in result.paid_players:
        return payout
    return payout - stake
