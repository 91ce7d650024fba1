from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Any | None = None


class CreateSessionRequest(BaseModel):
    players: list[str] = Field(
        ...,
        description="Player names in display order; blank entries are ignored",
        examples=[["Otieno", "Wanjiru", "Kamau", "Achieng"]],
    )
    stake: int | None = Field(default=None, gt=0, description="Stake per player per game", examples=[100])
    chalk_fee: int | None = Field(default=None, ge=0, examples=[30])
    table_fee: int | None = Field(default=None, ge=0, examples=[20])

    @model_validator(mode="after")
    def validate_players(self) -> "CreateSessionRequest":
        if len([name for name in self.players if name.strip()]) < 2:
            raise ValueError("Need at least 2 players to start a session")
        return self

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "players": ["Otieno", "Wanjiru", "Kamau", "Achieng"],
                    "stake": 100,
                    "chalk_fee": 30,
                    "table_fee": 20,
                }
            ]
        }
    }


class AddPlayerRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["Mwangi"])


class RenamePlayerRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["Mwangi"])


class AdjustBalanceRequest(BaseModel):
    balance: int = Field(..., examples=[-150])


class UpdateSettingsRequest(BaseModel):
    stake: int = Field(..., gt=0)
    chalk_fee: int = Field(..., ge=0)
    table_fee: int = Field(..., ge=0)


class CarryForwardSchema(BaseModel):
    player: str
    amount: int

    model_config = {"from_attributes": True}


class GameResultRequest(BaseModel):
    winner: str | None = None
    paid_players: list[str] = Field(default_factory=list)
    carry_forwards: list[CarryForwardSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_carry_forwards(self) -> "GameResultRequest":
        players = [entry.player for entry in self.carry_forwards]
        if len(set(players)) != len(players):
            raise ValueError("Only one carry-forward entry per player")
        return self

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "winner": "Otieno",
                    "paid_players": ["Wanjiru"],
                    "carry_forwards": [{"player": "Kamau", "amount": 40}],
                }
            ]
        }
    }


class ImportSessionsRequest(BaseModel):
    sessions: list[dict[str, Any]] = Field(..., description="Stored session list, oldest first")


class PlayerSchema(BaseModel):
    id: str
    name: str
    balance: int
    total_wins: int
    total_losses: int

    model_config = {"from_attributes": True}


class FeesSchema(BaseModel):
    chalk: int
    table: int

    model_config = {"from_attributes": True}


class GameRecordSchema(BaseModel):
    id: str
    game_number: int
    players: list[str]
    player_ids: list[str] = []
    stake: int
    winner: str
    paid_players: list[str]
    carry_forwards: list[CarryForwardSchema]
    fees: FeesSchema
    start_time: datetime | None = None
    end_time: datetime | None = None

    model_config = {"from_attributes": True}


class SessionSchema(BaseModel):
    id: str
    label: str
    start_time: datetime | None = None
    players: list[PlayerSchema]
    games: list[GameRecordSchema]
    current_stake: int
    chalk_fee: int
    table_fee: int

    model_config = {"from_attributes": True}


class GameInProgressSchema(BaseModel):
    game_number: int
    players: list[str]
    stake: int
    start_time: datetime

    model_config = {"from_attributes": True}


class PendingResultSchema(BaseModel):
    winner: str | None = None
    paid_players: list[str]
    carry_forwards: list[CarryForwardSchema]

    model_config = {"from_attributes": True}


class SessionStateResponse(BaseModel):
    status: str
    session: SessionSchema
    current_game: GameInProgressSchema | None = None
    pending_result: PendingResultSchema | None = None


class SessionListItem(BaseModel):
    id: str
    label: str
    start_time: datetime | None = None
    players: list[str]
    games_played: int


class BalanceEntry(BaseModel):
    name: str
    balance: int


class SummaryResponse(BaseModel):
    session_id: str
    total_games: int
    total_pot: int
    total_fees: int
    outstanding: int
    credits: list[BalanceEntry]
    debts: list[BalanceEntry]
    credits_total: int
    debts_total: int


class PlayerStandingSchema(BaseModel):
    name: str
    balance: int
    wins: int
    losses: int
    games_played: int

    model_config = {"from_attributes": True}
