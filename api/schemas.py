"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class ActionRequest(BaseModel):
    """Request for player action, as raw player input."""

    action: str = Field(..., max_length=64, description="Command such as 'hit' or 'stand'")


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    values: list[int]


class RoundStateResponse(BaseModel):
    """Current round state."""

    state: Literal["CONTINUING", "WON", "LOST"]
    message: str
    hand: list[CardResponse]
    possible_totals: list[int]
    is_over: bool
    cards_remaining: int
    action: str | None = None


class NewRoundResponse(BaseModel):
    """Session created for a new round."""

    session_id: str
