from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class PlayerPayload(BaseModel):
    id: str | None = None
    name: str = ""
    score: float | str | None = None
    nationality: str | None = None
    position: str | None = None


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    score: float
    nationality: str
    position: str


class RosterTextRequest(BaseModel):
    text: str = Field(default="")


class RosterResponse(BaseModel):
    players: List[PlayerResponse]
    count: int
