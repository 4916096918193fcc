from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from .player import PlayerPayload, PlayerResponse


class LockedSelectionPayload(BaseModel):
    team_index: int
    member_ids: List[str] = Field(default_factory=list)


class AssignmentRequest(BaseModel):
    players: List[PlayerPayload] = Field(default_factory=list)
    num_teams: int = Field(default=0, ge=0, le=256)
    team_size: int = Field(default=0, ge=0, le=256)
    seed: str = ""
    preset: str | None = None
    nationality_weight: float | None = None
    position_weight: float | None = None
    score_weight: float | None = None
    locked: LockedSelectionPayload | None = None


class LockRequest(AssignmentRequest):
    team_index: int = Field(..., ge=0)


class TeamResponse(BaseModel):
    index: int
    name: str
    score: float
    members: List[PlayerResponse]
    position_counts: Dict[str, int]
    nationality_counts: Dict[str, int]


class SubsGroupResponse(BaseModel):
    team_name: str
    score: float
    players: List[PlayerResponse]


class AssignmentResponse(BaseModel):
    error: str | None = None
    teams: List[TeamResponse] = Field(default_factory=list)
    targets: List[Dict[str, int]] = Field(default_factory=list)
    observed_positions: List[str] = Field(default_factory=list)
    subs_groups: List[SubsGroupResponse] = Field(default_factory=list)
    used_count: int = 0
    clipboard: str | None = None
