"""Pydantic models for API I/O."""

from .assignment import (
    AssignmentRequest,
    AssignmentResponse,
    LockedSelectionPayload,
    LockRequest,
    SubsGroupResponse,
    TeamResponse,
)
from .player import PlayerPayload, PlayerResponse, RosterResponse, RosterTextRequest

__all__ = [
    "AssignmentRequest",
    "AssignmentResponse",
    "LockedSelectionPayload",
    "LockRequest",
    "PlayerPayload",
    "PlayerResponse",
    "RosterResponse",
    "RosterTextRequest",
    "SubsGroupResponse",
    "TeamResponse",
]
