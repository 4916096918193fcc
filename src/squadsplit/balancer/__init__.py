"""Team balancing engine: sequencing, position targets and greedy assignment."""

from .sequencing import new_seed, seeded_shuffle, sequence_players, sort_by_score
from .service import (
    AssignmentResult,
    LockedSelection,
    SubsGroup,
    Team,
    compute_assignments,
    lock_team,
)
from .targets import collect_positions, compute_targets

__all__ = [
    "AssignmentResult",
    "LockedSelection",
    "SubsGroup",
    "Team",
    "collect_positions",
    "compute_assignments",
    "compute_targets",
    "lock_team",
    "new_seed",
    "seeded_shuffle",
    "sequence_players",
    "sort_by_score",
]
