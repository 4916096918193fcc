"""Per-team position quotas for an assignment pool."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from squadsplit.models import PlayerRecord


TargetMatrix = Tuple[Dict[str, int], ...]


def collect_positions(pool: Iterable[PlayerRecord]) -> List[str]:
    """Return the distinct non-empty positions in ``pool``, sorted."""

    return sorted({player.position for player in pool if player.position})


def compute_targets(
    pool: Sequence[PlayerRecord],
    num_teams: int,
    positions: Optional[Sequence[str]] = None,
) -> TargetMatrix:
    """Split each position count evenly across teams.

    Remainders go to the lowest team indices, so quotas for one position
    differ by at most one and always sum to the pool count.
    """

    if positions is None:
        positions = collect_positions(pool)
    totals = Counter(player.position for player in pool if player.position)

    targets: List[Dict[str, int]] = [{} for _ in range(num_teams)]
    for position in positions:
        base, remainder = divmod(totals.get(position, 0), num_teams)
        for team_index in range(num_teams):
            targets[team_index][position] = base + (1 if team_index < remainder else 0)
    return tuple(targets)


__all__ = ["TargetMatrix", "collect_positions", "compute_targets"]
