"""Greedy balanced team assignment."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from squadsplit.balancer.sequencing import sequence_players
from squadsplit.balancer.targets import TargetMatrix, collect_positions, compute_targets
from squadsplit.config import AssignmentOptions
from squadsplit.models import PlayerRecord, normalize_players


logger = logging.getLogger(__name__)

CONFIGURATION_ERROR = "Set teams and size."


@dataclass(frozen=True)
class LockedSelection:
    """Players pinned into one team for a single computation."""

    team_index: Any
    member_ids: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LockedSelection":
        team_index = data.get("team_index", data.get("index"))
        members = data.get("member_ids", data.get("members")) or ()
        if isinstance(members, str):
            members = (members,)
        return cls(team_index=team_index, member_ids=tuple(str(member) for member in members))

    def is_active(self, num_teams: int) -> bool:
        index = self.team_index
        return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < num_teams


@dataclass(frozen=True)
class Team:
    index: int
    name: str
    members: Tuple[PlayerRecord, ...]
    score: float
    position_counts: Mapping[str, int]
    nationality_counts: Mapping[str, int]

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def member_ids(self) -> Tuple[str, ...]:
        return tuple(member.player_id for member in self.members)


@dataclass(frozen=True)
class SubsGroup:
    team_name: str
    players: Tuple[PlayerRecord, ...]
    score: float


@dataclass(frozen=True)
class AssignmentResult:
    error: Optional[str] = None
    teams: Tuple[Team, ...] = ()
    targets: TargetMatrix = ()
    observed_positions: Tuple[str, ...] = ()
    subs_groups: Tuple[SubsGroup, ...] = ()
    used_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class _TeamState:
    """Mutable accumulator owned by a single ``compute_assignments`` call."""

    index: int
    name: str
    members: List[PlayerRecord] = field(default_factory=list)
    score: float = 0.0
    position_counts: defaultdict = field(default_factory=lambda: defaultdict(int))
    nationality_counts: defaultdict = field(default_factory=lambda: defaultdict(int))

    def add(self, player: PlayerRecord) -> None:
        self.members.append(player)
        self.score += player.score
        if player.position:
            self.position_counts[player.position] += 1
        if player.nationality:
            self.nationality_counts[player.nationality] += 1

    def freeze(self) -> Team:
        return Team(
            index=self.index,
            name=self.name,
            members=tuple(self.members),
            score=self.score,
            position_counts=MappingProxyType(dict(self.position_counts)),
            nationality_counts=MappingProxyType(dict(self.nationality_counts)),
        )


@dataclass
class _SubsState:
    team_name: str
    players: List[PlayerRecord] = field(default_factory=list)
    score: float = 0.0

    def freeze(self) -> SubsGroup:
        return SubsGroup(team_name=self.team_name, players=tuple(self.players), score=self.score)


def _resolve_options(options: Union[AssignmentOptions, Mapping[str, Any], None]) -> AssignmentOptions:
    if isinstance(options, AssignmentOptions):
        return options
    return AssignmentOptions.from_mapping(options)


def _resolve_lock(
    selection: Union[LockedSelection, Mapping[str, Any], None],
) -> Optional[LockedSelection]:
    if selection is None or isinstance(selection, LockedSelection):
        return selection
    if isinstance(selection, Mapping):
        return LockedSelection.from_mapping(selection)
    logger.debug("Ignoring locked selection of type %s", type(selection).__name__)
    return None


def _seed_locked_team(
    teams: Sequence[_TeamState],
    pool: Sequence[PlayerRecord],
    selection: Optional[LockedSelection],
    team_size: int,
) -> List[PlayerRecord]:
    """Pin locked players into their team and return the unlocked remainder."""

    if selection is None or not selection.is_active(len(teams)):
        return list(pool)

    first_index: dict[str, int] = {}
    for pool_index, player in enumerate(pool):
        first_index.setdefault(player.player_id, pool_index)

    team = teams[selection.team_index]
    pinned: set[int] = set()
    for member_id in selection.member_ids:
        if len(team.members) >= team_size:
            logger.debug("Locked team %s is full; ignoring %s", team.name, member_id)
            break
        pool_index = first_index.get(member_id)
        if pool_index is None or pool_index in pinned:
            continue
        pinned.add(pool_index)
        team.add(pool[pool_index])

    logger.debug(
        "Locked %s of %s requested players into %s",
        len(pinned),
        len(selection.member_ids),
        team.name,
    )
    return [player for pool_index, player in enumerate(pool) if pool_index not in pinned]


def _penalty(
    team: _TeamState,
    candidate: PlayerRecord,
    targets: TargetMatrix,
    avg_score: float,
    options: AssignmentOptions,
) -> float:
    nationality_penalty = team.nationality_counts.get(candidate.nationality, 0) * options.nationality_weight

    quota = targets[team.index].get(candidate.position, 0) if candidate.position else 0
    if quota:
        pressure = team.position_counts.get(candidate.position, 0) / max(1, quota)
    else:
        pressure = 0.0
    position_penalty = pressure * options.position_weight

    projected = (team.score + candidate.score) / (len(team.members) + 1)
    score_penalty = abs(projected - avg_score) * options.score_weight

    return nationality_penalty + position_penalty + score_penalty


def _assign_greedy(
    teams: Sequence[_TeamState],
    remaining: Iterable[PlayerRecord],
    targets: TargetMatrix,
    avg_score: float,
    options: AssignmentOptions,
) -> None:
    order = list(teams)
    for candidate in remaining:
        # Under-filled teams come first so they win exact penalty ties.
        order.sort(key=lambda team: (len(team.members), team.index))
        best: Optional[_TeamState] = None
        best_penalty = float("inf")
        for team in order:
            if len(team.members) >= options.team_size:
                continue
            penalty = _penalty(team, candidate, targets, avg_score, options)
            if penalty < best_penalty:
                best_penalty = penalty
                best = team
        if best is None:
            # Capacity always matches the remaining pool; only NaN weights land here.
            best = next(team for team in order if len(team.members) < options.team_size)
        best.add(candidate)


def _distribute_bench(
    teams: Sequence[_TeamState],
    bench: Iterable[PlayerRecord],
) -> List[_SubsState]:
    groups = [_SubsState(team_name=team.name) for team in teams]
    for player in bench:
        target_index = 0
        best_total = float("inf")
        for index, group in enumerate(groups):
            projected = teams[index].score + group.score + player.score
            if projected < best_total:
                best_total = projected
                target_index = index
        group = groups[target_index]
        group.players.append(player)
        group.score += player.score
    return groups


def compute_assignments(
    players: Optional[Iterable[Any]],
    options: Union[AssignmentOptions, Mapping[str, Any], None] = None,
    locked_selection: Union[LockedSelection, Mapping[str, Any], None] = None,
) -> AssignmentResult:
    """Partition ``players`` into balanced teams plus per-team subs.

    Configuration and insufficiency problems are reported through
    ``AssignmentResult.error``; nothing is raised for bad input.
    """

    opts = _resolve_options(options)
    if opts.num_teams < 1 or opts.team_size < 1:
        return AssignmentResult(error=CONFIGURATION_ERROR)

    rows = normalize_players(players)
    needed = opts.needed
    if len(rows) < needed:
        return AssignmentResult(error=f"Need {needed} players, have {len(rows)}.")

    ordered = sequence_players(rows, opts.seed)
    pool = ordered[:needed]
    bench = ordered[needed:]

    positions = collect_positions(pool)
    targets = compute_targets(pool, opts.num_teams, positions)
    teams = [_TeamState(index=index, name=f"Team {index + 1}") for index in range(opts.num_teams)]
    avg_score = sum(player.score for player in pool) / opts.num_teams

    logger.info(
        "Assigning %s players into %s teams of %s (bench=%s, positions=%s, seeded=%s)",
        len(pool),
        opts.num_teams,
        opts.team_size,
        len(bench),
        len(positions),
        bool(opts.seed),
    )

    remaining = _seed_locked_team(teams, pool, _resolve_lock(locked_selection), opts.team_size)
    _assign_greedy(teams, remaining, targets, avg_score, opts)
    subs = _distribute_bench(teams, bench)

    return AssignmentResult(
        error=None,
        teams=tuple(team.freeze() for team in teams),
        targets=targets,
        observed_positions=tuple(positions),
        subs_groups=tuple(group.freeze() for group in subs),
        used_count=len(pool),
    )


def lock_team(result: AssignmentResult, team_index: int) -> Optional[LockedSelection]:
    """Capture one team of ``result`` so the next computation keeps it."""

    if not result.ok or not 0 <= team_index < len(result.teams):
        return None
    return LockedSelection(team_index=team_index, member_ids=result.teams[team_index].member_ids)


__all__ = [
    "AssignmentResult",
    "CONFIGURATION_ERROR",
    "LockedSelection",
    "SubsGroup",
    "Team",
    "compute_assignments",
    "lock_team",
]
