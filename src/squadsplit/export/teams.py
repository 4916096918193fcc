"""Text and CSV export helpers for assignment results."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Any, Iterable, List, Sequence

from squadsplit.balancer import AssignmentResult


class AssignmentExportError(RuntimeError):
    """Raised when a result cannot be exported."""


CSV_HEADERS = ("team", "role", "player_id", "name", "score", "nationality", "position")


def _attr(item: Any, name: str, default: Any = None) -> Any:
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def _position(member: Any) -> str:
    value = _attr(member, "position") or _attr(member, "pos1") or ""
    return str(value).strip()


def build_clipboard_teams(teams: Iterable[Any] | None) -> str:
    """Render teams as paste-friendly blocks separated by blank lines.

    Teams where any member has a position get a ``Name,Pos`` header and
    ``name,position`` rows; otherwise a bare ``Name`` column is used.
    """

    lines: List[str] = []
    for idx, team in enumerate(teams or ()):
        label = _attr(team, "name")
        lines.append(str(label) if label else f"Team {idx + 1}")
        members = list(_attr(team, "members") or ())
        if any(_position(member) for member in members):
            lines.append("Name,Pos")
            for member in members:
                position = _position(member)
                name = _attr(member, "name", "")
                lines.append(f"{name},{position}" if position else str(name))
        else:
            lines.append("Name")
            lines.extend(str(_attr(member, "name", "")) for member in members)
        lines.append("")
    return "\n".join(lines)


def _rows(team_name: str, role: str, players: Sequence[Any]) -> Iterable[list[Any]]:
    for player in players:
        yield [
            team_name,
            role,
            player.player_id,
            player.name,
            player.score,
            player.nationality,
            player.position,
        ]


def export_assignments_to_csv(result: AssignmentResult) -> str:
    """Convert a successful result into CSV, main members before subs."""

    if not result.ok:
        raise AssignmentExportError(f"Cannot export a failed assignment: {result.error}")

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADERS)
    for team in result.teams:
        writer.writerows(_rows(team.name, "main", team.members))
    for group in result.subs_groups:
        writer.writerows(_rows(group.team_name, "sub", group.players))
    return buffer.getvalue()


__all__ = [
    "AssignmentExportError",
    "CSV_HEADERS",
    "build_clipboard_teams",
    "export_assignments_to_csv",
]
