"""Command-line interface for splitting a roster into balanced teams."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from squadsplit.balancer import AssignmentResult, LockedSelection, compute_assignments, new_seed
from squadsplit.config import AssignmentOptions, get_preset
from squadsplit.config_loader import OptionsProfile
from squadsplit.export import build_clipboard_teams, export_assignments_to_csv
from squadsplit.ingest import load_roster


logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split a player roster into balanced teams")
    parser.add_argument("roster", type=Path, help="Roster CSV or a plain list with one player per line")
    parser.add_argument("--teams", type=int, default=None, help="Number of teams")
    parser.add_argument("--size", type=int, default=None, help="Players per team")
    seed_group = parser.add_mutually_exclusive_group()
    seed_group.add_argument("--seed", default=None, help="Shuffle seed (empty keeps score order)")
    seed_group.add_argument(
        "--reshuffle",
        action="store_true",
        help="Draw a fresh random seed and print it",
    )
    parser.add_argument("--preset", default=None, help="Weight preset (balanced, score-first, ...)")
    parser.add_argument("--nationality-weight", type=float, default=None, help="Penalty per repeated nationality")
    parser.add_argument("--position-weight", type=float, default=None, help="Penalty for position quota pressure")
    parser.add_argument("--score-weight", type=float, default=None, help="Penalty for score imbalance")
    parser.add_argument(
        "--roster-column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First|Last)",
    )
    parser.add_argument("--lock-team", type=int, default=None, help="Team index (0-based) to pin players into")
    parser.add_argument(
        "--lock",
        nargs="*",
        default=None,
        help="Player IDs to pin into --lock-team",
    )
    parser.add_argument(
        "--format",
        choices=("text", "csv", "json"),
        default="text",
        help="Output format",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write output here instead of stdout")
    parser.add_argument("--load-profile", type=Path, help="Load options JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save options JSON", default=None)
    parser.add_argument("--verbose", action="store_true", help="Log progress at INFO level")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _resolve_options(args: argparse.Namespace, profile: OptionsProfile | None) -> AssignmentOptions:
    options = profile.options if profile else AssignmentOptions.from_env()
    preset = args.preset or (profile.preset if profile else None)
    if preset:
        options = options.with_preset(get_preset(preset))
    seed = new_seed() if args.reshuffle else args.seed
    overrides = {
        "num_teams": args.teams,
        "team_size": args.size,
        "seed": seed,
        "nationality_weight": args.nationality_weight,
        "position_weight": args.position_weight,
        "score_weight": args.score_weight,
    }
    return AssignmentOptions.from_mapping(
        {**options.to_dict(), **{key: value for key, value in overrides.items() if value is not None}}
    )


def _result_to_dict(result: AssignmentResult) -> dict:
    return {
        "error": result.error,
        "used_count": result.used_count,
        "observed_positions": list(result.observed_positions),
        "targets": [dict(row) for row in result.targets],
        "teams": [
            {
                "index": team.index,
                "name": team.name,
                "score": team.score,
                "members": [member.model_dump() for member in team.members],
            }
            for team in result.teams
        ],
        "subs_groups": [
            {
                "team_name": group.team_name,
                "score": group.score,
                "players": [player.model_dump() for player in group.players],
            }
            for group in result.subs_groups
        ],
    }


def _render(result: AssignmentResult, fmt: str) -> str:
    if fmt == "csv":
        return export_assignments_to_csv(result)
    if fmt == "json":
        return json.dumps(_result_to_dict(result), indent=2)
    text = build_clipboard_teams(result.teams)
    bench = [group for group in result.subs_groups if group.players]
    if bench:
        lines = ["Subs"]
        for group in bench:
            names = ", ".join(player.name for player in group.players)
            lines.append(f"{group.team_name}: {names}")
        text += "\n" + "\n".join(lines) + "\n"
    return text


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    profile = OptionsProfile.load(args.load_profile) if args.load_profile else None
    roster_mapping = _parse_mapping(args.roster_column)
    if profile:
        roster_mapping = profile.roster_mapping | roster_mapping

    try:
        options = _resolve_options(args, profile)
    except KeyError as exc:
        raise SystemExit(str(exc)) from exc

    if args.reshuffle:
        print(f"Using seed {options.seed}", file=sys.stderr)

    if args.save_profile:
        OptionsProfile(options, roster_mapping, preset=args.preset).save(args.save_profile)
        print(f"Saved options profile to {args.save_profile}", file=sys.stderr)

    try:
        players = load_roster(args.roster, mapping=roster_mapping or None)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    locked = None
    if args.lock_team is not None:
        locked = LockedSelection(team_index=args.lock_team, member_ids=tuple(args.lock or ()))

    result = compute_assignments(players, options, locked)
    if not result.ok:
        print(result.error, file=sys.stderr)
        raise SystemExit(1)

    output = _render(result, args.format)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info("Wrote %s teams to %s", len(result.teams), args.output)
    else:
        sys.stdout.write(output)


if __name__ == "__main__":
    main()
