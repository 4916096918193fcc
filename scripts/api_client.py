"""Lightweight REST client for the squadsplit API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(raw: str) -> dict[str, str]:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def _load_players(client: httpx.Client, roster: Path, mapping: dict[str, str]) -> list[dict]:
    if roster.suffix.lower() == ".csv":
        with roster.open("rb") as f:
            resp = client.post(
                "/roster/upload",
                files={"roster": (roster.name, f, "text/csv")},
                data={"roster_mapping": json.dumps(mapping)} if mapping else None,
            )
    else:
        resp = client.post("/roster/parse", json={"text": roster.read_text(encoding="utf-8")})
    if resp.status_code == 400:
        raise SystemExit(resp.json().get("detail", "roster rejected"))
    resp.raise_for_status()
    return [
        {
            "id": player["player_id"],
            "name": player["name"],
            "score": player["score"],
            "nationality": player["nationality"],
            "position": player["position"],
        }
        for player in resp.json()["players"]
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the squadsplit REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, help="Roster CSV or plain list")
    parser.add_argument("--teams", type=int, required=True, help="Number of teams")
    parser.add_argument("--size", type=int, required=True, help="Players per team")
    parser.add_argument("--seed", default="", help="Shuffle seed")
    parser.add_argument("--reshuffle", action="store_true", help="Ask the API for a fresh seed")
    parser.add_argument("--preset", default=None, help="Weight preset name")
    parser.add_argument("--roster-mapping", default="", help="JSON mapping for roster CSV columns")
    parser.add_argument("--json", action="store_true", help="Print the full JSON response")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        players = _load_players(client, args.roster, build_mapping(args.roster_mapping))
        seed = args.seed
        if args.reshuffle:
            resp = client.get("/seed")
            resp.raise_for_status()
            seed = resp.json()["seed"]
            print(f"Using seed {seed}")

        payload = {
            "players": players,
            "num_teams": args.teams,
            "team_size": args.size,
            "seed": seed,
            "preset": args.preset,
        }
        resp = client.post("/assignments", json=payload)
        resp.raise_for_status()
        data = resp.json()

    if args.json:
        print(json.dumps(data, indent=2))
        return
    if data.get("error"):
        raise SystemExit(data["error"])
    print(data["clipboard"])


if __name__ == "__main__":
    main()
