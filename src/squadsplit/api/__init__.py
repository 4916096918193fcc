"""REST API for the squadsplit team balancer."""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Iterable

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from squadsplit.api.schemas import (
    AssignmentRequest,
    AssignmentResponse,
    LockedSelectionPayload,
    LockRequest,
    PlayerResponse,
    RosterResponse,
    RosterTextRequest,
    SubsGroupResponse,
    TeamResponse,
)
from squadsplit.balancer import AssignmentResult, LockedSelection, compute_assignments, lock_team, new_seed
from squadsplit.config import AssignmentOptions
from squadsplit.export import build_clipboard_teams
from squadsplit.ingest import load_roster_csv, parse_list_ignore_numbers
from squadsplit.models import PlayerRecord, normalize_players


logger = logging.getLogger(__name__)


def _player_to_response(player: PlayerRecord) -> PlayerResponse:
    return PlayerResponse(
        player_id=player.player_id,
        name=player.name,
        score=player.score,
        nationality=player.nationality,
        position=player.position,
    )


def _players_to_response(players: Iterable[PlayerRecord]) -> list[PlayerResponse]:
    return [_player_to_response(player) for player in players]


def _result_to_response(result: AssignmentResult) -> AssignmentResponse:
    if not result.ok:
        return AssignmentResponse(error=result.error)
    return AssignmentResponse(
        error=None,
        teams=[
            TeamResponse(
                index=team.index,
                name=team.name,
                score=team.score,
                members=_players_to_response(team.members),
                position_counts=dict(team.position_counts),
                nationality_counts=dict(team.nationality_counts),
            )
            for team in result.teams
        ],
        targets=[dict(row) for row in result.targets],
        observed_positions=list(result.observed_positions),
        subs_groups=[
            SubsGroupResponse(
                team_name=group.team_name,
                score=group.score,
                players=_players_to_response(group.players),
            )
            for group in result.subs_groups
        ],
        used_count=result.used_count,
        clipboard=build_clipboard_teams(result.teams),
    )


def _request_options(request: AssignmentRequest) -> AssignmentOptions:
    options = AssignmentOptions.from_env(
        num_teams=request.num_teams,
        team_size=request.team_size,
        seed=request.seed,
    )
    if request.preset:
        try:
            options = options.with_preset(request.preset)
        except KeyError as exc:
            raise HTTPException(status_code=400, detail=f"Unknown preset {request.preset!r}") from exc
    weights = {
        "nationality_weight": request.nationality_weight,
        "position_weight": request.position_weight,
        "score_weight": request.score_weight,
    }
    return AssignmentOptions.from_mapping(
        {**options.to_dict(), **{key: value for key, value in weights.items() if value is not None}}
    )


def _request_lock(payload: LockedSelectionPayload | None) -> LockedSelection | None:
    if payload is None:
        return None
    return LockedSelection(team_index=payload.team_index, member_ids=tuple(payload.member_ids))


def _run_request(request: AssignmentRequest) -> AssignmentResult:
    return compute_assignments(
        [player.model_dump() for player in request.players],
        _request_options(request),
        _request_lock(request.locked),
    )


def _parse_mapping(mapping_str: str | None) -> dict[str, str]:
    if not mapping_str:
        return {}
    try:
        return json.loads(mapping_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc


async def _write_temp(upload: UploadFile) -> Path | None:
    contents = await upload.read()
    if not contents:
        return None
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".csv")
    try:
        tmp.write(contents)
        tmp.flush()
    finally:
        tmp.close()
    return Path(tmp.name)


def create_app() -> FastAPI:
    app = FastAPI(title="squadsplit team balancer")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/seed")
    async def seed() -> dict[str, str]:
        return {"seed": new_seed()}

    @app.post("/roster/parse", response_model=RosterResponse)
    async def parse_roster(request: RosterTextRequest) -> RosterResponse:
        players = normalize_players(parse_list_ignore_numbers(request.text))
        return RosterResponse(players=_players_to_response(players), count=len(players))

    @app.post("/roster/upload", response_model=RosterResponse)
    async def upload_roster(
        roster: UploadFile = File(...),
        roster_mapping: str | None = Form(None),
    ) -> RosterResponse:
        path = await _write_temp(roster)
        if path is None:
            raise HTTPException(status_code=400, detail="roster file is empty")
        try:
            rows = load_roster_csv(path, mapping=_parse_mapping(roster_mapping) or None)
        except (ValueError, UnicodeDecodeError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        finally:
            path.unlink(missing_ok=True)
        players = normalize_players(rows)
        return RosterResponse(players=_players_to_response(players), count=len(players))

    @app.post("/assignments", response_model=AssignmentResponse)
    async def assign(request: AssignmentRequest) -> AssignmentResponse:
        result = _run_request(request)
        if not result.ok:
            logger.info("Assignment request rejected: %s", result.error)
        return _result_to_response(result)

    @app.post("/assignments/lock", response_model=LockedSelectionPayload)
    async def lock(request: LockRequest) -> LockedSelectionPayload:
        result = _run_request(request)
        if not result.ok:
            raise HTTPException(status_code=400, detail=result.error)
        selection = lock_team(result, request.team_index)
        if selection is None:
            raise HTTPException(
                status_code=400,
                detail=f"team_index {request.team_index} is out of range for {len(result.teams)} teams",
            )
        return LockedSelectionPayload(team_index=selection.team_index, member_ids=list(selection.member_ids))

    @app.post("/export/clipboard", response_class=PlainTextResponse)
    async def export_clipboard(request: AssignmentRequest) -> PlainTextResponse:
        result = _run_request(request)
        if not result.ok:
            raise HTTPException(status_code=400, detail=result.error)
        return PlainTextResponse(build_clipboard_teams(result.teams))

    return app


__all__ = ["create_app"]
