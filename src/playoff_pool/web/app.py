"""JSON API over the pool services.

Every request checks a connection out of the ``ConnectionPool`` for its own
duration; clients poll for draft progress. Privileged routes require the
``X-Admin-Token`` header to match the configured admin token.
"""

import dataclasses
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from flask import Flask, Response, jsonify, request

from playoff_pool.auth import AdminCapability, authorize_admin
from playoff_pool.cli.factory import PoolContainer
from playoff_pool.config import PoolSettings
from playoff_pool.db.pool import ConnectionPool
from playoff_pool.domain.draft import DraftSnapshot
from playoff_pool.domain.errors import DraftNotFound, ParticipantNotFound, PoolError, ValidationError
from playoff_pool.domain.result import Err, Ok
from playoff_pool.domain.roster import RosterEntryScores

logger = logging.getLogger(__name__)

ADMIN_HEADER = "X-Admin-Token"

_STATUS_BY_KIND: dict[str, int] = {
    "ValidationError": 400,
    "NotPlayoffWeek": 400,
    "DraftNotFound": 404,
    "PlayerNotFound": 404,
    "ParticipantNotFound": 404,
    "NoParticipants": 409,
    "DraftComplete": 409,
    "NoDraftOrder": 409,
    "NotYourTurn": 409,
    "PlayerAlreadyDrafted": 409,
    "ConflictError": 409,
    "IngestError": 502,
}

type JsonResponse = tuple[Response, int]


def error_response(error: PoolError) -> JsonResponse:
    status = _STATUS_BY_KIND.get(error.kind, 500)
    return jsonify({"error": {"kind": error.kind, "message": error.message}}), status


def _forbidden() -> JsonResponse:
    return jsonify({"error": {"kind": "Forbidden", "message": "Admin token required"}}), 403


def _snapshot_json(snapshot: DraftSnapshot, container: PoolContainer) -> dict[str, Any]:
    assert snapshot.draft.id is not None
    picker = container.draft_engine.get_current_picker(snapshot.draft.id)
    return {
        "draft": dataclasses.asdict(snapshot.draft),
        "order": [dataclasses.asdict(entry) for entry in snapshot.order],
        "current_picker": dataclasses.asdict(picker) if picker is not None else None,
    }


def _roster_json(entries: list[RosterEntryScores]) -> dict[str, Any]:
    return {
        "entries": [
            {
                **dataclasses.asdict(e.entry),
                "weekly_points": {str(week): points for week, points in sorted(e.weekly_points.items())},
                "total_points": e.total_points,
            }
            for e in entries
        ],
        "total_points": sum(e.total_points for e in entries),
    }


def _int_field(body: dict[str, Any], name: str) -> int | ValidationError:
    value = body.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        return ValidationError(f"'{name}' must be an integer", field=name)
    return value


def _bool_field(body: dict[str, Any], name: str) -> bool | ValidationError:
    value = body.get(name)
    if not isinstance(value, bool):
        return ValidationError(f"'{name}' must be true or false", field=name)
    return value


def create_app(pool: ConnectionPool, settings: PoolSettings) -> Flask:
    """Create the pool API app serving connections from ``pool``."""
    app = Flask(__name__)

    @contextmanager
    def services() -> Iterator[PoolContainer]:
        with pool.connection() as conn:
            container = PoolContainer(conn, settings)
            try:
                yield container
            finally:
                container.close()

    def admin() -> AdminCapability | None:
        return authorize_admin(
            request.headers.get(ADMIN_HEADER),
            settings.admin_token,
            granted_to=request.remote_addr or "web",
        )

    def json_body() -> dict[str, Any]:
        body = request.get_json(silent=True)
        return body if isinstance(body, dict) else {}

    @app.get("/api/participants")
    def list_participants() -> JsonResponse:
        with services() as c:
            participants = c.participant_service.list_participants()
        return jsonify([dataclasses.asdict(p) for p in participants]), 200

    @app.post("/api/participants")
    def create_participant() -> JsonResponse:
        if admin() is None:
            return _forbidden()
        body = json_body()
        with services() as c:
            result = c.participant_service.create_participant(
                str(body.get("name") or ""),
                email=body.get("email"),
                external_id=body.get("external_id"),
            )
        match result:
            case Ok(participant_id):
                return jsonify({"id": participant_id}), 201
            case Err(e):
                return error_response(e)

    @app.get("/api/players")
    def search_players() -> JsonResponse:
        query = request.args.get("q", "")
        limit = request.args.get("limit", 100, type=int)
        with services() as c:
            players = c.catalog_service.search(query, limit=limit)
        return jsonify([dataclasses.asdict(p) for p in players]), 200

    @app.get("/api/drafts/<int:year>")
    def get_draft(year: int) -> JsonResponse:
        with services() as c:
            snapshot = c.draft_engine.get_current_draft(year)
            if snapshot is None:
                return error_response(DraftNotFound("No draft found for this season"))
            return jsonify(_snapshot_json(snapshot, c)), 200

    @app.post("/api/drafts/<int:year>")
    def create_draft(year: int) -> JsonResponse:
        if admin() is None:
            return _forbidden()
        body = json_body()
        total_rounds: int | ValidationError = settings.default_rounds
        if "total_rounds" in body:
            total_rounds = _int_field(body, "total_rounds")
        if isinstance(total_rounds, ValidationError):
            return error_response(total_rounds)
        with services() as c:
            match c.draft_engine.create_draft(year, total_rounds):
                case Ok(draft_id):
                    return jsonify({"id": draft_id}), 201
                case Err(e):
                    return error_response(e)

    @app.delete("/api/drafts/<int:year>")
    def delete_draft(year: int) -> JsonResponse:
        if admin() is None:
            return _forbidden()
        with services() as c:
            match c.draft_engine.delete_draft(year):
                case Ok(_):
                    return jsonify({"deleted": True}), 200
                case Err(e):
                    return error_response(e)

    @app.get("/api/drafts/<int:draft_id>/picks")
    def list_picks(draft_id: int) -> JsonResponse:
        with services() as c:
            picks = c.draft_engine.get_draft_picks(draft_id)
        return jsonify([dataclasses.asdict(p) for p in picks]), 200

    @app.get("/api/drafts/<int:draft_id>/current-picker")
    def current_picker(draft_id: int) -> JsonResponse:
        with services() as c:
            picker = c.draft_engine.get_current_picker(draft_id)
        return jsonify({"current_picker": dataclasses.asdict(picker) if picker is not None else None}), 200

    @app.post("/api/drafts/<int:draft_id>/picks")
    def make_pick(draft_id: int) -> JsonResponse:
        override: AdminCapability | None = None
        if request.headers.get(ADMIN_HEADER):
            override = admin()
            if override is None:
                return _forbidden()
        body = json_body()
        participant_id = _int_field(body, "participant_id")
        if isinstance(participant_id, ValidationError):
            return error_response(participant_id)
        player_id = _int_field(body, "player_id")
        if isinstance(player_id, ValidationError):
            return error_response(player_id)
        with services() as c:
            result = c.draft_engine.make_pick(draft_id, participant_id, player_id, override=override)
        match result:
            case Ok(pick):
                return jsonify(dataclasses.asdict(pick)), 201
            case Err(e):
                return error_response(e)

    @app.get("/api/standings/<int:year>")
    def standings(year: int) -> JsonResponse:
        with services() as c:
            rows = c.standings_service.standings(year)
        return jsonify([dataclasses.asdict(s) for s in rows]), 200

    @app.get("/api/rosters/<int:participant_id>/<int:year>")
    def roster(participant_id: int, year: int) -> JsonResponse:
        with services() as c:
            if c.participant_service.get_participant(participant_id) is None:
                return error_response(ParticipantNotFound())
            entries = c.roster_service.roster_with_scores(participant_id, year)
        return jsonify(_roster_json(entries)), 200

    @app.post("/api/rosters/<int:participant_id>/<int:year>")
    def add_roster_player(participant_id: int, year: int) -> JsonResponse:
        capability = admin()
        if capability is None:
            return _forbidden()
        player_id = _int_field(json_body(), "player_id")
        if isinstance(player_id, ValidationError):
            return error_response(player_id)
        with services() as c:
            result = c.roster_service.add_player(participant_id, player_id, year, admin=capability)
        match result:
            case Ok(entry_id):
                return jsonify({"id": entry_id}), 201
            case Err(e):
                return error_response(e)

    @app.delete("/api/roster-entries/<int:entry_id>")
    def remove_roster_entry(entry_id: int) -> JsonResponse:
        capability = admin()
        if capability is None:
            return _forbidden()
        with services() as c:
            result = c.roster_service.remove_entry(entry_id, admin=capability)
        match result:
            case Ok(_):
                return jsonify({"deleted": True}), 200
            case Err(e):
                return error_response(e)

    @app.post("/api/eligibility/teams")
    def set_team_eligibility() -> JsonResponse:
        if admin() is None:
            return _forbidden()
        body = json_body()
        teams = body.get("teams")
        if not isinstance(teams, list) or not all(isinstance(t, str) for t in teams):
            return error_response(ValidationError("'teams' must be a list of team abbreviations", field="teams"))
        eligible = _bool_field(body, "eligible")
        if isinstance(eligible, ValidationError):
            return error_response(eligible)
        with services() as c:
            updated = c.catalog_service.set_team_eligibility(teams, eligible)
        return jsonify({"updated": updated}), 200

    @app.post("/api/eligibility/all")
    def set_all_eligibility() -> JsonResponse:
        if admin() is None:
            return _forbidden()
        eligible = _bool_field(json_body(), "eligible")
        if isinstance(eligible, ValidationError):
            return error_response(eligible)
        with services() as c:
            updated = c.catalog_service.set_all_eligibility(eligible)
        return jsonify({"updated": updated}), 200

    @app.post("/api/eligibility/players/<int:player_id>/toggle")
    def toggle_eligibility(player_id: int) -> JsonResponse:
        if admin() is None:
            return _forbidden()
        with services() as c:
            result = c.catalog_service.toggle_eligibility(player_id)
        match result:
            case Ok(eligible):
                return jsonify({"player_id": player_id, "is_draft_eligible": eligible}), 200
            case Err(e):
                return error_response(e)

    @app.get("/api/eligibility/stats")
    def eligibility_stats() -> JsonResponse:
        with services() as c:
            stats = c.catalog_service.eligibility_stats()
        teams = [{**dataclasses.asdict(t), "total": t.total} for t in stats.teams]
        return jsonify({**dataclasses.asdict(stats), "teams": teams}), 200

    logger.debug("Created pool API app")
    return app


