from __future__ import annotations

import logging
from dataclasses import asdict
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request

from ..core.enums import DecisionKind, Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    ForbiddenTransitionError,
    NotFoundError,
    ValidationError,
)
from ..container import Container
from . import policy
from .model import Actor, Decision, OutpassRequest
from .service import NewOutpass

logger = logging.getLogger(__name__)

ACTOR_ID_HEADER = "X-Actor-Id"
ACTOR_ROLE_HEADER = "X-Actor-Role"


def _decision_json(decision: Optional[Decision]) -> Optional[dict]:
    if decision is None:
        return None
    return {
        "actorId": decision.actor_id,
        "timestamp": decision.timestamp.isoformat(),
        "remarks": decision.remarks,
    }


def outpass_json(outpass: OutpassRequest) -> dict:
    return {
        "id": outpass.request_id,
        "studentName": outpass.student_name,
        "studentId": outpass.student_id,
        "guardianName": outpass.guardian_name,
        "guardianNumber": outpass.guardian_number,
        "outDate": outpass.out_date.isoformat(),
        "inDate": outpass.in_date.isoformat(),
        "reason": outpass.reason,
        "dayType": outpass.day_type.value,
        "status": outpass.status.value,
        "createdBy": outpass.created_by,
        "createdAt": outpass.created_at.isoformat(),
        "updatedAt": outpass.updated_at.isoformat(),
        "mentorDecision": _decision_json(outpass.mentor_decision),
        "wardenDecision": _decision_json(outpass.warden_decision),
        "rejection": _decision_json(outpass.rejection),
    }


def status_code_for(exc: Exception) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ForbiddenTransitionError):
        return 403 if exc.reason == ForbiddenTransitionError.ROLE_NOT_PERMITTED else 400
    if isinstance(exc, AuthorizationError):
        return 403
    return 500


def _error(exc: DomainError):
    code = status_code_for(exc)
    if code >= 500:
        logger.error("internal fault: %s", exc)
    body = {"success": False, "message": str(exc) if code < 500 else "Internal server error"}
    if isinstance(exc, ForbiddenTransitionError):
        body["reason"] = exc.reason
    return jsonify(body), code


def _fault(context: str):
    logger.exception("%s failed", context)
    return jsonify({"success": False, "message": f"Error {context}"}), 500


def register(app: Flask, container: Container) -> None:
    def actor_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            actor_id = (request.headers.get(ACTOR_ID_HEADER) or "").strip()
            role_value = (request.headers.get(ACTOR_ROLE_HEADER) or "").strip().lower()
            try:
                role = Role(role_value)
            except ValueError:
                role = None
            if not actor_id or role is None:
                return jsonify({"success": False, "message": "Not authenticated"}), 401
            g.actor = Actor(actor_id=actor_id, role=role)
            return view(*args, **kwargs)

        return wrapper

    def _remarks() -> Optional[str]:
        body = request.get_json(silent=True) or {}
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        return body.get("remarks")

    @app.route("/api/outpass", methods=["POST"], endpoint="create_outpass")
    @actor_required
    def create_outpass():
        try:
            outpass = container.outpass_service.submit(
                NewOutpass.from_payload(request.get_json(silent=True) or {}),
                requester=g.actor,
            )
        except DomainError as e:
            return _error(e)
        except Exception:
            return _fault("creating outpass request")

        if policy.awaiting_role(status=outpass.status, day_type=outpass.day_type) == Role.MENTOR:
            message = "Request sent successfully. Awaiting mentor approval."
        else:
            message = "Request sent successfully to Warden."
        return jsonify({"success": True, "message": message, "data": outpass_json(outpass)}), 201

    @app.route("/api/outpass/pending", methods=["GET"], endpoint="pending_outpasses")
    @actor_required
    def pending_outpasses():
        try:
            rows = container.outpass_queries.pending_for(g.actor)
        except DomainError as e:
            return _error(e)
        except Exception:
            return _fault("fetching pending requests")
        return jsonify({"success": True, "count": len(rows), "data": [outpass_json(r) for r in rows]})

    @app.route("/api/outpass/history", methods=["GET"], endpoint="outpass_history")
    @actor_required
    def outpass_history():
        try:
            rows = container.outpass_queries.history_for(g.actor)
        except DomainError as e:
            return _error(e)
        except Exception:
            return _fault("fetching history")
        return jsonify({"success": True, "count": len(rows), "data": [outpass_json(r) for r in rows]})

    @app.route("/api/outpass/statistics", methods=["GET"], endpoint="outpass_statistics")
    @actor_required
    def outpass_statistics():
        try:
            stats = container.outpass_queries.statistics_for(g.actor)
        except DomainError as e:
            return _error(e)
        except Exception:
            return _fault("fetching statistics")
        return jsonify({"success": True, "data": asdict(stats)})

    @app.route("/api/outpass/<int:request_id>", methods=["GET"], endpoint="outpass_detail")
    @actor_required
    def outpass_detail(request_id: int):
        try:
            outpass = container.outpass_queries.get_for(g.actor, request_id)
        except DomainError as e:
            return _error(e)
        except Exception:
            return _fault("fetching outpass request")
        return jsonify({"success": True, "data": outpass_json(outpass)})

    def _decide(request_id: int, kind: DecisionKind, done_message: str):
        try:
            outpass = container.outpass_service.act(
                request_id,
                actor=g.actor,
                kind=kind,
                remarks=_remarks(),
            )
        except DomainError as e:
            return _error(e)
        except Exception:
            return _fault("processing outpass decision")
        return jsonify({"success": True, "message": done_message, "data": outpass_json(outpass)})

    @app.route("/api/outpass/<int:request_id>/approve", methods=["PUT"], endpoint="approve_outpass")
    @actor_required
    def approve_outpass(request_id: int):
        return _decide(request_id, DecisionKind.APPROVE, "Outpass approved successfully")

    @app.route("/api/outpass/<int:request_id>/reject", methods=["PUT"], endpoint="reject_outpass")
    @actor_required
    def reject_outpass(request_id: int):
        return _decide(request_id, DecisionKind.REJECT, "Outpass rejected")
