"""Flask glue shared by every controller: caller resolution, JSON helpers
and the mapping from domain errors to HTTP responses."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any

from flask import Flask, g, jsonify, request, session

from ..auth.model import Actor
from ..auth.resolver import RoleResolver
from ..core.exceptions import (
    AlreadyAllocated,
    AuthorizationDenied,
    CapacityExceeded,
    DomainError,
    RecordNotFound,
    ValidationError,
)
from ..rooms.model import Room

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationDenied, 403),
    (RecordNotFound, 404),
    (CapacityExceeded, 409),
    (AlreadyAllocated, 409),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def register_request_context(app: Flask, resolver: RoleResolver) -> None:
    """Resolve the caller once per request and keep it on ``g``."""

    @app.before_request
    def _resolve_actor():
        g.actor = resolver.resolve(session.get("identity_id"))


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        body = {"error": e.kind, "message": str(e)}
        body.update(to_json(e.details()))
        return jsonify(body), status_for(e)


def current_actor() -> Actor:
    actor = getattr(g, "actor", None)
    return actor if actor is not None else Actor.anonymous()


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def to_json(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out = {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
        if isinstance(value, Room):
            out["capacity"] = value.capacity
            out["status"] = value.status.value
        return out
    if isinstance(value, dict):
        return {str(to_json(k)): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json(v) for v in value]
    return value
