from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, to_json
from ..container import Container
from ..core.constants import DEFAULT_AUDIT_LIMIT
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit", methods=["GET"], endpoint="list_audit")
    def list_audit():
        try:
            limit = int(request.args.get("limit", DEFAULT_AUDIT_LIMIT))
        except ValueError:
            raise ValidationError("limit must be an integer")
        entries = container.audit_log.list_recent(actor=current_actor(), limit=limit)
        return jsonify(to_json(entries))
