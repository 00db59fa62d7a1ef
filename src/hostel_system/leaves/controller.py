from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_actor, json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/residents/<int:resident_id>/leaves", methods=["POST"], endpoint="request_leave")
    def request_leave(resident_id: int):
        data = json_body()
        leave_id = container.leave_service.request_leave(
            actor=current_actor(),
            resident_id=resident_id,
            start_date=parse_iso_date(data.get("start_date") or ""),
            end_date=parse_iso_date(data.get("end_date") or ""),
            reason=data.get("reason") or "",
        )
        return jsonify({"leave_id": leave_id}), 201

    @app.route("/api/residents/<int:resident_id>/leaves", methods=["GET"], endpoint="list_leaves")
    def list_leaves(resident_id: int):
        items = container.leave_service.list_leaves(actor=current_actor(), resident_id=resident_id)
        return jsonify(to_json(items))

    @app.route("/api/residents/<int:resident_id>/on-leave", methods=["GET"], endpoint="is_on_leave")
    def is_on_leave(resident_id: int):
        day = parse_iso_date(request.args.get("date") or "")
        on_leave = container.leave_service.is_on_leave(actor=current_actor(), resident_id=resident_id, day=day)
        return jsonify({"resident_id": resident_id, "date": day.isoformat(), "on_leave": on_leave})

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    def approve_leave(leave_id: int):
        leave = container.leave_service.approve_leave(actor=current_actor(), leave_id=leave_id)
        return jsonify(to_json(leave))
