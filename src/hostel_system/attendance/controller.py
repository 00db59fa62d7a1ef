from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_actor, json_body, to_json
from ..container import Container
from ..core.enums import SessionType
from ..core.exceptions import ValidationError
from .model import SessionScope


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/sessions", methods=["POST"], endpoint="get_or_create_session")
    def get_or_create_session():
        data = json_body()
        scope = data.get("scope") or {}
        if not isinstance(scope, dict):
            raise ValidationError("scope must be an object")
        session_id = container.session_registry.get_or_create(
            actor=current_actor(),
            session_date=parse_iso_date(data.get("date") or ""),
            session_type=data.get("session_type"),
            scope=SessionScope(
                block=scope.get("block"),
                room_id=scope.get("room_id"),
                course=scope.get("course"),
                year=scope.get("year"),
            ),
        )
        return jsonify({"session_id": session_id})

    @app.route("/api/attendance/sessions/<int:session_id>/records", methods=["POST"], endpoint="bulk_mark")
    def bulk_mark(session_id: int):
        data = json_body()
        records = data.get("records")
        if not isinstance(records, list):
            raise ValidationError("records must be a list")
        count = container.attendance_service.bulk_mark(
            actor=current_actor(),
            session_id=session_id,
            records=records,
        )
        return jsonify({"session_id": session_id, "count": count})

    @app.route("/api/attendance/sessions/<int:session_id>/records", methods=["GET"], endpoint="session_records")
    def session_records(session_id: int):
        items = container.attendance_service.list_session_records(actor=current_actor(), session_id=session_id)
        return jsonify(to_json(items))

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="self_check_in")
    def self_check_in():
        data = json_body()
        day = parse_iso_date(data["date"]) if data.get("date") else None
        session_id = container.attendance_service.self_check_in(
            actor=current_actor(),
            session_type=data.get("session_type") or SessionType.MORNING,
            day=day,
        )
        return jsonify({"session_id": session_id})

    @app.route("/api/residents/<int:resident_id>/attendance", methods=["GET"], endpoint="attendance_calendar")
    def attendance_calendar(resident_id: int):
        entries = container.attendance_service.calendar(
            actor=current_actor(),
            resident_id=resident_id,
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify(to_json(entries))

    @app.route("/api/residents/<int:resident_id>/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    def attendance_summary(resident_id: int):
        counts = container.attendance_service.summary(
            actor=current_actor(),
            resident_id=resident_id,
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify(counts)
