from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_actor, json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/residents", methods=["POST"], endpoint="enroll_resident")
    def enroll_resident():
        data = json_body()
        resident_id = container.resident_service.enroll(
            actor=current_actor(),
            full_name=data.get("full_name") or "",
            email=data.get("email") or "",
            contact=data.get("contact"),
            course=data.get("course"),
            year=data.get("year"),
        )
        return jsonify({"resident_id": resident_id}), 201

    @app.route("/api/residents/<int:resident_id>", methods=["PUT"], endpoint="update_resident")
    def update_resident(resident_id: int):
        data = json_body()
        resident = container.resident_service.update(
            actor=current_actor(),
            resident_id=resident_id,
            full_name=data.get("full_name") or "",
            email=data.get("email") or "",
            contact=data.get("contact"),
            course=data.get("course"),
            year=data.get("year"),
        )
        return jsonify(to_json(resident))

    @app.route("/api/residents/<int:resident_id>/disable", methods=["POST"], endpoint="disable_resident")
    def disable_resident(resident_id: int):
        container.resident_service.disable(actor=current_actor(), resident_id=resident_id)
        return jsonify({"resident_id": resident_id, "is_active": False})

    @app.route("/api/residents/<int:resident_id>", methods=["GET"], endpoint="get_resident")
    def get_resident(resident_id: int):
        resident = container.resident_service.get(actor=current_actor(), resident_id=resident_id)
        return jsonify(to_json(resident))

    @app.route("/api/residents/unallocated", methods=["GET"], endpoint="unallocated_residents")
    def unallocated_residents():
        items = container.resident_service.list_unallocated(actor=current_actor())
        return jsonify(to_json(items))
