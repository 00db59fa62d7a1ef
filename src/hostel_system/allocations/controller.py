from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_actor, json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/allocations", methods=["POST"], endpoint="allocate_room")
    def allocate_room():
        data = json_body()
        allocation_id = container.allocation_manager.allocate(
            actor=current_actor(),
            resident_id=data.get("resident_id"),
            room_id=data.get("room_id"),
        )
        return jsonify({"allocation_id": allocation_id}), 201

    @app.route("/api/allocations/transfer", methods=["POST"], endpoint="transfer_room")
    def transfer_room():
        data = json_body()
        allocation_id = container.allocation_manager.transfer(
            actor=current_actor(),
            resident_id=data.get("resident_id"),
            room_id=data.get("room_id"),
        )
        return jsonify({"allocation_id": allocation_id})

    @app.route("/api/residents/<int:resident_id>/vacate", methods=["POST"], endpoint="vacate_room")
    def vacate_room(resident_id: int):
        data = json_body()
        ended = container.allocation_manager.end_allocation(
            actor=current_actor(),
            resident_id=resident_id,
            reason=data.get("reason"),
        )
        return jsonify(to_json(ended))

    @app.route("/api/residents/<int:resident_id>/allocations", methods=["GET"], endpoint="allocation_history")
    def allocation_history(resident_id: int):
        items = container.allocation_manager.history(actor=current_actor(), resident_id=resident_id)
        return jsonify(to_json(items))
