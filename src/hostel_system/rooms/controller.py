from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_actor, json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rooms", methods=["POST"], endpoint="create_room")
    def create_room():
        data = json_body()
        room_id = container.room_service.create_room(
            actor=current_actor(),
            room_number=data.get("room_number") or "",
            room_type=data.get("room_type"),
            block=data.get("block"),
        )
        return jsonify({"room_id": room_id}), 201

    @app.route("/api/rooms/<int:room_id>/maintenance", methods=["POST"], endpoint="set_room_maintenance")
    def set_room_maintenance(room_id: int):
        data = json_body()
        room = container.room_service.set_maintenance(
            actor=current_actor(),
            room_id=room_id,
            maintenance=bool(data.get("maintenance", True)),
            notes=data.get("notes"),
        )
        return jsonify(to_json(room))

    @app.route("/api/rooms", methods=["GET"], endpoint="list_rooms")
    def list_rooms():
        rooms = container.room_service.list_rooms(actor=current_actor())
        return jsonify(to_json(rooms))

    @app.route("/api/rooms/<int:room_id>", methods=["GET"], endpoint="room_details")
    def room_details(room_id: int):
        details = container.room_service.room_details(actor=current_actor(), room_id=room_id)
        return jsonify(to_json(details))
