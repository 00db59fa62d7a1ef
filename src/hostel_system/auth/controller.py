from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_actor, json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/identities/<identity_id>/role", methods=["PUT"], endpoint="bind_role")
    def bind_role(identity_id: str):
        data = json_body()
        binding = container.identity_service.bind_role(
            actor=current_actor(),
            identity_id=identity_id,
            role=data.get("role"),
            resident_id=data.get("resident_id"),
        )
        return jsonify(to_json(binding))

    @app.route("/api/me", methods=["GET"], endpoint="whoami")
    def whoami():
        return jsonify(to_json(current_actor()))
