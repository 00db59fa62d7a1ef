from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/search", methods=["GET"], endpoint="search")
    def search():
        result = container.search_service.search(actor=current_actor(), term=request.args.get("q", ""))
        return jsonify(to_json(result))
