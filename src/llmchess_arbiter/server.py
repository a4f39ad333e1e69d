"""
Minimal Flask API that exposes the move arbitrator to a browser board.

Endpoints:
- GET  /health    -> {"status": "ok"}
- POST /api/move  -> body {fen, legalMoves, difficulty}; returns {uci, from, to, promotion, source}

An empty "uci" in the reply means the position has no legal moves; the UI
decides whether that is checkmate or a draw.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Coroutine, Optional

from flask import Flask, jsonify, request

from .arbitrator import MoveArbitrator
from .config import Settings, load_settings

log = logging.getLogger("server")


class _LoopThread:
    """One event loop on a daemon thread, shared by all request threads.

    The AsyncOpenAI client keeps its connection pool bound to the loop it
    first ran on, so every arbitration is scheduled on this one loop, and
    the client is closed on that loop before it stops.
    """

    def __init__(self, arbitrator: MoveArbitrator) -> None:
        self._arbitrator = arbitrator
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._loop.run_forever, name="arbitrator-loop", daemon=True)
        self._thread.start()

    def run(self, coro: Coroutine[Any, Any, Any]) -> Any:
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    def stop(self) -> None:
        if self._loop.is_closed():
            return
        try:
            self.run(self._arbitrator.aclose())
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=5)
            if not self._thread.is_alive():
                self._loop.close()


def create_app(settings: Optional[Settings] = None, arbitrator: Optional[MoveArbitrator] = None) -> Flask:
    settings = settings or load_settings()
    arbitrator = arbitrator or MoveArbitrator.from_settings(settings)
    loop = _LoopThread(arbitrator)

    app = Flask(__name__)
    app.config["ARBITRATOR"] = arbitrator
    app.config["SETTINGS"] = settings
    if not settings.has_credential:
        log.info("No LLM API key configured; every AI move will be a random legal move")

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/move", methods=["POST"])
    def ai_move():
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "request body must be a JSON object"}), 400
        legal_moves = data.get("legalMoves")
        if legal_moves is None:
            legal_moves = []
        if not isinstance(legal_moves, list):
            return jsonify({"error": "legalMoves must be a list of UCI strings"}), 400
        position = data.get("fen") or data.get("position") or ""
        if not isinstance(position, str):
            return jsonify({"error": "fen must be a string"}), 400
        difficulty = data.get("difficulty")
        if difficulty is not None and not isinstance(difficulty, str):
            difficulty = None

        result = loop.run(arbitrator.resolve_move(position, legal_moves, difficulty))
        return jsonify(result.to_dict())

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = request.headers.get("Origin", "*")
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Cache-Control"] = "no-store, max-age=0"
        return response

    @app.route("/api/<path:path>", methods=["OPTIONS"])
    def cors_preflight(path: str):
        return app.make_response(("", 204))

    app.extensions["arbitrator_loop"] = loop
    return app


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO), format="%(asctime)s %(levelname)s %(message)s")
    app = create_app(settings)
    try:
        app.run(host=settings.host, port=settings.port)
    finally:
        app.extensions["arbitrator_loop"].stop()


if __name__ == "__main__":
    main()
