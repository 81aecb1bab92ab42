from __future__ import annotations

import logging
import os
import random
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional

from flask import Flask, jsonify, request

from game import (
    Board,
    GameSession,
    GameState,
    IllegalMove,
    Phase,
    Player,
    legal_moves,
)

logger = logging.getLogger(__name__)

HUMAN_PLAYER = Player.P1
AI_PLAYER = Player.P2


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring non-integer %s=%r", name, raw)
        return None


AI_SEED = _env_int("CHROMACLASH_AI_SEED")
MAX_GAMES = max(1, _env_int("CHROMACLASH_MAX_GAMES") or 1000)

app = Flask(__name__)

# In-memory games keyed by id, least recently used first; nothing is persisted.
_sessions: "OrderedDict[str, GameSession]" = OrderedDict()
_sessions_lock = threading.Lock()


# ---------- JSON helpers ----------

def board_to_json(b: Board) -> Dict[str, Any]:
    return {
        "size": int(b.size),
        "cells": [
            [{"owner": (int(cell.owner) if cell.owner is not None else None), "charge": int(cell.charge)} for cell in row]
            for row in b.rows()
        ],
    }


def status_message(s: GameState) -> str:
    phase = s.status.phase
    if phase is Phase.FIRST_MOVE:
        return "Place your first piece"
    if phase is Phase.PLAYING:
        return "Your move"
    if phase is Phase.RESOLVING:
        return "Chain reaction..."
    return "Game Over"


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "board": board_to_json(s.board),
        "currentPlayer": int(s.current_player),
        "status": s.status.phase.value,
        "statusPlayer": (int(s.status.player) if s.status.player is not None else None),
        "winner": (int(s.winner) if s.winner is not None else None),
        "scores": {"1": s.scores.p1, "2": s.scores.p2},
        "turnCount": int(s.turn_count),
        "message": status_message(s),
    }


def frames_to_json(frames: Iterable[GameState]) -> List[Dict[str, Any]]:
    return [board_to_json(f.board) for f in frames]


def _moves_json(session: GameSession) -> List[List[int]]:
    return [[r, c] for (r, c) in legal_moves(session.snapshot())]


def _get_session(game_id: Any) -> Optional[GameSession]:
    if not isinstance(game_id, str):
        return None
    with _sessions_lock:
        session = _sessions.get(game_id)
        if session is not None:
            _sessions.move_to_end(game_id)
        return session


def _register(session: GameSession) -> str:
    game_id = uuid.uuid4().hex
    with _sessions_lock:
        _sessions[game_id] = session
        while len(_sessions) > MAX_GAMES:
            old_id, _ = _sessions.popitem(last=False)
            logger.info("evicted game %s (limit %d)", old_id, MAX_GAMES)
    return game_id


def _json_body() -> Optional[Dict[str, Any]]:
    """Request JSON as a dict; an empty body counts as {}, anything but a JSON object is None."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return None if request.get_data().strip() else {}
    return body if isinstance(body, dict) else None


def _malformed() -> Any:
    return jsonify({"ok": False, "error": "malformed body"}), 400


def _not_found() -> Any:
    return jsonify({"ok": False, "error": "unknown game"}), 404


def _illegal(e: IllegalMove, session: GameSession) -> Any:
    return jsonify({
        "ok": False,
        "error": str(e),
        "reason": e.reason.value,
        "state": state_to_json(session.snapshot()),
        "legalMoves": _moves_json(session),
    }), 400


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _malformed()
    seed = body.get("seed", AI_SEED)
    if seed is not None and not isinstance(seed, int):
        return jsonify({"ok": False, "error": "seed must be an integer"}), 400
    session = GameSession(rng=random.Random(seed), ai_player=AI_PLAYER)
    game_id = _register(session)
    logger.info("new game %s (seed=%s)", game_id, seed)
    return jsonify({
        "ok": True,
        "gameId": game_id,
        "state": state_to_json(session.snapshot()),
        "legalMoves": _moves_json(session),
    })


@app.get("/api/state/<game_id>")
def api_state(game_id: str) -> Any:
    session = _get_session(game_id)
    if session is None:
        return _not_found()
    return jsonify({"ok": True, "state": state_to_json(session.snapshot()), "legalMoves": _moves_json(session)})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    if body is None:
        return _malformed()
    session = _get_session(body.get("gameId"))
    if session is None:
        return _not_found()
    try:
        state = session.request_move(HUMAN_PLAYER, body.get("row"), body.get("col"))
    except IllegalMove as e:
        return _illegal(e, session)
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "frames": frames_to_json(session.last_frames),
        "legalMoves": _moves_json(session),
    })


@app.post("/api/ai")
def api_ai() -> Any:
    body = _json_body()
    if body is None:
        return _malformed()
    session = _get_session(body.get("gameId"))
    if session is None:
        return _not_found()
    try:
        move, state = session.play_ai_turn()
    except IllegalMove as e:
        return _illegal(e, session)
    return jsonify({
        "ok": True,
        "move": [move[0], move[1]],
        "state": state_to_json(state),
        "frames": frames_to_json(session.last_frames),
        "legalMoves": _moves_json(session),
    })


@app.post("/api/reset")
def api_reset() -> Any:
    body = _json_body()
    if body is None:
        return _malformed()
    session = _get_session(body.get("gameId"))
    if session is None:
        return _not_found()
    state = session.reset()
    return jsonify({"ok": True, "state": state_to_json(state), "legalMoves": _moves_json(session)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("CHROMACLASH_LOG_LEVEL", "INFO").upper())
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
