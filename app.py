from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request, send_from_directory

# Ensure package imports work when executed directly from repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from game import (  # noqa: E402
    SessionState,
    action_from_json,
    ingest_files,
    json_to_state,
    project,
    state_to_json,
    update,
)

logger = logging.getLogger(__name__)

MAX_UPLOAD_MB = int(os.getenv("MATCHING_MAX_UPLOAD_MB", "16"))

STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)
app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_MB * 1024 * 1024


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


@app.get("/styles.css")
def styles_css() -> Any:
    resp = send_from_directory(app.static_folder, "styles.css")
    resp.headers["Content-Type"] = "text/css; charset=utf-8"
    return resp


@app.get("/static/<path:filename>")
def static_files(filename: str) -> Any:
    return send_from_directory(app.static_folder, filename)


# ---------- Game API ----------

def _state_from_body(body: Dict[str, Any]) -> SessionState:
    s_in = body.get("state")
    if s_in is None:
        return SessionState()
    return json_to_state(s_in)


def _reply(state: SessionState, **extra: Any) -> Any:
    payload: Dict[str, Any] = {"ok": True, "state": state_to_json(state), "view": project(state)}
    payload.update(extra)
    return jsonify(payload)


@app.post("/api/new")
def api_new() -> Any:
    return _reply(SessionState())


@app.post("/api/view")
def api_view() -> Any:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        body = {}
    try:
        state = _state_from_body(body)
    except ValueError as e:
        return jsonify({"ok": False, "error": f"bad state: {e}"}), 400
    return _reply(state)


@app.post("/api/action")
def api_action() -> Any:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        return jsonify({"ok": False, "error": "JSON object required"}), 400
    try:
        state = _state_from_body(body)
    except ValueError as e:
        return jsonify({"ok": False, "error": f"bad state: {e}"}), 400
    if "action" not in body:
        return jsonify({"ok": False, "error": "action required"}), 400
    try:
        action = action_from_json(body["action"])
    except ValueError as e:
        return jsonify({"ok": False, "error": f"bad action: {e}"}), 400
    next_state = update(state, action)
    logger.debug(f"{type(action).__name__}: {state.phase} -> {next_state.phase}")
    return _reply(next_state)


@app.post("/api/drop")
def api_drop() -> Any:
    raw_state = request.form.get("state")
    try:
        state = json_to_state(json.loads(raw_state)) if raw_state else SessionState()
    except (ValueError, TypeError) as e:
        return jsonify({"ok": False, "error": f"bad state: {e}"}), 400
    if state.is_playing:
        return jsonify({"ok": False, "error": "cannot add cards during a game"}), 409

    files: List[Tuple[str, bytes]] = []
    for f in request.files.getlist("files"):
        name: Optional[str] = f.filename
        if not name:
            continue
        files.append((name, f.read()))

    next_state, added, skipped = ingest_files(state, files)
    if skipped:
        logger.info(f"skipped {len(skipped)} unsupported file(s)")
    return _reply(next_state, added=added, skipped=skipped)


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
