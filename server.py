#!/usr/bin/env python3
"""stageview - Web UI backend: compile stages, output surfaces, session controls."""

import logging
import os

from flask import Flask, jsonify, request

from core.errors import EngineLoadError, EngineNotReady, PipelineBusy, UnknownStage
from core.graph import resolve
from core.orchestrator import Orchestrator
from core.router import SurfaceBoard
from core.stages import StageId
from engine.backends import build_loader
from engine.gateway import EngineGateway, load_engine
from session.assistant import CodeAssistant
from session.editor import SourceBuffer
from session.theme import ThemeToggle

logger = logging.getLogger(__name__)

app = Flask(__name__)


def _start_engine():
    """Kick off engine initialization; an unconfigured engine stays not-ready."""
    try:
        return load_engine(build_loader())
    except EngineLoadError as e:
        logger.error("%s", e)
        return EngineGateway()


gateway = _start_engine()
orchestrator = Orchestrator(gateway)
board = SurfaceBoard()
buffer = SourceBuffer()
theme = ThemeToggle()
assistant = CodeAssistant(buffer)


def _result_to_dict(result):
    return {
        "stage": result.stage.short_name,
        "label": result.stage.label,
        "output": result.output_text,
        "elapsed_ms": round(result.elapsed_ms, 2),
        "succeeded": result.succeeded,
    }


def _run_to_dict(run, commands):
    return {
        "requested": run.requested.short_name,
        "results": [_result_to_dict(r) for r in run.results],
        "total_ms": None if run.total_ms is None else round(run.total_ms, 2),
        "succeeded": run.succeeded,
        "commands": [
            {"action": c.action, "surface": c.surface_id, "content": c.content}
            for c in commands
        ],
        "active_surface": next(
            (c.surface_id for c in commands if c.action == "activate"), None
        ),
    }


def _surfaces_to_list():
    return [
        {"id": s.id, "content": s.content, "active": s.active}
        for s in board.surfaces()
    ]


def _posted_source(data):
    """Return the posted source, or None when the run should use the buffer.

    A posted source is only written back to the buffer once its run has
    been accepted and routed.
    """
    if "source" not in data:
        return None
    if not isinstance(data["source"], str):
        raise ValueError("source must be a string")
    return data["source"]


@app.errorhandler(EngineNotReady)
def _engine_not_ready(e):
    return jsonify({"error": str(e)}), 503


@app.errorhandler(UnknownStage)
def _unknown_stage(e):
    return jsonify({"error": str(e)}), 404


@app.errorhandler(PipelineBusy)
def _pipeline_busy(e):
    return jsonify({"error": str(e)}), 409


@app.route("/api/status")
def api_status():
    return jsonify({
        "engine_ready": gateway.ready,
        "theme": theme.mode,
        "editor_theme": theme.editor_theme,
        "active_surface": board.active_id,
    })


@app.route("/api/stages")
def api_stages():
    return jsonify([
        {
            "name": stage.short_name,
            "label": stage.label,
            "runs": [s.short_name for s in resolve(stage)],
        }
        for stage in StageId
    ])


@app.route("/api/compile/<stage>", methods=["POST"])
def api_compile(stage):
    data = request.get_json(silent=True) or {}
    try:
        posted = _posted_source(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    source = buffer.get_value() if posted is None else posted
    run, commands = orchestrator.run_and_route(board, stage, source)
    if posted is not None:
        buffer.set_value(posted)
    return jsonify(_run_to_dict(run, commands))


@app.route("/api/full", methods=["POST"])
def api_full():
    data = request.get_json(silent=True) or {}
    try:
        posted = _posted_source(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    user_input = data.get("user_input", "")
    if not isinstance(user_input, str):
        return jsonify({"error": "user_input must be a string"}), 400

    source = buffer.get_value() if posted is None else posted
    run, commands = orchestrator.run_full_and_route(board, source, user_input=user_input)
    if posted is not None:
        buffer.set_value(posted)
    return jsonify(_run_to_dict(run, commands))


@app.route("/api/surfaces")
def api_surfaces():
    return jsonify({"active": board.active_id, "surfaces": _surfaces_to_list()})


@app.route("/api/source", methods=["GET", "POST"])
def api_source():
    if request.method == "POST":
        data = request.get_json(silent=True) or {}
        if not isinstance(data.get("source"), str):
            return jsonify({"error": "Missing source"}), 400
        buffer.set_value(data["source"])
    return jsonify({"source": buffer.get_value()})


@app.route("/api/theme", methods=["POST"])
def api_theme():
    mode = theme.toggle()
    return jsonify({"theme": mode, "editor_theme": theme.editor_theme})


@app.route("/api/assistant", methods=["POST"])
def api_assistant():
    """Generate code from a typed prompt or a voice transcript."""
    data = request.get_json(silent=True) or {}
    prompt = data.get("prompt") or data.get("transcript") or ""
    if not isinstance(prompt, str) or not prompt.strip():
        return jsonify({"error": "Please describe the code you want."}), 400

    code = assistant.generate(prompt)
    return jsonify({"source": code})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    port = int(os.environ.get("PORT", 5001))
    print(f"stageview running at http://localhost:{port}")
    app.run(debug=False, port=port)
