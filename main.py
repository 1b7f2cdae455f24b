#!/usr/bin/env python3
"""stageview - drive a five-stage compile engine from the command line.

Usage:
    python main.py stages                                  # list stages and closures
    python main.py run codegen prog.c                      # lower -> optimize -> codegen
    python main.py run lexer                               # run on the sample source
    python main.py full prog.c --input "5 7"               # all stages, with program input
    python main.py assist "add two integers" --out add.c   # code assistant
"""

import argparse
import logging
import sys

from config.defaults import DEFAULTS
from core.errors import EngineLoadError, EngineNotReady, UnknownStage
from core.graph import resolve
from core.orchestrator import Orchestrator, format_stats
from core.router import SurfaceBoard
from core.stages import StageId
from engine.backends import build_loader
from engine.gateway import load_engine
from session.assistant import CodeAssistant
from session.editor import SourceBuffer


def _read_source(path):
    if not path:
        return DEFAULTS["sample_source"]
    if path == "-":
        return sys.stdin.read()
    with open(path) as f:
        return f.read()


def _start_engine(args):
    """Load the engine and block until it is ready (CLI runs are one-shot)."""
    loader = build_loader(args.engine_module, args.engine_command)
    gateway = load_engine(loader)
    gateway.wait_ready(timeout=DEFAULTS["engine_ready_timeout"])
    return gateway


def _print_run(run, commands, board):
    written = [c for c in commands if c.action == "set_content"]
    for command in written:
        print(f"=== {command.surface_id} ===")
        print(command.content.rstrip("\n"))
        print()

    print("--- stats ---")
    for result in run.results:
        print(f"  {format_stats(result)}")
    if run.total_ms is not None:
        print(f"  Total: {run.total_ms:.2f} ms")
    print(f"Active surface: {board.active_id}")


def cmd_stages(args):
    print("Available stages:")
    for stage in StageId:
        closure = " -> ".join(s.short_name for s in resolve(stage))
        print(f"  {stage.short_name:13s} {stage.label:13s} runs: {closure}")


def cmd_run(args):
    source = _read_source(args.file)
    orchestrator = Orchestrator(_start_engine(args))
    board = SurfaceBoard()
    run, commands = orchestrator.run_and_route(board, args.stage, source)
    _print_run(run, commands, board)
    return 0 if run.succeeded else 1


def cmd_full(args):
    source = _read_source(args.file)
    orchestrator = Orchestrator(_start_engine(args))
    board = SurfaceBoard()
    run, commands = orchestrator.run_full_and_route(board, source, user_input=args.input)
    _print_run(run, commands, board)
    return 0 if run.succeeded else 1


def cmd_assist(args):
    buffer = SourceBuffer()
    code = CodeAssistant(buffer).generate(args.prompt)
    if args.out:
        with open(args.out, "w") as f:
            f.write(code + "\n")
        print(f"Wrote {args.out}")
    else:
        print(code)
    return 0


def _add_engine_args(parser):
    parser.add_argument("--engine-module", help="Dotted path of a Python engine module")
    parser.add_argument("--engine-command", help="Engine executable (and args) to run per stage")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="stageview",
        description="Run compile stages through an external engine",
    )
    parser.add_argument("--verbose", action="store_true", help="Log each stage as it runs")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("stages", help="List stages and what each one runs")

    run_parser = subparsers.add_parser("run", help="Run one stage and its prerequisites")
    run_parser.add_argument("stage", help="lexer, ast, ir, optimized_ir or codegen")
    run_parser.add_argument("file", nargs="?", help="Source file ('-' for stdin, default: sample)")
    _add_engine_args(run_parser)

    full_parser = subparsers.add_parser("full", help="Run every stage and report total time")
    full_parser.add_argument("file", nargs="?", help="Source file ('-' for stdin, default: sample)")
    full_parser.add_argument("--input", default="", help="Program input delivered before codegen")
    _add_engine_args(full_parser)

    assist_parser = subparsers.add_parser("assist", help="Generate C code from a description")
    assist_parser.add_argument("prompt", help="What the code should do")
    assist_parser.add_argument("--out", help="Write the generated code to this file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    handlers = {
        "stages": cmd_stages,
        "run": cmd_run,
        "full": cmd_full,
        "assist": cmd_assist,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args) or 0
    except (EngineLoadError, EngineNotReady, UnknownStage, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
