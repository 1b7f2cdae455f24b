"""Default pipeline settings."""

import os

DEFAULTS = {
    # Engine: a dotted module path wins over an executable command.
    "engine_module": os.environ.get("STAGEVIEW_ENGINE_MODULE", ""),
    "engine_command": os.environ.get("STAGEVIEW_ENGINE_COMMAND", ""),
    "engine_timeout": 30,
    "engine_ready_timeout": 10,
    "allowed_engines": ["c-stage-engine", "node", "wasmtime"],
    # Classification markers (matched case-insensitively)
    "failure_marker": "error",
    "success_marker": "execution result",
    # Session
    "sample_source": "// Sample C code\nint main() { return 42; }",
    # Code assistant
    "model": "claude-sonnet-4-5-20250929",
    "max_tokens": 512,
    "temperature": 0.3,
    "top_p": 0.95,
    "assistant_placeholder": "// Failed to generate.",
}
