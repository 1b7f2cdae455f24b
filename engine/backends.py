"""Engine backends: the concrete things an EngineGateway can sit on.

The compile engine itself is external. A backend is any object exposing the
five stage exports (run_lexer, run_ast, run_ir, run_optimized_ir,
run_codegen) plus set_user_input, each taking and returning a string.
"""

import importlib
import logging
import os
import shlex

from config.defaults import DEFAULTS
from core.errors import EngineLoadError
from core.sandbox import run_in_sandbox
from core.stages import EXPORT_NAMES

logger = logging.getLogger(__name__)

REQUIRED_EXPORTS = list(EXPORT_NAMES.values()) + ["set_user_input"]

USER_INPUT_ENV = "STAGEVIEW_USER_INPUT"


class ModuleEngine:
    """Binds the engine exports of an importable Python module."""

    def __init__(self, module_path):
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise EngineLoadError(f"Cannot import engine module '{module_path}': {e}") from e

        missing = [name for name in REQUIRED_EXPORTS if not callable(getattr(module, name, None))]
        if missing:
            raise EngineLoadError(
                f"Engine module '{module_path}' is missing exports: {', '.join(missing)}"
            )
        self.module_path = module_path
        for name in REQUIRED_EXPORTS:
            setattr(self, name, getattr(module, name))
        logger.info("Bound engine module %s", module_path)


class CommandEngine:
    """Drives an engine executable, one process per stage call.

    Each call runs ``[*command, <export name>]`` with the input on stdin.
    Process-level failures are returned as text so callers see them the
    same way they see compile errors.
    """

    def __init__(self, command, timeout=None):
        if isinstance(command, str):
            command = shlex.split(command)
        if not command:
            raise EngineLoadError("Engine command is empty")
        executable = os.path.basename(command[0])
        if executable not in DEFAULTS["allowed_engines"]:
            raise EngineLoadError(
                f"Engine '{executable}' not in allowlist: {DEFAULTS['allowed_engines']}"
            )
        self.command = list(command)
        self.timeout = timeout
        self.user_input = ""

    def _call(self, export, text):
        stdout, stderr, rc = run_in_sandbox(
            self.command + [export],
            input_text=text,
            env={USER_INPUT_ENV: self.user_input},
            timeout=self.timeout,
        )
        if rc != 0 and not stdout.strip():
            detail = stderr.strip() or f"exit code {rc}"
            logger.warning("Engine command %s failed: %s", export, detail)
            return f"Engine error: {export} failed: {detail}"
        return stdout

    def run_lexer(self, text):
        return self._call("run_lexer", text)

    def run_ast(self, text):
        return self._call("run_ast", text)

    def run_ir(self, text):
        return self._call("run_ir", text)

    def run_optimized_ir(self, text):
        return self._call("run_optimized_ir", text)

    def run_codegen(self, text):
        return self._call("run_codegen", text)

    def set_user_input(self, text):
        self.user_input = text or ""


def build_loader(engine_module=None, engine_command=None):
    """Return a zero-arg callable that builds the configured backend.

    Explicit arguments override DEFAULTS; a module path wins over a command.
    """
    engine_module = engine_module or DEFAULTS["engine_module"]
    engine_command = engine_command or DEFAULTS["engine_command"]

    if engine_module:
        return lambda: ModuleEngine(engine_module)
    if engine_command:
        return lambda: CommandEngine(engine_command, timeout=DEFAULTS["engine_timeout"])
    raise EngineLoadError(
        "No engine configured. Set STAGEVIEW_ENGINE_MODULE or STAGEVIEW_ENGINE_COMMAND."
    )
