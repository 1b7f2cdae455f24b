"""Engine gateway: the only path from the orchestrator to the compile engine."""

import logging
import threading
from concurrent.futures import Future

from core.errors import EngineNotReady
from core.stages import StageId, parse_stage

logger = logging.getLogger(__name__)


def _as_text(value):
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class EngineGateway:
    """Five string -> string stage operations behind a readiness gate.

    The gateway wraps a Future that resolves to an engine backend once
    initialization finishes. Every call made before then raises
    EngineNotReady; nothing is queued.
    """

    def __init__(self, ready=None):
        self._ready = ready if ready is not None else Future()

    @classmethod
    def from_backend(cls, backend):
        """Build an already-ready gateway around an existing backend."""
        ready = Future()
        ready.set_result(backend)
        return cls(ready)

    @property
    def ready(self):
        return self._ready.done() and self._ready.exception() is None

    def wait_ready(self, timeout=None):
        """Block until initialization resolves. Returns the ready flag."""
        try:
            self._ready.result(timeout=timeout)
        except Exception:
            return False
        return True

    def _backend(self):
        if not self._ready.done():
            raise EngineNotReady()
        error = self._ready.exception()
        if error is not None:
            raise EngineNotReady(f"Engine failed to initialize: {error}") from error
        return self._ready.result()

    def check_ready(self):
        """Raise EngineNotReady unless the engine is initialized."""
        self._backend()

    def invoke(self, stage, text):
        stage = parse_stage(stage)
        backend = self._backend()
        return _as_text(getattr(backend, stage.export_name)(text))

    def run_lexer(self, text):
        return self.invoke(StageId.TOKENIZE, text)

    def run_ast(self, text):
        return self.invoke(StageId.PARSE, text)

    def run_ir(self, text):
        return self.invoke(StageId.LOWER_IR, text)

    def run_optimized_ir(self, text):
        return self.invoke(StageId.OPTIMIZE_IR, text)

    def run_codegen(self, text):
        return self.invoke(StageId.GENERATE, text)

    def set_user_input(self, text):
        """Deliver side-channel program input ahead of a full run."""
        self._backend().set_user_input(text or "")


def load_engine(loader):
    """Start engine initialization in the background and return its gateway.

    loader is a zero-arg callable returning a backend. The gateway rejects
    calls until it has returned.
    """
    ready = Future()

    def _init():
        try:
            backend = loader()
        except Exception as e:
            logger.error("Engine initialization failed: %s", e)
            ready.set_exception(e)
            return
        logger.info("Engine loaded")
        ready.set_result(backend)

    threading.Thread(target=_init, name="engine-init", daemon=True).start()
    return EngineGateway(ready)
