"""Pipeline orchestrator: resolve a stage closure, run it, time and classify each stage."""

import logging
import threading
import time
from contextlib import contextmanager

from core.errors import PipelineBusy
from core.graph import FULL_PIPELINE, input_source, resolve
from core.quality import stage_succeeded
from core.stages import StageId, parse_stage
from core.state import PipelineRun, StageRequest, StageResult

logger = logging.getLogger(__name__)


def format_stats(result):
    """One-line summary of a stage result, e.g. 'IR ✅ in 0.42 ms'."""
    mark = "✅" if result.succeeded else "❌"
    return f"{result.stage.label} {mark} in {result.elapsed_ms:.2f} ms"


def _snapshot(source_text):
    if source_text is None:
        return ""
    if not isinstance(source_text, str):
        raise TypeError(f"source_text must be a string, not {type(source_text).__name__}")
    return source_text


class Orchestrator:
    """Runs stage closures against an EngineGateway.

    Every run recomputes its whole closure from the source snapshot; nothing
    is cached between runs. Only one run may be in flight at a time; a
    second caller gets PipelineBusy instead of waiting.
    """

    def __init__(self, gateway, clock=time.perf_counter):
        self.gateway = gateway
        self.clock = clock
        self._run_lock = threading.Lock()

    @contextmanager
    def _single_run(self):
        if not self._run_lock.acquire(blocking=False):
            raise PipelineBusy()
        try:
            yield
        finally:
            self._run_lock.release()

    def _run_stage(self, stage, input_text):
        start = self.clock()
        output = self.gateway.invoke(stage, input_text)
        elapsed_ms = max(0.0, (self.clock() - start) * 1000.0)

        result = StageResult(
            stage=stage,
            input_text=input_text,
            output_text=output,
            elapsed_ms=elapsed_ms,
            succeeded=stage_succeeded(stage, output),
        )
        logger.info("%s", format_stats(result))
        return result

    def _execute(self, stages, request):
        run = PipelineRun(requested=request.requested)
        outputs = {}
        for stage in stages:
            feed = input_source(stage)
            input_text = request.source_text if feed is None else outputs[feed]
            result = self._run_stage(stage, input_text)
            outputs[stage] = result.output_text
            run.results.append(result)
            if stage == request.requested:
                break
        return run

    def _pipeline(self, requested, source_text):
        request = StageRequest(requested=requested, source_text=source_text)
        self.gateway.check_ready()
        return self._execute(resolve(request.requested), request)

    def _full_pipeline(self, source_text, user_input):
        request = StageRequest(requested=StageId.GENERATE, source_text=source_text)
        self.gateway.check_ready()
        self.gateway.set_user_input(user_input)

        start = self.clock()
        run = self._execute(FULL_PIPELINE, request)
        run.total_ms = max(0.0, (self.clock() - start) * 1000.0)
        logger.info("Total Compilation Time: %.2f ms", run.total_ms)
        return run

    def run_pipeline(self, requested, source_text):
        """Run the closure of one requested terminal stage.

        Raises UnknownStage for an undefined stage and EngineNotReady before
        initialization; in both cases no stage runs.
        """
        requested = parse_stage(requested)
        with self._single_run():
            return self._pipeline(requested, _snapshot(source_text))

    def run_full_pipeline(self, source_text, user_input=""):
        """Run all five stages, delivering user_input to the engine first.

        The returned run also carries total_ms, measured from the first
        stage's start to the last stage's end.
        """
        with self._single_run():
            return self._full_pipeline(_snapshot(source_text), user_input)

    def run_and_route(self, board, requested, source_text):
        """run_pipeline, then route the run to board before releasing the guard.

        Returns (run, commands).
        """
        requested = parse_stage(requested)
        with self._single_run():
            run = self._pipeline(requested, _snapshot(source_text))
            return run, board.route(run)

    def run_full_and_route(self, board, source_text, user_input=""):
        """run_full_pipeline, routed to board under the same guard."""
        with self._single_run():
            run = self._full_pipeline(_snapshot(source_text), user_input)
            return run, board.route(run)
