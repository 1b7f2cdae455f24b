"""Run models shared by the orchestrator, the router and the UI layers."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.stages import StageId


@dataclass(frozen=True)
class StageRequest:
    requested: StageId
    source_text: str    # snapshot taken when the user triggered the stage


@dataclass(frozen=True)
class StageResult:
    stage: StageId
    input_text: str     # exactly what was handed to the engine
    output_text: str    # opaque engine output
    elapsed_ms: float
    succeeded: bool


@dataclass
class PipelineRun:
    requested: StageId
    results: list[StageResult] = field(default_factory=list)
    total_ms: float | None = None       # only set by the full-pipeline path

    @property
    def stages(self) -> list[StageId]:
        return [r.stage for r in self.results]

    @property
    def terminal(self) -> StageResult | None:
        return self.results[-1] if self.results else None

    @property
    def succeeded(self) -> bool:
        terminal = self.terminal
        return terminal is not None and terminal.succeeded

    def result_for(self, stage: StageId) -> StageResult | None:
        for result in self.results:
            if result.stage == stage:
                return result
        return None
