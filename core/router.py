"""Presentation router: stage output -> named output surface, one surface active."""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import UnknownSurface
from core.stages import StageId, parse_stage

SURFACE_IDS = ("lexer", "ast", "ir", "codegen")

STAGE_SURFACE = {
    StageId.TOKENIZE: "lexer",
    StageId.PARSE: "ast",
    StageId.LOWER_IR: "ir",
    StageId.OPTIMIZE_IR: "ir",     # overwrites LowerIR on the shared surface
    StageId.GENERATE: "codegen",
}


@dataclass(frozen=True)
class OutputSurface:
    id: str
    content: str
    active: bool


@dataclass(frozen=True)
class SurfaceCommand:
    action: str         # "set_content" | "activate"
    surface_id: str
    content: str | None = None


def surface_for(stage) -> str:
    return STAGE_SURFACE[parse_stage(stage)]


class SurfaceBoard:
    """Session-wide output surfaces.

    Activation is a single ``active_id`` field rather than a flag on each
    surface, so at most one surface can ever be active.
    """

    def __init__(self):
        self._content = {}
        self.active_id = None
        self.reset()

    def reset(self):
        self._content = {sid: "" for sid in SURFACE_IDS}
        self.active_id = None

    def _check(self, surface_id):
        if surface_id not in self._content:
            raise UnknownSurface(surface_id)

    def set_content(self, surface_id, text):
        self._check(surface_id)
        self._content[surface_id] = text

    def activate(self, surface_id):
        self._check(surface_id)
        self.active_id = surface_id

    def content(self, surface_id) -> str:
        self._check(surface_id)
        return self._content[surface_id]

    @property
    def active(self) -> OutputSurface | None:
        if self.active_id is None:
            return None
        return OutputSurface(self.active_id, self._content[self.active_id], True)

    def surfaces(self) -> list[OutputSurface]:
        return [
            OutputSurface(sid, self._content[sid], sid == self.active_id)
            for sid in SURFACE_IDS
        ]

    def route(self, run) -> list[SurfaceCommand]:
        """Write every result of run to its surface, then activate the
        surface of the requested stage. Returns the applied commands."""
        commands = []
        for result in run.results:
            content = result.output_text
            if result.stage == StageId.GENERATE and run.total_ms is not None:
                content = f"{content}\nTotal Compilation Time: {run.total_ms:.2f} ms"
            commands.append(SurfaceCommand("set_content", surface_for(result.stage), content))
        commands.append(SurfaceCommand("activate", surface_for(run.requested)))

        for command in commands:
            if command.action == "set_content":
                self.set_content(command.surface_id, command.content)
            else:
                self.activate(command.surface_id)
        return commands
