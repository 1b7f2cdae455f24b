"""Exception taxonomy for the pipeline.

Only programmer/timing errors are raised. A stage whose output text looks
like a failure is an ordinary StageResult with succeeded=False.
"""


class StageviewError(Exception):
    """Base class for all errors raised by stageview."""


class EngineNotReady(StageviewError):
    """The engine was called before asynchronous initialization completed."""

    def __init__(self, message="Engine is not ready; wait for initialization to finish"):
        super().__init__(message)


class EngineLoadError(StageviewError):
    """The configured engine backend could not be loaded."""


class UnknownStage(StageviewError, ValueError):
    """A request referenced a stage that does not exist."""

    def __init__(self, stage):
        self.stage = stage
        super().__init__(f"Unknown stage: {stage!r}")


class UnknownSurface(StageviewError, LookupError):
    """An output surface id that is not in the declared set."""

    def __init__(self, surface_id):
        self.surface_id = surface_id
        super().__init__(f"Unknown output surface: {surface_id!r}")


class PipelineBusy(StageviewError):
    """A pipeline run was requested while another one is still in flight."""

    def __init__(self, message="A pipeline run is already in progress"):
        super().__init__(message)
