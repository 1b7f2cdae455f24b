"""Stage output classification."""

from config.defaults import DEFAULTS
from core.stages import StageId


def stage_succeeded(stage, output_text):
    """Classify a stage's text output as success or failure.

    Any stage fails if its output mentions "error" in any case. Codegen is
    stricter: it also has to report an execution result to count as a pass.
    """
    text = (output_text or "").lower()
    if DEFAULTS["failure_marker"].lower() in text:
        return False
    if stage == StageId.GENERATE:
        return DEFAULTS["success_marker"].lower() in text
    return True
