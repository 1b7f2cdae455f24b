"""Static stage graph: required predecessors and input wiring per stage."""

from core.stages import StageId, parse_stage

# Tokenize, Parse and LowerIR each re-derive their output from raw source.
# Only OptimizeIR and Generate chain off another stage's output.
REQUIRES = {
    StageId.TOKENIZE: [],
    StageId.PARSE: [],
    StageId.LOWER_IR: [],
    StageId.OPTIMIZE_IR: [StageId.LOWER_IR],
    StageId.GENERATE: [StageId.LOWER_IR, StageId.OPTIMIZE_IR],
}

# Stage whose output is fed to the key stage; None means raw source.
INPUT_FROM = {
    StageId.TOKENIZE: None,
    StageId.PARSE: None,
    StageId.LOWER_IR: None,
    StageId.OPTIMIZE_IR: StageId.LOWER_IR,
    StageId.GENERATE: StageId.OPTIMIZE_IR,
}

FULL_PIPELINE = sorted(StageId)


def resolve(stage):
    """Return the ordered closure needed to satisfy a request for stage.

    The list holds every transitive predecessor once, in ascending stage
    order, and always ends with the requested stage.
    """
    stage = parse_stage(stage)
    seen = set()
    pending = [stage]
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        pending.extend(REQUIRES[current])
    return sorted(seen)


def input_source(stage):
    """Return the stage feeding stage's input, or None for raw source."""
    return INPUT_FROM[parse_stage(stage)]
