"""Stage identifiers for the five-stage compile pipeline."""

from enum import IntEnum

from core.errors import UnknownStage


class StageId(IntEnum):
    TOKENIZE = 1
    PARSE = 2
    LOWER_IR = 3
    OPTIMIZE_IR = 4
    GENERATE = 5

    @property
    def short_name(self):
        return SHORT_NAMES[self]

    @property
    def label(self):
        return LABELS[self]

    @property
    def export_name(self):
        """Name of the engine function that implements this stage."""
        return EXPORT_NAMES[self]


SHORT_NAMES = {
    StageId.TOKENIZE: "lexer",
    StageId.PARSE: "ast",
    StageId.LOWER_IR: "ir",
    StageId.OPTIMIZE_IR: "optimized_ir",
    StageId.GENERATE: "codegen",
}

LABELS = {
    StageId.TOKENIZE: "Lexer",
    StageId.PARSE: "AST",
    StageId.LOWER_IR: "IR",
    StageId.OPTIMIZE_IR: "Optimized IR",
    StageId.GENERATE: "Codegen",
}

EXPORT_NAMES = {
    StageId.TOKENIZE: "run_lexer",
    StageId.PARSE: "run_ast",
    StageId.LOWER_IR: "run_ir",
    StageId.OPTIMIZE_IR: "run_optimized_ir",
    StageId.GENERATE: "run_codegen",
}

_BY_NAME = {}
for _stage in StageId:
    _BY_NAME[_stage.short_name] = _stage
    _BY_NAME[_stage.name.lower()] = _stage


def parse_stage(value):
    """Return the StageId for a StageId, short name or enum name.

    Raises UnknownStage for anything else, including bare integers.
    """
    if isinstance(value, StageId):
        return value
    if isinstance(value, str):
        stage = _BY_NAME.get(value.strip().lower().replace("-", "_"))
        if stage is not None:
            return stage
    raise UnknownStage(value)
