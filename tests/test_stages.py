"""Tests for core.stages."""

import pytest

from core.errors import UnknownStage
from core.stages import StageId, parse_stage


def test_total_order():
    assert StageId.TOKENIZE < StageId.PARSE < StageId.LOWER_IR < StageId.OPTIMIZE_IR < StageId.GENERATE


def test_parse_short_names():
    assert parse_stage("lexer") is StageId.TOKENIZE
    assert parse_stage("ast") is StageId.PARSE
    assert parse_stage("ir") is StageId.LOWER_IR
    assert parse_stage("optimized_ir") is StageId.OPTIMIZE_IR
    assert parse_stage("codegen") is StageId.GENERATE


def test_parse_enum_names_case_insensitive():
    assert parse_stage("GENERATE") is StageId.GENERATE
    assert parse_stage("Lower_IR") is StageId.LOWER_IR
    assert parse_stage("optimized-ir") is StageId.OPTIMIZE_IR


def test_parse_passthrough():
    assert parse_stage(StageId.PARSE) is StageId.PARSE


@pytest.mark.parametrize("value", ["link", "", None, 3, "assemble"])
def test_unknown_stage(value):
    with pytest.raises(UnknownStage):
        parse_stage(value)


def test_unknown_stage_is_value_error():
    with pytest.raises(ValueError, match="Unknown stage"):
        parse_stage("bogus")


def test_labels_and_exports():
    assert StageId.OPTIMIZE_IR.label == "Optimized IR"
    assert StageId.GENERATE.export_name == "run_codegen"
    assert StageId.TOKENIZE.short_name == "lexer"
