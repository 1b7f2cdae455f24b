"""Tests for core.sandbox."""

import sys
from unittest.mock import patch

import pytest

from config.defaults import DEFAULTS
from core.sandbox import run_in_sandbox

PYTHON = sys.executable


@pytest.fixture
def allow_python():
    allowed = DEFAULTS["allowed_engines"] + [PYTHON.rsplit("/", 1)[-1]]
    with patch.dict(DEFAULTS, {"allowed_engines": allowed}):
        yield


def test_stdin_is_passed(allow_python):
    stdout, stderr, rc = run_in_sandbox(
        [PYTHON, "-c", "import sys; print(sys.stdin.read().upper())"],
        input_text="ret i32 42",
    )
    assert rc == 0
    assert stdout.strip() == "RET I32 42"


def test_env_is_merged(allow_python):
    stdout, _, rc = run_in_sandbox(
        [PYTHON, "-c", "import os; print(os.environ['STAGEVIEW_USER_INPUT'])"],
        env={"STAGEVIEW_USER_INPUT": "5 7"},
    )
    assert rc == 0
    assert stdout.strip() == "5 7"


def test_disallowed_command():
    with pytest.raises(ValueError, match="not in allowlist"):
        run_in_sandbox(["rm", "-rf", "/"])


def test_disallowed_bash():
    with pytest.raises(ValueError, match="not in allowlist"):
        run_in_sandbox(["bash", "-c", "echo pwned"])


def test_empty_command():
    with pytest.raises(ValueError, match="non-empty list"):
        run_in_sandbox([])


def test_timeout(allow_python):
    stdout, stderr, rc = run_in_sandbox(
        [PYTHON, "-c", "import time; time.sleep(10)"],
        timeout=1,
    )
    assert rc == -1
    assert "timed out" in stderr.lower()


def test_command_not_found():
    with patch.dict(DEFAULTS, {"allowed_engines": ["nonexistent_engine_xyz"]}):
        stdout, stderr, rc = run_in_sandbox(["nonexistent_engine_xyz", "run_ir"])
    assert rc == -1
    assert "not found" in stderr.lower()
