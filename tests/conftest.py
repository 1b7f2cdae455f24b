"""Shared fixtures: an in-process fake engine that behaves like the real one."""

import re

import pytest

from engine.gateway import EngineGateway


class FakeEngine:
    """Deterministic stand-in for the compile engine.

    Records every call as (export_name, input_text) so tests can check
    which stages ran and what each one was fed.
    """

    def __init__(self):
        self.calls = []
        self.user_input = None

    def run_lexer(self, text):
        self.calls.append(("run_lexer", text))
        return "".join(f'TOKEN(SYMBOL, "{t}")\n' for t in text.split())

    def run_ast(self, text):
        self.calls.append(("run_ast", text))
        if "main" not in text:
            return "ROOT\n\n--- Semantic Errors ---\nExpected function\n"
        return "ROOT\n  Function(main)\n\nSemantic analysis passed.\n"

    def run_ir(self, text):
        self.calls.append(("run_ir", text))
        match = re.search(r"return\s+(\d+)", text)
        if not match:
            return ""
        return f"define i32 @main() {{\n  ret i32 {match.group(1)}\n}}\n"

    def run_optimized_ir(self, text):
        self.calls.append(("run_optimized_ir", text))
        return "; Optimized IR\n" + text

    def run_codegen(self, text):
        self.calls.append(("run_codegen", text))
        match = re.search(r"ret i32 (\d+)", text)
        if not match:
            return "Execution error: no recognizable return."
        return f"Execution result: {match.group(1)}"

    def set_user_input(self, text):
        self.calls.append(("set_user_input", text))
        self.user_input = text

    @property
    def exports_called(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def gateway(fake_engine):
    return EngineGateway.from_backend(fake_engine)
