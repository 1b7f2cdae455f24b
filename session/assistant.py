"""Natural-language code assistant that fills the source buffer."""

import logging

import anthropic

from config.defaults import DEFAULTS
from utils.llm import call_llm, extract_code

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant who writes C code."


def build_prompt(instruction):
    return (
        "Write a valid C function based on the following instruction:\n"
        f"\"{instruction}\"\n"
        "Only provide code."
    )


class CodeAssistant:
    """Turns an instruction (typed or a voice transcript) into source code.

    Failures talking to the model never propagate: the buffer receives a
    placeholder comment instead.
    """

    def __init__(self, buffer):
        self.buffer = buffer

    def generate(self, instruction):
        instruction = (instruction or "").strip()
        if not instruction:
            raise ValueError("Please describe the code you want.")

        try:
            reply = call_llm(SYSTEM_PROMPT, build_prompt(instruction))
        except (anthropic.APIError, RuntimeError) as e:
            logger.warning("Code generation failed: %s", e)
            reply = ""

        code = extract_code(reply) or DEFAULTS["assistant_placeholder"]
        self.buffer.set_value(code)
        return code
