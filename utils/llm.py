"""Claude API client for the code assistant."""

import os
import re

import anthropic

from config.defaults import DEFAULTS


def get_client():
    """Return an Anthropic client. Raises if no API key is set."""
    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        raise RuntimeError(
            "ANTHROPIC_API_KEY environment variable is not set. "
            "Get a key at https://console.anthropic.com/ and run:\n"
            "  export ANTHROPIC_API_KEY='your-key-here'"
        )
    return anthropic.Anthropic(api_key=api_key)


def call_llm(system_prompt, user_message):
    """Call Claude once and return the text of the reply.

    Single attempt: callers decide what a failure means for them.
    """
    client = get_client()
    response = client.messages.create(
        model=DEFAULTS["model"],
        max_tokens=DEFAULTS["max_tokens"],
        temperature=DEFAULTS["temperature"],
        top_p=DEFAULTS["top_p"],
        system=system_prompt,
        messages=[{"role": "user", "content": user_message}],
    )
    return "".join(
        block.text for block in response.content if getattr(block, "type", "") == "text"
    )


_FENCE_RE = re.compile(r"```[^\n]*\n(.*?)```", re.DOTALL)


def extract_code(response):
    """Return the body of the first fenced code block, or the whole reply.

    Handles:
        ```c            (language tag)
        ```             (bare fence)
        plain text      (no fences at all)
    """
    if not response:
        return ""
    match = _FENCE_RE.search(response)
    code = match.group(1) if match else response
    return code.strip("\n")
