"""Subprocess runner for external engine executables, with allowlist and timeout."""

import os
import subprocess

from config.defaults import DEFAULTS


def run_in_sandbox(command, input_text="", env=None, timeout=None):
    """Run an engine command, feeding input_text on stdin.

    Args:
        command: Command as a list of strings, e.g. ["c-stage-engine", "run_ir"]
        input_text: Text written to the process's stdin.
        env: Extra environment variables merged over os.environ.
        timeout: Seconds before killing the process (default from config)

    Returns:
        (stdout, stderr, returncode) tuple

    Raises:
        ValueError: If command is empty or its executable is not in the allowlist.
    """
    if timeout is None:
        timeout = DEFAULTS["engine_timeout"]

    if not command or not isinstance(command, list):
        raise ValueError("Command must be a non-empty list of strings")

    executable = os.path.basename(command[0])
    allowed = DEFAULTS["allowed_engines"]
    if executable not in allowed:
        raise ValueError(
            f"Engine '{executable}' not in allowlist: {allowed}"
        )

    proc_env = dict(os.environ)
    if env:
        proc_env.update(env)

    try:
        result = subprocess.run(
            command,
            input=input_text,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=proc_env,
        )
        return result.stdout, result.stderr, result.returncode
    except subprocess.TimeoutExpired:
        return "", f"Command timed out after {timeout}s", -1
    except FileNotFoundError:
        return "", f"Command not found: {command[0]}", -1
