"""
Bridge to the ``wasm-tools`` CLI.

The WIT text of a component is printed by ``wasm-tools component wit``;
this module runs it as a blocking subprocess and hands back its stdout.
There is no timeout: a hung tool hangs the command.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from witdocs.errors import SubprocessError, ToolNotFoundError
from witdocs.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WASM_TOOLS = "wasm-tools"


def find_wasm_tools(executable: str = DEFAULT_WASM_TOOLS) -> str:
    """Locate the wasm-tools binary on PATH (or at an explicit path)."""
    found = shutil.which(executable)
    if found is None:
        raise ToolNotFoundError(
            f"{executable!r} not found on PATH. Install it with:\n"
            "  cargo install wasm-tools"
        ).with_context(command=executable, step="render-wit")
    return found


def component_wit(component: Path, executable: str = DEFAULT_WASM_TOOLS) -> str:
    """Return the WIT text of ``component`` as printed by wasm-tools.

    Raises:
        ToolNotFoundError: the executable cannot be found
        SubprocessError: the tool exits non-zero or prints non-UTF-8
    """
    tool = find_wasm_tools(executable)
    cmd = [tool, "component", "wit", str(component)]
    command_line = " ".join(cmd)
    logger.debug("wasm_tools.run", command=command_line)

    try:
        proc = subprocess.run(cmd, capture_output=True, check=False)
    except OSError as e:
        raise SubprocessError(f"failed to start {executable}", cause=e).with_context(
            command=command_line, path=str(component), step="render-wit"
        ) from e

    stderr = proc.stderr.decode("utf-8", errors="replace").strip()
    if proc.returncode != 0:
        raise SubprocessError(
            f"wasm-tools component wit failed: {stderr}", stderr=stderr
        ).with_context(
            command=command_line,
            returncode=proc.returncode,
            path=str(component),
            step="render-wit",
        )

    try:
        text = proc.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SubprocessError("wasm-tools output is not valid UTF-8", cause=e).with_context(
            command=command_line, path=str(component), step="render-wit"
        ) from e

    logger.debug("wasm_tools.done", lines=text.count("\n"))
    return text


__all__ = ["DEFAULT_WASM_TOOLS", "find_wasm_tools", "component_wit"]
