"""Shared utility functions for the ATSDC Stack CLI.

Provides async command execution, JSON I/O and Rich-based terminal output.
Styling goes through the stateless :func:`styled` helper so no module keeps
mutable colour tables around.
"""

from __future__ import annotations

import asyncio
import json
import os
from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------


class Style(str, Enum):
    """Named text styles, mapped to Rich markup."""
    PLAIN = ""
    BRIGHT = "bold"
    CYAN = "cyan"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    DIM = "dim"


def styled(text: str, style: Style = Style.PLAIN) -> str:
    """Return *text* wrapped in Rich markup for *style*.

    Examples::

        styled("done", Style.GREEN) -> "[green]done[/green]"
        styled("plain")             -> "plain"
    """
    if not style.value:
        return text
    return f"[{style.value}]{text}[/{style.value}]"


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------
#
# Messages are printed literally; any Rich markup inside them is escaped.


def print_step(step: int | str, message: str) -> None:
    """Print a numbered step line, e.g. ``[3] Copying template files...``."""
    label = escape(f"[{step}]")
    console.print(f"{styled(label, Style.CYAN)} {escape(message)}")


def print_success(message: str) -> None:
    """Print a green check-marked message."""
    console.print(f"{styled('✓', Style.GREEN)} {escape(message)}")


def print_warning(message: str, target: Console | None = None) -> None:
    """Print a yellow warning message on *target* (default: stdout console)."""
    (target or console).print(f"{styled('⚠', Style.YELLOW)} {escape(message)}")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"{styled('✗', Style.RED)} {escape(message)}")


def print_info(message: str) -> None:
    console.print(f"  {styled('ℹ', Style.YELLOW)} {escape(message)}")


def print_rule(title: str = "") -> None:
    """Print a full-width rule, optionally titled."""
    console.print(Rule(title, style=Style.BRIGHT.value))


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Executable followed by its arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits for as long as the child runs.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's terminal, which interactive installers need).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.

    Raises:
        FileNotFoundError: If the executable cannot be found.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=stdout_pipe,
        stderr=stderr_pipe,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON object from *path*.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not an object.
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data


def dump_json(data: dict[str, Any], path: str | Path, indent: int = 4) -> Path:
    """Write *data* as indented JSON with a trailing newline."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(
        json.dumps(data, indent=indent, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    return file_path
