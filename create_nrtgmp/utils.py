"""Shared utility functions for create-nrtgmp-app.

Provides async command execution, JSON I/O, random token generation and
Rich-based output helpers.  Every stage of the scaffolding workflow prints
through the single module-level ``console``.
"""

from __future__ import annotations

import asyncio
import json
import secrets
import string
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

TOKEN_ALPHABET = string.ascii_lowercase + string.digits


class CommandError(Exception):
    """Raised when an external command cannot be run or exits non-zero."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    *args: str,
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> tuple[str, str]:
    """Run an external command asynchronously and return ``(stdout, stderr)``.

    Args:
        *args: Program followed by its arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` or ``0`` waits indefinitely.

    Raises:
        CommandError: If the program is missing, times out, or exits non-zero.
    """
    cmd_str = " ".join(args)

    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise CommandError(
            f"Command not found: {args[0]}",
            command=cmd_str,
        ) from exc
    except OSError as exc:
        raise CommandError(
            f"Cannot run {args[0]}: {exc}",
            command=cmd_str,
        ) from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout or None
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise CommandError(
            f"Command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
        )

    stdout = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise CommandError(
            f"Command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


async def run_git(
    *args: str,
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> tuple[str, str]:
    """Run ``git`` with *args*; see :func:`run_command`."""
    return await run_command("git", *args, cwd=cwd, timeout=timeout)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def generate_token(length: int = 40, alphabet: str = TOKEN_ALPHABET) -> str:
    """Return *length* characters drawn uniformly from *alphabet*.

    Uses :mod:`secrets`, so the result is suitable for session secrets.

    Examples::

        generate_token(8)          -> "k3v9x0qa"
        generate_token(4, "ab")    -> "abba"
    """
    if length < 1:
        raise ValueError(f"Token length must be positive, got {length}")
    if not alphabet:
        raise ValueError("Token alphabet must not be empty")
    return "".join(secrets.choice(alphabet) for _ in range(length))


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file whose top level is an object.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top level is not an object.
    """
    file_path = Path(path)
    data = json.loads(file_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {file_path}")
    return data


async def save_json(data: dict[str, Any], path: str | Path) -> None:
    """Save data as JSON indented with two spaces, like ``npm`` does.

    The write is performed in a worker thread to keep the event loop free.
    """
    file_path = Path(path)
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    await asyncio.to_thread(file_path.write_text, content, "utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
