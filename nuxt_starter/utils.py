"""Shared utility functions for nuxt-starter.

Provides the shared Rich console, bracket-marker rendering for console
messages, async streaming command execution, and small name/path helpers.
"""

from __future__ import annotations

import asyncio
import os
import re
from collections.abc import Callable
from pathlib import Path

from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style

console = Console(highlight=False)


class StarterError(Exception):
    """Base class for every error nuxt-starter reports to the user."""


# ---------------------------------------------------------------------------
# Bracket-marker rendering
# ---------------------------------------------------------------------------

MARKER_PATTERN = re.compile(r"\[([a-zA-Z]+)\s([^\]]+)\]")

STYLE_TABLE: dict[str, str] = {
    "bold": "bold",
    "dim": "dim",
    "italic": "italic",
    "underline": "underline",
    "black": "black",
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "blue": "blue",
    "magenta": "magenta",
    "cyan": "cyan",
    "white": "white",
    "gray": "bright_black",
    "grey": "bright_black",
    "blackBright": "bright_black",
    "redBright": "bright_red",
    "greenBright": "bright_green",
    "yellowBright": "bright_yellow",
    "blueBright": "bright_blue",
    "magentaBright": "bright_magenta",
    "cyanBright": "bright_cyan",
    "whiteBright": "bright_white",
}


def render_markup(text: str, color: bool = True) -> str:
    """Resolve ``[style payload]`` markers into styled text.

    Each marker whose style name is in ``STYLE_TABLE`` is replaced by its
    payload wrapped in the matching ANSI sequence (or by the bare payload
    when *color* is ``False``).  Markers naming an unknown style are left
    exactly as written, and everything outside markers, including ANSI
    sequences rendered earlier, is passed through untouched.

    Examples::

        render_markup("[green hi] plain", color=False) -> "hi plain"
        render_markup("[nope hi]") -> "[nope hi]"
    """

    def _replace(match: re.Match[str]) -> str:
        name, payload = match.group(1), match.group(2)
        style = STYLE_TABLE.get(name)
        if style is None:
            return match.group(0)
        if not color:
            return payload
        return Style.parse(style).render(payload, color_system=ColorSystem.STANDARD)

    return MARKER_PATTERN.sub(_replace, text)


def color_enabled() -> bool:
    """Return ``True`` if the shared console should emit styles."""
    return console.color_system is not None and not console.no_color


def set_color(enabled: bool) -> None:
    """Force styled output off (or back on) for the shared console."""
    console.no_color = not enabled


def log(*parts: str, end: str = "\n") -> None:
    """Render each part's markers and write them space-joined to the console."""
    color = color_enabled()
    console.out(*(render_markup(part, color=color) for part in parts), end=end)


def print_success(message: str) -> None:
    """Print a green success message."""
    log(f"[greenBright {message}]")


def print_error(message: str) -> None:
    """Print a red error message."""
    log(f"[redBright {message}]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    log(f"[yellow {message}]")


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def stream_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    on_chunk: Callable[[bytes], None] | None = None,
    chunk_size: int = 4096,
    env: dict[str, str] | None = None,
) -> int:
    """Run a command, forwarding stdout chunks as they arrive.

    Every chunk the child writes to stdout is handed to *on_chunk* as soon
    as it is read, before the next read is awaited.  Stderr is inherited
    from this process.  No timeout is applied: the call returns only once
    the child has closed stdout and exited.

    Args:
        cmd: Executable and arguments.
        cwd: Working directory for the child process.
        on_chunk: Callback receiving raw stdout bytes.
        chunk_size: Maximum bytes read per chunk.
        env: Optional extra environment variables merged over ``os.environ``.

    Returns:
        The child's exit code.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=None,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    assert process.stdout is not None  # guaranteed by PIPE

    while True:
        chunk = await process.stdout.read(chunk_size)
        if not chunk:
            # EOF: the child has closed stdout.
            break
        if on_chunk is not None:
            on_chunk(chunk)

    return await process.wait()


# ---------------------------------------------------------------------------
# Name / path helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert a directory name to a valid npm package name.

    * Lowercases the input.
    * Replaces characters other than letters, digits, ``-``, ``_`` and ``.``
      with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens,
      dots and underscores.

    Examples::

        sanitize_name("My Nuxt App") -> "my-nuxt-app"
        sanitize_name("  Shop (v2)  ") -> "shop-v2"
    """
    result = re.sub(r"[^a-z0-9._-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-._")


def resolve_target(raw: str, cwd: Path | None = None) -> Path:
    """Turn a user-supplied path into an absolute one.

    ``~`` is expanded and relative paths are joined to *cwd* (default: the
    current working directory).  ``..`` segments are collapsed.
    """
    base = cwd if cwd is not None else Path.cwd()
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base / path
    return Path(os.path.normpath(path))
