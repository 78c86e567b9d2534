"""Package-manager installation.

Builds the install command for the chosen package manager, runs it in the
generated project with its stdout mirrored live to ours, and prints the
follow-up commands once it succeeds.
"""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import BinaryIO

from .utils import StarterError, log, stream_command

INSTALL_ARGS: dict[str, list[str]] = {
    "npm": ["npm", "install"],
    "yarn": ["yarn", "install"],
}

NEXT_STEPS: tuple[tuple[str, str], ...] = (
    ("To start the development server, run", "dev"),
    ("To build for production, run", "build"),
    ("To preview the production build, run", "preview"),
    ("To generate static files, run", "generate"),
)


class InstallError(StarterError):
    """Raised when the package manager is missing or exits non-zero."""

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        self.exit_code = exit_code
        super().__init__(message)


def install_command(manager: str) -> list[str]:
    """Return the argv that installs dependencies with *manager*.

    The executable is resolved on ``PATH`` so wrappers such as ``npm.cmd``
    are found on Windows.

    Raises:
        InstallError: If *manager* is unknown or not installed.
    """
    args = INSTALL_ARGS.get(manager)
    if args is None:
        raise InstallError(f"Unsupported package manager: {manager}")
    executable = shutil.which(args[0])
    if executable is None:
        raise InstallError(f"'{args[0]}' was not found on PATH")
    return [executable, *args[1:]]


def display_command(manager: str) -> str:
    return " ".join(INSTALL_ARGS[manager])


async def run_install(
    manager: str,
    cwd: Path,
    output: BinaryIO | None = None,
) -> int:
    """Run the install in *cwd*, copying its stdout to *output* as it arrives.

    Args:
        manager: ``"npm"`` or ``"yarn"``.
        cwd: The generated project directory.
        output: Binary sink; defaults to this process's stdout.

    Returns:
        The package manager's exit code.
    """
    cmd = install_command(manager)
    sink = output if output is not None else sys.stdout.buffer

    def _forward(chunk: bytes) -> None:
        sink.write(chunk)
        sink.flush()

    sys.stdout.flush()
    return await stream_command(cmd, cwd=cwd, on_chunk=_forward)


def next_steps(manager: str) -> list[str]:
    """Follow-up hints, one per script, as console markup."""
    return [f"[yellow {label}] [blueBright {manager} run {script}]" for label, script in NEXT_STEPS]


def print_next_steps(manager: str) -> None:
    log("\n[greenBright Done!]\n")
    for hint in next_steps(manager):
        log(hint)
    log("\n[greenBright Happy coding!]")
