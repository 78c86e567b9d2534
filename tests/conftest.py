"""Shared pytest fixtures for the nuxt-starter test suite.

Provides reusable fixtures for:
- Temporary target directories and run settings
- Scripted answer streams for the prompter
- A stand-in package manager (a Python one-liner) for install tests
"""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from nuxt_starter.config import StarterConfig
from nuxt_starter.prompts import Prompter
from nuxt_starter.utils import console


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _plain_console():
    """Keep console output unstyled so tests can match plain text.

    Also undoes any ``--no-color`` a test switched on.
    """
    saved = console.no_color
    console.no_color = True
    yield
    console.no_color = saved


# ---------------------------------------------------------------------------
# Paths & settings
# ---------------------------------------------------------------------------

@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """A target path that does not exist yet (the session creates it)."""
    return tmp_path / "my-app"


@pytest.fixture
def settings(target_dir: Path) -> StarterConfig:
    """Run settings pointing at ``target_dir`` with force off."""
    return StarterConfig(target_path=target_dir)


# ---------------------------------------------------------------------------
# Scripted input
# ---------------------------------------------------------------------------

@pytest.fixture
def answers_stream():
    """Factory turning a list of answers into a line-oriented text stream.

    Usage:
        def test_x(answers_stream):
            stream = answers_stream(["y", "SSR", "npm"])
    """
    def factory(answers: list[str]) -> io.StringIO:
        return io.StringIO("".join(f"{a}\n" for a in answers))

    return factory


@pytest.fixture
def make_prompter(answers_stream):
    """Factory for a ``Prompter`` that reads the given answers in order."""
    def factory(answers: list[str]) -> Prompter:
        return Prompter(stream=answers_stream(answers))

    return factory


# ---------------------------------------------------------------------------
# Fake package manager
# ---------------------------------------------------------------------------

def fake_install_argv(stdout: str = "", returncode: int = 0) -> list[str]:
    """argv for a child that writes *stdout* in two chunks and exits."""
    half = len(stdout) // 2
    script = (
        "import sys\n"
        f"sys.stdout.write({stdout[:half]!r}); sys.stdout.flush()\n"
        f"sys.stdout.write({stdout[half:]!r}); sys.stdout.flush()\n"
        f"sys.exit({returncode})\n"
    )
    return [sys.executable, "-c", script]


@pytest.fixture
def fake_package_manager():
    """Patch ``install_command`` so installs run a Python one-liner.

    Returns a function that installs the patch and records the managers it
    was asked for.

    Usage:
        def test_install(fake_package_manager):
            calls = fake_package_manager(stdout="added 1 package\\n", returncode=0)
            ...
            assert calls == ["npm"]
    """
    patches = []

    def install(stdout: str = "", returncode: int = 0) -> list[str]:
        calls: list[str] = []

        def _command(manager: str) -> list[str]:
            calls.append(manager)
            return fake_install_argv(stdout, returncode)

        p = patch("nuxt_starter.installer.install_command", side_effect=_command)
        p.start()
        patches.append(p)
        return calls

    yield install

    for p in patches:
        p.stop()
