"""Scaffolding session.

Drives one run of the tool from confirmation to installed dependencies:

1. CONFIRM   -- ask whether to install into the target directory.
2. PREPARE   -- create the directory and check that it is empty.
3. CONFIGURE -- ask the configuration questions and fold the answers.
4. WRITE     -- write ``package.json``, ``nuxt.config.js`` and any lock file.
5. INSTALL   -- run the package manager and print the next steps.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import BinaryIO

from .builder import build_config
from .config import DEFAULT_PROJECT_NAME, Manifest, ProjectConfig, StarterConfig
from .installer import InstallError, display_command, print_next_steps, run_install
from .prompts import (
    CONFIGURATION_QUESTIONS,
    CONFIRM,
    PROJECT_NAME,
    Prompter,
    confirm_prompt,
    is_affirmative,
)
from .utils import StarterError, log, resolve_target, sanitize_name
from .writer import ArtifactWriteError, classify_os_error, ensure_target, write_artifacts

# Entries that do not count against the empty-directory check.
IGNORED_ENTRIES = frozenset({".git"})


class Outcome(str, Enum):
    """How a session ended without an error."""

    DECLINED = "declined"
    INSTALLED = "installed"


class PreconditionError(StarterError):
    """Raised when the target directory is not empty and force is off."""

    hint = "If you want to force the installation, use the --force or -f flag"

    def __init__(self, path: Path, entries: list[str]) -> None:
        self.path = path
        self.entries = entries
        super().__init__("The directory is not empty.")


def ask_target(prompter: Prompter, cwd: Path | None = None) -> Path:
    """Ask for a project name and return the directory it maps to."""
    name = prompter.answer(PROJECT_NAME)
    return resolve_target(name, cwd)


def directory_entries(path: Path) -> list[str]:
    """Names in *path* that make it count as non-empty."""
    try:
        names = sorted(entry.name for entry in path.iterdir())
    except OSError as exc:
        raise ArtifactWriteError(path, classify_os_error(exc), exc.strerror or str(exc)) from exc
    return [name for name in names if name not in IGNORED_ENTRIES]


class StarterSession:
    """One interactive scaffolding run.

    Attributes:
        settings: Target path and flags for this run.
        prompter: Source of answers.
        answers: Configuration answers in the order they were given.
        project: The final configuration, once every question is answered.
        written: Artifact paths written to disk.
    """

    def __init__(
        self,
        settings: StarterConfig,
        prompter: Prompter | None = None,
        output: BinaryIO | None = None,
    ) -> None:
        self.settings = settings
        self.prompter = prompter if prompter is not None else Prompter()
        self.output = output
        self.answers: dict[str, str] = {}
        self.project: ProjectConfig | None = None
        self.written: list[Path] = []

    async def run(self) -> Outcome:
        """Run every step.

        Returns:
            ``Outcome.DECLINED`` if the user said no at the confirmation,
            otherwise ``Outcome.INSTALLED``.

        Raises:
            PreconditionError: The target is not empty and force is off.
            ArtifactWriteError: The directory or a file could not be written.
            InstallError: The package manager is missing or failed.
            PromptClosedError: Input ended before all questions were answered.
        """
        if not self.confirm():
            log("[redBright Aborting...]")
            return Outcome.DECLINED

        self.prepare()
        self.project = self.configure()
        self.written = write_artifacts(self.settings, self.project)
        await self.install(self.project.package_manager)
        return Outcome.INSTALLED

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def confirm(self) -> bool:
        answer = self.prompter.answer(CONFIRM, confirm_prompt(self.settings.display_path))
        return is_affirmative(answer)

    def prepare(self) -> None:
        target = ensure_target(self.settings.target_path)
        entries = directory_entries(target)
        if entries and not self.settings.force:
            raise PreconditionError(target, entries)

    def initial_config(self) -> ProjectConfig:
        name = sanitize_name(self.settings.target_path.name) or DEFAULT_PROJECT_NAME
        return ProjectConfig(manifest=Manifest(name=name))

    def configure(self) -> ProjectConfig:
        for question in CONFIGURATION_QUESTIONS:
            self.answers[question.key] = self.prompter.answer(question)
        return build_config(self.answers, self.initial_config())

    async def install(self, manager: str) -> None:
        log("\n[yellow Installing dependencies, This may take a while.]")
        log(f"\n[whiteBright > {display_command(manager)}]")

        code = await run_install(manager, self.settings.target_path, self.output)
        if code != 0:
            raise InstallError("Failed to install dependencies.", exit_code=code)

        print_next_steps(manager)
