"""Interactive questions and answer handling.

Each question is a small immutable record describing its label, the
choices shown to the user and the default.  ``Prompter`` writes a question's
prompt through the shared console, blocks until one line of input arrives,
and hands back the cleaned answer.  An empty answer selects the displayed
default.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO

from .utils import StarterError, log

# Raw line-editing characters a non-canonical terminal can leave in a line.
ERASE_CHARS: tuple[str, ...] = ("\b", "\x7f")

AFFIRMATIVE = frozenset({"y", "yes"})


class PromptClosedError(StarterError):
    """Raised when the input stream ends before a question is answered."""

    def __init__(self, question: str) -> None:
        self.question = question
        super().__init__(f"Input closed while waiting for an answer to '{question}'")


@dataclass(frozen=True)
class Question:
    """A single question asked during a session."""

    key: str
    label: str
    choices: tuple[str, ...] = field(default_factory=tuple)
    default: str = ""

    def options_hint(self) -> str:
        """Choices with the default in angle brackets, e.g. ``(<SSR>/SSG/SPA)``."""
        if not self.choices:
            return f"(<{self.default}>)" if self.default else ""
        shown = [f"<{c}>" if c == self.default else c for c in self.choices]
        return "(" + "/".join(shown) + ")"

    def prompt(self) -> str:
        hint = self.options_hint()
        sep = "" if self.label.endswith("?") else ":"
        return f"[yellow {self.label}{sep} ] {hint}".rstrip()


# ---------------------------------------------------------------------------
# The question table, in the order a session asks it
# ---------------------------------------------------------------------------

PROJECT_NAME = Question("project_name", "Project name", default="nuxt-app")
CONFIRM = Question("confirm", "Install Nuxt 3", ("Yes", "No"), default="No")
RENDER_MODE = Question("render_mode", "Render mode", ("SSR", "SSG", "SPA"), default="SSR")
PACKAGE_MANAGER = Question("package_manager", "Package manager", ("NPM", "Yarn"), default="NPM")
CSS_FRAMEWORK = Question("css_framework", "CSS framework", ("None", "Tailwind"), default="None")
CSS_PREPROCESSOR = Question(
    "css_preprocessor", "CSS preprocessor", ("None", "Sass"), default="None"
)
DEVTOOLS = Question("devtools", "Enable Nuxt Devtools?", ("Yes", "No"), default="Yes")

# Render mode is asked but has no effect on the generated files.
CONFIGURATION_QUESTIONS: tuple[Question, ...] = (
    RENDER_MODE,
    PACKAGE_MANAGER,
    CSS_FRAMEWORK,
    CSS_PREPROCESSOR,
    DEVTOOLS,
)


def confirm_prompt(display_path: str) -> str:
    """Prompt text for the install confirmation, naming the target."""
    return f"[yellow Install Nuxt 3 in ] [blueBright {display_path}]? {CONFIRM.options_hint()}"


# ---------------------------------------------------------------------------
# Answer helpers
# ---------------------------------------------------------------------------


def resolve_erasures(text: str) -> str:
    """Apply raw erase characters left in an answer.

    For each distinct erase character present, its first occurrence is
    removed together with the character right after it.  Text without
    erase characters is returned unchanged.

    Examples::

        resolve_erasures("npx\\bm") -> "npx"
        resolve_erasures("yarn") -> "yarn"
    """
    for char in ERASE_CHARS:
        index = text.find(char)
        if index == -1:
            continue
        text = text[:index] + text[index + 2 :]
    return text


def is_affirmative(answer: str) -> bool:
    """Return ``True`` for ``y`` / ``yes`` in any case."""
    return answer.strip().lower() in AFFIRMATIVE


# ---------------------------------------------------------------------------
# Prompter
# ---------------------------------------------------------------------------


class Prompter:
    """Asks questions on the console and reads answers line by line.

    Args:
        stream: Where answers are read from.  Defaults to ``sys.stdin`` at
            the time of each question.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.history: list[tuple[str, str]] = []

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    def ask(self, question: Question, prompt: str | None = None) -> str:
        """Show *prompt* (or the question's own) and return the trimmed answer.

        Blocks until a full line is available.

        Raises:
            PromptClosedError: If the stream is at end of input.
        """
        log(prompt if prompt is not None else question.prompt(), end=" ")
        line = self.stream.readline()
        if not line:
            raise PromptClosedError(question.label)
        answer = resolve_erasures(line.strip())
        self.history.append((question.key, answer))
        return answer

    def answer(self, question: Question, prompt: str | None = None) -> str:
        """Like :meth:`ask`, but an empty answer becomes the question's default."""
        return self.ask(question, prompt) or question.default
