"""Configuration reducers.

One pure function per question.  Each takes the current ``ProjectConfig``
and the user's answer, and returns a new ``ProjectConfig``; the input is
never mutated.  Reducers only add packages and settings, and an answer that
does not select a feature returns an unchanged copy.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from .config import (
    DEVTOOLS_PACKAGE,
    DEVTOOLS_VERSION,
    SASS_PACKAGES,
    TAILWIND_PACKAGE,
    TAILWIND_VERSION,
    ProjectConfig,
)
from .prompts import is_affirmative

Reducer = Callable[[ProjectConfig, str], ProjectConfig]

YARN_LOCK = "yarn.lock"


def _normalise(answer: str) -> str:
    return answer.strip().lower()


def apply_render_mode(config: ProjectConfig, answer: str) -> ProjectConfig:
    """Record the render mode; the generated files do not depend on it."""
    return config.model_copy(update={"render_mode": _normalise(answer)}, deep=True)


def apply_package_manager(config: ProjectConfig, answer: str) -> ProjectConfig:
    updated = config.model_copy(deep=True)
    if _normalise(answer) == "yarn":
        updated.package_manager = "yarn"
        updated.lock_file = YARN_LOCK
    return updated


def apply_css_framework(config: ProjectConfig, answer: str) -> ProjectConfig:
    updated = config.model_copy(deep=True)
    if _normalise(answer) == "tailwind":
        updated.manifest.dev_dependencies[TAILWIND_PACKAGE] = TAILWIND_VERSION
        modules = updated.framework_config.setdefault("modules", [])
        if TAILWIND_PACKAGE not in modules:
            modules.append(TAILWIND_PACKAGE)
    return updated


def apply_css_preprocessor(config: ProjectConfig, answer: str) -> ProjectConfig:
    updated = config.model_copy(deep=True)
    if _normalise(answer) == "sass":
        updated.manifest.dev_dependencies.update(SASS_PACKAGES)
    return updated


def apply_devtools(config: ProjectConfig, answer: str) -> ProjectConfig:
    updated = config.model_copy(deep=True)
    if is_affirmative(answer):
        updated.manifest.dev_dependencies[DEVTOOLS_PACKAGE] = DEVTOOLS_VERSION
        updated.framework_config["devtools"] = {"enabled": True}
    return updated


REDUCERS: dict[str, Reducer] = {
    "render_mode": apply_render_mode,
    "package_manager": apply_package_manager,
    "css_framework": apply_css_framework,
    "css_preprocessor": apply_css_preprocessor,
    "devtools": apply_devtools,
}


def build_config(
    answers: Mapping[str, str] | Iterable[tuple[str, str]],
    initial: ProjectConfig | None = None,
) -> ProjectConfig:
    """Fold answers, in order, through their reducers.

    Args:
        answers: ``{question_key: answer}`` or ``(key, answer)`` pairs.
            Keys without a reducer (e.g. ``confirm``) are skipped.
        initial: Starting configuration; a fresh ``ProjectConfig`` if omitted.

    Returns:
        The final configuration.
    """
    pairs = answers.items() if isinstance(answers, Mapping) else answers
    config = initial if initial is not None else ProjectConfig()
    for key, answer in pairs:
        reducer = REDUCERS.get(key)
        if reducer is not None:
            config = reducer(config, answer)
    return config
