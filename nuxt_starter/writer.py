"""Artifact serialisation.

Writes the generated project's files into the target directory:

* ``package.json`` -- the manifest, as two-space indented JSON.
* ``nuxt.config.js`` -- the framework configuration wrapped in
  ``export default defineNuxtConfig(...)``; the argument is plain JSON, so
  the file is valid JavaScript and can be parsed back with
  :func:`parse_framework_config`.
* an empty lock file, when the chosen package manager needs one.

Files are written one after another and existing files are overwritten.
If a later write fails, earlier ones stay on disk.
"""

from __future__ import annotations

import errno
import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment

from .config import ProjectConfig, StarterConfig
from .utils import StarterError

FRAMEWORK_CONFIG_TEMPLATE = "export default defineNuxtConfig({{ config | tojson(indent=2) }})\n"

_DEFINE_CONFIG_RE = re.compile(r"defineNuxtConfig\((?P<body>.*)\)\s*;?\s*$", re.DOTALL)

_env = Environment(autoescape=False, keep_trailing_newline=True)


class ArtifactWriteError(StarterError):
    """Raised when a directory or file in the target cannot be written.

    ``reason`` is one of ``permission``, ``disk-full``, ``path-too-long``
    or ``io``.
    """

    def __init__(self, path: Path, reason: str, detail: str = "") -> None:
        self.path = path
        self.reason = reason
        messages = {
            "permission": "permission denied",
            "disk-full": "no space left on device",
            "path-too-long": "path is too long",
        }
        text = messages.get(reason, detail or "I/O error")
        super().__init__(f"Cannot write {path}: {text}")


def classify_os_error(exc: OSError) -> str:
    """Map an ``OSError`` to a short reason code."""
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return "permission"
    if exc.errno in (errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)):
        return "disk-full"
    if exc.errno == errno.ENAMETOOLONG:
        return "path-too-long"
    return "io"


def write_text(path: Path, content: str) -> Path:
    """Write *content* to *path*, turning OS errors into ``ArtifactWriteError``."""
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ArtifactWriteError(path, classify_os_error(exc), exc.strerror or str(exc)) from exc
    return path


def ensure_target(path: Path) -> Path:
    """Create the target directory (and parents) if it does not exist."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ArtifactWriteError(path, classify_os_error(exc), exc.strerror or str(exc)) from exc
    return path


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


def render_manifest(config: ProjectConfig) -> str:
    return json.dumps(config.manifest.to_json_dict(), indent=2) + "\n"


def render_framework_config(config: ProjectConfig) -> str:
    template = _env.from_string(FRAMEWORK_CONFIG_TEMPLATE)
    return template.render(config=config.framework_config)


def parse_framework_config(text: str) -> dict[str, Any]:
    """Recover the mapping from a rendered ``nuxt.config.js``.

    Raises:
        ValueError: If *text* is not a ``defineNuxtConfig(...)`` export.
    """
    match = _DEFINE_CONFIG_RE.search(text)
    if match is None:
        raise ValueError("Not a defineNuxtConfig(...) module")
    return json.loads(match.group("body"))


def write_artifacts(settings: StarterConfig, config: ProjectConfig) -> list[Path]:
    """Write every artifact for *config* into ``settings.target_path``.

    Returns:
        The paths written, in write order.

    Raises:
        ArtifactWriteError: On the first file that cannot be written.
    """
    written = [
        write_text(settings.manifest_path, render_manifest(config)),
        write_text(settings.framework_config_path, render_framework_config(config)),
    ]
    if config.lock_file:
        written.append(write_text(settings.lock_file_path(config.lock_file), ""))
    return written
