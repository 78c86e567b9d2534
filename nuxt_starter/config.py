"""nuxt-starter configuration.

Typed models for the two kinds of state the tool carries: the run settings
resolved from the command line and environment (``StarterConfig``), and the
project configuration accumulated from the user's answers (``ProjectConfig``
with its ``Manifest``).  All models use Pydantic v2 so they are validated at
construction time and serialise without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Fixed package versions
# ---------------------------------------------------------------------------

BASE_DEV_DEPENDENCIES: dict[str, str] = {
    "@nuxt/devtools": "latest",
    "@types/node": "^18",
    "nuxt": "^3.6.1",
}

TAILWIND_PACKAGE = "@nuxtjs/tailwindcss"
TAILWIND_VERSION = "^4.0.0"

SASS_PACKAGES: dict[str, str] = {
    "sass": "^1.42.1",
    "sass-loader": "^12.1.0",
}

DEVTOOLS_PACKAGE = "@nuxtjs/devtools"
DEVTOOLS_VERSION = "^1.0.0"

DEFAULT_SCRIPTS: dict[str, str] = {
    "build": "nuxt build",
    "dev": "nuxt dev",
    "generate": "nuxt generate",
    "preview": "nuxt preview",
    "postinstall": "nuxt prepare",
}

DEFAULT_PROJECT_NAME = "nuxtapp"

PackageManager = Literal["npm", "yarn"]

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


# ---------------------------------------------------------------------------
# Run settings
# ---------------------------------------------------------------------------


class StarterConfig(BaseModel):
    """Settings for a single scaffolding run.

    ``target_path`` is absolute and fixed once the CLI has resolved it; the
    artifact locations below are derived from it.
    """

    target_path: Path
    force: bool = Field(default=False, description="Skip the empty-directory check")
    color: bool = Field(default=True, description="Emit ANSI styles in console output")

    @property
    def manifest_path(self) -> Path:
        """Path to the generated ``package.json``."""
        return self.target_path / "package.json"

    @property
    def framework_config_path(self) -> Path:
        """Path to the generated ``nuxt.config.js``."""
        return self.target_path / "nuxt.config.js"

    def lock_file_path(self, name: str) -> Path:
        """Path to a package-manager lock file inside the target."""
        return self.target_path / name

    @property
    def display_path(self) -> str:
        """Target path as shown to the user (forward slashes on Windows)."""
        if os.name == "nt":
            return self.target_path.as_posix()
        return str(self.target_path)

    @classmethod
    def from_env(cls, target_path: Path, **overrides: Any) -> "StarterConfig":
        """Build a ``StarterConfig`` from environment variables.

        Recognised variables (all optional):
            NUXT_STARTER_FORCE, NUXT_STARTER_NO_COLOR.

        Keyword *overrides* win over the environment; ``None`` values are
        ignored so unset CLI flags fall through.
        """
        values: dict[str, Any] = {
            "target_path": target_path,
            "force": _env_flag("NUXT_STARTER_FORCE"),
            "color": not _env_flag("NUXT_STARTER_NO_COLOR"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


class Manifest(BaseModel):
    """The ``package.json`` of the generated project."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default=DEFAULT_PROJECT_NAME)
    private: bool = Field(default=True)
    scripts: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SCRIPTS))
    dev_dependencies: dict[str, str] = Field(
        default_factory=lambda: dict(BASE_DEV_DEPENDENCIES),
        alias="devDependencies",
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Return the manifest with its on-disk key names."""
        return self.model_dump(by_alias=True)


class ProjectConfig(BaseModel):
    """Configuration accumulated while the user answers questions.

    Starts with the base manifest and an empty ``framework_config``; the
    builder reducers only ever add to it.
    """

    manifest: Manifest = Field(default_factory=Manifest)
    framework_config: dict[str, Any] = Field(default_factory=dict)
    package_manager: PackageManager = Field(default="npm")
    render_mode: str = Field(default="ssr")
    lock_file: str | None = Field(default=None)
