"""Unit tests for artifact serialisation (nuxt_starter.writer).

Tests cover:
- package.json and nuxt.config.js contents
- parse_framework_config
- lock file creation
- overwrite behaviour and partial writes
- OS error classification
"""

from __future__ import annotations

import errno
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from nuxt_starter.builder import build_config
from nuxt_starter.config import BASE_DEV_DEPENDENCIES, ProjectConfig, StarterConfig
from nuxt_starter.writer import (
    ArtifactWriteError,
    classify_os_error,
    ensure_target,
    parse_framework_config,
    render_framework_config,
    render_manifest,
    write_artifacts,
    write_text,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def ready_settings(settings: StarterConfig) -> StarterConfig:
    settings.target_path.mkdir()
    return settings


@pytest.fixture
def full_config() -> ProjectConfig:
    return build_config(
        {
            "package_manager": "yarn",
            "css_framework": "tailwind",
            "css_preprocessor": "sass",
            "devtools": "yes",
        }
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRenderManifest:
    def test_valid_json_with_alias_keys(self):
        data = json.loads(render_manifest(ProjectConfig()))
        assert data["name"] == "nuxtapp"
        assert data["private"] is True
        assert data["devDependencies"] == BASE_DEV_DEPENDENCIES
        assert data["scripts"]["dev"] == "nuxt dev"

    def test_two_space_indent_and_newline(self):
        text = render_manifest(ProjectConfig())
        assert text.startswith('{\n  "name"')
        assert text.endswith("}\n")


class TestRenderFrameworkConfig:
    def test_empty_config(self):
        assert render_framework_config(ProjectConfig()) == "export default defineNuxtConfig({})\n"

    def test_parses_back(self, full_config: ProjectConfig):
        text = render_framework_config(full_config)
        assert text.startswith("export default defineNuxtConfig(")
        assert parse_framework_config(text) == full_config.framework_config

    def test_json_literals(self, full_config: ProjectConfig):
        text = render_framework_config(full_config)
        assert '"enabled": true' in text

    def test_parse_rejects_other_modules(self):
        with pytest.raises(ValueError):
            parse_framework_config("module.exports = {}")


# ---------------------------------------------------------------------------
# write_artifacts
# ---------------------------------------------------------------------------


class TestWriteArtifacts:
    def test_writes_manifest_and_config(self, ready_settings: StarterConfig):
        written = write_artifacts(ready_settings, ProjectConfig())
        assert written == [ready_settings.manifest_path, ready_settings.framework_config_path]
        manifest = json.loads(ready_settings.manifest_path.read_text(encoding="utf-8"))
        assert manifest["devDependencies"] == BASE_DEV_DEPENDENCIES
        config_text = ready_settings.framework_config_path.read_text(encoding="utf-8")
        assert parse_framework_config(config_text) == {}

    def test_no_lock_file_for_npm(self, ready_settings: StarterConfig):
        write_artifacts(ready_settings, build_config({"package_manager": "npm"}))
        assert not (ready_settings.target_path / "yarn.lock").exists()

    def test_empty_yarn_lock(self, ready_settings: StarterConfig, full_config: ProjectConfig):
        written = write_artifacts(ready_settings, full_config)
        lock = ready_settings.target_path / "yarn.lock"
        assert lock in written
        assert lock.read_text(encoding="utf-8") == ""

    def test_overwrites_existing(self, ready_settings: StarterConfig):
        ready_settings.manifest_path.write_text("stale", encoding="utf-8")
        write_artifacts(ready_settings, ProjectConfig())
        assert json.loads(ready_settings.manifest_path.read_text(encoding="utf-8"))["name"] == "nuxtapp"

    def test_first_file_kept_when_second_fails(self, ready_settings: StarterConfig):
        real_write = Path.write_text

        def flaky(self, *args, **kwargs):
            if self.name == "nuxt.config.js":
                raise OSError(errno.ENOSPC, "No space left on device")
            return real_write(self, *args, **kwargs)

        with patch.object(Path, "write_text", flaky):
            with pytest.raises(ArtifactWriteError) as excinfo:
                write_artifacts(ready_settings, ProjectConfig())

        assert excinfo.value.reason == "disk-full"
        assert ready_settings.manifest_path.exists()
        assert not ready_settings.framework_config_path.exists()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestClassifyOsError:
    def test_permission(self):
        assert classify_os_error(PermissionError(errno.EACCES, "denied")) == "permission"
        assert classify_os_error(OSError(errno.EPERM, "not permitted")) == "permission"

    def test_disk_full(self):
        assert classify_os_error(OSError(errno.ENOSPC, "full")) == "disk-full"

    def test_path_too_long(self):
        assert classify_os_error(OSError(errno.ENAMETOOLONG, "long")) == "path-too-long"

    def test_other(self):
        assert classify_os_error(OSError(errno.EIO, "io")) == "io"


class TestWriteErrors:
    def test_write_text_wraps_permission_error(self, tmp_path: Path):
        target = tmp_path / "package.json"
        with patch.object(Path, "write_text", side_effect=PermissionError(errno.EACCES, "denied")):
            with pytest.raises(ArtifactWriteError, match="permission denied") as excinfo:
                write_text(target, "{}")
        assert excinfo.value.path == target
        assert isinstance(excinfo.value.__cause__, PermissionError)

    def test_ensure_target_creates_parents(self, tmp_path: Path):
        target = tmp_path / "a" / "b"
        assert ensure_target(target) == target
        assert target.is_dir()

    def test_ensure_target_existing_ok(self, tmp_path: Path):
        assert ensure_target(tmp_path) == tmp_path

    def test_ensure_target_over_file(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(ArtifactWriteError):
            ensure_target(blocker / "child")

    def test_message_for_unknown_reason_uses_detail(self, tmp_path: Path):
        err = ArtifactWriteError(tmp_path, "io", "Input/output error")
        assert str(err).endswith("Input/output error")
