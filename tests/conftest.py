# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Shared fixtures for the mentat test-suite.

Every test gets:
- a fresh settings singleton whose skill cache lives under ``tmp_path``
- an empty project-profile cache

Workspaces are built on disk with the ``make_workspace`` factory.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from mentat.config import clear_settings_cache
from mentat.profile import clear_detect_cache

WorkspaceFactory = Callable[[dict[str, str]], Path]


def package_json(
    dependencies: dict[str, str] | None = None,
    dev_dependencies: dict[str, str] | None = None,
) -> str:
    """Render a minimal package.json manifest."""
    manifest: dict[str, object] = {"name": "fixture", "version": "1.0.0"}
    if dependencies is not None:
        manifest["dependencies"] = dependencies
    if dev_dependencies is not None:
        manifest["devDependencies"] = dev_dependencies
    return json.dumps(manifest, indent=2)


@pytest.fixture(autouse=True)
def _isolated_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("MENTAT_SKILL_CACHE_DIR", str(tmp_path / "skill-cache"))
    monkeypatch.delenv("MENTAT_WORKER_REGISTRY_PATH", raising=False)
    monkeypatch.delenv("MENTAT_PROFILE_CACHE_TTL_SECONDS", raising=False)
    clear_settings_cache()
    clear_detect_cache()
    yield
    clear_settings_cache()
    clear_detect_cache()


@pytest.fixture
def make_workspace(tmp_path: Path) -> WorkspaceFactory:
    """Return a factory that writes ``{relative_path: content}`` into a new workspace."""
    counter = {"n": 0}

    def _make(files: dict[str, str]) -> Path:
        counter["n"] += 1
        root = tmp_path / f"workspace-{counter['n']}"
        root.mkdir()
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture(name="package_json")
def package_json_fixture() -> Callable[..., str]:
    """Expose ``package_json`` to tests without importing conftest."""
    return package_json
