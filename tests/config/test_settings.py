# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Tests for mentat.config.settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mentat.config import BUNDLED_CATALOG_DIR, Settings, clear_settings_cache, get_settings

pytestmark = pytest.mark.unit


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MENTAT_SKILL_CACHE_DIR", raising=False)
        settings = Settings(_env_file=None)
        assert settings.bundled_catalog_dir == BUNDLED_CATALOG_DIR
        assert settings.project_catalog_dirname == "mentat-catalog"
        assert settings.skill_cache_dir == Path.home() / ".mentat" / "skills"
        assert settings.skill_cache_ttl_seconds == 86400
        assert settings.profile_cache_ttl_seconds == 60
        assert settings.fetch_timeout_seconds is None
        assert settings.worker_registry_path is None

    def test_bundled_catalog_ships_with_package(self) -> None:
        assert BUNDLED_CATALOG_DIR.is_dir()
        assert any(BUNDLED_CATALOG_DIR.rglob("*.yaml"))

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MENTAT_FETCH_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("MENTAT_PROJECT_CATALOG_DIRNAME", ".mentat")
        settings = Settings(_env_file=None)
        assert settings.fetch_timeout_seconds == 2.5
        assert settings.project_catalog_dir(Path("/ws")) == Path("/ws/.mentat")

    def test_invalid_timeout_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MENTAT_FETCH_TIMEOUT_SECONDS", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_singleton_and_reset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        assert get_settings() is first
        monkeypatch.setenv("MENTAT_MAX_CONTEXT_FILES", "3")
        clear_settings_cache()
        assert get_settings().max_context_files == 3
