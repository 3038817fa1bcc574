# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Mentat settings.

All values can be overridden through environment variables with the
``MENTAT_`` prefix or a ``.env`` file found at or above the package
directory:

    MENTAT_BUNDLED_CATALOG_DIR=/opt/mentat/catalog
    MENTAT_PROJECT_CATALOG_DIRNAME=mentat-catalog
    MENTAT_SKILL_CACHE_DIR=~/.mentat/skills
    MENTAT_SKILL_CACHE_TTL_SECONDS=86400
    MENTAT_PROFILE_CACHE_TTL_SECONDS=60
    MENTAT_WORKER_REGISTRY_PATH=/etc/mentat/workers.yaml

Remote fetches have no timeout unless ``MENTAT_FETCH_TIMEOUT_SECONDS`` is
set; a hung fetch blocks skill resolution.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent
BUNDLED_CATALOG_DIR = _PACKAGE_ROOT / "catalog" / "bundled"


def _find_and_load_env() -> None:
    """Load .env file from the nearest ancestor directory that has one."""
    from dotenv import load_dotenv

    current = Path(__file__).resolve().parent
    for _ in range(10):
        env_file = current / ".env"
        if env_file.exists():
            load_dotenv(env_file, override=False)
            return
        parent = current.parent
        if parent == current:
            break
        current = parent


_find_and_load_env()

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Runtime configuration for catalog loading, caching and matching."""

    model_config = SettingsConfigDict(
        env_prefix="MENTAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # CATALOG
    # =========================================================================
    bundled_catalog_dir: Path = Field(
        default=BUNDLED_CATALOG_DIR,
        description="Read-only catalog shipped with the package",
    )
    project_catalog_dirname: str = Field(
        default="mentat-catalog",
        description="Workspace-relative directory holding project-local entries",
    )

    # =========================================================================
    # REMOTE SKILL CONTENT
    # =========================================================================
    skill_cache_dir: Path = Field(
        default=Path.home() / ".mentat" / "skills",
        description="Root of the per-entry skill content cache",
    )
    skill_cache_ttl_seconds: int = Field(
        default=24 * 60 * 60,
        ge=0,
        description="Freshness window of cached skill content (file mtime based)",
    )
    raw_content_base_url: str = Field(
        default="https://raw.githubusercontent.com",
        description="Base URL used to expand github: source locators",
    )
    source_default_branch: str = Field(
        default="main",
        description="Branch used when expanding github: source locators",
    )
    source_default_filename: str = Field(
        default="SKILL.md",
        description="Content file appended to directory-style source locators",
    )
    fetch_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="HTTP timeout for skill fetches; None means wait indefinitely",
    )

    # =========================================================================
    # PROFILER
    # =========================================================================
    profile_cache_ttl_seconds: float = Field(
        default=60.0,
        ge=0,
        description="Lifetime of the single cached project profile snapshot",
    )

    # =========================================================================
    # WORKERS
    # =========================================================================
    worker_registry_path: Path | None = Field(
        default=None,
        description="YAML file listing worker records; unset disables worker matching",
    )

    # =========================================================================
    # SKILL CONTEXT GATHERING
    # =========================================================================
    max_context_files: int = Field(
        default=10,
        ge=0,
        le=200,
        description="Maximum workspace files attached to an executed skill",
    )
    max_context_file_chars: int = Field(
        default=8000,
        ge=100,
        le=200000,
        description="Per-file character cap for attached workspace files",
    )

    def project_catalog_dir(self, workspace: Path) -> Path:
        """Return the project-local catalog directory for ``workspace``."""
        return workspace / self.project_catalog_dirname


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get singleton settings instance.

    Note:
        For test isolation, use ``clear_settings_cache()`` to reset the
        singleton before each test that needs fresh settings.
    """
    instance = Settings()
    if instance.worker_registry_path is None:
        logger.debug(
            "Worker registry not configured (MENTAT_WORKER_REGISTRY_PATH unset); "
            "hire_worker will only consider catalog skills."
        )
    return instance


def clear_settings_cache() -> None:
    """Clear the settings singleton cache for test isolation."""
    get_settings.cache_clear()
