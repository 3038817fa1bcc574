# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Catalog Library.

Merges the bundled catalog with an optional project-local catalog, filters
entries against a ``ProjectProfile`` and lazily resolves remote skill
content.

Merge order is explicit: the bundled collection is applied first and the
project collection second, so a project entry replaces a bundled entry with
the same id.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx

from mentat.catalog.loader import CatalogLoader
from mentat.catalog.models import CatalogEntry, EntryOrigin, EntryType
from mentat.catalog.source import SkillContentCache, source_to_url, strip_frontmatter
from mentat.config import Settings, get_settings
from mentat.profile.models import ProjectProfile

logger = logging.getLogger(__name__)


def matches_profile(entry: CatalogEntry, profile: ProjectProfile) -> bool:
    """Decide whether ``entry`` applies to ``profile``.

    - No detect rule: always applies.
    - Any ``exclude_files`` present in the project: never applies.
    - Neither ``files`` nor ``dependencies`` declared: applies.
    - Otherwise applies when any declared file is present or any declared
      dependency is declared by the project.
    """
    rule = entry.detect
    if rule is None:
        return True

    if any(f in profile.config_files for f in rule.exclude_files):
        return False

    if not rule.files and not rule.dependencies:
        return True

    return any(f in profile.config_files for f in rule.files) or any(
        d in profile.dependencies for d in rule.dependencies
    )


class CatalogLibrary:
    """Access point for catalog entries of one workspace.

    Args:
        workspace: Project root; its ``mentat-catalog/`` directory (name
            configurable) holds project-local entries.
        settings: Optional settings; defaults to ``get_settings()``.
        http_client: Optional client used for remote fetches.  When omitted a
            short-lived client is created per fetch.
        bundled_dir: Override for the bundled catalog root.
    """

    def __init__(
        self,
        workspace: str | Path,
        *,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        bundled_dir: Path | None = None,
    ) -> None:
        self.workspace = Path(workspace)
        self.settings = settings or get_settings()
        self._http_client = http_client
        self._bundled_loader = CatalogLoader(
            bundled_dir or self.settings.bundled_catalog_dir, EntryOrigin.BUNDLED
        )
        self._project_loader = CatalogLoader(
            self.settings.project_catalog_dir(self.workspace), EntryOrigin.PROJECT
        )
        self._content_cache = SkillContentCache(
            self.settings.skill_cache_dir.expanduser(),
            self.settings.skill_cache_ttl_seconds,
        )

    # -------------------------------------------------------------------------
    # Loading and filtering
    # -------------------------------------------------------------------------

    def load_all_entries(self) -> list[CatalogEntry]:
        """Return the merged catalog, one entry per id."""
        by_id: dict[str, CatalogEntry] = {}

        for entry in self._bundled_loader.load_all_entries():
            by_id[entry.id] = entry

        for entry in self._project_loader.load_all_entries():
            if entry.id in by_id:
                logger.debug("Project catalog overrides bundled entry %s", entry.id)
            by_id[entry.id] = entry

        return list(by_id.values())

    def load_relevant_entries(self, profile: ProjectProfile) -> list[CatalogEntry]:
        """Return merged entries whose detect rules match ``profile``."""
        relevant = [e for e in self.load_all_entries() if matches_profile(e, profile)]
        logger.debug(
            "Catalog filtered to %d relevant entr%s",
            len(relevant),
            "y" if len(relevant) == 1 else "ies",
        )
        return relevant

    def load_instant_candidates(self, profile: ProjectProfile) -> list[CatalogEntry]:
        """Relevant entries that can be applied without hiring (non-agent)."""
        return [e for e in self.load_relevant_entries(profile) if e.type is not EntryType.AGENT]

    def get_entry(self, entry_id: str) -> CatalogEntry | None:
        for entry in self.load_all_entries():
            if entry.id == entry_id:
                return entry
        return None

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    async def resolve_entry(self, entry_id: str) -> CatalogEntry | None:
        """Look up ``entry_id`` and fill in remote instructions when needed.

        Returns:
            None when no entry has that id; otherwise the entry, resolved
            when its content could be obtained and unchanged when not.
        """
        entry = self.get_entry(entry_id)
        if entry is None:
            return None
        if not entry.needs_resolution:
            return entry

        content = await self._fetch_content(entry.id, entry.source or "")
        if content is None:
            return entry
        return entry.with_instructions(content)

    async def _fetch_content(self, entry_id: str, source: str) -> str | None:
        cached = await asyncio.to_thread(self._content_cache.read, entry_id)
        if cached is not None:
            logger.debug("Skill content cache hit for %s", entry_id)
            return cached

        url = source_to_url(
            source,
            raw_base_url=self.settings.raw_content_base_url,
            branch=self.settings.source_default_branch,
            default_filename=self.settings.source_default_filename,
        )
        if url is None:
            logger.warning("Unsupported source locator for %s: %s", entry_id, source)
            return None

        try:
            if self._http_client is not None:
                response = await self._http_client.get(url)
            else:
                async with httpx.AsyncClient(
                    timeout=self.settings.fetch_timeout_seconds, follow_redirects=True
                ) as client:
                    response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch skill %s from %s: %s", entry_id, url, e)
            return None

        if not response.is_success:
            logger.warning(
                "Failed to fetch skill %s from %s: HTTP %d",
                entry_id,
                url,
                response.status_code,
            )
            return None

        content = strip_frontmatter(response.text)
        await asyncio.to_thread(self._content_cache.write, entry_id, content)
        logger.info("Resolved skill %s from %s", entry_id, url)
        return content


__all__ = ["CatalogLibrary", "matches_profile"]
