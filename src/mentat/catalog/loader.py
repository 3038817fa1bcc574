# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Catalog entry loader.

Discovers ``*.yaml``/``*.yml`` files under a catalog root and validates each
one's ``entry:`` mapping into a ``CatalogEntry``.  Unlike a strict loader,
a bad file never aborts the scan: it is logged and skipped so one broken
project-local entry cannot hide the rest of the catalog.

Usage:
    >>> from pathlib import Path
    >>> from mentat.catalog.loader import CatalogLoader
    >>>
    >>> loader = CatalogLoader(Path("mentat-catalog"), EntryOrigin.PROJECT)
    >>> for entry in loader.load_all_entries():
    ...     print(entry.id)
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from mentat.catalog.models import CatalogEntry, EntryOrigin
from mentat.lib.errors import CatalogLoadError

logger = logging.getLogger(__name__)


class CatalogLoader:
    """Loader for one catalog collection.

    Attributes:
        catalog_root: Root directory scanned recursively for entry files.
        origin: Origin tag stamped on every entry loaded from this root.
    """

    GLOB_PATTERNS = ("**/*.yaml", "**/*.yml")
    """Glob patterns for discovering entry files."""

    def __init__(self, catalog_root: Path, origin: EntryOrigin) -> None:
        self._catalog_root = catalog_root
        self._origin = origin
        logger.debug("CatalogLoader initialized with root: %s (%s)", catalog_root, origin.value)

    @property
    def catalog_root(self) -> Path:
        return self._catalog_root

    @property
    def origin(self) -> EntryOrigin:
        return self._origin

    def discover_entries(self) -> list[Path]:
        """Discover entry files under the catalog root.

        Returns:
            Paths sorted alphabetically; empty when the root is missing.
        """
        if not self._catalog_root.is_dir():
            return []

        discovered: set[Path] = set()
        for pattern in self.GLOB_PATTERNS:
            discovered.update(self._catalog_root.glob(pattern))
        paths = sorted(discovered)
        logger.debug("Discovered %d catalog file(s) in %s", len(paths), self._catalog_root)
        return paths

    def load_entry(self, path: Path) -> CatalogEntry:
        """Load and validate a single entry file.

        Args:
            path: Path to the YAML file.

        Returns:
            Validated CatalogEntry tagged with this loader's origin.

        Raises:
            CatalogLoadError: If the file cannot be read, is not valid YAML,
                lacks an ``entry:`` mapping or fails validation.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogLoadError(f"Cannot read catalog file: {path}", path=path, cause=e) from e
        except yaml.YAMLError as e:
            raise CatalogLoadError(f"Invalid YAML in catalog file: {path}", path=path, cause=e) from e

        if not isinstance(raw_data, dict) or not isinstance(raw_data.get("entry"), dict):
            raise CatalogLoadError(f"Catalog file has no 'entry' mapping: {path}", path=path)

        data = dict(raw_data["entry"])
        data["origin"] = self._origin
        try:
            return CatalogEntry.model_validate(data)
        except ValidationError as e:
            error_details = []
            for error in e.errors():
                loc = ".".join(str(x) for x in error["loc"])
                error_details.append(f"  - {loc}: {error['msg']}")
            raise CatalogLoadError(
                f"Catalog entry validation failed for {path}:\n" + "\n".join(error_details),
                path=path,
                cause=e,
            ) from e

    def load_all_entries(self) -> list[CatalogEntry]:
        """Load every valid entry under the root, skipping broken files."""
        entries: list[CatalogEntry] = []
        for path in self.discover_entries():
            try:
                entries.append(self.load_entry(path))
            except CatalogLoadError as e:
                logger.warning("Skipping catalog file %s: %s", e.path, e)
        return entries


__all__ = ["CatalogLoader"]
