# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Remote skill content: locator translation, front-matter stripping and
the on-disk content cache.

Cache layout is one file per entry id::

    <cache_root>/<entry_id>/latest.md

The file's mtime is the freshness clock.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

logger = logging.getLogger(__name__)

CACHE_FILENAME = "latest.md"
GITHUB_PREFIX = "github:"
FRONTMATTER_DELIMITER = "---"


def source_to_url(
    source: str,
    *,
    raw_base_url: str = "https://raw.githubusercontent.com",
    branch: str = "main",
    default_filename: str = "SKILL.md",
) -> str | None:
    """Translate a source locator into a fetchable URL.

    ``http(s)://`` locators are returned as-is.  ``github:owner/repo/path``
    expands to ``<raw_base_url>/owner/repo/<branch>/path/<default_filename>``;
    the filename is not appended when ``path`` already names a ``.md`` file.

    Returns:
        The URL, or None for unsupported shapes.
    """
    if source.startswith(("http://", "https://")):
        return source
    if not source.startswith(GITHUB_PREFIX):
        return None

    parts = source[len(GITHUB_PREFIX):].split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    owner, repo = parts[0], parts[1]
    path = "/".join(parts[2:])

    if path.endswith(".md"):
        file_path = path
    elif path:
        file_path = f"{path}/{default_filename}"
    else:
        file_path = default_filename
    return f"{raw_base_url.rstrip('/')}/{owner}/{repo}/{branch}/{file_path}"


def strip_frontmatter(content: str) -> str:
    """Drop a leading ``---``-delimited metadata block and trim the body."""
    trimmed = content.strip()
    if trimmed.startswith(FRONTMATTER_DELIMITER):
        end = trimmed.find(FRONTMATTER_DELIMITER, len(FRONTMATTER_DELIMITER))
        if end != -1:
            return trimmed[end + len(FRONTMATTER_DELIMITER):].strip()
    return trimmed


class SkillContentCache:
    """Disk cache of fetched skill bodies, expiring by file mtime."""

    def __init__(self, cache_root: Path, ttl_seconds: float) -> None:
        self.cache_root = cache_root
        self.ttl_seconds = ttl_seconds

    def path_for(self, entry_id: str) -> Path | None:
        """Return the cache file for ``entry_id``, or None if it would land outside the root."""
        path = self.cache_root / entry_id / CACHE_FILENAME
        if not path.resolve().is_relative_to(self.cache_root.resolve()):
            return None
        return path

    def read(self, entry_id: str) -> str | None:
        """Return cached content if younger than the TTL, else None."""
        path = self.path_for(entry_id)
        if path is None:
            return None
        try:
            age = time.time() - path.stat().st_mtime
            if age >= self.ttl_seconds:
                return None
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def write(self, entry_id: str, content: str) -> None:
        """Store ``content``; write failures are logged and ignored."""
        path = self.path_for(entry_id)
        if path is None:
            logger.warning(
                "Refusing to cache skill content outside %s: %s", self.cache_root, entry_id
            )
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to cache skill content for %s: %s", entry_id, e)


__all__ = [
    "CACHE_FILENAME",
    "SkillContentCache",
    "source_to_url",
    "strip_frontmatter",
]
