# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Workspace context gathering for executed skills.

Collects the files named by the caller plus those matched by an entry's
``context_patterns``, bounded in count and size.  Paths that resolve outside
the workspace are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_SKIPPED_PARTS = frozenset({".git", "node_modules", "dist", "build", "__pycache__", "venv"})


@dataclass(frozen=True)
class ContextFile:
    """A workspace file attached to a skill prompt."""

    path: str
    content: str
    truncated: bool = False


def gather_context(
    workspace: Path,
    patterns: tuple[str, ...] | list[str],
    target_files: tuple[str, ...] | list[str],
    *,
    max_files: int = 10,
    max_chars: int = 8000,
) -> list[ContextFile]:
    """Read target files first, then pattern matches, up to ``max_files``.

    Args:
        workspace: Project root every path must stay inside.
        patterns: Workspace-relative glob patterns.
        target_files: Workspace-relative (or absolute, inside the workspace)
            file paths named by the caller.
        max_files: Maximum number of files returned.
        max_chars: Per-file character cap; longer files are truncated.

    Returns:
        Context files in discovery order, de-duplicated by path.
    """
    root = workspace.resolve()
    candidates: list[Path] = [root / t for t in target_files]
    for pattern in patterns:
        try:
            candidates.extend(sorted(root.glob(pattern)))
        except (ValueError, NotImplementedError) as e:
            logger.debug("Ignoring context pattern %r: %s", pattern, e)

    gathered: list[ContextFile] = []
    seen: set[Path] = set()
    for candidate in candidates:
        if len(gathered) >= max_files:
            break
        try:
            resolved = candidate.resolve()
        except OSError:
            continue
        if resolved in seen or not resolved.is_relative_to(root):
            continue
        relative = resolved.relative_to(root)
        if _SKIPPED_PARTS.intersection(relative.parts) or not resolved.is_file():
            continue
        seen.add(resolved)

        try:
            text = resolved.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        truncated = len(text) > max_chars
        gathered.append(
            ContextFile(
                path=relative.as_posix(),
                content=text[:max_chars] if truncated else text,
                truncated=truncated,
            )
        )

    return gathered


__all__ = ["ContextFile", "gather_context"]
