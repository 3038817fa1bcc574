# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Catalog Library - declarative solutions filtered by project profile.

Usage::

    from mentat.catalog import CatalogLibrary

    library = CatalogLibrary("/path/to/workspace")
    entries = library.load_relevant_entries(profile)
    entry = await library.resolve_entry("frontend-design")
"""

from mentat.catalog.context import ContextFile, gather_context
from mentat.catalog.library import CatalogLibrary, matches_profile
from mentat.catalog.loader import CatalogLoader
from mentat.catalog.models import (
    CatalogEntry,
    DetectRule,
    EntryOrigin,
    EntryType,
    ResolutionState,
)
from mentat.catalog.source import SkillContentCache, source_to_url, strip_frontmatter

__all__ = [
    "CatalogEntry",
    "CatalogLibrary",
    "CatalogLoader",
    "ContextFile",
    "DetectRule",
    "EntryOrigin",
    "EntryType",
    "ResolutionState",
    "SkillContentCache",
    "gather_context",
    "matches_profile",
    "source_to_url",
    "strip_frontmatter",
]
