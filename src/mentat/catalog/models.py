# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Catalog entry models.

A catalog entry is one reusable solution (skill, CLI recommendation,
protocol-integration server or specialist agent) declared in a YAML file
under a top-level ``entry:`` key.  Entries are immutable; resolving remote
content produces a new entry via ``with_instructions``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Single path segment; ids name skill cache directories
ENTRY_ID_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._-]*$"


class EntryType(str, Enum):
    """Kind of solution a catalog entry describes."""

    SKILL = "skill"
    CLI = "cli"
    MCP = "mcp"
    AGENT = "agent"


class ResolutionState(str, Enum):
    """Whether an entry's instructions hold real content yet.

    ``UNRESOLVED`` entries carry a copy of their description as instructions
    until remote content is fetched from ``source``.
    """

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class EntryOrigin(str, Enum):
    """Which catalog collection an entry was loaded from."""

    BUNDLED = "bundled"
    PROJECT = "project"


def _as_tuple(v: Any) -> tuple[str, ...]:
    if v is None:
        return ()
    if isinstance(v, str):
        return (v,)
    return tuple(str(item) for item in v)


class DetectRule(BaseModel):
    """Applicability rule matched against a project profile.

    Attributes:
        files: Config files whose presence makes the entry relevant.
        dependencies: Dependency names whose presence makes the entry relevant.
        exclude_files: Config files whose presence disqualifies the entry.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    files: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    exclude_files: tuple[str, ...] = ()

    @field_validator("files", "dependencies", "exclude_files", mode="before")
    @classmethod
    def coerce_sequence(cls, v: Any) -> tuple[str, ...]:
        return _as_tuple(v)


class CatalogEntry(BaseModel):
    """One reusable solution in the catalog.

    ``instructions`` defaults to a copy of ``description``.  Entries whose
    instructions were declared inline are ``RESOLVED``; the rest stay
    ``UNRESOLVED`` until ``CatalogLibrary.resolve_entry`` fetches their
    ``source``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., pattern=ENTRY_ID_PATTERN)
    type: EntryType = EntryType.SKILL
    name: str = Field(..., min_length=1)
    description: str
    instructions: str = ""
    resolution: ResolutionState = ResolutionState.UNRESOLVED
    detect: DetectRule | None = None
    context_patterns: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    category: str | None = None
    source: str | None = None
    stars: int | None = Field(default=None, ge=0)
    origin: EntryOrigin = EntryOrigin.BUNDLED

    @field_validator("context_patterns", "examples", mode="before")
    @classmethod
    def coerce_sequence(cls, v: Any) -> tuple[str, ...]:
        return _as_tuple(v)

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v: Any) -> Any:
        return EntryType.SKILL if v is None else v

    @model_validator(mode="before")
    @classmethod
    def derive_instructions(cls, data: Any) -> Any:
        """Fill in instructions from the description and tag the resolution."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        instructions = data.get("instructions")
        if "resolution" not in data:
            data["resolution"] = (
                ResolutionState.RESOLVED if instructions else ResolutionState.UNRESOLVED
            )
        if not instructions:
            data["instructions"] = data.get("description", "")
        return data

    @property
    def is_universal(self) -> bool:
        """True when the entry applies to every project."""
        return self.detect is None

    @property
    def needs_resolution(self) -> bool:
        return self.source is not None and self.resolution is ResolutionState.UNRESOLVED

    def with_instructions(self, instructions: str) -> CatalogEntry:
        """Return a resolved copy carrying ``instructions``."""
        return self.model_copy(
            update={"instructions": instructions, "resolution": ResolutionState.RESOLVED}
        )


__all__ = [
    "ENTRY_ID_PATTERN",
    "CatalogEntry",
    "DetectRule",
    "EntryOrigin",
    "EntryType",
    "ResolutionState",
]
