# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Project profile model.

A ``ProjectProfile`` is the fingerprint of a workspace: languages, the
winning framework, declared dependencies, present config files, the package
manager and the file extensions seen by a shallow scan.  Profiles are
immutable so a cached snapshot can be handed out repeatedly.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_LANGUAGE = "Unknown"


class ProjectProfile(BaseModel):
    """Structured fingerprint of a workspace.

    Attributes:
        languages: Detected languages in rule order; ``("Unknown",)`` when
            nothing matched.  Never empty.
        framework: The single highest-priority framework, if any.
        dependencies: Declared dependency names, production before dev,
            de-duplicated in first-seen order.
        config_files: Well-known config files/directories present at the root.
        package_manager: First lockfile match by fixed priority.
        file_extensions: Distinct extensions from the two-level scan, sorted.
    """

    model_config = ConfigDict(frozen=True)

    languages: tuple[str, ...] = (UNKNOWN_LANGUAGE,)
    framework: str | None = None
    dependencies: tuple[str, ...] = ()
    config_files: tuple[str, ...] = ()
    package_manager: str | None = None
    file_extensions: tuple[str, ...] = Field(default=())

    @field_validator("languages")
    @classmethod
    def languages_never_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Collapse an empty language list to the Unknown sentinel."""
        return v or (UNKNOWN_LANGUAGE,)

    def has_config(self, name: str) -> bool:
        return name in self.config_files

    def has_dependency(self, name: str) -> bool:
        return name in self.dependencies


__all__ = ["UNKNOWN_LANGUAGE", "ProjectProfile"]
