# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Worker records and match results.

Worker records are owned by an external registry and consumed read-only.
A match request produces exactly one of ``SkillMatch``,
``WorkerMatchResult`` or ``NoMatch``; all three are transient.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mentat.catalog.models import CatalogEntry


class WorkerStatus(str, Enum):
    """Lifecycle status of a worker in the registry."""

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class ConfidenceTier(str, Enum):
    """Coarse bucket derived from a match score."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WorkerRecord(BaseModel):
    """A paid specialist worker as published by the registry.

    Attributes:
        id: Registry identifier.
        name: Display name.
        specialty: Specialty slug used for exact-match filtering.
        capabilities: Free-text capability tags.
        limitations: Free-text limitation tags.
        reputation_score: Average rating, 0.0 to 5.0.
        completion_count: Jobs completed so far.
        pricing: Price per job.
        avg_completion_time: Average turnaround in minutes.
        status: Only ``active`` workers are eligible for matching.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1)
    name: str = ""
    specialty: str = ""
    capabilities: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()
    reputation_score: float = Field(default=0.0, ge=0.0, le=5.0)
    completion_count: int = Field(default=0, ge=0)
    pricing: float = Field(default=0.0, ge=0.0)
    avg_completion_time: float = Field(default=0.0, ge=0.0)
    status: WorkerStatus = WorkerStatus.PENDING

    @field_validator("capabilities", "limitations", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return tuple(str(item) for item in v)

    @property
    def is_active(self) -> bool:
        return self.status is WorkerStatus.ACTIVE


class WorkerMatch(BaseModel):
    """One ranked candidate with its score and human-readable reasons."""

    model_config = ConfigDict(frozen=True)

    worker: WorkerRecord
    score: float
    reasons: tuple[str, ...] = ()
    confidence: ConfidenceTier


class SkillMatch(BaseModel):
    """An instant catalog solution found by keyword."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["skill"] = "skill"
    entry: CatalogEntry
    keyword: str


class WorkerMatchResult(BaseModel):
    """Ranked worker candidates (at most five) plus the hiring rationale."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["worker"] = "worker"
    matches: tuple[WorkerMatch, ...]
    recommendation: str


class NoMatch(BaseModel):
    """Neutral explanation returned when nothing qualifies."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"
    message: str


MatchResult = Union[SkillMatch, WorkerMatchResult, NoMatch]


__all__ = [
    "ConfidenceTier",
    "MatchResult",
    "NoMatch",
    "SkillMatch",
    "WorkerMatch",
    "WorkerMatchResult",
    "WorkerRecord",
    "WorkerStatus",
]
