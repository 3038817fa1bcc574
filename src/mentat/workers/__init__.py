# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Worker Matcher - instant skills first, then ranked specialist workers."""

from mentat.workers.keywords import KEYWORD_EXTRACTOR_VERSION, extract_keywords
from mentat.workers.matcher import (
    NO_MATCH_MESSAGE,
    WorkerMatcher,
    recommendation_reason,
    suggest_specialties,
)
from mentat.workers.models import (
    ConfidenceTier,
    MatchResult,
    NoMatch,
    SkillMatch,
    WorkerMatch,
    WorkerMatchResult,
    WorkerRecord,
    WorkerStatus,
)
from mentat.workers.registry import (
    InMemoryWorkerRegistry,
    WorkerRegistry,
    YamlWorkerRegistry,
)
from mentat.workers.scoring import WorkerScore, confidence_tier, score_worker

__all__ = [
    "KEYWORD_EXTRACTOR_VERSION",
    "NO_MATCH_MESSAGE",
    "ConfidenceTier",
    "InMemoryWorkerRegistry",
    "MatchResult",
    "NoMatch",
    "SkillMatch",
    "WorkerMatch",
    "WorkerMatchResult",
    "WorkerMatcher",
    "WorkerRecord",
    "WorkerRegistry",
    "WorkerScore",
    "WorkerStatus",
    "YamlWorkerRegistry",
    "confidence_tier",
    "extract_keywords",
    "recommendation_reason",
    "score_worker",
    "suggest_specialties",
]
