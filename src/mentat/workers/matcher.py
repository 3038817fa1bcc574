# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Worker Matcher
==============

Finds the best way to get a task done: an instant catalog skill when one
matches the task's keywords, otherwise a ranked shortlist of specialist
workers, otherwise a neutral "no match" explanation.

Ranking is deterministic: score descending, then price ascending, then
completion count descending, then worker id ascending.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mentat.catalog.models import CatalogEntry
from mentat.workers.keywords import extract_keywords
from mentat.workers.models import (
    MatchResult,
    NoMatch,
    SkillMatch,
    WorkerMatch,
    WorkerMatchResult,
    WorkerRecord,
)
from mentat.workers.registry import WorkerRegistry
from mentat.workers.scoring import MAX_WORKER_MATCHES, score_worker

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = "No workers found matching your requirements. Try adjusting your request."

# (phrases, rationale) checked against the lower-cased task
RECOMMENDATION_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("refactor", "redesign"), "Requires design judgment and multi-step thinking"),
    (("complex", "multiple"), "Multi-step task requiring human oversight"),
    (("custom", "specific"), "Custom work tailored to your needs"),
)
DEFAULT_RECOMMENDATION = "Task requires flexible problem-solving"
RECOMMENDATION_SEPARATOR = " • "

SPECIALTY_PATTERNS: dict[str, tuple[str, ...]] = {
    "landing-page-design": ("landing", "homepage", "hero", "landing page"),
    "seo-optimization": ("seo", "search", "optimization", "meta tags", "sitemap"),
    "refactoring": ("refactor", "cleanup", "improve", "reorganize"),
    "api-integration": ("api", "integration", "webhook", "connect"),
    "ui-design": ("design", "ui", "interface", "layout", "style"),
    "performance": ("performance", "optimize", "speed", "slow", "fast"),
    "testing": ("test", "testing", "unit test", "e2e"),
    "documentation": ("docs", "documentation", "readme", "comments"),
}


def recommendation_reason(task: str) -> str:
    """Explain why worker help is suggested over an instant skill."""
    normalized = task.lower()
    reasons = [
        rationale
        for phrases, rationale in RECOMMENDATION_RULES
        if any(p in normalized for p in phrases)
    ]
    return RECOMMENDATION_SEPARATOR.join(reasons or [DEFAULT_RECOMMENDATION])


def suggest_specialties(task: str) -> list[str]:
    """Return specialty slugs whose trigger phrases appear in ``task``."""
    normalized = task.lower()
    return [
        specialty
        for specialty, phrases in SPECIALTY_PATTERNS.items()
        if any(p in normalized for p in phrases)
    ]


def _entry_matches_keyword(entry: CatalogEntry, keyword: str) -> bool:
    fields = (entry.name, entry.description, entry.category or "")
    return any(keyword in f.lower() for f in fields)


def _has_capabilities(worker: WorkerRecord, required: Sequence[str]) -> bool:
    capabilities = [c.lower() for c in worker.capabilities]
    return all(any(req.lower() in cap for cap in capabilities) for req in required)


class WorkerMatcher:
    """
    Match a task to an instant skill or to ranked workers.

    Args:
        registry: Source of worker records (read-only)
        skills: Catalog entries eligible as instant solutions, searched in
            the order given
    """

    def __init__(
        self,
        registry: WorkerRegistry,
        skills: Sequence[CatalogEntry] = (),
    ) -> None:
        self.registry = registry
        self.skills = list(skills)

    async def find_match(
        self,
        task: str,
        specialty: str | None = None,
        budget: float | None = None,
        required_capabilities: Sequence[str] | None = None,
    ) -> MatchResult:
        """
        Find the best match for ``task``.

        Args:
            task: Free-text task description
            specialty: Exact specialty slug to restrict candidates to
            budget: Maximum price per job
            required_capabilities: Capabilities every candidate must carry
                (case-insensitive substring of a declared capability)

        Returns:
            SkillMatch, WorkerMatchResult (top 5) or NoMatch
        """
        keywords = extract_keywords(task)

        skill_match = self._find_skill_match(keywords)
        if skill_match is not None:
            logger.debug(
                "Instant skill matched",
                extra={"entry_id": skill_match.entry.id, "keyword": skill_match.keyword},
            )
            return skill_match

        matches = await self._find_worker_matches(
            keywords, specialty, budget, required_capabilities or ()
        )
        if not matches:
            logger.debug("No worker matched", extra={"keywords": keywords})
            return NoMatch(message=NO_MATCH_MESSAGE)

        return WorkerMatchResult(
            matches=tuple(matches[:MAX_WORKER_MATCHES]),
            recommendation=recommendation_reason(task),
        )

    def suggest_specialties(self, task: str) -> list[str]:
        return suggest_specialties(task)

    def _find_skill_match(self, keywords: Sequence[str]) -> SkillMatch | None:
        for keyword in keywords:
            for entry in self.skills:
                if _entry_matches_keyword(entry, keyword):
                    return SkillMatch(entry=entry, keyword=keyword)
        return None

    async def _find_worker_matches(
        self,
        keywords: Sequence[str],
        specialty: str | None,
        budget: float | None,
        required_capabilities: Sequence[str],
    ) -> list[WorkerMatch]:
        if specialty is not None:
            candidates = await self.registry.list_active_workers_by_specialty(specialty)
        else:
            candidates = await self.registry.list_active_workers()

        eligible = [
            w
            for w in candidates
            if w.is_active
            and (specialty is None or w.specialty == specialty)
            and (budget is None or w.pricing <= budget)
            and _has_capabilities(w, required_capabilities)
        ]

        scored: list[WorkerMatch] = []
        for worker in eligible:
            result = score_worker(worker, keywords)
            if result.total <= 0:
                continue
            scored.append(
                WorkerMatch(
                    worker=worker,
                    score=result.total,
                    reasons=result.reasons,
                    confidence=result.confidence,
                )
            )

        scored.sort(
            key=lambda m: (-m.score, m.worker.pricing, -m.worker.completion_count, m.worker.id)
        )
        logger.debug(
            "Ranked %d of %d candidate worker(s)",
            len(scored),
            len(candidates),
        )
        return scored


__all__ = [
    "NO_MATCH_MESSAGE",
    "WorkerMatcher",
    "recommendation_reason",
    "suggest_specialties",
]
