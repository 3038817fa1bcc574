# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for WorkerMatcher.

Tests cover:
- Instant skill matching (keyword order, field coverage)
- Candidate filters (status, specialty, budget, required capabilities)
- Ranking, top-5 truncation and deterministic tie-breaking
- Recommendation rationale and specialty suggestions
- The strong-worker and limitation-conflict scenarios
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from mentat.catalog import CatalogEntry
from mentat.workers import (
    NO_MATCH_MESSAGE,
    ConfidenceTier,
    InMemoryWorkerRegistry,
    NoMatch,
    SkillMatch,
    WorkerMatcher,
    WorkerMatchResult,
    WorkerRecord,
    WorkerStatus,
    recommendation_reason,
    suggest_specialties,
)

pytestmark = pytest.mark.unit


def _worker(**overrides: object) -> WorkerRecord:
    defaults: dict[str, object] = {
        "id": "w-ts",
        "name": "TS Fixer",
        "specialty": "typescript",
        "capabilities": ["typescript"],
        "limitations": [],
        "reputation_score": 4.8,
        "completion_count": 120,
        "pricing": 8,
        "avg_completion_time": 15,
        "status": WorkerStatus.ACTIVE,
    }
    defaults.update(overrides)
    return WorkerRecord.model_validate(defaults)


def _skill(entry_id: str, **overrides: object) -> CatalogEntry:
    data: dict[str, object] = {"id": entry_id, "name": entry_id, "description": "generic"}
    data.update(overrides)
    return CatalogEntry.model_validate(data)


def _matcher(*workers: WorkerRecord, skills: tuple[CatalogEntry, ...] = ()) -> WorkerMatcher:
    return WorkerMatcher(InMemoryWorkerRegistry(workers), skills)


# ---------------------------------------------------------------------------
# Step 1: instant skills
# ---------------------------------------------------------------------------


class TestSkillMatch:
    @pytest.mark.asyncio
    async def test_first_keyword_wins(self) -> None:
        skills = (
            _skill("email", name="Send Email"),
            _skill("payments", description="Accept payments with Stripe"),
        )
        result = await _matcher(skills=skills).find_match("payments email flow")
        assert isinstance(result, SkillMatch)
        assert result.entry.id == "payments"
        assert result.keyword == "payments"

    @pytest.mark.asyncio
    async def test_category_is_searched(self) -> None:
        skills = (_skill("sentry", category="monitoring"),)
        result = await _matcher(skills=skills).find_match("set up monitoring")
        assert isinstance(result, SkillMatch)

    @pytest.mark.asyncio
    async def test_match_is_case_insensitive_substring(self) -> None:
        skills = (_skill("pdf", name="PDF Toolkit"),)
        result = await _matcher(skills=skills).find_match("merge pdf files")
        assert isinstance(result, SkillMatch)
        assert result.keyword == "pdf"

    @pytest.mark.asyncio
    async def test_skill_short_circuits_registry(self) -> None:
        registry = AsyncMock()
        matcher = WorkerMatcher(registry, [_skill("pdf", name="PDF Toolkit")])
        await matcher.find_match("pdf")
        registry.list_active_workers.assert_not_called()


# ---------------------------------------------------------------------------
# Step 2: workers
# ---------------------------------------------------------------------------


class TestWorkerRanking:
    @pytest.mark.asyncio
    async def test_strong_worker_is_high_confidence_top_match(self) -> None:
        result = await _matcher(_worker()).find_match("fix my typescript errors")
        assert isinstance(result, WorkerMatchResult)
        assert len(result.matches) == 1
        top = result.matches[0]
        assert top.worker.id == "w-ts"
        assert top.score >= 70
        assert top.confidence is ConfidenceTier.HIGH

    @pytest.mark.asyncio
    async def test_limitation_conflict_costs_fifty(self) -> None:
        clean = await _matcher(_worker()).find_match("refactor this module")
        conflicted = await _matcher(_worker(limitations=["no refactors"])).find_match(
            "refactor this module"
        )
        assert isinstance(clean, WorkerMatchResult)
        assert isinstance(conflicted, WorkerMatchResult)
        assert clean.matches[0].score - conflicted.matches[0].score == pytest.approx(50)
        assert conflicted.matches[0].confidence is ConfidenceTier.LOW

    @pytest.mark.asyncio
    async def test_limitation_conflict_can_drop_to_no_match(self) -> None:
        weak = _worker(
            reputation_score=2.0,
            completion_count=4,
            pricing=40,
            avg_completion_time=60,
            limitations=["no refactors"],
        )
        result = await _matcher(weak).find_match("refactor this module")
        assert isinstance(result, NoMatch)
        assert result.message == NO_MATCH_MESSAGE

    @pytest.mark.asyncio
    async def test_only_active_workers(self) -> None:
        registry = AsyncMock()
        registry.list_active_workers.return_value = [_worker(status=WorkerStatus.SUSPENDED)]
        result = await WorkerMatcher(registry).find_match("fix typescript")
        assert isinstance(result, NoMatch)

    @pytest.mark.asyncio
    async def test_specialty_filter(self) -> None:
        matcher = _matcher(_worker(id="a", specialty="seo"), _worker(id="b", specialty="testing"))
        result = await matcher.find_match("fix typescript", specialty="testing")
        assert isinstance(result, WorkerMatchResult)
        assert [m.worker.id for m in result.matches] == ["b"]

    @pytest.mark.asyncio
    async def test_budget_filter_is_inclusive(self) -> None:
        matcher = _matcher(_worker(id="cheap", pricing=20), _worker(id="pricey", pricing=21))
        result = await matcher.find_match("fix typescript", budget=20)
        assert isinstance(result, WorkerMatchResult)
        assert [m.worker.id for m in result.matches] == ["cheap"]

    @pytest.mark.asyncio
    async def test_zero_budget_is_applied(self) -> None:
        result = await _matcher(_worker(pricing=8)).find_match("fix typescript", budget=0)
        assert isinstance(result, NoMatch)

    @pytest.mark.asyncio
    async def test_required_capabilities(self) -> None:
        matcher = _matcher(
            _worker(id="ts", capabilities=["TypeScript", "React Native"]),
            _worker(id="py", capabilities=["python"]),
        )
        result = await matcher.find_match("fix bug", required_capabilities=["typescript", "react"])
        assert isinstance(result, WorkerMatchResult)
        assert [m.worker.id for m in result.matches] == ["ts"]

    @pytest.mark.asyncio
    async def test_top_five_sorted_descending(self) -> None:
        workers = [_worker(id=f"w{i}", reputation_score=i * 0.5) for i in range(1, 9)]
        result = await _matcher(*workers).find_match("fix typescript")
        assert isinstance(result, WorkerMatchResult)
        assert [m.worker.id for m in result.matches] == ["w8", "w7", "w6", "w5", "w4"]
        scores = [m.score for m in result.matches]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_tie_break_price_then_experience_then_id(self) -> None:
        # Identical scores: pricing above 50 and completions above 40 add nothing.
        base = {"pricing": 60, "completion_count": 45}
        workers = [
            _worker(id="d", **{**base, "pricing": 55}),
            _worker(id="c", **{**base, "completion_count": 41}),
            _worker(id="b", **base),
            _worker(id="a", **base),
        ]
        result = await _matcher(*workers).find_match("fix typescript")
        assert isinstance(result, WorkerMatchResult)
        assert len({m.score for m in result.matches}) == 1
        assert [m.worker.id for m in result.matches] == ["d", "a", "b", "c"]

    @pytest.mark.asyncio
    async def test_ranking_is_deterministic_across_registry_order(self) -> None:
        workers = [_worker(id=f"w{i}", pricing=60) for i in range(4)]
        forward = await _matcher(*workers).find_match("fix typescript")
        backward = await _matcher(*reversed(workers)).find_match("fix typescript")
        assert forward == backward


# ---------------------------------------------------------------------------
# Rationale and suggestions
# ---------------------------------------------------------------------------


class TestRecommendation:
    def test_fallback(self) -> None:
        assert recommendation_reason("fix typescript") == "Task requires flexible problem-solving"

    def test_phrases_join_in_rule_order(self) -> None:
        reason = recommendation_reason("Custom redesign of multiple pages")
        assert reason == (
            "Requires design judgment and multi-step thinking"
            " • Multi-step task requiring human oversight"
            " • Custom work tailored to your needs"
        )

    @pytest.mark.asyncio
    async def test_result_carries_recommendation(self) -> None:
        result = await _matcher(_worker()).find_match("refactor typescript")
        assert isinstance(result, WorkerMatchResult)
        assert result.recommendation == "Requires design judgment and multi-step thinking"


class TestSuggestSpecialties:
    def test_multiple_specialties(self) -> None:
        assert suggest_specialties("Improve the landing page SEO") == [
            "landing-page-design",
            "seo-optimization",
            "refactoring",
        ]

    def test_none(self) -> None:
        assert suggest_specialties("xyz") == []

    def test_matcher_method_delegates(self) -> None:
        assert _matcher().suggest_specialties("write unit test") == ["testing"]
