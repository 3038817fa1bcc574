# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Worker Scoring Policy
=====================

Additive score for one worker against one task's keywords.  Every term
contributes a human-readable reason when it is notable.

Score components:
1. Reputation  - rating x 10 (0-50)
2. Experience  - completion count x 0.5, capped at 20
3. Capability  - +10 per keyword found in any capability
4. Limitation  - -50 once if any keyword is found in any limitation
5. Pricing     - max(0, 10 - price / 5)
6. Speed       - max(0, 10 - avg minutes / 10)

Tiers: >= 70 high, >= 40 medium, otherwise low.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from mentat.workers.models import ConfidenceTier, WorkerRecord

# Component weights
REPUTATION_WEIGHT = 10.0
EXPERIENCE_PER_JOB = 0.5
EXPERIENCE_CAP = 20.0
CAPABILITY_MATCH_POINTS = 10.0
LIMITATION_PENALTY = 50.0
PRICING_MAX_POINTS = 10.0
PRICING_DIVISOR = 5.0
SPEED_MAX_POINTS = 10.0
SPEED_DIVISOR = 10.0

# Reason thresholds
HIGH_RATING_THRESHOLD = 4.5
EXPERIENCED_JOB_COUNT = 50
SOME_EXPERIENCE_JOB_COUNT = 10
AFFORDABLE_PRICE = 10.0
FAST_MINUTES = 20.0

# Confidence tiers
HIGH_CONFIDENCE_THRESHOLD = 70.0
MEDIUM_CONFIDENCE_THRESHOLD = 40.0

# Result shaping
MAX_WORKER_MATCHES = 5

LIMITATION_REASON = "⚠️ May have limitations for this task"
LOW_CONFIDENCE_REASON = "Low confidence match"


@dataclass(frozen=True)
class WorkerScore:
    """Score with the reasons that produced it."""

    total: float
    confidence: ConfidenceTier
    reasons: tuple[str, ...] = field(default_factory=tuple)


def _fmt(value: float) -> str:
    return f"{value:g}"


def confidence_tier(score: float) -> ConfidenceTier:
    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return ConfidenceTier.HIGH
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.LOW


def score_worker(worker: WorkerRecord, keywords: Sequence[str]) -> WorkerScore:
    """
    Score ``worker`` against task ``keywords``.

    Args:
        worker: Candidate worker record
        keywords: Output of ``extract_keywords`` for the task

    Returns:
        WorkerScore; the total may be negative when the limitation
        penalty outweighs everything else.
    """
    score = 0.0
    reasons: list[str] = []

    # 1. Reputation
    score += worker.reputation_score * REPUTATION_WEIGHT
    if worker.reputation_score >= HIGH_RATING_THRESHOLD:
        reasons.append(f"High rating: {_fmt(worker.reputation_score)}/5")

    # 2. Experience
    score += min(worker.completion_count * EXPERIENCE_PER_JOB, EXPERIENCE_CAP)
    if worker.completion_count > EXPERIENCED_JOB_COUNT:
        reasons.append(f"Experienced: {worker.completion_count} jobs completed")
    elif worker.completion_count > SOME_EXPERIENCE_JOB_COUNT:
        reasons.append(f"{worker.completion_count} jobs completed")

    # 3. Capability overlap
    capabilities = [c.lower() for c in worker.capabilities]
    matching = [kw for kw in keywords if any(kw in cap for cap in capabilities)]
    score += len(matching) * CAPABILITY_MATCH_POINTS
    if matching:
        reasons.append(f"Specialty match: {worker.specialty}")

    # 4. Limitation conflict
    limitations = [lim.lower() for lim in worker.limitations]
    if any(kw in lim for kw in keywords for lim in limitations):
        score -= LIMITATION_PENALTY
        reasons.append(LIMITATION_REASON)

    # 5. Pricing
    score += max(0.0, PRICING_MAX_POINTS - worker.pricing / PRICING_DIVISOR)
    if worker.pricing <= AFFORDABLE_PRICE:
        reasons.append("Affordable pricing")

    # 6. Speed
    score += max(0.0, SPEED_MAX_POINTS - worker.avg_completion_time / SPEED_DIVISOR)
    if worker.avg_completion_time <= FAST_MINUTES:
        reasons.append(f"Fast: ~{_fmt(worker.avg_completion_time)} min avg")

    tier = confidence_tier(score)
    if tier is ConfidenceTier.LOW:
        reasons.append(LOW_CONFIDENCE_REASON)

    return WorkerScore(total=score, confidence=tier, reasons=tuple(reasons))


__all__ = [
    "HIGH_CONFIDENCE_THRESHOLD",
    "LIMITATION_PENALTY",
    "MAX_WORKER_MATCHES",
    "MEDIUM_CONFIDENCE_THRESHOLD",
    "WorkerScore",
    "confidence_tier",
    "score_worker",
]
