# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Task keyword extraction.

Pure and versioned: the output for a given input only changes together with
``KEYWORD_EXTRACTOR_VERSION``.  Tokenisation is ASCII-only so results do not
depend on locale or Unicode case-folding tables.
"""

from __future__ import annotations

import re
import string

KEYWORD_EXTRACTOR_VERSION = "keywords_v1"

MIN_KEYWORD_LENGTH = 3

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
        "be", "have", "has", "had", "do", "does", "did", "will", "would",
        "should", "could", "may", "might", "must", "can", "this", "that",
        "these", "those", "my", "your", "i", "you", "we", "they", "it",
    }
)  # fmt: skip

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_TOKEN = re.compile(r"[a-z0-9]+")


def extract_keywords(text: str) -> tuple[str, ...]:
    """Extract matching keywords from free text.

    Lower-cases ASCII letters, splits on anything outside ``[a-z0-9]``,
    drops stop words and tokens shorter than three characters, and
    de-duplicates keeping first-occurrence order.

    Example:
        >>> extract_keywords("Fix my TypeScript errors, fix them!")
        ('fix', 'typescript', 'errors', 'them')
    """
    seen: dict[str, None] = {}
    for token in _TOKEN.findall(text.translate(_ASCII_LOWER)):
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOP_WORDS:
            seen.setdefault(token, None)
    return tuple(seen)


__all__ = ["KEYWORD_EXTRACTOR_VERSION", "STOP_WORDS", "extract_keywords"]
