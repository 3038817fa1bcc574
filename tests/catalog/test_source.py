# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for source locator translation, front-matter stripping and
the skill content cache."""

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from mentat.catalog import SkillContentCache, source_to_url, strip_frontmatter

pytestmark = pytest.mark.unit


class TestSourceToUrl:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            (
                "github:anthropics/skills/skills/pdf",
                "https://raw.githubusercontent.com/anthropics/skills/main/skills/pdf/SKILL.md",
            ),
            (
                "github:resend/resend-skills/SKILL.md",
                "https://raw.githubusercontent.com/resend/resend-skills/main/SKILL.md",
            ),
            (
                "github:owner/repo/docs/guide.md",
                "https://raw.githubusercontent.com/owner/repo/main/docs/guide.md",
            ),
            (
                "github:owner/repo",
                "https://raw.githubusercontent.com/owner/repo/main/SKILL.md",
            ),
            ("https://example.com/skill.md", "https://example.com/skill.md"),
            ("http://example.com/skill", "http://example.com/skill"),
        ],
    )
    def test_supported_locators(self, source: str, expected: str) -> None:
        assert source_to_url(source) == expected

    @pytest.mark.parametrize(
        "source",
        ["github:owner", "github:", "gitlab:owner/repo/path", "ftp://example.com/x", "skills/pdf"],
    )
    def test_unsupported_locators(self, source: str) -> None:
        assert source_to_url(source) is None

    def test_custom_base_and_branch(self) -> None:
        url = source_to_url(
            "github:o/r/p",
            raw_base_url="https://mirror.example/",
            branch="dev",
            default_filename="README.md",
        )
        assert url == "https://mirror.example/o/r/dev/p/README.md"


class TestStripFrontmatter:
    def test_strips_leading_block(self) -> None:
        content = "---\nname: pdf\ndescription: x\n---\n\n# PDF\n\nBody text.\n"
        assert strip_frontmatter(content) == "# PDF\n\nBody text."

    def test_no_frontmatter_is_trimmed(self) -> None:
        assert strip_frontmatter("\n\n# Title\nBody\n\n") == "# Title\nBody"

    def test_unterminated_block_kept(self) -> None:
        assert strip_frontmatter("---\nname: x\n# Body") == "---\nname: x\n# Body"

    def test_leading_whitespace_before_block(self) -> None:
        assert strip_frontmatter("  \n---\na: 1\n---\nBody") == "Body"


class TestSkillContentCache:
    def test_round_trip(self, tmp_path: Path) -> None:
        cache = SkillContentCache(tmp_path, ttl_seconds=60)
        cache.write("pdf", "# Body")
        assert cache.path_for("pdf") == tmp_path / "pdf" / "latest.md"
        assert cache.read("pdf") == "# Body"

    def test_miss(self, tmp_path: Path) -> None:
        assert SkillContentCache(tmp_path, ttl_seconds=60).read("absent") is None

    def test_expired_by_mtime(self, tmp_path: Path) -> None:
        cache = SkillContentCache(tmp_path, ttl_seconds=60)
        cache.write("pdf", "# Body")
        old = time.time() - 120
        os.utime(cache.path_for("pdf"), (old, old))
        assert cache.read("pdf") is None

    def test_escaping_id_is_not_written(self, tmp_path: Path) -> None:
        cache = SkillContentCache(tmp_path / "cache", ttl_seconds=60)
        assert cache.path_for("../escaped") is None
        cache.write("../escaped", "x")
        assert not (tmp_path / "escaped" / "latest.md").exists()
        assert cache.read("../escaped") is None

    def test_write_failure_is_swallowed(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        cache = SkillContentCache(blocker, ttl_seconds=60)
        cache.write("pdf", "# Body")
        assert cache.read("pdf") is None
