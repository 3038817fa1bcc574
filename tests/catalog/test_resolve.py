# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for CatalogLibrary.resolve_entry.

HTTP is served by ``httpx.MockTransport`` so no test touches the network;
the skill cache lives under ``tmp_path`` (see conftest).
"""

from __future__ import annotations

import os
import time
from pathlib import Path

import httpx
import pytest

from mentat.catalog import CatalogLibrary, ResolutionState
from mentat.config import get_settings

pytestmark = pytest.mark.unit

SKILL_MD = "---\nname: remote\ndescription: remote skill\n---\n\n# Remote Skill\n\nDo the thing.\n"


def _bundled(tmp_path: Path, source: str | None = "github:acme/skills/remote") -> Path:
    root = tmp_path / "bundled"
    root.mkdir(exist_ok=True)
    lines = [
        "entry:",
        "  id: remote",
        "  name: Remote",
        "  description: Remote skill description.",
    ]
    if source is not None:
        lines.append(f"  source: {source}")
    (root / "remote.yaml").write_text("\n".join(lines) + "\n", encoding="utf-8")
    (root / "inline.yaml").write_text(
        "entry:\n  id: inline\n  name: Inline\n  description: d\n"
        "  instructions: Inline steps.\n  source: github:acme/skills/inline\n",
        encoding="utf-8",
    )
    return root


class _Recorder:
    """MockTransport handler that records requests."""

    def __init__(self, status: int = 200, text: str = SKILL_MD, error: bool = False) -> None:
        self.status = status
        self.text = text
        self.error = error
        self.urls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.urls.append(str(request.url))
        if self.error:
            raise httpx.ConnectError("simulated outage", request=request)
        return httpx.Response(self.status, text=self.text)


def _library(tmp_path: Path, handler: _Recorder, **kwargs) -> CatalogLibrary:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CatalogLibrary(
        tmp_path / "ws",
        bundled_dir=_bundled(tmp_path, **kwargs),
        http_client=client,
    )


class TestResolveEntry:
    @pytest.mark.asyncio
    async def test_unknown_id(self, tmp_path: Path) -> None:
        library = _library(tmp_path, _Recorder())
        assert await library.resolve_entry("nope") is None

    @pytest.mark.asyncio
    async def test_fetches_strips_and_caches(self, tmp_path: Path) -> None:
        handler = _Recorder()
        library = _library(tmp_path, handler)

        entry = await library.resolve_entry("remote")

        assert entry is not None
        assert entry.instructions == "# Remote Skill\n\nDo the thing."
        assert entry.resolution is ResolutionState.RESOLVED
        assert handler.urls == [
            "https://raw.githubusercontent.com/acme/skills/main/remote/SKILL.md"
        ]
        cached = get_settings().skill_cache_dir / "remote" / "latest.md"
        assert cached.read_text(encoding="utf-8") == "# Remote Skill\n\nDo the thing."

    @pytest.mark.asyncio
    async def test_cache_round_trip_makes_no_network_call(self, tmp_path: Path) -> None:
        handler = _Recorder()
        library = _library(tmp_path, handler)

        first = await library.resolve_entry("remote")
        second = await library.resolve_entry("remote")

        assert len(handler.urls) == 1
        assert first is not None and second is not None
        assert second.instructions == first.instructions

    @pytest.mark.asyncio
    async def test_stale_cache_refetches(self, tmp_path: Path) -> None:
        handler = _Recorder()
        library = _library(tmp_path, handler)
        await library.resolve_entry("remote")

        cached = get_settings().skill_cache_dir / "remote" / "latest.md"
        old = time.time() - 25 * 60 * 60
        os.utime(cached, (old, old))
        await library.resolve_entry("remote")

        assert len(handler.urls) == 2

    @pytest.mark.asyncio
    async def test_network_error_returns_entry_unchanged(self, tmp_path: Path) -> None:
        library = _library(tmp_path, _Recorder(error=True))

        entry = await library.resolve_entry("remote")

        assert entry is not None
        assert entry.instructions == entry.description
        assert entry.resolution is ResolutionState.UNRESOLVED

    @pytest.mark.asyncio
    async def test_non_success_status_returns_entry_unchanged(self, tmp_path: Path) -> None:
        library = _library(tmp_path, _Recorder(status=404, text="Not Found"))

        entry = await library.resolve_entry("remote")

        assert entry is not None
        assert entry.instructions == "Remote skill description."
        assert not (get_settings().skill_cache_dir / "remote").exists()

    @pytest.mark.asyncio
    async def test_unsupported_locator_makes_no_request(self, tmp_path: Path) -> None:
        handler = _Recorder()
        library = _library(tmp_path, handler, source="s3://bucket/skill")

        entry = await library.resolve_entry("remote")

        assert entry is not None
        assert entry.resolution is ResolutionState.UNRESOLVED
        assert handler.urls == []

    @pytest.mark.asyncio
    async def test_entry_without_source_is_returned_as_is(self, tmp_path: Path) -> None:
        handler = _Recorder()
        library = _library(tmp_path, handler, source=None)

        entry = await library.resolve_entry("remote")

        assert entry is not None
        assert entry.instructions == "Remote skill description."
        assert handler.urls == []

    @pytest.mark.asyncio
    async def test_inline_instructions_are_not_refetched(self, tmp_path: Path) -> None:
        handler = _Recorder()
        library = _library(tmp_path, handler)

        entry = await library.resolve_entry("inline")

        assert entry is not None
        assert entry.instructions == "Inline steps."
        assert handler.urls == []
