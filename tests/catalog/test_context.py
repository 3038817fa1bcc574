# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for workspace context gathering."""

from __future__ import annotations

import pytest

from mentat.catalog import gather_context

pytestmark = pytest.mark.unit


class TestGatherContext:
    def test_targets_first_then_patterns(self, make_workspace) -> None:
        ws = make_workspace({"app/page.tsx": "page", "src/a.css": "a", "src/b.css": "b"})
        files = gather_context(ws, ["src/*.css"], ["app/page.tsx"])
        assert [f.path for f in files] == ["app/page.tsx", "src/a.css", "src/b.css"]
        assert files[0].content == "page"

    def test_duplicates_collapse(self, make_workspace) -> None:
        ws = make_workspace({"src/a.css": "a"})
        files = gather_context(ws, ["src/*.css", "**/*.css"], ["src/a.css"])
        assert [f.path for f in files] == ["src/a.css"]

    def test_never_escapes_workspace(self, make_workspace, tmp_path) -> None:
        (tmp_path / "outside.txt").write_text("secret")
        ws = make_workspace({"in.txt": "ok"})
        files = gather_context(ws, ["../*.txt"], ["../outside.txt", str(tmp_path / "outside.txt")])
        assert files == []

    def test_missing_and_directory_targets_ignored(self, make_workspace) -> None:
        ws = make_workspace({"src/a.css": "a"})
        assert gather_context(ws, [], ["missing.ts", "src"]) == []

    def test_bulk_directories_skipped(self, make_workspace) -> None:
        ws = make_workspace({"node_modules/x/index.js": "x", "src/index.js": "y"})
        files = gather_context(ws, ["**/*.js"], [])
        assert [f.path for f in files] == ["src/index.js"]

    def test_file_count_cap(self, make_workspace) -> None:
        ws = make_workspace({f"src/f{i}.ts": str(i) for i in range(5)})
        assert len(gather_context(ws, ["src/*.ts"], [], max_files=3)) == 3

    def test_size_cap_truncates(self, make_workspace) -> None:
        ws = make_workspace({"big.txt": "x" * 500})
        (context,) = gather_context(ws, [], ["big.txt"], max_chars=100)
        assert context.truncated
        assert len(context.content) == 100

    def test_binary_files_skipped(self, make_workspace) -> None:
        ws = make_workspace({})
        (ws / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe")
        assert gather_context(ws, ["*.png"], []) == []
