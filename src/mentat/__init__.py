# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Mentat - project-aware routing of coding tasks to skills, tools and workers.

Given a task description and a workspace, Mentat fingerprints the project,
filters a declarative catalog of reusable solutions down to what fits, and
falls back to ranking paid specialist workers when nothing instant applies.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mentat")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
