# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Shared helpers for Mentat modules."""

from __future__ import annotations

from mentat.lib.errors import CatalogLoadError, MentatError, MentatErrorCode

__all__ = [
    "CatalogLoadError",
    "MentatError",
    "MentatErrorCode",
]
