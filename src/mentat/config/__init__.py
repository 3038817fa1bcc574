# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Mentat configuration - Pydantic Settings for environment configuration."""

from __future__ import annotations

from .settings import BUNDLED_CATALOG_DIR, Settings, clear_settings_cache, get_settings

__all__ = [
    "BUNDLED_CATALOG_DIR",
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
