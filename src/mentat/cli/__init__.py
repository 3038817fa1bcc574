# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Mentat command-line interface."""

from mentat.cli.main import cli, main

__all__ = ["cli", "main"]
