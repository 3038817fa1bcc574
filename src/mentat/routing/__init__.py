# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Routing - response formatting and the named tool boundary."""

from mentat.routing.formatter import (
    format_match_result,
    format_profile,
    format_skill_prompt,
    format_solve_response,
)
from mentat.routing.tools import ToolDispatcher, ToolResponse

__all__ = [
    "ToolDispatcher",
    "ToolResponse",
    "format_match_result",
    "format_profile",
    "format_skill_prompt",
    "format_solve_response",
]
