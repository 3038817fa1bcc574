# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Tool Boundary
=============

Named operations exposed to an assistant host:

- ``solve``          - detect the project, filter the catalog, render options
- ``execute_skill``  - resolve one catalog entry and attach workspace context
- ``hire_worker``    - instant skill, ranked workers or a no-match explanation

The dispatcher is transport-agnostic: a host adapter forwards the tool name
and JSON arguments to ``ToolDispatcher.call`` and relays the text back.
Failures never escape ``call``; they become ``Error: ...`` responses with
``is_error`` set.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mentat.catalog.context import gather_context
from mentat.catalog.library import CatalogLibrary
from mentat.config import Settings, get_settings
from mentat.lib.errors import MentatError, MentatErrorCode
from mentat.profile.detector import detect
from mentat.routing.formatter import (
    format_match_result,
    format_skill_prompt,
    format_solve_response,
)
from mentat.workers.matcher import WorkerMatcher, suggest_specialties
from mentat.workers.models import NoMatch, SkillMatch, WorkerMatchResult
from mentat.workers.registry import InMemoryWorkerRegistry, WorkerRegistry, YamlWorkerRegistry

logger = logging.getLogger(__name__)


# =============================================================================
# Tool arguments
# =============================================================================


class _ToolArguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class _TaskArguments(_ToolArguments):
    task: str = Field(..., description="What the user wants to do, in plain english")

    @field_validator("task")
    @classmethod
    def task_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("task must not be empty")
        return v


class SolveArguments(_TaskArguments):
    target_files: list[str] = Field(
        default_factory=list,
        alias="targetFiles",
        description="Specific files to focus on (optional)",
    )


class ExecuteSkillArguments(_ToolArguments):
    skill_id: str = Field(
        ...,
        min_length=1,
        alias="skillId",
        description="Which catalog entry to apply (e.g. frontend-design)",
    )
    target_files: list[str] = Field(
        default_factory=list,
        alias="targetFiles",
        description="Which files to modify",
    )


class HireWorkerArguments(_TaskArguments):
    specialty: str | None = Field(default=None, description="Exact specialty slug to restrict to")
    budget: float | None = Field(default=None, ge=0, description="Maximum price per job")
    required_capabilities: list[str] = Field(
        default_factory=list,
        alias="requiredCapabilities",
        description="Capabilities every candidate must have",
    )


class ToolResponse(BaseModel):
    """Text result of one tool call."""

    model_config = ConfigDict(frozen=True)

    text: str
    is_error: bool = False


_TOOL_DESCRIPTIONS: dict[str, tuple[str, type[_ToolArguments]]] = {
    "solve": (
        "Routes to the best skill, CLI, or agent for the task. "
        "The project stack is detected automatically.",
        SolveArguments,
    ),
    "execute_skill": (
        "Apply a catalog skill to the project with the relevant files attached.",
        ExecuteSkillArguments,
    ),
    "hire_worker": (
        "Find an instant skill or a ranked shortlist of specialist workers for a task.",
        HireWorkerArguments,
    ),
}


# =============================================================================
# Dispatcher
# =============================================================================


class ToolDispatcher:
    """
    Dispatch tool calls for one workspace.

    Args:
        workspace: Project root the tools operate on
        catalog: Optional pre-built catalog library
        registry: Optional worker registry; defaults to the YAML file in
            ``Settings.worker_registry_path`` or an empty registry
        settings: Optional settings; defaults to ``get_settings()``
    """

    def __init__(
        self,
        workspace: str | Path,
        *,
        catalog: CatalogLibrary | None = None,
        registry: WorkerRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.workspace = Path(workspace)
        self.settings = settings or get_settings()
        self.catalog = catalog or CatalogLibrary(self.workspace, settings=self.settings)
        self._registry = registry
        self._handlers: dict[str, Callable[[dict[str, Any]], Awaitable[str]]] = {
            "solve": self._solve,
            "execute_skill": self._execute_skill,
            "hire_worker": self._hire_worker,
        }

        # Track dispatch stats
        self.stats: dict[str, Any] = {
            "total_calls": 0,
            "calls_by_tool": {},
            "errors": 0,
            "catalog_hits": 0,
            "worker_matches": 0,
            "no_match": 0,
        }

    @staticmethod
    def list_tools() -> list[dict[str, Any]]:
        """Describe every tool with its JSON input schema."""
        return [
            {
                "name": name,
                "description": description,
                "inputSchema": model.model_json_schema(by_alias=True),
            }
            for name, (description, model) in _TOOL_DESCRIPTIONS.items()
        ]

    def get_stats(self) -> dict[str, Any]:
        """
        Get dispatch statistics.

        Returns:
            Copy of the counters plus an error rate once calls were made
        """
        stats = {**self.stats, "calls_by_tool": dict(self.stats["calls_by_tool"])}
        total = stats["total_calls"]
        if total > 0:
            stats["error_rate"] = stats["errors"] / total
        return stats

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResponse:
        """
        Run tool ``name`` with ``arguments``.

        Returns:
            ToolResponse; ``is_error`` is set for unknown tools, invalid
            arguments, missing entries and unexpected failures.
        """
        self.stats["total_calls"] += 1
        by_tool = self.stats["calls_by_tool"]
        by_tool[name] = by_tool.get(name, 0) + 1

        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise MentatError(MentatErrorCode.UNKNOWN_TOOL, f"Unknown tool: {name}")
            text = await handler(arguments or {})
        except MentatError as e:
            self.stats["errors"] += 1
            logger.warning(
                "Tool call failed: %s",
                e,
                extra={"tool": name, "error_code": e.code.value},
            )
            return ToolResponse(text=f"Error: {e.message}", is_error=True)
        except Exception as e:
            self.stats["errors"] += 1
            logger.exception("Unexpected error in tool %s", name)
            return ToolResponse(text=f"Error: {e}", is_error=True)

        return ToolResponse(text=text)

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    async def _solve(self, arguments: dict[str, Any]) -> str:
        args = _parse(SolveArguments, arguments)
        profile = await detect(self.workspace)
        entries = await asyncio.to_thread(self.catalog.load_relevant_entries, profile)
        if entries:
            self.stats["catalog_hits"] += 1
        return format_solve_response(profile, entries, args.task, args.target_files)

    async def _execute_skill(self, arguments: dict[str, Any]) -> str:
        args = _parse(ExecuteSkillArguments, arguments)
        entry = await self.catalog.resolve_entry(args.skill_id)
        if entry is None:
            raise MentatError(
                MentatErrorCode.ENTRY_NOT_FOUND,
                f"Skill not found: {args.skill_id}",
                {"skill_id": args.skill_id},
            )
        context = await asyncio.to_thread(
            gather_context,
            self.workspace,
            entry.context_patterns,
            args.target_files,
            max_files=self.settings.max_context_files,
            max_chars=self.settings.max_context_file_chars,
        )
        return format_skill_prompt(entry, context)

    async def _hire_worker(self, arguments: dict[str, Any]) -> str:
        args = _parse(HireWorkerArguments, arguments)
        profile = await detect(self.workspace)
        skills = await asyncio.to_thread(self.catalog.load_instant_candidates, profile)
        matcher = WorkerMatcher(self._get_registry(), skills)

        result = await matcher.find_match(
            args.task,
            specialty=args.specialty,
            budget=args.budget,
            required_capabilities=args.required_capabilities,
        )
        if isinstance(result, SkillMatch):
            self.stats["catalog_hits"] += 1
        elif isinstance(result, WorkerMatchResult):
            self.stats["worker_matches"] += 1
        elif isinstance(result, NoMatch):
            self.stats["no_match"] += 1

        text = format_match_result(result)
        suggestions = suggest_specialties(args.task)
        if suggestions and not isinstance(result, SkillMatch):
            text += f"\n\nSuggested specialties: {', '.join(suggestions)}"
        return text

    def _get_registry(self) -> WorkerRegistry:
        if self._registry is None:
            path = self.settings.worker_registry_path
            self._registry = (
                YamlWorkerRegistry(path.expanduser()) if path else InMemoryWorkerRegistry()
            )
        return self._registry


def _parse(model: type[_ToolArguments], arguments: dict[str, Any]) -> Any:
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(x) for x in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        )
        raise MentatError(
            MentatErrorCode.INVALID_INPUT,
            f"Invalid arguments: {problems}",
            {"errors": e.errors(include_url=False)},
        ) from e


__all__ = [
    "ExecuteSkillArguments",
    "HireWorkerArguments",
    "SolveArguments",
    "ToolDispatcher",
    "ToolResponse",
]
