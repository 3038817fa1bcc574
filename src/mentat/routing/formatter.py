# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Response rendering.

Pure functions that turn profiles, catalog entries and match results into
the markdown text returned to the caller.  Nothing here performs I/O.
"""

from __future__ import annotations

from collections.abc import Sequence

from mentat.catalog.context import ContextFile
from mentat.catalog.models import CatalogEntry
from mentat.profile.models import ProjectProfile
from mentat.workers.models import MatchResult, NoMatch, SkillMatch, WorkerMatchResult

MAX_LISTED_DEPENDENCIES = 15
CLOSING_INSTRUCTION = "Pick the best solution and execute it. If none fit, use your own judgment."


def _fmt(value: float) -> str:
    return f"{value:g}"


def format_profile(profile: ProjectProfile) -> list[str]:
    """Render the ``## Your Project`` block as lines."""
    lines = ["## Your Project", f"- Language: {', '.join(profile.languages)}"]
    if profile.framework:
        lines.append(f"- Framework: {profile.framework}")
    if profile.config_files:
        lines.append(f"- Detected: {', '.join(profile.config_files)}")
    if profile.dependencies:
        shown = profile.dependencies[:MAX_LISTED_DEPENDENCIES]
        hidden = len(profile.dependencies) - len(shown)
        suffix = f" (+{hidden} more)" if hidden > 0 else ""
        lines.append(f"- Deps: {', '.join(shown)}{suffix}")
    if profile.package_manager:
        lines.append(f"- Package manager: {profile.package_manager}")
    return lines


def format_solve_response(
    profile: ProjectProfile,
    entries: Sequence[CatalogEntry],
    task: str,
    target_files: Sequence[str] | None = None,
) -> str:
    """Render the full solve response.

    Args:
        profile: Detected project profile.
        entries: Catalog entries relevant to the profile, in catalog order.
        task: The user's task, quoted verbatim.
        target_files: Optional files the user wants to focus on.

    Returns:
        Newline-joined markdown text.
    """
    parts = format_profile(profile)
    parts.append("")

    if entries:
        parts.append("## Available Solutions")
        parts.append("")
        for entry in entries:
            parts.append(f"### {entry.id} ({entry.type.value})")
            parts.append(entry.description)
            if entry.instructions and entry.instructions != entry.description:
                parts.append("")
                parts.append(entry.instructions.strip())
            parts.append("")
    else:
        parts.append("## No catalog solutions matched this project.")
        parts.append("Proceed with your own judgment.")
        parts.append("")

    parts.append("## User's Task")
    parts.append(f'"{task}"')
    if target_files:
        parts.append(f"Target files: {', '.join(target_files)}")
    parts.append("")
    parts.append(CLOSING_INSTRUCTION)

    return "\n".join(parts)


def format_match_result(result: MatchResult) -> str:
    """Render a skill match, a worker shortlist or a no-match message."""
    if isinstance(result, SkillMatch):
        entry = result.entry
        return "\n".join(
            [
                "## Instant Solution Available",
                "",
                f"### {entry.id} ({entry.type.value})",
                entry.description,
                "",
                f'Matched on "{result.keyword}". '
                f'Run execute_skill with skillId "{entry.id}" to apply it.',
            ]
        )

    if isinstance(result, WorkerMatchResult):
        parts = ["## Recommended Workers", "", f"Why a worker: {result.recommendation}", ""]
        for rank, match in enumerate(result.matches, start=1):
            worker = match.worker
            parts.append(
                f"### {rank}. {worker.name or worker.id} ({worker.specialty}) "
                f"- score {match.score:.1f}, {match.confidence.value} confidence"
            )
            parts.append(
                f"- Price: ${_fmt(worker.pricing)} · ~{_fmt(worker.avg_completion_time)} min avg"
            )
            parts.extend(f"- {reason}" for reason in match.reasons)
            parts.append("")
        return "\n".join(parts).rstrip("\n")

    if isinstance(result, NoMatch):
        return result.message

    raise TypeError(f"Unsupported match result: {type(result).__name__}")


def format_skill_prompt(entry: CatalogEntry, context_files: Sequence[ContextFile] = ()) -> str:
    """Render an executable skill prompt with attached workspace files."""
    parts = [f"# Skill: {entry.name}", "", entry.description, "", "## Instructions", ""]
    parts.append(entry.instructions.strip())

    if entry.examples:
        parts.extend(["", "## Examples", ""])
        parts.extend(f"- {example}" for example in entry.examples)

    if context_files:
        parts.extend(["", "## Project Context"])
        for context in context_files:
            parts.extend(["", f"### {context.path}", "```", context.content.rstrip("\n"), "```"])
            if context.truncated:
                parts.append("(truncated)")

    parts.extend(["", "Apply these instructions to the project above."])
    return "\n".join(parts)


__all__ = [
    "format_match_result",
    "format_profile",
    "format_skill_prompt",
    "format_solve_response",
]
