# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Mentat CLI - terminal access to the routing tools.

Commands:

    profile     Print the detected project profile.
    catalog     List catalog entries relevant to the project (or all of them).
    solve       Route a task to the relevant catalog solutions.
    skill       Render one catalog skill with workspace context attached.
    hire        Find an instant skill or rank specialist workers for a task.

Usage::

    mentat profile .
    mentat solve "add payments" --workspace ~/code/shop
    mentat skill frontend-design --target-file app/page.tsx
    mentat hire "refactor the checkout" --workers workers.yaml --budget 50
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.table import Table

from mentat.catalog.library import CatalogLibrary
from mentat.lib.errors import MentatError
from mentat.profile.detector import detect
from mentat.profile.models import ProjectProfile
from mentat.routing.tools import ToolDispatcher
from mentat.workers.registry import WorkerRegistry, YamlWorkerRegistry

console = Console()
error_console = Console(stderr=True)

_workspace_option = click.option(
    "--workspace",
    "-w",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Project root to inspect.",
)
_target_file_option = click.option(
    "--target-file",
    "-t",
    "target_files",
    multiple=True,
    help="File to focus on (repeatable).",
)


def _fail(message: str) -> NoReturn:
    error_console.print(f"[red]{message}[/red]")
    sys.exit(1)


def _run_tool(
    workspace: Path,
    name: str,
    arguments: dict[str, Any],
    registry: WorkerRegistry | None = None,
) -> None:
    dispatcher = ToolDispatcher(workspace, registry=registry)
    response = asyncio.run(dispatcher.call(name, arguments))
    if response.is_error:
        _fail(response.text)
    click.echo(response.text)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Route coding tasks to skills, tools and specialist workers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# ---------------------------------------------------------------------------
# profile
# ---------------------------------------------------------------------------


def _print_profile(profile: ProjectProfile) -> None:
    console.rule("Project Profile")
    console.print(f"  [bold]languages:[/bold]        {', '.join(profile.languages)}")
    console.print(f"  [bold]framework:[/bold]        {profile.framework or '-'}")
    console.print(f"  [bold]package manager:[/bold]  {profile.package_manager or '-'}")
    console.print(f"  [bold]config files:[/bold]     {', '.join(profile.config_files) or '-'}")
    console.print(f"  [bold]extensions:[/bold]       {', '.join(profile.file_extensions) or '-'}")
    console.print(f"  [bold]dependencies:[/bold]     {len(profile.dependencies)}")
    for dependency in profile.dependencies:
        console.print(f"    - {dependency}", highlight=False)


@cli.command("profile")
@click.argument(
    "workspace",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
def profile_cmd(workspace: Path) -> None:
    """Print the detected profile of WORKSPACE (default: current directory)."""
    _print_profile(asyncio.run(detect(workspace)))


# ---------------------------------------------------------------------------
# catalog
# ---------------------------------------------------------------------------


@cli.command("catalog")
@_workspace_option
@click.option("--all", "show_all", is_flag=True, help="List every entry, ignoring detect rules.")
def catalog_cmd(workspace: Path, show_all: bool) -> None:
    """List catalog entries relevant to the project."""
    library = CatalogLibrary(workspace)
    if show_all:
        entries = library.load_all_entries()
    else:
        entries = library.load_relevant_entries(asyncio.run(detect(workspace)))

    table = Table(title=f"Catalog ({len(entries)} entries)")
    table.add_column("id", style="bold")
    table.add_column("type")
    table.add_column("category")
    table.add_column("origin", style="dim")
    for entry in entries:
        table.add_row(entry.id, entry.type.value, entry.category or "", entry.origin.value)
    console.print(table)


# ---------------------------------------------------------------------------
# solve / skill / hire
# ---------------------------------------------------------------------------


@cli.command("solve")
@click.argument("task")
@_workspace_option
@_target_file_option
def solve_cmd(task: str, workspace: Path, target_files: tuple[str, ...]) -> None:
    """Route TASK to the catalog solutions relevant to the project."""
    _run_tool(workspace, "solve", {"task": task, "targetFiles": list(target_files)})


@cli.command("skill")
@click.argument("skill_id", metavar="SKILL_ID")
@_workspace_option
@_target_file_option
def skill_cmd(skill_id: str, workspace: Path, target_files: tuple[str, ...]) -> None:
    """Render catalog skill SKILL_ID with workspace context attached."""
    _run_tool(workspace, "execute_skill", {"skillId": skill_id, "targetFiles": list(target_files)})


@cli.command("hire")
@click.argument("task")
@_workspace_option
@click.option(
    "--workers",
    "workers_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML worker registry (defaults to MENTAT_WORKER_REGISTRY_PATH).",
)
@click.option("--specialty", default=None, help="Only consider this specialty.")
@click.option("--budget", type=float, default=None, help="Maximum price per job.")
@click.option(
    "--capability",
    "capabilities",
    multiple=True,
    help="Capability every worker must have (repeatable).",
)
def hire_cmd(
    task: str,
    workspace: Path,
    workers_file: Path | None,
    specialty: str | None,
    budget: float | None,
    capabilities: tuple[str, ...],
) -> None:
    """Find an instant skill or rank specialist workers for TASK."""
    registry: WorkerRegistry | None = None
    if workers_file is not None:
        try:
            registry = YamlWorkerRegistry(workers_file)
        except MentatError as exc:
            _fail(f"Error: {exc.message}")

    arguments: dict[str, Any] = {"task": task, "requiredCapabilities": list(capabilities)}
    if specialty is not None:
        arguments["specialty"] = specialty
    if budget is not None:
        arguments["budget"] = budget
    _run_tool(workspace, "hire_worker", arguments, registry=registry)


def main() -> None:
    """Entry point for the ``mentat`` console script."""
    cli()


if __name__ == "__main__":
    main()
