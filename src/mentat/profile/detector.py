# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Project Profiler.

Fingerprints a workspace into a ``ProjectProfile`` by running four
independent probes concurrently:

1. Manifest probe        - dependency names from package.json / pyproject.toml
2. Config-presence probe - which well-known config files exist at the root
3. Extension census      - distinct file extensions, root plus one level
4. Package-manager probe - first lockfile found by fixed priority

Every probe treats unreadable or malformed input as absent, so ``detect``
never raises.  The result is cached as a single most-recent snapshot for a
short TTL.  The cache is keyed by recency, not by workspace: calling
``detect`` for a second workspace inside the TTL returns the first
workspace's profile.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path

from mentat.config import get_settings
from mentat.profile.models import UNKNOWN_LANGUAGE, ProjectProfile

logger = logging.getLogger(__name__)

CONFIG_FILES: tuple[str, ...] = (
    "tsconfig.json",
    "pyproject.toml",
    "Cargo.toml",
    "go.mod",
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.json",
    "eslint.config.js",
    "eslint.config.mjs",
    ".prettierrc",
    "prettier.config.js",
    "tailwind.config.ts",
    "tailwind.config.js",
    "postcss.config.js",
    "postcss.config.mjs",
    "next.config.js",
    "next.config.mjs",
    "next.config.ts",
    "vite.config.ts",
    "vite.config.js",
    "nuxt.config.ts",
    "svelte.config.js",
    "angular.json",
    "vercel.json",
    ".vercel",
    "netlify.toml",
    "fly.toml",
    "Dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    ".github",
    ".gitlab-ci.yml",
    "prisma",
    "drizzle.config.ts",
)

# Lockfile -> package manager, in priority order.
LOCKFILES: tuple[tuple[str, str], ...] = (
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
    ("uv.lock", "uv"),
    ("poetry.lock", "poetry"),
    ("Pipfile.lock", "pipenv"),
)

# Dependency name -> framework.  Meta-frameworks precede the libraries they wrap.
FRAMEWORK_PRIORITY: tuple[tuple[str, str], ...] = (
    ("next", "Next.js"),
    ("nuxt", "Nuxt"),
    ("@sveltejs/kit", "SvelteKit"),
    ("svelte", "Svelte"),
    ("@angular/core", "Angular"),
    ("vue", "Vue"),
    ("react", "React"),
    ("express", "Express"),
    ("fastify", "Fastify"),
    ("hono", "Hono"),
    ("django", "Django"),
    ("fastapi", "FastAPI"),
    ("flask", "Flask"),
)

# (language, config files implying it, extensions implying it)
LANGUAGE_RULES: tuple[tuple[str, tuple[str, ...], tuple[str, ...]], ...] = (
    ("TypeScript", ("tsconfig.json",), (".ts", ".tsx")),
    ("JavaScript", (), (".js", ".jsx")),
    ("Python", ("pyproject.toml",), (".py",)),
    ("Rust", ("Cargo.toml",), (".rs",)),
    ("Go", ("go.mod",), (".go",)),
)

SKIPPED_DIRECTORIES = frozenset(
    {"node_modules", "dist", "build", "__pycache__", "venv", "target"}
)
MAX_ENTRIES_PER_SUBDIRECTORY = 50

_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


# ---------------------------------------------------------------------------
# Profile cache (single most-recent snapshot)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Snapshot:
    profile: ProjectProfile
    timestamp: float


_cached: _Snapshot | None = None


def clear_detect_cache() -> None:
    """Reset the profile cache.  Intended for tests only."""
    global _cached
    _cached = None


async def detect(
    workspace: str | os.PathLike[str],
    *,
    ttl_seconds: float | None = None,
) -> ProjectProfile:
    """Detect the project profile of ``workspace``.

    Args:
        workspace: Root directory of the project to fingerprint.
        ttl_seconds: Snapshot lifetime; defaults to
            ``Settings.profile_cache_ttl_seconds``.

    Returns:
        The cached profile when it is younger than the TTL, otherwise a
        freshly probed one.
    """
    global _cached
    ttl = get_settings().profile_cache_ttl_seconds if ttl_seconds is None else ttl_seconds

    if _cached is not None and time.time() - _cached.timestamp < ttl:
        return _cached.profile

    root = Path(workspace)
    dependencies, config_files, extensions, package_manager = await asyncio.gather(
        _read_manifest_dependencies(root),
        _detect_config_files(root),
        _detect_file_extensions(root),
        _detect_package_manager(root),
    )

    profile = ProjectProfile(
        languages=derive_languages(config_files, extensions),
        framework=derive_framework(dependencies),
        dependencies=tuple(dependencies),
        config_files=tuple(config_files),
        package_manager=package_manager,
        file_extensions=tuple(sorted(extensions)),
    )
    _cached = _Snapshot(profile=profile, timestamp=time.time())

    logger.debug(
        "Detected project profile",
        extra={
            "workspace": str(root),
            "languages": profile.languages,
            "framework": profile.framework,
            "dependency_count": len(profile.dependencies),
        },
    )
    return profile


# ---------------------------------------------------------------------------
# Derivation rules
# ---------------------------------------------------------------------------


def derive_languages(
    config_files: list[str] | tuple[str, ...],
    extensions: set[str] | frozenset[str] | tuple[str, ...],
) -> tuple[str, ...]:
    """Apply the ordered language rules; ``("Unknown",)`` when none match."""
    languages = [
        language
        for language, configs, exts in LANGUAGE_RULES
        if any(c in config_files for c in configs) or any(e in extensions for e in exts)
    ]
    return tuple(languages) if languages else (UNKNOWN_LANGUAGE,)


def derive_framework(dependencies: list[str] | tuple[str, ...]) -> str | None:
    """Return the first framework in priority order present in ``dependencies``."""
    declared = set(dependencies)
    for dependency, framework in FRAMEWORK_PRIORITY:
        if dependency in declared:
            return framework
    return None


# ---------------------------------------------------------------------------
# Probes
# ---------------------------------------------------------------------------


async def _read_manifest_dependencies(root: Path) -> list[str]:
    return await asyncio.to_thread(_manifest_dependencies_sync, root)


async def _detect_config_files(root: Path) -> list[str]:
    return await asyncio.to_thread(_config_files_sync, root)


async def _detect_file_extensions(root: Path) -> set[str]:
    return await asyncio.to_thread(_file_extensions_sync, root)


async def _detect_package_manager(root: Path) -> str | None:
    return await asyncio.to_thread(_package_manager_sync, root)


def _manifest_dependencies_sync(root: Path) -> list[str]:
    names: list[str] = []
    for name in _package_json_dependencies(root) + _pyproject_dependencies(root):
        if name not in names:
            names.append(name)
    return names


def _package_json_dependencies(root: Path) -> list[str]:
    try:
        raw = (root / "package.json").read_text(encoding="utf-8")
        pkg = json.loads(raw)
    except (OSError, UnicodeDecodeError, ValueError):
        return []
    if not isinstance(pkg, dict):
        return []

    names: list[str] = []
    for section in ("dependencies", "devDependencies"):
        declared = pkg.get(section)
        if isinstance(declared, dict):
            names.extend(str(key) for key in declared)
    return names


def _pyproject_dependencies(root: Path) -> list[str]:
    try:
        with open(root / "pyproject.toml", "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return []

    requirements: list[str] = []
    project = data.get("project", {})
    if isinstance(project, dict):
        requirements.extend(_as_str_list(project.get("dependencies")))
        optional = project.get("optional-dependencies")
        if isinstance(optional, dict):
            for group in optional.values():
                requirements.extend(_as_str_list(group))

    tool = data.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    if isinstance(poetry, dict):
        for section in ("dependencies", "dev-dependencies"):
            declared = poetry.get(section)
            if isinstance(declared, dict):
                requirements.extend(k for k in declared if k.lower() != "python")

    names: list[str] = []
    for requirement in requirements:
        match = _REQUIREMENT_NAME.match(requirement)
        if match:
            names.append(re.sub(r"[-_.]+", "-", match.group(1)).lower())
    return names


def _as_str_list(value: object) -> list[str]:
    if isinstance(value, list):
        return [v for v in value if isinstance(v, str)]
    return []


def _config_files_sync(root: Path) -> list[str]:
    present: list[str] = []
    for name in CONFIG_FILES:
        try:
            if (root / name).exists():
                present.append(name)
        except OSError:
            continue
    return present


def _file_extensions_sync(root: Path) -> set[str]:
    extensions: set[str] = set()
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return extensions

    for entry in entries:
        if entry.name.startswith(".") or entry.name in SKIPPED_DIRECTORIES:
            continue
        try:
            if entry.is_file():
                _add_extension(extensions, entry.name)
            elif entry.is_dir():
                children = sorted(os.listdir(entry.path))[:MAX_ENTRIES_PER_SUBDIRECTORY]
                for child in children:
                    _add_extension(extensions, child)
        except OSError:
            continue
    return extensions


def _add_extension(extensions: set[str], filename: str) -> None:
    suffix = os.path.splitext(filename)[1]
    if suffix:
        extensions.add(suffix)


def _package_manager_sync(root: Path) -> str | None:
    for lockfile, manager in LOCKFILES:
        try:
            if (root / lockfile).exists():
                return manager
        except OSError:
            continue
    return None


__all__ = [
    "CONFIG_FILES",
    "FRAMEWORK_PRIORITY",
    "LANGUAGE_RULES",
    "LOCKFILES",
    "clear_detect_cache",
    "derive_framework",
    "derive_languages",
    "detect",
]
