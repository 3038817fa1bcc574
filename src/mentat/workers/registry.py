# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Worker registry boundary.

The matcher only reads from a registry.  Two implementations are provided:
an in-memory one for embedding and tests, and one backed by a YAML file
with a top-level ``workers:`` list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

import yaml
from pydantic import ValidationError

from mentat.lib.errors import MentatError, MentatErrorCode
from mentat.workers.models import WorkerRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class WorkerRegistry(Protocol):
    """Read-only access to worker records."""

    async def list_active_workers(self) -> list[WorkerRecord]: ...

    async def list_active_workers_by_specialty(self, specialty: str) -> list[WorkerRecord]: ...

    async def get_worker(self, worker_id: str) -> WorkerRecord | None: ...


class InMemoryWorkerRegistry:
    """Registry over a fixed collection of records, in insertion order."""

    def __init__(self, workers: Iterable[WorkerRecord] = ()) -> None:
        self._workers: dict[str, WorkerRecord] = {}
        for worker in workers:
            self._workers[worker.id] = worker

    def __len__(self) -> int:
        return len(self._workers)

    async def list_active_workers(self) -> list[WorkerRecord]:
        return [w for w in self._workers.values() if w.is_active]

    async def list_active_workers_by_specialty(self, specialty: str) -> list[WorkerRecord]:
        return [w for w in self._workers.values() if w.is_active and w.specialty == specialty]

    async def get_worker(self, worker_id: str) -> WorkerRecord | None:
        return self._workers.get(worker_id)


class YamlWorkerRegistry(InMemoryWorkerRegistry):
    """Registry loaded once from a YAML file.

    Expected layout::

        workers:
          - id: w-1
            specialty: refactoring
            capabilities: [typescript, react]
            status: active

    Raises:
        MentatError: CONFIGURATION_ERROR when the file is missing, is not
            valid YAML, or holds an invalid record; IO_ERROR when it exists
            but cannot be read.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(self._load(path))
        logger.info("Loaded %d worker(s) from %s", len(self), path)

    @staticmethod
    def _load(path: Path) -> list[WorkerRecord]:
        try:
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except FileNotFoundError as e:
            logger.error("Worker registry not found: %s", path)
            raise MentatError(
                MentatErrorCode.CONFIGURATION_ERROR,
                f"Worker registry not found: {path}",
            ) from e
        except OSError as e:
            logger.error("Cannot read worker registry %s: %s", path, e)
            raise MentatError(
                MentatErrorCode.IO_ERROR,
                f"Cannot read worker registry: {path}",
                {"os_error": str(e)},
            ) from e
        except yaml.YAMLError as e:
            logger.error(
                "Invalid YAML in worker registry: %s",
                path,
                extra={"yaml_error": str(e)},
            )
            raise MentatError(
                MentatErrorCode.CONFIGURATION_ERROR,
                f"Invalid YAML in worker registry: {path}",
                {"yaml_error": str(e)},
            ) from e

        if raw is None:
            return []
        items = raw.get("workers") if isinstance(raw, dict) else None
        if not isinstance(items, list):
            raise MentatError(
                MentatErrorCode.CONFIGURATION_ERROR,
                f"Worker registry must contain a 'workers' list: {path}",
            )

        try:
            return [WorkerRecord.model_validate(item) for item in items]
        except ValidationError as e:
            raise MentatError(
                MentatErrorCode.CONFIGURATION_ERROR,
                f"Invalid worker record in {path}",
                {"errors": e.errors(include_url=False)},
            ) from e


__all__ = ["InMemoryWorkerRegistry", "WorkerRegistry", "YamlWorkerRegistry"]
