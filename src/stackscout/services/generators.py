"""GeneratorService — catalog of generator commands and their docs.

Documentation passes through untouched: help text stays text, missing
help stays Undocumented, ``docs=False`` stays ExplicitlyEmpty.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from stackscout.domain.records import GeneratorDescriptor
from stackscout.infrastructure.resources import RegistryError
from stackscout.services.result import ErrorKind, ServiceError, ServiceResult
from stackscout.services.telemetry import traced

if TYPE_CHECKING:
    from stackscout.infrastructure.generators import GeneratorRegistryProvider
    from stackscout.infrastructure.project import Project

logger = logging.getLogger(__name__)


class GeneratorService:
    def __init__(self, registry: GeneratorRegistryProvider) -> None:
        self._registry = registry

    @classmethod
    def from_project(cls, project: Project) -> GeneratorService:
        return cls(project.generator_registry)

    @traced
    def list_generators(self) -> ServiceResult:
        op = "list_generators"
        try:
            items = [
                GeneratorDescriptor(command=command, docs=docs)
                for command, docs in self._registry.generators()
            ]
        except (RegistryError, ValidationError) as exc:
            logger.warning("Generator registry failed: %s", exc)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorKind.EXECUTION_ERROR,
                    message=f"Cannot list generators: {exc}",
                ),
            )
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})
