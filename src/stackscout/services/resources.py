"""ResourceService — domain-modeled resources of an application scope."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from stackscout.domain.records import ResourceDescriptor
from stackscout.infrastructure.resources import RegistryError
from stackscout.services.result import ErrorKind, ServiceError, ServiceResult
from stackscout.services.telemetry import traced

if TYPE_CHECKING:
    from stackscout.infrastructure.project import Project
    from stackscout.infrastructure.resources import ResourceRegistryProvider

logger = logging.getLogger(__name__)


class ResourceService:
    """Lists every resource the registry reports, one descriptor each.

    No filtering, sorting or deduplication happens here; the registry
    order is the output order.
    """

    def __init__(self, registry: ResourceRegistryProvider) -> None:
        self._registry = registry

    @classmethod
    def from_project(cls, project: Project) -> ResourceService:
        return cls(project.resource_registry)

    @traced
    def list_resources(self, scope: str | None) -> ServiceResult:
        op = "list_ash_resources"
        try:
            pairs = self._registry.resources_for(scope)
            items = [ResourceDescriptor(name=name, domain=domain) for name, domain in pairs]
        except (RegistryError, ValidationError) as exc:
            logger.warning("Resource registry failed for scope %s: %s", scope, exc)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorKind.EXECUTION_ERROR,
                    message=f"Cannot list resources: {exc}",
                    detail={"scope": scope},
                ),
            )

        warnings: list[str] = []
        if scope is None and not items:
            warnings.append("No application scope configured; set [project] app")
        return ServiceResult(
            ok=True,
            op=op,
            data={"scope": scope, "items": items, "count": len(items)},
            warnings=warnings,
        )
