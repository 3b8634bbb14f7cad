"""PackageRulesService — usage-rules documents shipped by dependencies.

For each requested package the service asks the dependency path provider
for the package root and reads the rules document there. Unknown packages
and packages without the document are simply left out. A document that
exists but cannot be read fails the whole call: nothing is returned.

Lookups are independent and run on a thread pool; ``Executor.map`` yields
in input order, so output order always matches the request.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from stackscout.config.models import RULES_FILENAME
from stackscout.domain.records import PackageRuleEntry
from stackscout.infrastructure.dependencies import read_rules_file
from stackscout.infrastructure.resources import RegistryError
from stackscout.services.result import ErrorKind, ServiceError, ServiceResult
from stackscout.services.telemetry import get_current_span, traced

if TYPE_CHECKING:
    from stackscout.infrastructure.dependencies import DependencyPathProvider
    from stackscout.infrastructure.project import Project

logger = logging.getLogger(__name__)


class PackageRulesService:
    """Resolves package names to :class:`PackageRuleEntry` records.

    Parameters:
        paths: dependency path provider.
        filename: rules document name looked up under each package root.
        max_workers: thread pool size; 1 resolves in the calling thread.
    """

    def __init__(
        self,
        paths: DependencyPathProvider,
        *,
        filename: str = RULES_FILENAME,
        max_workers: int = 4,
    ) -> None:
        self._paths = paths
        self._filename = filename
        self._max_workers = max_workers

    @classmethod
    def from_project(cls, project: Project) -> PackageRulesService:
        rules = project.settings.rules
        return cls(
            project.dependency_paths,
            filename=rules.filename,
            max_workers=rules.max_workers,
        )

    @traced
    def get_package_rules(self, packages: Sequence[str]) -> ServiceResult:
        """Return the rules of every package in *packages* that ships them."""
        op = "get_package_rules"
        names = list(packages)

        if self._max_workers == 1 or len(names) <= 1:
            outcomes = [self._lookup(name) for name in names]
        else:
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(names))) as pool:
                outcomes = list(pool.map(self._lookup, names))

        entries: list[PackageRuleEntry] = []
        for outcome in outcomes:
            if isinstance(outcome, ServiceError):
                return ServiceResult(ok=False, op=op, error=outcome)
            if outcome is not None:
                entries.append(outcome)

        span = get_current_span()
        if span is not None:
            span.annotate("requested", len(names))
            span.annotate("found", len(entries))

        return ServiceResult(
            ok=True,
            op=op,
            data={"items": entries, "count": len(entries)},
        )

    def _lookup(self, name: str) -> PackageRuleEntry | ServiceError | None:
        """Resolve one package: an entry, nothing, or the error that stops the call."""
        try:
            root = self._paths.root_for(name)
        except RegistryError as exc:
            return ServiceError(
                code=ErrorKind.EXECUTION_ERROR,
                message=f"Dependency lookup failed for {name!r}: {exc}",
                detail={"package": name},
            )
        if root is None:
            logger.debug("Package %s not found", name)
            return None

        path = root / self._filename
        try:
            text = read_rules_file(root, self._filename)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            return ServiceError(
                code=ErrorKind.EXECUTION_ERROR,
                message=f"Cannot read {self._filename} for {name!r}: {exc}",
                detail={"package": name, "path": str(path)},
            )

        if text is None or not text.strip():
            logger.debug("Package %s has no %s", name, self._filename)
            return None
        return PackageRuleEntry(package=name, rules=text)
