"""The value every service call and every dispatched action returns.

Callers branch on ``ok``; an expected failure travels as a ServiceError
with one of the ErrorKind codes instead of an exception. The CLI renders
these results and the MCP tools serialize them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorKind(StrEnum):
    # Arguments missing or malformed; nothing ran.
    VALIDATION_ERROR = "VALIDATION_ERROR"
    # A resolver hit an I/O fault or a registry failed; no partial result.
    EXECUTION_ERROR = "EXECUTION_ERROR"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation.

    ``op`` names the operation, e.g. ``"get_package_rules"``. List
    operations put their records in ``data["items"]`` and the length in
    ``data["count"]``. ``warnings`` collects problems that did not stop the
    call, and ``meta`` carries timing when telemetry is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def items(self) -> list[Any]:
        """The records of a list operation; empty when it failed."""
        return list(self.data.get("items", []))
