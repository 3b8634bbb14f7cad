"""Action dispatch — the contract external callers invoke.

The set of actions is closed: :class:`Action` enumerates them and
:data:`ACTIONS` maps each one to its description, argument model, record
type and handler. Arguments are validated before any handler runs; a bad
call never reaches a resolver.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from stackscout.domain.records import GeneratorDescriptor, PackageRuleEntry, ResourceDescriptor
from stackscout.services.generators import GeneratorService
from stackscout.services.resources import ResourceService
from stackscout.services.result import ErrorKind, ServiceError, ServiceResult
from stackscout.services.rules import PackageRulesService

if TYPE_CHECKING:
    from stackscout.infrastructure.project import Project

logger = logging.getLogger(__name__)


class Action(StrEnum):
    GET_PACKAGE_RULES = "get_package_rules"
    LIST_ASH_RESOURCES = "list_ash_resources"
    LIST_GENERATORS = "list_generators"


# --- Argument models ---


class GetPackageRulesArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Required; an empty list is a valid request.
    packages: list[StrictStr]


class NoArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# --- Handlers ---


@dataclass(frozen=True)
class Resolvers:
    """The services handlers delegate to, plus the ambient resource scope."""

    rules: PackageRulesService
    resources: ResourceService
    generators: GeneratorService
    scope: str | None = None

    @classmethod
    def from_project(cls, project: Project) -> Resolvers:
        return cls(
            rules=PackageRulesService.from_project(project),
            resources=ResourceService.from_project(project),
            generators=GeneratorService.from_project(project),
            scope=project.scope,
        )


def _get_package_rules(resolvers: Resolvers, args: Any) -> ServiceResult:
    return resolvers.rules.get_package_rules(args.packages)


def _list_resources(resolvers: Resolvers, _args: Any) -> ServiceResult:
    return resolvers.resources.list_resources(resolvers.scope)


def _list_generators(resolvers: Resolvers, _args: Any) -> ServiceResult:
    return resolvers.generators.list_generators()


@dataclass(frozen=True)
class ActionSpec:
    action: Action
    description: str
    arguments: type[BaseModel]
    record: type[BaseModel]
    handler: Callable[[Resolvers, Any], ServiceResult]


ACTIONS: dict[Action, ActionSpec] = {
    Action.GET_PACKAGE_RULES: ActionSpec(
        action=Action.GET_PACKAGE_RULES,
        description=(
            "Get the usage rules for the given packages. Each dependency may ship a "
            "usage-rules.md file describing how to use it well; this returns the full "
            "text for every requested package that has one and leaves out the rest. "
            "Read the rules of packages before writing code against them."
        ),
        arguments=GetPackageRulesArgs,
        record=PackageRuleEntry,
        handler=_get_package_rules,
    ),
    Action.LIST_ASH_RESOURCES: ActionSpec(
        action=Action.LIST_ASH_RESOURCES,
        description=(
            "List all Ash resources in the current application and the domains that "
            "own them. A resource is a mapped SQLAlchemy model or table; its domain "
            "is the declarative base, ORM registry or MetaData that declares it."
        ),
        arguments=NoArgs,
        record=ResourceDescriptor,
        handler=_list_resources,
    ),
    Action.LIST_GENERATORS: ActionSpec(
        action=Action.LIST_GENERATORS,
        description=(
            "List the available code generators and their documentation. These are the "
            "project's igniter-style generator commands: stackscout's own "
            "(stackscout.install, stackscout.gen.*) plus any contributed by plugins "
            "and installed packages. docs is the help text, null when a command has "
            "none, or false when its author disabled documentation."
        ),
        arguments=NoArgs,
        record=GeneratorDescriptor,
        handler=_list_generators,
    ),
}


def _invalid(op: str, message: str, **detail: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=ErrorKind.VALIDATION_ERROR, message=message, detail=detail),
    )


class ActionDispatcher:
    """Validates a named call and runs the matching handler.

    Holds no mutable state; concurrent dispatches are independent.
    """

    def __init__(self, resolvers: Resolvers) -> None:
        self._resolvers = resolvers

    @classmethod
    def from_project(cls, project: Project) -> ActionDispatcher:
        return cls(Resolvers.from_project(project))

    def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> ServiceResult:
        """Run action *name* with *arguments*.

        Returns a successful ServiceResult with ``data["items"]`` holding the
        records in resolver order, or a failed one whose error code is
        ``VALIDATION_ERROR`` (nothing ran) or ``EXECUTION_ERROR``.
        """
        try:
            action = Action(name)
        except ValueError:
            return _invalid(
                str(name),
                f"Unknown action {name!r}",
                known=[a.value for a in Action],
            )
        spec = ACTIONS[action]

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            return _invalid(
                action,
                f"Arguments for {action} must be a mapping, got {type(arguments).__name__}",
            )
        try:
            args = spec.arguments.model_validate(dict(arguments))
        except ValidationError as exc:
            return _invalid(
                action,
                f"Invalid arguments for {action}: {exc.error_count()} error(s)",
                errors=exc.errors(include_url=False, include_context=False),
            )

        logger.debug("Dispatching %s", action)
        try:
            return spec.handler(self._resolvers, args)
        except Exception as exc:
            logger.exception("Action %s crashed", action)
            return ServiceResult(
                ok=False,
                op=action,
                error=ServiceError(
                    code=ErrorKind.EXECUTION_ERROR,
                    message=f"{action} failed: {exc}",
                    detail={"exception": type(exc).__name__},
                ),
            )

    @staticmethod
    def describe() -> list[dict[str, Any]]:
        """Action catalog for tool listings: name, description, argument schema."""
        return [
            {
                "name": spec.action.value,
                "description": spec.description,
                "input_schema": spec.arguments.model_json_schema(),
            }
            for spec in ACTIONS.values()
        ]
