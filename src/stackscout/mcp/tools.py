"""MCP tool definitions — one tool per action.

Each tool has a ``<name>_impl`` function testable without the mcp package.
``register_tools()`` wraps them with FastMCP decorators and uses the
action descriptions as tool descriptions.
"""

from __future__ import annotations

from typing import Any

from stackscout.actions.dispatcher import ACTIONS, Action, ActionDispatcher
from stackscout.services.result import ServiceResult


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict (records in wire form)."""
    dumped = result.model_dump(mode="json")
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": dumped["data"],
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
            "detail": dumped["error"]["detail"],
        }
    return response


def get_package_rules_impl(dispatcher: ActionDispatcher, packages: Any) -> dict[str, Any]:
    result = dispatcher.dispatch(Action.GET_PACKAGE_RULES, {"packages": packages})
    return _to_mcp_response(result)


def list_ash_resources_impl(dispatcher: ActionDispatcher) -> dict[str, Any]:
    return _to_mcp_response(dispatcher.dispatch(Action.LIST_ASH_RESOURCES))


def list_generators_impl(dispatcher: ActionDispatcher) -> dict[str, Any]:
    return _to_mcp_response(dispatcher.dispatch(Action.LIST_GENERATORS))


def register_tools(server: Any, dispatcher: ActionDispatcher) -> None:
    """Register the three discovery tools on the FastMCP server."""

    @server.tool(description=ACTIONS[Action.GET_PACKAGE_RULES].description)  # type: ignore[untyped-decorator]
    def get_package_rules(packages: list[str]) -> dict[str, Any]:
        return get_package_rules_impl(dispatcher, packages)

    @server.tool(description=ACTIONS[Action.LIST_ASH_RESOURCES].description)  # type: ignore[untyped-decorator]
    def list_ash_resources() -> dict[str, Any]:
        return list_ash_resources_impl(dispatcher)

    @server.tool(description=ACTIONS[Action.LIST_GENERATORS].description)  # type: ignore[untyped-decorator]
    def list_generators() -> dict[str, Any]:
        return list_generators_impl(dispatcher)
