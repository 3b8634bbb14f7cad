"""Tests for the action dispatcher."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from stackscout.actions import ACTIONS, Action, ActionDispatcher, Resolvers
from stackscout.domain.records import (
    ExplicitlyEmpty,
    GeneratorDescriptor,
    PackageRuleEntry,
    ResourceDescriptor,
    Undocumented,
)
from stackscout.services.generators import GeneratorService
from stackscout.services.resources import ResourceService
from stackscout.services.result import ErrorKind
from stackscout.services.rules import PackageRulesService


class CountingPaths:
    def __init__(self, roots: dict[str, Path]) -> None:
        self.roots = roots
        self.calls: list[str] = []

    def root_for(self, name: str) -> Path | None:
        self.calls.append(name)
        return self.roots.get(name)


class StaticResources:
    def __init__(self, pairs: list[tuple[str, str]]) -> None:
        self.pairs = pairs
        self.scopes: list[str | None] = []

    def resources_for(self, scope: str | None) -> list[tuple[str, str]]:
        self.scopes.append(scope)
        return list(self.pairs)


class StaticGenerators:
    def __init__(self, pairs: list[tuple[str, Any]]) -> None:
        self.pairs = pairs

    def generators(self) -> list[tuple[str, Any]]:
        return list(self.pairs)


class CrashingGenerators:
    def generators(self) -> list[tuple[str, Any]]:
        raise KeyError("registry bug")


@pytest.fixture
def paths(tmp_path: Path) -> CountingPaths:
    ash = tmp_path / "ash"
    ash.mkdir()
    (ash / "usage-rules.md").write_text("# Ash\nDefine resources with Ash.Resource.\n")
    return CountingPaths({"ash": ash})


@pytest.fixture
def resources() -> StaticResources:
    return StaticResources([("MyApp.Accounts.User", "MyApp.Accounts")])


@pytest.fixture
def dispatcher(paths: CountingPaths, resources: StaticResources) -> ActionDispatcher:
    return ActionDispatcher(
        Resolvers(
            rules=PackageRulesService(paths),
            resources=ResourceService(resources),
            generators=GeneratorService(
                StaticGenerators([("ash.gen.resource", None), ("ash.gen.domain", False)])
            ),
            scope="my_app",
        )
    )


class TestCatalog:
    def test_every_action_has_a_spec(self) -> None:
        assert set(ACTIONS) == set(Action)
        for action, spec in ACTIONS.items():
            assert spec.action is action

    def test_records(self) -> None:
        assert ACTIONS[Action.GET_PACKAGE_RULES].record is PackageRuleEntry
        assert ACTIONS[Action.LIST_ASH_RESOURCES].record is ResourceDescriptor
        assert ACTIONS[Action.LIST_GENERATORS].record is GeneratorDescriptor

    @pytest.mark.parametrize(
        ("action", "words"),
        [
            (Action.GET_PACKAGE_RULES, ["rules", "packages", "usage-rules.md"]),
            (Action.LIST_ASH_RESOURCES, ["Ash resources", "domains"]),
            (Action.LIST_GENERATORS, ["generators", "igniter"]),
        ],
    )
    def test_descriptions(self, action: Action, words: list[str]) -> None:
        for word in words:
            assert word in ACTIONS[action].description

    def test_describe(self) -> None:
        described = {d["name"]: d for d in ActionDispatcher.describe()}
        assert list(described) == [a.value for a in Action]
        schema = described["get_package_rules"]["input_schema"]
        assert schema["required"] == ["packages"]
        assert schema["properties"]["packages"]["type"] == "array"
        assert "packages" not in described["list_generators"]["input_schema"].get(
            "properties", {}
        )


class TestGetPackageRulesAction:
    def test_known_and_unknown(self, dispatcher: ActionDispatcher) -> None:
        result = dispatcher.dispatch(
            "get_package_rules", {"packages": ["ash", "non_existent_package"]}
        )
        assert result.ok
        assert len(result.items) == 1
        assert result.items[0].package == "ash"
        assert "Ash" in result.items[0].rules

    def test_empty_list_is_valid(
        self, dispatcher: ActionDispatcher, paths: CountingPaths
    ) -> None:
        result = dispatcher.dispatch("get_package_rules", {"packages": []})
        assert result.ok
        assert result.items == []
        assert paths.calls == []

    def test_missing_packages(self, dispatcher: ActionDispatcher, paths: CountingPaths) -> None:
        result = dispatcher.dispatch("get_package_rules", {})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ErrorKind.VALIDATION_ERROR
        assert result.error.detail["errors"][0]["loc"] == ("packages",)
        assert paths.calls == []

    def test_none_arguments_means_missing(self, dispatcher: ActionDispatcher) -> None:
        result = dispatcher.dispatch("get_package_rules")
        assert result.error is not None
        assert result.error.code == ErrorKind.VALIDATION_ERROR

    @pytest.mark.parametrize(
        "packages",
        ["ash", ["ash", 3], [None], [["ash"]]],
    )
    def test_malformed_packages(
        self, dispatcher: ActionDispatcher, paths: CountingPaths, packages: Any
    ) -> None:
        result = dispatcher.dispatch("get_package_rules", {"packages": packages})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ErrorKind.VALIDATION_ERROR
        assert paths.calls == []

    def test_unexpected_argument(self, dispatcher: ActionDispatcher) -> None:
        result = dispatcher.dispatch("get_package_rules", {"packages": [], "pkgs": ["ash"]})
        assert result.error is not None
        assert result.error.code == ErrorKind.VALIDATION_ERROR

    def test_idempotent(self, dispatcher: ActionDispatcher) -> None:
        first = dispatcher.dispatch("get_package_rules", {"packages": ["ash"]})
        second = dispatcher.dispatch("get_package_rules", {"packages": ["ash"]})
        assert first.items == second.items


class TestListActions:
    def test_resources_use_scope(
        self, dispatcher: ActionDispatcher, resources: StaticResources
    ) -> None:
        result = dispatcher.dispatch("list_ash_resources", {})
        assert result.ok
        assert result.items == [
            ResourceDescriptor(name="MyApp.Accounts.User", domain="MyApp.Accounts")
        ]
        assert resources.scopes == ["my_app"]

    def test_generators(self, dispatcher: ActionDispatcher) -> None:
        result = dispatcher.dispatch(Action.LIST_GENERATORS)
        assert result.ok
        assert [(g.command, g.docs) for g in result.items] == [
            ("ash.gen.resource", Undocumented()),
            ("ash.gen.domain", ExplicitlyEmpty()),
        ]

    def test_list_actions_reject_arguments(self, dispatcher: ActionDispatcher) -> None:
        result = dispatcher.dispatch("list_generators", {"verbose": True})
        assert result.error is not None
        assert result.error.code == ErrorKind.VALIDATION_ERROR


class TestDispatchErrors:
    def test_unknown_action(self, dispatcher: ActionDispatcher) -> None:
        result = dispatcher.dispatch("list_everything", {})
        assert not result.ok
        assert result.op == "list_everything"
        assert result.error is not None
        assert result.error.code == ErrorKind.VALIDATION_ERROR
        assert result.error.detail["known"] == [a.value for a in Action]

    def test_non_mapping_arguments(self, dispatcher: ActionDispatcher) -> None:
        result = dispatcher.dispatch("get_package_rules", ["ash"])  # type: ignore[arg-type]
        assert result.error is not None
        assert result.error.code == ErrorKind.VALIDATION_ERROR
        assert "mapping" in result.error.message

    def test_unexpected_exception_is_execution_error(
        self, paths: CountingPaths, resources: StaticResources
    ) -> None:
        dispatcher = ActionDispatcher(
            Resolvers(
                rules=PackageRulesService(paths),
                resources=ResourceService(resources),
                generators=GeneratorService(CrashingGenerators()),
            )
        )
        result = dispatcher.dispatch("list_generators")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ErrorKind.EXECUTION_ERROR
        assert result.error.detail == {"exception": "KeyError"}


class TestFromProject:
    def test_own_rules(self, project) -> None:  # type: ignore[no-untyped-def]
        result = ActionDispatcher.from_project(project).dispatch(
            "get_package_rules", {"packages": ["stackscout"]}
        )
        assert result.ok
        assert [e.package for e in result.items] == ["stackscout"]
        assert result.items[0].rules.startswith("# Rules for working with stackscout")
