"""Tests for the generator registry."""

from __future__ import annotations

import click
import pytest

from stackscout.commands._base import GeneratorCommand
from stackscout.commands.gen import builtin_generators
from stackscout.infrastructure.generators import (
    GeneratorRegistry,
    command_name,
    raw_docs,
)
from stackscout.infrastructure.resources import RegistryError
from stackscout.plugins.hookspecs import hookimpl
from stackscout.plugins.manager import PluginManager


@click.command(cls=GeneratorCommand, generator="shop.gen.order")
def gen_order() -> None:
    """Generate an order resource."""


@click.command(cls=GeneratorCommand, generator="shop.gen.secret", docs=False)
def gen_secret() -> None:
    """Help text that must not be listed."""


@click.command("shop.gen.bare")
def gen_bare() -> None:
    pass


class _GeneratorsPlugin:
    def __init__(self, commands: list[object]) -> None:
        self.commands = commands

    @hookimpl
    def register_generators(self) -> list[object]:
        return self.commands


class _BrokenPlugin:
    @hookimpl
    def register_generators(self) -> list[object]:
        raise RuntimeError("generator plugin exploded")


def _registry(*plugins: object, builtins: list[click.Command] | None = None) -> GeneratorRegistry:
    pm = PluginManager()
    for plugin in plugins:
        pm.register_plugin(plugin)
    return GeneratorRegistry(builtins or [], plugin_manager=pm, entry_point_group=None)


class TestCommandDocs:
    def test_help_text(self) -> None:
        assert raw_docs(gen_order) == "Generate an order resource."

    def test_docs_disabled(self) -> None:
        assert raw_docs(gen_secret) is False

    def test_no_help(self) -> None:
        assert raw_docs(gen_bare) is None

    def test_generator_name_wins(self) -> None:
        assert command_name(gen_order) == "shop.gen.order"
        assert gen_order.name == "gen-order"

    def test_click_name_fallback(self) -> None:
        assert command_name(gen_bare) == "shop.gen.bare"


class TestGeneratorRegistry:
    def test_builtins_first(self) -> None:
        reg = GeneratorRegistry(builtin_generators(), entry_point_group=None)
        assert [name for name, _ in reg.generators()] == [
            "stackscout.install",
            "stackscout.gen.usage_rules",
            "stackscout.gen.mcp",
        ]

    def test_builtins_are_documented(self) -> None:
        reg = GeneratorRegistry(builtin_generators(), entry_point_group=None)
        for _, docs in reg.generators():
            assert isinstance(docs, str)
            assert docs

    def test_plugin_commands_follow_builtins(self) -> None:
        reg = _registry(
            _GeneratorsPlugin([gen_order, gen_secret, gen_bare]),
            builtins=builtin_generators(),
        )
        pairs = reg.generators()
        assert pairs[3:] == [
            ("shop.gen.order", "Generate an order resource."),
            ("shop.gen.secret", False),
            ("shop.gen.bare", None),
        ]

    def test_duplicate_names_keep_first(self) -> None:
        @click.command(cls=GeneratorCommand, generator="shop.gen.order")
        def other_order() -> None:
            """Shadowing command."""

        reg = _registry(_GeneratorsPlugin([gen_order, other_order]))
        assert reg.generators() == [("shop.gen.order", "Generate an order resource.")]

    def test_failing_plugin_raises(self) -> None:
        with pytest.raises(RegistryError, match="exploded"):
            _registry(_BrokenPlugin()).generators()

    def test_non_command_raises(self) -> None:
        with pytest.raises(RegistryError, match="expected a click command"):
            _registry(_GeneratorsPlugin(["not a command"])).generators()

    def test_empty(self) -> None:
        assert GeneratorRegistry(entry_point_group=None).generators() == []

    def test_unused_entry_point_group(self) -> None:
        reg = GeneratorRegistry(entry_point_group="stackscout.tests.no_such_group")
        assert reg.generators() == []
