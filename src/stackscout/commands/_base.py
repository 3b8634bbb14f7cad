"""Click classes shared by every stackscout command.

Commands and groups built with ``examples="..."`` grow an eager
``--examples`` flag that prints the text and exits, so ``--help`` stays
short.

A GeneratorCommand is listed by ``list_generators`` under its dotted
``generator`` name. Passing ``docs=False`` marks it as deliberately
undocumented, which the catalog tells apart from a command that merely
lacks help text.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Stores ``examples`` and wires the ``--examples`` flag when given."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return

        def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if value:
                click.echo(f"Examples for '{ctx.command_path}':\n")
                click.echo(examples)
                ctx.exit(0)

        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                is_eager=True,
                expose_value=False,
                callback=show,
                help="Show usage examples.",
            )
        )


class ScoutCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class ScoutGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands are ScoutCommands unless told otherwise."""

    command_class = ScoutCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class GeneratorCommand(ScoutCommand):
    """A command that shows up in the generator catalog."""

    def __init__(
        self,
        *args: Any,
        generator: str | None = None,
        docs: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.generator = generator
        self.docs = docs
