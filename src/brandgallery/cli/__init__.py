"""Brand Gallery CLI entry point with lazy command registration."""

from __future__ import annotations

import logging
import os

import click

_COMMANDS_REGISTERED = False


def _register_commands_once() -> None:
    global _COMMANDS_REGISTERED
    if _COMMANDS_REGISTERED:
        return

    from .commands import ingest, inspect

    cli.add_command(ingest.ingest_command, name="ingest")
    cli.add_command(inspect.tree_command, name="tree")
    cli.add_command(inspect.sheets_command, name="sheets")
    cli.add_command(inspect.purchases_command, name="purchases")
    cli.add_command(inspect.show_config_command, name="show-config")

    _COMMANDS_REGISTERED = True


class _LazyCLIGroup(click.Group):
    def list_commands(self, ctx):
        _register_commands_once()
        return super().list_commands(ctx)

    def get_command(self, ctx, cmd_name):
        _register_commands_once()
        return super().get_command(ctx, cmd_name)


@click.group(cls=_LazyCLIGroup)
def cli():
    """Brand Gallery CLI for local administration."""
    logging.basicConfig(
        level=getattr(logging, str(os.getenv("BRANDGALLERY_LOG_LEVEL") or "WARNING").upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    cli()
