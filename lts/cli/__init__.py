"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands. Keep this file minimal to avoid circular
imports and duplication.
"""
from lts.cli.helpers import cli  # root group
from lts.cli import service_cmds  # noqa: F401
from lts.cli import track_cmds  # noqa: F401
from lts.cli import playlist_cmds  # noqa: F401


def main() -> None:
    """Console-script entry point."""
    cli()


__all__ = ["cli", "main"]
