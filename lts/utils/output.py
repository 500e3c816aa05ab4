"""Output sink shared by services and CLI commands."""

from typing import Callable

# Services emit one line per call; the CLI passes click.echo
Writer = Callable[[str], None]

__all__ = ["Writer"]
