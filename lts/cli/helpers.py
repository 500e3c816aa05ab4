from __future__ import annotations
import functools
import logging

import click

from ..config import load_typed_config
from ..config_types import AppConfig
from ..errors import LtsError
from ..providers import ServiceLoader, build_service_loader
from ..version import __version__

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="loved-track-sync")
@click.pass_context
def cli(ctx: click.Context):
    """Sync loved tracks between music services.

    \b
    TYPICAL WORKFLOWS:

    \b
    Initial Setup:
      lts login spotify     # Authenticate with Spotify
      lts login lastfm      # Authenticate with Last.fm
      lts status            # Check who is logged in where

    \b
    Mirror favorites:
      lts list lastfm --limit 20          # Inspect recent loved tracks
      lts sync lastfm spotify --limit 0   # Love every Last.fm track on Spotify

    \b
    Spotify playlists:
      lts daily             # Discover Daily playlist from recommendations
      lts dump              # Back up this week's Discover Weekly
    """
    if not isinstance(ctx.obj, AppConfig):
        ctx.obj = load_typed_config()


def get_service_loader(cfg: AppConfig) -> ServiceLoader:
    """Build the service registry for the current invocation."""
    return build_service_loader(cfg)


def handle_errors(func):
    """Report application errors as a click error (exit code 1)."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LtsError as e:
            logger.debug("Command failed", exc_info=True)
            raise click.ClickException(str(e)) from e
    return wrapper


__all__ = ["cli", "get_service_loader", "handle_errors"]
