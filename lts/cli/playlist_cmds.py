"""Spotify derivative playlist commands."""

from __future__ import annotations
import click

from .helpers import cli, get_service_loader, handle_errors
from ..services.playlist_service import create_discover_daily, dump_discover_weekly


@cli.command()
@click.pass_context
@handle_errors
def daily(ctx: click.Context):
    """Create Discover Daily playlist from Spotify recommendations."""
    with get_service_loader(ctx.obj).for_name('spotify') as service:
        create_discover_daily(service, click.echo)


@cli.command()
@click.pass_context
@handle_errors
def dump(ctx: click.Context):
    """Back up your Spotify Discover Weekly playlist for the current week."""
    with get_service_loader(ctx.obj).for_name('spotify') as service:
        dump_discover_weekly(service, click.echo)


__all__ = ['daily', 'dump']
