"""Loved-track commands: list and sync."""

from __future__ import annotations
import logging

import click

from .helpers import cli, get_service_loader, handle_errors
from ..services.list_service import list_loved_tracks
from ..services.pagination import PageOptions
from ..services.sync_service import sync_loved_tracks

logger = logging.getLogger(__name__)


def paging_options(verb: str):
    """Attach the shared --limit/--page options."""
    def decorator(func):
        func = click.option(
            '--page', '-p', type=click.IntRange(min=1), default=1, show_default=True,
            help=f'Page number to start {verb} from',
        )(func)
        func = click.option(
            '--limit', '-l', type=click.IntRange(min=0), default=10, show_default=True,
            help=(
                f'Number of tracks for {verb}. Specify 0 for all tracks; pages are '
                'then 50 tracks long (relevant for --page)'
            ),
        )(func)
        return func
    return decorator


@cli.command(name='list')
@click.argument('service')
@paging_options('displaying')
@click.pass_context
@handle_errors
def list_cmd(ctx: click.Context, service: str, limit: int, page: int):
    """List loved tracks on SERVICE."""
    loader = get_service_loader(ctx.obj)
    list_loved_tracks(loader, service, PageOptions(limit=limit, page=page), click.echo)


@cli.command()
@click.argument('source')
@click.argument('target')
@paging_options('syncing')
@click.pass_context
@handle_errors
def sync(ctx: click.Context, source: str, target: str, limit: int, page: int):
    """Sync recently loved tracks from SOURCE to TARGET."""
    loader = get_service_loader(ctx.obj)
    result = sync_loved_tracks(loader, source, target, PageOptions(limit=limit, page=page), click.echo)
    logger.debug(f"Completed in {result.duration_seconds:.2f}s")


__all__ = ['list_cmd', 'sync']
