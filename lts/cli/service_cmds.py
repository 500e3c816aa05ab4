"""Service authentication commands: login and status."""

from __future__ import annotations
import logging

import click

from .helpers import cli, get_service_loader, handle_errors
from ..auth.callback import CallbackServer
from ..services.login_service import login as login_service
from ..services.status_service import report_status

logger = logging.getLogger(__name__)


@cli.command()
@click.argument('service')
@click.argument('code', required=False)
@click.pass_context
@handle_errors
def login(ctx: click.Context, service: str, code: str | None):
    """Log in on SERVICE.

    Without CODE the authorization URL is printed and a local callback
    server waits for the browser redirect. Pass CODE to complete a login
    whose code was copied by hand.
    """
    cfg = ctx.obj
    loader = get_service_loader(cfg)
    callback = CallbackServer(cfg.callback) if code is None else None
    login_service(
        loader,
        service,
        redirect_url=cfg.callback.redirect_url(),
        write=click.echo,
        code=code,
        callback=callback,
    )


@cli.command()
@click.pass_context
@handle_errors
def status(ctx: click.Context):
    """Show login status for every service."""
    report_status(get_service_loader(ctx.obj), click.echo)


__all__ = ['login', 'status']
