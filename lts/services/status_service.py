"""Status service: authentication state of every registered service."""

from __future__ import annotations
import logging

from ..providers.base import ServiceLoader
from ..utils.output import Writer

logger = logging.getLogger(__name__)


def report_status(loader: ServiceLoader, write: Writer) -> None:
    """Write a two-line status block per service, in registry order.

    Output per service::

        Spotify
        \tAuthenticated as someone

    A resolution or profile failure aborts the report; blocks already
    written for earlier services stay written.
    """
    for service_name in loader.names():
        with loader.for_name(service_name) as service:
            if service.authenticated():
                status = f"Authenticated as {service.get_username()}"
            else:
                status = "Not logged in"

            write(service.name())
            write(f"\t{status}")


__all__ = ["report_status"]
