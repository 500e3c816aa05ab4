"""List service: print one service's loved tracks."""

from __future__ import annotations
import logging

from ..errors import NotAuthenticatedError
from ..providers.base import ServiceLoader
from ..utils.output import Writer
from .pagination import PageOptions, iter_loved_tracks

logger = logging.getLogger(__name__)


def list_loved_tracks(loader: ServiceLoader, service_name: str, options: PageOptions, write: Writer) -> int:
    """Write every loved track of service_name, one per line.

    Returns:
        Number of tracks written
    """
    count = 0
    with loader.for_name(service_name) as service:
        if not service.authenticated():
            raise NotAuthenticatedError(service.name())

        for track in iter_loved_tracks(service, options):
            write(str(track))
            count += 1

    logger.debug(f"Listed {count} track(s) from {service_name}")
    return count


__all__ = ["list_loved_tracks"]
