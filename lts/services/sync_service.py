"""Sync service: mirror loved tracks from one service to another.

Tracks are matched on the target by artist and name only. Loving is
best-effort and treated as idempotent on the backend, so an aborted sync
can simply be re-run; nothing already loved is rolled back.
"""

from __future__ import annotations
import logging
import time
from contextlib import ExitStack
from dataclasses import dataclass

from ..errors import NotAuthenticatedError
from ..providers.base import ServiceLoader
from ..utils.output import Writer
from .pagination import PageOptions, iter_loved_tracks

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Results from a sync operation."""
    source: str
    target: str
    synced: int = 0
    duration_seconds: float = 0.0


def sync_loved_tracks(
    loader: ServiceLoader,
    source_name: str,
    target_name: str,
    options: PageOptions,
    write: Writer,
) -> SyncResult:
    """Love every source track on the target, in source order.

    The first failure (resolution, authentication, page fetch or love)
    aborts the sync and propagates. Both services are closed on every path.

    Args:
        loader: Service registry
        source_name: Service to read loved tracks from
        target_name: Service to love tracks on
        options: Paging parameters for the source walk
        write: Line sink; receives "Synced: <artist> - <name>" per track
    """
    start = time.time()
    with ExitStack() as stack:
        source = stack.enter_context(loader.for_name(source_name))
        target = stack.enter_context(loader.for_name(target_name))

        if not source.authenticated():
            raise NotAuthenticatedError(source.name())
        if not target.authenticated():
            raise NotAuthenticatedError(target.name())

        result = SyncResult(source=source.name(), target=target.name())
        for track in iter_loved_tracks(source, options):
            target.love_track(track)
            write(f"Synced: {track}")
            result.synced += 1

    result.duration_seconds = time.time() - start
    logger.debug(
        f"Synced {result.synced} track(s) from {result.source} to {result.target} "
        f"in {result.duration_seconds:.2f}s"
    )
    return result


__all__ = ["sync_loved_tracks", "SyncResult"]
