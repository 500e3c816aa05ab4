"""Loved-track pagination shared by listing and syncing.

A walk starts at ``options.page`` and requests pages of ``options.limit``
tracks. A limit of 0 switches to a continuous walk: pages of
CONTINUOUS_PAGE_SIZE are requested until the backend returns a short page.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator

from ..providers.base import Service, Track

logger = logging.getLogger(__name__)

CONTINUOUS_PAGE_SIZE = 50


@dataclass(frozen=True)
class PageOptions:
    """Per-invocation paging parameters.

    Attributes:
        limit: Tracks per page; 0 walks every page
        page: 1-based page to start from
    """
    limit: int = 10
    page: int = 1

    @property
    def continuous(self) -> bool:
        return self.limit == 0

    @property
    def effective_limit(self) -> int:
        return CONTINUOUS_PAGE_SIZE if self.continuous else self.limit


def iter_loved_tracks(service: Service, options: PageOptions) -> Iterator[Track]:
    """Yield loved tracks page by page in backend order.

    Pages are fetched lazily: a consumer that stops iterating (or raises)
    causes no further page requests.

    Raises:
        TrackFetchError: If a page cannot be fetched
    """
    limit = options.effective_limit
    page = options.page
    while True:
        tracks = service.get_loved_tracks(limit, page)
        logger.debug(f"{service.name()} page {page}: {len(tracks)} track(s)")
        yield from tracks
        if not options.continuous or len(tracks) < limit:
            return
        page += 1


__all__ = ["PageOptions", "iter_loved_tracks", "CONTINUOUS_PAGE_SIZE"]
