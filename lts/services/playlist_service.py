"""Playlist service: Spotify derivative playlists.

Two composite features built on the Spotify API client:
- Discover Daily: a playlist of recommendations seeded from top items
- Discover Weekly backup: a dated copy of the current Discover Weekly
"""

from __future__ import annotations
import logging
import random
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List

import requests

from ..errors import NotAuthenticatedError, PlaylistError, PlaylistNotFoundError
from ..providers.spotify import SpotifyService
from ..providers.spotify.service import track_from_item
from ..utils.output import Writer

logger = logging.getLogger(__name__)

TIME_RANGES = ("long_term", "medium_term", "short_term")
TOP_ITEMS_LIMIT = 50
RECOMMENDATIONS_LIMIT = 100
# Spotify accepts at most five seeds in total
SEED_ARTISTS = 2
SEED_TRACKS = 3
PLAYLIST_PAGE_SIZE = 50
DISCOVER_WEEKLY = "Discover Weekly"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_login(service: SpotifyService) -> None:
    if not service.authenticated():
        raise NotAuthenticatedError(service.name())


def create_discover_daily(
    service: SpotifyService,
    write: Writer,
    rng: random.Random | None = None,
    clock: Clock = _utcnow,
) -> str:
    """Create a "Discover Daily <dd-mm-YYYY>" playlist from recommendations.

    Seeds are drawn from the user's shuffled top artists and tracks for a
    randomly chosen time range. Every recommended track is written out.

    Returns:
        ID of the created playlist
    """
    _require_login(service)
    rng = rng or random.Random()
    user_id = service.get_user_id()
    time_range = rng.choice(TIME_RANGES)
    api = service.api

    try:
        artist_ids = [a["id"] for a in api.top_items("artists", time_range, TOP_ITEMS_LIMIT)]
        track_ids = [t["id"] for t in api.top_items("tracks", time_range, TOP_ITEMS_LIMIT)]
    except requests.RequestException as e:
        raise PlaylistError(f"failed to get current user top items from Spotify: {e}") from e
    if not artist_ids and not track_ids:
        raise PlaylistError("no top artists or tracks to seed recommendations")
    rng.shuffle(artist_ids)
    rng.shuffle(track_ids)

    try:
        recommended = api.recommendations(artist_ids[:SEED_ARTISTS], track_ids[:SEED_TRACKS], RECOMMENDATIONS_LIMIT)
    except requests.RequestException as e:
        raise PlaylistError(f"failed to get recommendations from Spotify: {e}") from e

    recommended_ids: List[str] = []
    for item in recommended:
        recommended_ids.append(item["id"])
        write(str(track_from_item(item)))

    date = clock().strftime("%d-%m-%Y")
    name = f"Discover Daily {date}"
    description = f"Discover Daily playlist for {date} from recommendations with options: {time_range}"
    try:
        playlist = api.create_playlist(user_id, name, description, public=True)
        if recommended_ids:
            api.add_tracks_to_playlist(playlist["id"], recommended_ids)
    except requests.RequestException as e:
        raise PlaylistError(f"failed to create Spotify playlist {name!r}: {e}") from e

    logger.info(f"Created playlist '{name}' with {len(recommended_ids)} track(s)")
    return playlist["id"]


def _find_playlist(service: SpotifyService, query: str) -> Dict[str, Any]:
    try:
        result = service.api.search(query, "playlist", limit=1)
    except requests.RequestException as e:
        raise PlaylistError(f"failed to search {query} playlist: {e}") from e
    # The search API can return null entries for unavailable playlists
    playlists = [p for p in (result.get("playlists") or {}).get("items") or [] if p]
    if not playlists:
        raise PlaylistNotFoundError(f"playlist {query} not found")
    return playlists[0]


def dump_discover_weekly(
    service: SpotifyService,
    write: Writer,
    clock: Clock = _utcnow,
) -> int:
    """Back up the current Discover Weekly into "Discover Weekly #<week> <year>".

    Source items are copied page by page; the first page replaces the
    backup's contents and later pages are appended.

    Returns:
        Number of tracks copied
    """
    _require_login(service)
    user_id = service.get_user_id()
    write(f"UserID: {user_id}")

    source = _find_playlist(service, DISCOVER_WEEKLY)
    write(f"PlaylistID: {source['id']}")

    year, week, _ = clock().isocalendar()
    name = f"Discover Weekly #{week} {year}"
    description = f"Backup of the Discover Weekly playlist for {week} week in {year}."
    api = service.api

    try:
        backup = api.create_playlist(user_id, name, description, public=True)
    except requests.RequestException as e:
        raise PlaylistError(f"failed to create Spotify playlist {name!r}: {e}") from e

    copied = 0
    offset = 0
    page = 1
    while True:
        try:
            data = api.playlist_items(source["id"], limit=PLAYLIST_PAGE_SIZE, offset=offset)
        except requests.RequestException as e:
            raise PlaylistError(f"failed to read Spotify playlist data: {e}") from e
        if page == 1:
            write(f"Playlist has {data.get('total', 0)} total tracks")

        items = [item for item in data.get("items", []) if item.get("track")]
        write(f"Page {page} has {len(items)} tracks")
        if not items:
            break

        track_ids = []
        for item in items:
            track_ids.append(item["track"]["id"])
            write(str(track_from_item(item)))

        try:
            if page == 1:
                api.replace_playlist_tracks(backup["id"], track_ids)
            else:
                api.add_tracks_to_playlist(backup["id"], track_ids)
        except requests.RequestException as e:
            raise PlaylistError(f"failed to add tracks to playlist {name!r}: {e}") from e
        copied += len(track_ids)

        if len(data.get("items", [])) < PLAYLIST_PAGE_SIZE:
            break
        offset += len(data.get("items", []))
        page += 1

    logger.info(f"Copied {copied} track(s) into '{name}'")
    return copied


__all__ = ["create_discover_daily", "dump_discover_weekly"]
