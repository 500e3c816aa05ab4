"""Service layer for loved-track-sync.

This package contains orchestration logic extracted from CLI commands:
paging through loved tracks, syncing, status reporting, login and the
Spotify derivative playlists. CLI commands focus on argument handling and
turn errors into exit codes.
"""

from .pagination import PageOptions, iter_loved_tracks
from .list_service import list_loved_tracks
from .sync_service import sync_loved_tracks, SyncResult
from .status_service import report_status
from .login_service import login
from .playlist_service import create_discover_daily, dump_discover_weekly

__all__ = [
    'PageOptions',
    'iter_loved_tracks',
    'list_loved_tracks',
    'sync_loved_tracks',
    'SyncResult',
    'report_status',
    'login',
    'create_discover_daily',
    'dump_discover_weekly',
]
