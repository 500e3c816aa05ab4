"""Spotify API client.

Handles all HTTP requests to Spotify Web API endpoints. The client owns the
current OAuth token and refreshes it transparently once it expires, so the
token read back at close time may differ from the one it started with.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Sequence

import requests

from .auth import SpotifyToken

logger = logging.getLogger(__name__)
API_BASE = "https://api.spotify.com/v1"

TokenRefresher = Callable[[SpotifyToken], SpotifyToken]


class SpotifyAPIClient:
    """Spotify Web API client.

    Provides the read and write calls the Spotify service needs: profile,
    saved tracks, search, library and playlist modification, top items and
    recommendations.
    """

    def __init__(self, token: SpotifyToken, refresher: TokenRefresher | None = None):
        """Initialize client with a token.

        Args:
            token: OAuth token (possibly restored from secrets)
            refresher: Callable exchanging an expired token for a new one
        """
        self._token = token
        self._refresher = refresher

    def token(self) -> SpotifyToken:
        """Return a valid token, refreshing it first when expired.

        Raises:
            requests.RequestException: If the refresh request fails
        """
        if self._refresher is not None and self._token.expired() and self._token.refresh_token:
            self._token = self._refresher(self._token)
        return self._token

    def _headers(self) -> Dict[str, str]:
        """Build authorization headers for API requests."""
        token = self.token()
        return {"Authorization": f"{token.token_type or 'Bearer'} {token.access_token}"}

    @staticmethod
    def _json_or_empty(r: requests.Response) -> Dict[str, Any]:
        if not r.text:
            return {}
        try:
            return r.json()
        except ValueError:
            return {}

    def _get(self, path: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Execute GET request.

        Args:
            path: API endpoint path (e.g., '/me/tracks')
            params: Optional query parameters

        Returns:
            JSON response as dict

        Raises:
            requests.RequestException: On transport or HTTP errors
        """
        logger.debug(f"GET {path} params={params}")
        r = requests.get(API_BASE + path, headers=self._headers(), params=params, timeout=30)
        r.raise_for_status()
        return r.json()

    def _put(self, path: str, json: Dict[str, Any], params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Execute PUT request.

        Returns:
            JSON response as dict (may be empty)
        """
        logger.debug(f"PUT {path}")
        r = requests.put(API_BASE + path, headers=self._headers(), params=params, json=json, timeout=30)
        r.raise_for_status()
        return self._json_or_empty(r)

    def _post(self, path: str, json: Dict[str, Any]) -> Dict[str, Any]:
        """Execute POST request.

        Returns:
            JSON response as dict (may be empty)
        """
        logger.debug(f"POST {path}")
        r = requests.post(API_BASE + path, headers=self._headers(), json=json, timeout=30)
        r.raise_for_status()
        return self._json_or_empty(r)

    def current_user_profile(self) -> Dict[str, Any]:
        """Get current user's profile information.

        Returns:
            User profile dict with 'id', 'display_name', etc.
        """
        return self._get("/me")

    def saved_tracks(self, limit: int, offset: int) -> List[Dict[str, Any]]:
        """Fetch one page of the user's saved (liked) tracks.

        Returns:
            Saved-track item dicts with 'track' and 'added_at'
        """
        data = self._get("/me/tracks", params={"limit": limit, "offset": offset})
        items = data.get("items", [])
        logger.debug(f"Fetched {len(items)} liked tracks (offset={offset})")
        return items

    def search(self, query: str, search_type: str, limit: int = 1) -> Dict[str, Any]:
        """Search the catalog.

        Args:
            query: Spotify search query (field filters allowed)
            search_type: 'track', 'playlist', ...
            limit: Maximum results per type
        """
        return self._get("/search", params={"q": query, "type": search_type, "limit": limit})

    def add_tracks_to_library(self, track_ids: Sequence[str]) -> None:
        self._put("/me/tracks", json={"ids": list(track_ids)})

    def playlist_items(self, playlist_id: str, limit: int, offset: int) -> Dict[str, Any]:
        """Fetch one page of playlist items.

        Returns:
            Paging object with 'items' and 'total'
        """
        return self._get(
            f"/playlists/{playlist_id}/tracks",
            params={"limit": limit, "offset": offset, "additional_types": "track"},
        )

    def create_playlist(self, user_id: str, name: str, description: str, public: bool = True) -> Dict[str, Any]:
        return self._post(
            f"/users/{user_id}/playlists",
            json={"name": name, "description": description, "public": public, "collaborative": False},
        )

    def replace_playlist_tracks(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        uris = [f"spotify:track:{tid}" for tid in track_ids]
        self._put(f"/playlists/{playlist_id}/tracks", json={"uris": uris})

    def add_tracks_to_playlist(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        uris = [f"spotify:track:{tid}" for tid in track_ids]
        self._post(f"/playlists/{playlist_id}/tracks", json={"uris": uris})

    def top_items(self, item_type: str, time_range: str, limit: int = 50) -> List[Dict[str, Any]]:
        """Fetch the user's top 'artists' or 'tracks' for a time range."""
        data = self._get(f"/me/top/{item_type}", params={"time_range": time_range, "limit": limit})
        return data.get("items", [])

    def recommendations(self, seed_artists: Sequence[str], seed_tracks: Sequence[str], limit: int = 100) -> List[Dict[str, Any]]:
        params = {
            "seed_artists": ",".join(seed_artists),
            "seed_tracks": ",".join(seed_tracks),
            "limit": limit,
        }
        data = self._get("/recommendations", params=params)
        return data.get("tracks", [])


__all__ = ["SpotifyAPIClient"]
