"""Last.fm API client.

Thin synchronous wrapper over the Last.fm 2.0 REST API covering the web
authentication flow, profile lookup and the loved-tracks endpoints.
"""

from __future__ import annotations
import hashlib
import logging
from typing import Any, Dict, List
from urllib.parse import urlencode

import requests

logger = logging.getLogger(__name__)

API_ROOT = "https://ws.audioscrobbler.com/2.0/"
AUTH_URL = "https://www.last.fm/api/auth/"

# Parameters Last.fm excludes from the request signature
_UNSIGNED_PARAMS = {"format", "callback"}


class LastfmAPIError(Exception):
    """Error payload returned by the Last.fm API."""

    def __init__(self, code: int, message: str):
        super().__init__(f"Last.fm error {code}: {message}")
        self.code = code
        self.message = message


class LastfmAPIClient:
    """Last.fm web service client.

    ``session_key`` is None until a session has been obtained or restored.
    """

    def __init__(self, api_key: str, api_secret: str, session_key: str | None = None):
        self.api_key = api_key
        self.api_secret = api_secret
        self.session_key = session_key

    def sign(self, params: Dict[str, str]) -> str:
        """Create API signature for authenticated requests.

        Args:
            params: Request parameters

        Returns:
            MD5 signature string
        """
        sig_string = "".join(
            f"{k}{v}" for k, v in sorted(params.items()) if k not in _UNSIGNED_PARAMS
        )
        sig_string += self.api_secret
        # MD5 is mandated by the Last.fm API signature scheme
        return hashlib.md5(sig_string.encode("utf-8"), usedforsecurity=False).hexdigest()

    def auth_url(self, callback_url: str) -> str:
        return f"{AUTH_URL}?{urlencode({'api_key': self.api_key, 'cb': callback_url})}"

    def _call(self, method: str, params: Dict[str, Any], signed: bool = False, post: bool = False) -> Dict[str, Any]:
        """Execute an API method and return the decoded JSON body.

        Raises:
            LastfmAPIError: If the API reports an error
            requests.RequestException: On transport or HTTP errors
        """
        request_params = {"method": method, "api_key": self.api_key, **params}
        if signed:
            request_params["api_sig"] = self.sign(request_params)
        request_params["format"] = "json"

        logger.debug(f"Last.fm {method}")
        if post:
            r = requests.post(API_ROOT, data=request_params, timeout=30)
        else:
            r = requests.get(API_ROOT, params=request_params, timeout=30)

        try:
            data = r.json()
        except ValueError:
            r.raise_for_status()
            raise
        if isinstance(data, dict) and "error" in data:
            raise LastfmAPIError(int(data["error"]), data.get("message", ""))
        r.raise_for_status()
        return data

    def get_session(self, token: str) -> Dict[str, Any]:
        """Exchange an auth token for a session and keep its key.

        Returns:
            Session dict with 'name' and 'key'
        """
        data = self._call("auth.getSession", {"token": token}, signed=True)
        session = data["session"]
        self.session_key = session["key"]
        return session

    def user_info(self) -> Dict[str, Any]:
        data = self._call("user.getInfo", {"sk": self.session_key}, signed=True)
        return data["user"]

    def loved_tracks(self, user: str, limit: int, page: int) -> List[Dict[str, Any]]:
        data = self._call("user.getLovedTracks", {"user": user, "limit": limit, "page": page})
        raw = (data.get("lovedtracks") or {}).get("track", [])
        if isinstance(raw, dict):  # API returns a dict for a single track
            raw = [raw]
        return raw

    def love_track(self, artist: str, track: str) -> None:
        self._call(
            "track.love",
            {"artist": artist, "track": track, "sk": self.session_key},
            signed=True,
            post=True,
        )


__all__ = ["LastfmAPIClient", "LastfmAPIError"]
