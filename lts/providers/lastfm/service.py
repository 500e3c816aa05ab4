"""Last.fm service implementation.

Last.fm web sessions do not expire, so the persisted session material is
just the session key plus the account name it belongs to.
"""

from __future__ import annotations
import logging
from typing import List

import requests

from ..base import Service, Track
from ...config_types import LastfmSettings
from ...errors import (
    AuthenticationError,
    ConfigurationError,
    NotAuthenticatedError,
    ProfileReadError,
    TokenPersistenceError,
    TrackFetchError,
    TrackLoveError,
)
from ...secrets import SecretsConfig
from .client import LastfmAPIClient, LastfmAPIError

logger = logging.getLogger(__name__)

_API_ERRORS = (requests.RequestException, LastfmAPIError, KeyError, ValueError)


class LastfmService(Service):
    """Last.fm scrobbling service."""

    def __init__(self, secrets: SecretsConfig, settings: LastfmSettings, client: LastfmAPIClient | None = None):
        if not settings.api_key or not settings.api_secret:
            raise ConfigurationError(
                "please set LTS__PROVIDERS__LASTFM__API_KEY and "
                "LTS__PROVIDERS__LASTFM__API_SECRET environment variables"
            )
        self.secrets = secrets
        self.client = client or LastfmAPIClient(settings.api_key, settings.api_secret)
        self._username: str | None = None
        if secrets.is_set("session_key"):
            self.client.session_key = secrets.get("session_key")
            self._username = secrets.get("username") or None
            logger.debug("Restored Last.fm session from secrets")

    def name(self) -> str:
        return "Last.fm"

    def authenticated(self) -> bool:
        return bool(self.client.session_key)

    def create_auth_url(self, redirect_url: str) -> str:
        return self.client.auth_url(redirect_url)

    def code_param(self) -> str:
        return "token"

    def authenticate(self, code: str, redirect_url: str) -> None:
        try:
            session = self.client.get_session(code)
        except _API_ERRORS as e:
            raise AuthenticationError(f"failed to authenticate on Last.fm: {e}") from e
        self._username = session.get("name") or None

    def get_username(self) -> str:
        if not self.authenticated():
            raise NotAuthenticatedError(self.name())
        if self._username:
            return self._username
        try:
            user = self.client.user_info()
        except _API_ERRORS as e:
            raise ProfileReadError(f"failed to read Last.fm profile data: {e}") from e
        self._username = user["name"]
        return self._username

    def get_loved_tracks(self, limit: int, page: int) -> List[Track]:
        try:
            username = self.get_username()
        except ProfileReadError as e:
            raise TrackFetchError(f"failed to read Last.fm loved tracks: {e}") from e
        try:
            raw = self.client.loved_tracks(username, limit=limit, page=page)
        except _API_ERRORS as e:
            raise TrackFetchError(f"failed to read Last.fm loved tracks: {e}") from e
        return [
            Track(artist=(t.get("artist") or {}).get("name", ""), name=t.get("name", ""))
            for t in raw
        ]

    def love_track(self, track: Track) -> None:
        if not self.authenticated():
            raise NotAuthenticatedError(self.name())
        try:
            self.client.love_track(track.artist, track.name)
        except LastfmAPIError as e:
            if e.code == 6:  # Invalid parameters: track unknown to Last.fm
                logger.debug(f"No Last.fm match for {track}")
                return
            raise TrackLoveError(f"failed to mark track as loved on Last.fm: {e}") from e
        except (requests.RequestException, ValueError) as e:
            raise TrackLoveError(f"failed to mark track as loved on Last.fm: {e}") from e

    def close(self) -> None:
        if not self.authenticated():
            return
        try:
            self.secrets.set("session_key", self.client.session_key or "")
            self.secrets.set("username", self._username or "")
            self.secrets.save()
        except OSError as e:
            raise TokenPersistenceError(f"failed to save Last.fm secrets: {e}") from e


__all__ = ["LastfmService"]
