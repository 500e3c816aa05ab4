"""Spotify service implementation.

Wraps the Spotify Web API client behind the Service contract and manages
the OAuth session stored in the service's secrets unit.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List

import requests

from ..base import Service, Track
from ...config_types import SpotifySettings
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
from .auth import SpotifyAuthenticator, SpotifyToken, format_rfc3339, parse_rfc3339
from .client import SpotifyAPIClient, TokenRefresher

logger = logging.getLogger(__name__)

ClientFactory = Callable[[SpotifyToken, TokenRefresher], SpotifyAPIClient]


def _search_query(track: Track) -> str:
    # Field filters are quoted; embedded quotes would end the filter early
    artist = track.artist.replace('"', '')
    name = track.name.replace('"', '')
    return f'artist:"{artist}" track:"{name}"'


def track_from_item(item: Dict[str, Any]) -> Track:
    data = item.get("track") or item
    artists = data.get("artists") or [{}]
    return Track(artist=artists[0].get("name", ""), name=data.get("name", ""))


class SpotifyService(Service):
    """Spotify streaming service."""

    def __init__(
        self,
        secrets: SecretsConfig,
        settings: SpotifySettings,
        authenticator: SpotifyAuthenticator | None = None,
        client_factory: ClientFactory = SpotifyAPIClient,
    ):
        if not settings.client_id or not settings.client_secret:
            raise ConfigurationError(
                "please set LTS__PROVIDERS__SPOTIFY__CLIENT_ID and "
                "LTS__PROVIDERS__SPOTIFY__CLIENT_SECRET environment variables"
            )
        self.secrets = secrets
        self.authenticator = authenticator or SpotifyAuthenticator(
            settings.client_id, settings.client_secret, settings.scope
        )
        self._client_factory = client_factory
        self._client: SpotifyAPIClient | None = None
        self._restore_from_secrets()

    def name(self) -> str:
        return "Spotify"

    def authenticated(self) -> bool:
        return self._client is not None

    @property
    def api(self) -> SpotifyAPIClient:
        """Live API client for Spotify-only features."""
        if self._client is None:
            raise NotAuthenticatedError(self.name())
        return self._client

    def create_auth_url(self, redirect_url: str) -> str:
        return self.authenticator.auth_url(redirect_url)

    def code_param(self) -> str:
        return "code"

    def authenticate(self, code: str, redirect_url: str) -> None:
        try:
            token = self.authenticator.exchange(code, redirect_url)
        except (requests.RequestException, KeyError, ValueError) as e:
            raise AuthenticationError(f"failed to authenticate on Spotify: {e}") from e
        self._client = self._client_factory(token, self.authenticator.refresh)

    def get_username(self) -> str:
        try:
            user = self.api.current_user_profile()
        except requests.RequestException as e:
            raise ProfileReadError(f"failed to read Spotify profile data: {e}") from e
        return user.get("display_name") or user.get("id", "")

    def get_user_id(self) -> str:
        try:
            user = self.api.current_user_profile()
        except requests.RequestException as e:
            raise ProfileReadError(f"failed to read Spotify profile data: {e}") from e
        return user["id"]

    def get_loved_tracks(self, limit: int, page: int) -> List[Track]:
        offset = (page - 1) * limit
        try:
            items = self.api.saved_tracks(limit=limit, offset=offset)
        except requests.RequestException as e:
            raise TrackFetchError(f"failed to read Spotify loved tracks: {e}") from e
        return [track_from_item(item) for item in items]

    def love_track(self, track: Track) -> None:
        try:
            result = self.api.search(_search_query(track), "track", limit=1)
        except requests.RequestException as e:
            raise TrackLoveError(f"failed to search track on Spotify: {e}") from e

        matches = (result.get("tracks") or {}).get("items") or []
        if not matches:
            logger.debug(f"No Spotify match for {track}")
            return

        try:
            self.api.add_tracks_to_library([matches[0]["id"]])
        except requests.RequestException as e:
            raise TrackLoveError(f"failed to mark track as loved on Spotify: {e}") from e

    def close(self) -> None:
        if self._client is None:
            return
        try:
            token = self._client.token()
        except (requests.RequestException, KeyError, ValueError) as e:
            raise TokenPersistenceError(f"failed to save Spotify secrets: {e}") from e
        try:
            self._persist_token(token)
        except OSError as e:
            raise TokenPersistenceError(f"failed to save Spotify secrets: {e}") from e

    def _persist_token(self, token: SpotifyToken) -> None:
        self.secrets.set("token_type", token.token_type)
        self.secrets.set("access_token", token.access_token)
        self.secrets.set("expiry", format_rfc3339(token.expiry) if token.expiry else "")
        self.secrets.set("refresh_token", token.refresh_token)
        self.secrets.save()

    def _restore_from_secrets(self) -> None:
        if not self.secrets.is_set("token_type"):
            return
        try:
            # An empty expiry is stored for tokens that never expire
            expiry = parse_rfc3339(self.secrets.get("expiry")) if self.secrets.is_set("expiry") else None
        except ValueError:
            # A corrupt cache reads as logged out
            logger.debug("Ignoring stored Spotify session with malformed expiry")
            return
        token = SpotifyToken(
            token_type=self.secrets.get("token_type"),
            access_token=self.secrets.get("access_token"),
            expiry=expiry,
            refresh_token=self.secrets.get("refresh_token"),
        )
        self._client = self._client_factory(token, self.authenticator.refresh)
        logger.debug("Restored Spotify session from secrets")


__all__ = ["SpotifyService", "track_from_item"]
