"""Spotify OAuth authorization-code flow.

Builds consent URLs and exchanges or refreshes tokens against the Spotify
accounts service using the confidential client (id + secret) grant.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from urllib.parse import urlencode

import requests

logger = logging.getLogger(__name__)

AUTH_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"

# Refresh slightly before the server-side expiry
EXPIRY_DELTA = timedelta(seconds=10)


@dataclass(frozen=True)
class SpotifyToken:
    token_type: str
    access_token: str
    expiry: datetime | None
    refresh_token: str

    def expired(self, now: datetime | None = None) -> bool:
        if self.expiry is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self.expiry - EXPIRY_DELTA


def format_rfc3339(value: datetime) -> str:
    """Render an aware datetime as RFC3339 in UTC."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC3339 timestamp.

    Raises:
        ValueError: If value is not a timezone-aware RFC3339 timestamp
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if "T" not in text.upper() or parsed.tzinfo is None:
        raise ValueError(f"not an RFC3339 timestamp: {value!r}")
    return parsed


def _token_from_response(data: Dict[str, Any], previous_refresh: str = "") -> SpotifyToken:
    expires_in = data.get("expires_in")
    expiry = None
    if expires_in is not None:
        expiry = datetime.now(timezone.utc) + timedelta(seconds=int(expires_in))
    return SpotifyToken(
        token_type=data.get("token_type", "Bearer"),
        access_token=data["access_token"],
        expiry=expiry,
        # Spotify may omit refresh_token on refresh; keep the old one
        refresh_token=data.get("refresh_token") or previous_refresh,
    )


class SpotifyAuthenticator:
    """Spotify accounts-service client."""

    def __init__(self, client_id: str, client_secret: str, scope: str):
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope

    def auth_url(self, redirect_url: str, state: str = "") -> str:
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": redirect_url,
            "scope": self.scope,
        }
        if state:
            params["state"] = state
        return f"{AUTH_URL}?{urlencode(params)}"

    def _post_token(self, data: Dict[str, str]) -> Dict[str, Any]:
        resp = requests.post(TOKEN_URL, data=data, auth=(self.client_id, self.client_secret), timeout=30)
        resp.raise_for_status()
        return resp.json()

    def exchange(self, code: str, redirect_url: str) -> SpotifyToken:
        """Exchange an authorization code for a token.

        Raises:
            requests.RequestException: On transport or HTTP errors
            KeyError: If the response carries no access token
        """
        logger.debug(f"Exchanging code for token at {TOKEN_URL}")
        data = self._post_token({
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_url,
        })
        return _token_from_response(data)

    def refresh(self, token: SpotifyToken) -> SpotifyToken:
        """Obtain a fresh access token; returns token unchanged without a refresh token."""
        if not token.refresh_token:
            return token
        logger.debug("Refreshing Spotify access token")
        data = self._post_token({
            "grant_type": "refresh_token",
            "refresh_token": token.refresh_token,
        })
        refreshed = _token_from_response(data, previous_refresh=token.refresh_token)
        if not refreshed.token_type:
            refreshed = replace(refreshed, token_type=token.token_type)
        return refreshed


__all__ = ["SpotifyAuthenticator", "SpotifyToken", "format_rfc3339", "parse_rfc3339"]
