"""Tests for the Spotify authorization-code flow."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest

from lts.providers.spotify import auth as spotify_auth
from lts.providers.spotify.auth import (
    SpotifyAuthenticator,
    SpotifyToken,
    format_rfc3339,
    parse_rfc3339,
)


@pytest.fixture
def authenticator():
    return SpotifyAuthenticator("client-id", "client-secret", "user-library-read user-library-modify")


def fake_post(monkeypatch, payload):
    calls = []

    def _post(url, data=None, auth=None, timeout=None):
        calls.append({"url": url, "data": data, "auth": auth})
        resp = Mock()
        resp.json.return_value = payload
        resp.raise_for_status.return_value = None
        return resp

    monkeypatch.setattr(spotify_auth.requests, "post", _post)
    return calls


def test_auth_url_carries_client_scope_and_redirect(authenticator):
    url = authenticator.auth_url("http://127.0.0.1:9876/callback", state="xyz")

    parsed = urlparse(url)
    qs = parse_qs(parsed.query)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == spotify_auth.AUTH_URL
    assert qs["client_id"] == ["client-id"]
    assert qs["response_type"] == ["code"]
    assert qs["redirect_uri"] == ["http://127.0.0.1:9876/callback"]
    assert qs["scope"] == ["user-library-read user-library-modify"]
    assert qs["state"] == ["xyz"]


def test_exchange(monkeypatch, authenticator):
    calls = fake_post(monkeypatch, {
        "token_type": "Bearer",
        "access_token": "access",
        "refresh_token": "refresh",
        "expires_in": 3600,
    })

    token = authenticator.exchange("authcode", "http://127.0.0.1:9876/callback")

    assert token.access_token == "access"
    assert token.refresh_token == "refresh"
    assert not token.expired()
    assert calls[0]["url"] == spotify_auth.TOKEN_URL
    assert calls[0]["auth"] == ("client-id", "client-secret")
    assert calls[0]["data"]["grant_type"] == "authorization_code"
    assert calls[0]["data"]["code"] == "authcode"


def test_refresh_keeps_previous_refresh_token(monkeypatch, authenticator):
    calls = fake_post(monkeypatch, {"token_type": "Bearer", "access_token": "new", "expires_in": 3600})
    old = SpotifyToken("Bearer", "old", datetime.now(timezone.utc) - timedelta(hours=1), "refresh")

    token = authenticator.refresh(old)

    assert token.access_token == "new"
    assert token.refresh_token == "refresh"
    assert calls[0]["data"] == {"grant_type": "refresh_token", "refresh_token": "refresh"}


def test_refresh_without_refresh_token_is_noop(monkeypatch, authenticator):
    calls = fake_post(monkeypatch, {})
    token = SpotifyToken("Bearer", "old", None, "")

    assert authenticator.refresh(token) is token
    assert calls == []


def test_token_expiry_margin():
    now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = SpotifyToken("Bearer", "a", now + timedelta(seconds=5), "r")

    assert token.expired(now)
    assert not SpotifyToken("Bearer", "a", now + timedelta(minutes=5), "r").expired(now)
    assert not SpotifyToken("Bearer", "a", None, "r").expired(now)


def test_rfc3339_format_and_parse():
    value = datetime(2024, 3, 9, 8, 7, 6, tzinfo=timezone.utc)

    assert format_rfc3339(value) == "2024-03-09T08:07:06Z"
    assert parse_rfc3339("2024-03-09T08:07:06Z") == value
    assert parse_rfc3339("2024-03-09T10:07:06+02:00") == value


@pytest.mark.parametrize("text", ["", "yesterday", "2024-03-09", "2024-03-09T08:07:06"])
def test_rfc3339_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_rfc3339(text)
