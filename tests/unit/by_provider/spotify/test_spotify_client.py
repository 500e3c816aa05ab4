"""Tests for token handling in the Spotify API client."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from lts.providers.spotify import client as spotify_client
from lts.providers.spotify import SpotifyAPIClient, SpotifyToken

PAST = datetime.now(timezone.utc) - timedelta(hours=1)
FUTURE = datetime.now(timezone.utc) + timedelta(hours=1)


@pytest.fixture
def refresher():
    return Mock(return_value=SpotifyToken("Bearer", "fresh", FUTURE, "refresh"))


def test_expired_token_is_refreshed(refresher):
    stale = SpotifyToken("Bearer", "stale", PAST, "refresh")
    client = SpotifyAPIClient(stale, refresher)

    assert client.token().access_token == "fresh"
    refresher.assert_called_once_with(stale)
    # The refreshed token is kept for later calls
    assert client.token().access_token == "fresh"
    assert refresher.call_count == 1


def test_expired_token_without_refresh_token_is_kept(refresher):
    stale = SpotifyToken("Bearer", "stale", PAST, "")
    client = SpotifyAPIClient(stale, refresher)

    assert client.token() is stale
    refresher.assert_not_called()


def test_valid_token_is_not_refreshed(refresher):
    current = SpotifyToken("Bearer", "current", FUTURE, "refresh")
    client = SpotifyAPIClient(current, refresher)

    assert client.token() is current
    refresher.assert_not_called()


def test_requests_use_refreshed_token(monkeypatch, refresher):
    resp = Mock()
    resp.json.return_value = {"id": "uid"}
    get = Mock(return_value=resp)
    monkeypatch.setattr(spotify_client.requests, "get", get)
    client = SpotifyAPIClient(SpotifyToken("Bearer", "stale", PAST, "refresh"), refresher)

    assert client.current_user_profile() == {"id": "uid"}
    assert get.call_args.kwargs["headers"] == {"Authorization": "Bearer fresh"}
