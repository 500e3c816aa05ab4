"""Unit tests for syncing loved tracks between services."""

import pytest

from lts.errors import NotAuthenticatedError, TrackLoveError, UnknownServiceError
from lts.providers.base import Track
from lts.services.pagination import PageOptions
from lts.services.sync_service import sync_loved_tracks
from tests.mocks.fakes import FakeLoader, FakeService, make_tracks


@pytest.fixture
def source():
    return FakeService(label="Source", catalog=make_tracks(3))


@pytest.fixture
def target():
    return FakeService(label="Target")


def test_loves_tracks_in_source_order(source, target):
    lines = []
    loader = FakeLoader({"source": source, "target": target})

    result = sync_loved_tracks(loader, "source", "target", PageOptions(limit=10), lines.append)

    assert target.loved == source.catalog
    assert lines == [
        "Synced: Artist 1 - Song 1",
        "Synced: Artist 2 - Song 2",
        "Synced: Artist 3 - Song 3",
    ]
    assert result.synced == 3
    assert result.source == "Source"
    assert result.target == "Target"
    assert source.close_calls == 1
    assert target.close_calls == 1


def test_single_page_request_with_limit(source, target):
    source.catalog = make_tracks(40)
    loader = FakeLoader({"source": source, "target": target})

    sync_loved_tracks(loader, "source", "target", PageOptions(limit=10, page=2), lambda line: None)

    assert source.page_requests == [(10, 2)]
    assert target.loved == source.catalog[10:20]


def test_syncs_all_pages_with_limit_zero(source, target):
    source.catalog = make_tracks(51)
    loader = FakeLoader({"source": source, "target": target})

    sync_loved_tracks(loader, "source", "target", PageOptions(limit=0), lambda line: None)

    assert source.page_requests == [(50, 1), (50, 2)]
    assert len(target.loved) == 51


def test_halts_at_first_love_failure(source, target):
    source.catalog = make_tracks(120)
    target.fail_love_on = Track(artist="Artist 2", name="Song 2")
    lines = []
    loader = FakeLoader({"source": source, "target": target})

    with pytest.raises(TrackLoveError, match="failed to love Artist 2 - Song 2"):
        sync_loved_tracks(loader, "source", "target", PageOptions(limit=0), lines.append)

    assert target.loved == [Track(artist="Artist 1", name="Song 1")]
    assert lines == ["Synced: Artist 1 - Song 1"]
    assert source.page_requests == [(50, 1)]
    assert source.close_calls == 1
    assert target.close_calls == 1


def test_source_not_logged_in(source, target):
    source._authenticated = False
    loader = FakeLoader({"source": source, "target": target})

    with pytest.raises(NotAuthenticatedError, match="not logged in on Source"):
        sync_loved_tracks(loader, "source", "target", PageOptions(), lambda line: None)

    assert source.page_requests == []
    assert source.close_calls == 1
    assert target.close_calls == 1


def test_target_not_logged_in(source, target):
    target._authenticated = False
    loader = FakeLoader({"source": source, "target": target})

    with pytest.raises(NotAuthenticatedError) as exc_info:
        sync_loved_tracks(loader, "source", "target", PageOptions(), lambda line: None)

    assert exc_info.value.service_name == "Target"
    assert source.page_requests == []


def test_unknown_target_closes_source_without_network(source):
    loader = FakeLoader({"source": source})

    with pytest.raises(UnknownServiceError):
        sync_loved_tracks(loader, "source", "target", PageOptions(), lambda line: None)

    assert source.page_requests == []
    assert source.close_calls == 1


def test_unknown_source_never_resolves_target(target):
    loader = FakeLoader({"target": target})

    with pytest.raises(UnknownServiceError):
        sync_loved_tracks(loader, "source", "target", PageOptions(), lambda line: None)

    assert loader.requested == ["source"]
