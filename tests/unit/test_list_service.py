"""Unit tests for listing loved tracks."""

import pytest

from lts.errors import NotAuthenticatedError, UnknownServiceError
from lts.services.list_service import list_loved_tracks
from lts.services.pagination import PageOptions
from tests.mocks.fakes import FakeLoader, FakeService, make_tracks


def test_lists_tracks_one_per_line():
    service = FakeService(catalog=make_tracks(3))
    lines = []

    count = list_loved_tracks(FakeLoader({"foo": service}), "foo", PageOptions(limit=10), lines.append)

    assert count == 3
    assert lines == ["Artist 1 - Song 1", "Artist 2 - Song 2", "Artist 3 - Song 3"]
    assert service.close_calls == 1


def test_list_all_pages():
    service = FakeService(catalog=make_tracks(75))
    lines = []

    list_loved_tracks(FakeLoader({"foo": service}), "foo", PageOptions(limit=0), lines.append)

    assert len(lines) == 75
    assert service.page_requests == [(50, 1), (50, 2)]


def test_not_logged_in():
    service = FakeService(label="Foo", authenticated=False)
    lines = []

    with pytest.raises(NotAuthenticatedError, match="not logged in on Foo"):
        list_loved_tracks(FakeLoader({"foo": service}), "foo", PageOptions(), lines.append)

    assert lines == []
    assert service.page_requests == []
    assert service.close_calls == 1


def test_unknown_service():
    with pytest.raises(UnknownServiceError):
        list_loved_tracks(FakeLoader({}), "nope", PageOptions(), lambda line: None)
