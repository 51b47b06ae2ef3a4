from __future__ import annotations

import json

import pytest
import responses

from page_control.exceptions import MalformedRegistryState
from page_control.models import ExistingGrant
from page_control.permission_cache import PermissionCache

from tests._helpers import FETCH_URL, make_client


@responses.activate
def test_refresh_replaces_snapshot_with_serialized_records() -> None:
    responses.add(responses.GET, FETCH_URL, json={"usercontrol": [{"page": "Bank", "url": "master/bank"}]}, status=200)
    cache = PermissionCache(make_client(), raw="not json")

    assert cache.read().is_malformed

    cache.refresh()

    assert json.loads(cache.snapshot()) == [{"page": "Bank", "url": "master/bank"}]
    assert cache.read().grants == (ExistingGrant(page="Bank", url="master/bank"),)
    assert cache.refresh_count == 1


def test_refresh_requires_a_client() -> None:
    with pytest.raises(RuntimeError):
        PermissionCache(raw="[]").refresh()


@responses.activate
def test_unrecognized_refresh_response_keeps_previous_snapshot(caplog) -> None:
    previous = json.dumps([{"page": "Bank", "url": "master/bank"}])
    responses.add(responses.GET, FETCH_URL, json={"rows": []}, status=200)
    cache = PermissionCache(make_client(), raw=previous)

    with caplog.at_level("WARNING", logger="page_control.clients.page_controls"):
        with pytest.raises(MalformedRegistryState, match="rows"):
            cache.refresh()

    assert cache.snapshot() == previous
    assert cache.refresh_count == 0
    assert "page_permissions_fetch_unrecognized" in caplog.text


@responses.activate
def test_empty_refresh_body_is_not_read_as_no_grants() -> None:
    responses.add(responses.GET, FETCH_URL, body="", status=200)

    with pytest.raises(MalformedRegistryState):
        PermissionCache(make_client(), raw="[]").refresh()
