from __future__ import annotations

import pytest

from page_control.exceptions import InvalidSelectionError
from page_control.models import CatalogEntry, ExistingGrant
from page_control.selection import (
    ALL_OPTION,
    Selection,
    SelectionKind,
    available_page_options,
    resolve,
    select_page,
)

A = CatalogEntry(title="A", url="/a")
B = CatalogEntry(title="B", url="/b")
C = CatalogEntry(title="C", url="/c")
CATALOG = [A, B, C]


def test_unset_resolves_to_nothing() -> None:
    assert resolve(Selection.unset(), CATALOG, []) == []


def test_all_remaining_excludes_granted_pages_in_catalog_order() -> None:
    existing = [ExistingGrant(page="B", url="b")]

    assert resolve(Selection.all_remaining(), CATALOG, existing) == [A, C]


def test_title_match_alone_excludes() -> None:
    existing = [ExistingGrant(page="A", url="different")]

    assert resolve(Selection.all_remaining(), [A], existing) == []


def test_url_match_alone_excludes() -> None:
    existing = [ExistingGrant(page="Renamed", url="c")]

    assert resolve(Selection.all_remaining(), CATALOG, existing) == [A, B]


def test_url_match_uses_normalized_catalog_url_only() -> None:
    existing = [ExistingGrant(page="Other", url="/a")]

    assert resolve(Selection.all_remaining(), [A], existing) == [A]


def test_specific_selection_ignores_existing_grants() -> None:
    existing = [ExistingGrant(page="B", url="b")]

    assert resolve(Selection.specific(B), CATALOG, existing) == [B]


def test_options_list_all_then_remaining_titles() -> None:
    existing = [ExistingGrant(page="A", url="a")]

    assert available_page_options(CATALOG, existing) == [ALL_OPTION, "B", "C"]


def test_select_page_maps_options() -> None:
    assert select_page("", CATALOG).kind is SelectionKind.UNSET
    assert select_page(None, CATALOG) == Selection.unset()
    assert select_page(ALL_OPTION, CATALOG).kind is SelectionKind.ALL_REMAINING
    assert select_page("C", CATALOG) == Selection.specific(C)


def test_select_unknown_page_is_rejected() -> None:
    with pytest.raises(InvalidSelectionError):
        select_page("Missing", CATALOG)


def test_specific_selection_requires_a_page() -> None:
    with pytest.raises(InvalidSelectionError):
        Selection(kind=SelectionKind.SPECIFIC)
    with pytest.raises(InvalidSelectionError):
        Selection(kind=SelectionKind.ALL_REMAINING, page=A)
