from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidSelectionError
from .models import CatalogEntry, ExistingGrant

ALL_OPTION = "All"


class SelectionKind(str, Enum):
    UNSET = "unset"
    SPECIFIC = "specific"
    ALL_REMAINING = "all_remaining"


@dataclass(frozen=True)
class Selection:
    kind: SelectionKind = SelectionKind.UNSET
    page: CatalogEntry | None = None

    def __post_init__(self) -> None:
        if (self.kind is SelectionKind.SPECIFIC) != (self.page is not None):
            raise InvalidSelectionError("a page is required for, and only for, a specific selection")

    @classmethod
    def unset(cls) -> "Selection":
        return cls()

    @classmethod
    def specific(cls, page: CatalogEntry) -> "Selection":
        return cls(kind=SelectionKind.SPECIFIC, page=page)

    @classmethod
    def all_remaining(cls) -> "Selection":
        return cls(kind=SelectionKind.ALL_REMAINING)

    @property
    def is_set(self) -> bool:
        return self.kind is not SelectionKind.UNSET


def remaining_pages(catalog: Iterable[CatalogEntry], existing: Iterable[ExistingGrant]) -> list[CatalogEntry]:
    grants = list(existing)
    return [entry for entry in catalog if not any(grant.matches(entry) for grant in grants)]


def resolve(
    selection: Selection,
    catalog: Sequence[CatalogEntry],
    existing: Iterable[ExistingGrant],
) -> list[CatalogEntry]:
    if selection.kind is SelectionKind.SPECIFIC:
        # An explicit pick is granted as-is, even if it is already granted.
        return [selection.page]
    if selection.kind is SelectionKind.ALL_REMAINING:
        return remaining_pages(catalog, existing)
    return []


def available_page_options(catalog: Sequence[CatalogEntry], existing: Iterable[ExistingGrant]) -> list[str]:
    return [ALL_OPTION, *(entry.title for entry in remaining_pages(catalog, existing))]


def select_page(option: str | None, catalog: Sequence[CatalogEntry]) -> Selection:
    if not option:
        return Selection.unset()
    if option == ALL_OPTION:
        return Selection.all_remaining()
    for entry in catalog:
        if entry.title == option:
            return Selection.specific(entry)
    raise InvalidSelectionError(f"Unknown page: {option!r}")
