from __future__ import annotations

from collections.abc import Sequence

from .exceptions import InvalidSelectionError
from .models import CatalogEntry, GrantRequest

DEFAULT_USER_IDS = "1,2,3,4,5"
DEFAULT_STATUS = "Active"


def build_payload(
    pages: Sequence[CatalogEntry],
    user_ids: str = DEFAULT_USER_IDS,
    status: str = DEFAULT_STATUS,
) -> list[GrantRequest]:
    """One grant per page, in page order; ``user_ids`` and ``status`` are copied verbatim."""
    if not pages:
        raise InvalidSelectionError("No page selected for page control")
    return [
        GrantRequest(page=page.title, url=page.normalized_url, user_ids=user_ids, status=status)
        for page in pages
    ]


def wire_body(batch: Sequence[GrantRequest]) -> dict[str, list[dict[str, str]]]:
    return {"usercontrol_data": [grant.to_wire() for grant in batch]}
