from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

NON_NAVIGABLE_URL = "#"


def normalize_url(url: str) -> str:
    """Drop a single leading path separator: ``/master/bank`` -> ``master/bank``."""
    return url[1:] if url.startswith("/") else url


class NavigationNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str | None = None
    name: str | None = None
    url: str | None = None
    items: List["NavigationNode"] = Field(default_factory=list)

    @property
    def label(self) -> str | None:
        return self.title or self.name

    @property
    def is_navigable(self) -> bool:
        return bool(self.url) and self.url != NON_NAVIGABLE_URL


class CatalogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str

    @property
    def normalized_url(self) -> str:
        return normalize_url(self.url)


class ExistingGrant(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: str | None = None
    url: str | None = None

    def matches(self, entry: CatalogEntry) -> bool:
        # Title OR url: a renamed page with the same url still counts as granted.
        if self.page is not None and self.page == entry.title:
            return True
        return self.url is not None and self.url == entry.normalized_url


class GrantRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: str
    url: str
    user_ids: str = Field(alias="userIds")
    status: str

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class SubmissionAck(BaseModel):
    code: int | str | None = None
    msg: str | None = None
    message: str | None = None
    trace_id: str | None = None

    @property
    def text(self) -> str | None:
        return self.msg or self.message
