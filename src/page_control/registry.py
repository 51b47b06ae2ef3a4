from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import MalformedRegistryState
from .models import ExistingGrant, normalize_url

logger = logging.getLogger(__name__)

_GRANT_LIST = TypeAdapter(list[ExistingGrant])


@dataclass(frozen=True)
class RegistryReadResult:
    grants: tuple[ExistingGrant, ...]
    error: MalformedRegistryState | None = None

    @property
    def is_malformed(self) -> bool:
        return self.error is not None


def read_registry(raw: str | None) -> RegistryReadResult:
    """Parse the serialized page-permission list.

    Anything unreadable is reported through ``error`` and yields no grants,
    so every page shows as ungranted instead of blocking the screen.
    """
    if not isinstance(raw, str) or not raw.strip():
        return RegistryReadResult(grants=())
    try:
        decoded = json.loads(raw)
        if not isinstance(decoded, list):
            raise MalformedRegistryState(
                f"expected a JSON array of page permissions, got {type(decoded).__name__}"
            )
        records = _GRANT_LIST.validate_python(decoded)
    except (ValueError, PydanticValidationError) as exc:
        error = exc if isinstance(exc, MalformedRegistryState) else MalformedRegistryState(str(exc))
        logger.warning(
            "page_permissions_parse_failed",
            extra={"error": str(error), "raw_length": len(raw)},
        )
        return RegistryReadResult(grants=(), error=error)
    grants = tuple(
        ExistingGrant(page=record.page, url=normalize_url(record.url) if record.url is not None else None)
        for record in records
    )
    logger.debug("page_permissions_parsed", extra={"count": len(grants)})
    return RegistryReadResult(grants=grants)


def parse_existing(raw: str | None) -> tuple[ExistingGrant, ...]:
    return read_registry(raw).grants
