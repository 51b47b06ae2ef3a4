from __future__ import annotations

import json
import logging

from .clients.page_controls import PageControlClient
from .registry import RegistryReadResult, read_registry

logger = logging.getLogger(__name__)


class PermissionCache:
    """Serialized page permissions shared by the console screens.

    The value is kept exactly as the rest of the console consumes it, a JSON
    array string, and only replaced by :meth:`refresh`.
    """

    def __init__(self, client: PageControlClient | None = None, raw: str | None = None) -> None:
        self.client = client
        self._raw = raw
        self.refresh_count = 0

    def snapshot(self) -> str | None:
        return self._raw

    def read(self) -> RegistryReadResult:
        return read_registry(self._raw)

    def refresh(self) -> None:
        if self.client is None:
            raise RuntimeError("PermissionCache has no client to refresh from")
        logger.info("page_permissions_refresh_attempt")
        records = self.client.fetch_page_permissions()
        self._raw = json.dumps(records)
        self.refresh_count += 1
        logger.info("page_permissions_refresh_success", extra={"count": len(records)})
