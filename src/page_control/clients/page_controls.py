from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..exceptions import MalformedRegistryState
from ..models import GrantRequest, SubmissionAck
from ..payload import wire_body
from .base import BaseClient

logger = logging.getLogger(__name__)

_LIST_KEYS = ("usercontrol", "usercontrol_data", "data")


class PageControlClient(BaseClient):
    def create_page_controls(self, grants: Sequence[GrantRequest]) -> SubmissionAck:
        data = self._request(
            "POST",
            self.http.config.create_path,
            json_body=wire_body(grants),
            operation="page_control.create",
        )
        return SubmissionAck.model_validate(data if isinstance(data, dict) else {})

    def fetch_page_permissions(self) -> list[dict[str, Any]]:
        """Current page permissions; a bare list or one wrapped under a known key.

        Any other 2xx body raises :class:`MalformedRegistryState` rather than
        reading as "nothing granted".
        """
        data = self._request("GET", self.http.config.fetch_path, operation="page_control.fetch")
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            for key in _LIST_KEYS:
                records = data.get(key)
                if isinstance(records, list):
                    return records
        shape = sorted(data) if isinstance(data, dict) else type(data).__name__
        logger.warning("page_permissions_fetch_unrecognized", extra={"shape": str(shape)})
        raise MalformedRegistryState(f"Unrecognized page permissions response: {shape}")
