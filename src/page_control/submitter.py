from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from .clients.page_controls import PageControlClient
from .exceptions import ApiError, InvalidSelectionError
from .log import log_action
from .models import GrantRequest, SubmissionAck
from .telemetry import TelemetryLogger, build_event

logger = logging.getLogger(__name__)

USER_MANAGEMENT_ROUTE = "/userManagement"

RefreshPermissions = Callable[[], object]


@dataclass(frozen=True)
class SubmissionResult:
    ack: SubmissionAck
    count: int
    trace_id: str | None
    refreshed: bool = True
    navigate_to: str = USER_MANAGEMENT_ROUTE


class ProvisioningSubmitter:
    """Sends one grant batch and, only when it is accepted, refreshes permissions.

    The batch is one unit of intent: a rejected or failed call is not
    retried and nothing in it is assumed committed.
    """

    def __init__(
        self,
        client: PageControlClient,
        refresh: RefreshPermissions,
        *,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.client = client
        self.refresh = refresh
        self.telemetry = telemetry or TelemetryLogger(enabled=False)

    def submit(self, batch: Sequence[GrantRequest]) -> SubmissionResult:
        if not batch:
            raise InvalidSelectionError("No page selected for page control")
        logger.info("page_control_submit_attempt", extra={"count": len(batch)})
        try:
            ack = self.client.create_page_controls(batch)
        except ApiError as exc:
            logger.warning(
                "page_control_submit_failed",
                extra={"code": exc.code, "status_code": exc.status_code, "trace_id": exc.trace_id},
            )
            log_action(logger, "page_control.create", "error", pages=len(batch), trace_id=exc.trace_id, error_code=exc.code)
            self.telemetry.emit(
                build_event(
                    category="api_call_result",
                    name="page_control_submit_result",
                    action="page_control.create",
                    trace_id=exc.trace_id,
                    success=False,
                    error_code=exc.code,
                    context={"count": len(batch), "status_code": exc.status_code},
                )
            )
            raise

        trace_id = ack.trace_id or self._last_trace_id()
        refreshed = self._refresh(trace_id)
        log_action(logger, "page_control.create", "success", pages=len(batch), trace_id=trace_id)
        self.telemetry.emit(
            build_event(
                category="api_call_result",
                name="page_control_submit_result",
                action="page_control.create",
                trace_id=trace_id,
                success=True,
                context={"count": len(batch)},
            )
        )
        return SubmissionResult(ack=ack, count=len(batch), trace_id=trace_id, refreshed=refreshed)

    def _last_trace_id(self) -> str | None:
        operation = self.client.http.last_operation
        return operation.trace_id if operation else None

    def _refresh(self, trace_id: str | None) -> bool:
        # The batch is already committed; a stale cache must not turn that into a failure.
        try:
            self.refresh()
        except Exception as exc:
            logger.warning(
                "page_permissions_refresh_failed",
                extra={
                    "code": getattr(exc, "code", type(exc).__name__),
                    "status_code": getattr(exc, "status_code", None),
                    "trace_id": trace_id,
                },
            )
            return False
        return True
