"""The "Create Page Control" screen as a small state machine.

A session owns one catalog and one registry snapshot. The administrator picks
an option (a page title or ``"All"``), the session resolves it against the
snapshot, previews the grant rows and submits them through a
:class:`~page_control.submitter.ProvisioningSubmitter`.

States::

    UNSET -> SPECIFIC_SELECTED | ALL_SELECTED -> SUBMITTING
    SUBMITTING -> UNSET                          (accepted)
    SUBMITTING -> SPECIFIC_SELECTED | ALL_SELECTED (failed, selection kept)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from .exceptions import SubmissionInProgressError
from .models import CatalogEntry, ExistingGrant, GrantRequest
from .payload import DEFAULT_STATUS, DEFAULT_USER_IDS, build_payload
from .registry import RegistryReadResult, read_registry
from .selection import Selection, SelectionKind, available_page_options, resolve, select_page
from .submitter import ProvisioningSubmitter, SubmissionResult
from .telemetry import TelemetryLogger, build_event

logger = logging.getLogger(__name__)


class ProvisioningState(str, Enum):
    UNSET = "unset"
    SPECIFIC_SELECTED = "specific_selected"
    ALL_SELECTED = "all_selected"
    SUBMITTING = "submitting"


_STATE_FOR_KIND = {
    SelectionKind.UNSET: ProvisioningState.UNSET,
    SelectionKind.SPECIFIC: ProvisioningState.SPECIFIC_SELECTED,
    SelectionKind.ALL_REMAINING: ProvisioningState.ALL_SELECTED,
}


class ProvisioningSession:
    def __init__(
        self,
        catalog: Sequence[CatalogEntry],
        registry: RegistryReadResult | str | None,
        submitter: ProvisioningSubmitter | None = None,
        *,
        user_ids: str = DEFAULT_USER_IDS,
        status: str = DEFAULT_STATUS,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.catalog = list(catalog)
        self.registry = registry if isinstance(registry, RegistryReadResult) else read_registry(registry)
        self.submitter = submitter
        self.user_ids = user_ids
        self.status = status
        self.selection = Selection.unset()
        self.state = ProvisioningState.UNSET
        self.last_error: Exception | None = None
        self.telemetry = telemetry or TelemetryLogger(enabled=False)
        if self.registry.is_malformed:
            self.telemetry.emit(
                build_event(
                    category="registry",
                    name="page_permissions_unreadable",
                    action="registry.read",
                    success=False,
                    error_code="MALFORMED_REGISTRY_STATE",
                )
            )

    @property
    def existing(self) -> tuple[ExistingGrant, ...]:
        return self.registry.grants

    @property
    def can_submit(self) -> bool:
        return self.selection.is_set and self.state is not ProvisioningState.SUBMITTING

    def options(self) -> list[str]:
        return available_page_options(self.catalog, self.existing)

    def select(self, option: str | None) -> Selection:
        if self.state is ProvisioningState.SUBMITTING:
            raise SubmissionInProgressError("Selection is locked while a submission is in flight")
        self.selection = select_page(option, self.catalog)
        self.state = _STATE_FOR_KIND[self.selection.kind]
        self.last_error = None
        self.telemetry.emit(
            build_event(
                category="selection",
                name="page_selected",
                action="selection.change",
                context={"kind": self.selection.kind.value, "pages": len(self.pages())},
            )
        )
        return self.selection

    def selected_url(self) -> str:
        """Read-only URL field: filled for a single page, blank for ``All``."""
        if self.selection.page is None:
            return ""
        return self.selection.page.normalized_url

    def pages(self) -> list[CatalogEntry]:
        return resolve(self.selection, self.catalog, self.existing)

    def preview(self) -> list[GrantRequest]:
        pages = self.pages()
        if not pages:
            return []
        return build_payload(pages, self.user_ids, self.status)

    def submit(self) -> SubmissionResult:
        if self.state is ProvisioningState.SUBMITTING:
            raise SubmissionInProgressError("A page control submission is already in flight")
        if self.submitter is None:
            raise RuntimeError("ProvisioningSession has no submitter")
        batch = build_payload(self.pages(), self.user_ids, self.status)
        previous = self.state
        self.state = ProvisioningState.SUBMITTING
        try:
            result = self.submitter.submit(batch)
        except Exception as exc:
            self.state = previous
            self.last_error = exc
            raise
        self.selection = Selection.unset()
        self.state = ProvisioningState.UNSET
        self.last_error = None
        logger.info("page_control_session_submitted", extra={"count": result.count})
        return result
