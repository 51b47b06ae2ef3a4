from __future__ import annotations

from dataclasses import dataclass


class MalformedRegistryState(ValueError):
    """Serialized page-permission state could not be read as a list of grants."""


class InvalidSelectionError(ValueError):
    """Nothing resolved for submission, or the chosen page is unknown."""


EmptySelection = InvalidSelectionError


class SubmissionInProgressError(RuntimeError):
    """A grant batch is already in flight for this session."""


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class SubmissionRejected(ApiError):
    """The authority answered with a non-success response."""


class AuthError(SubmissionRejected):
    pass


class ForbiddenError(SubmissionRejected):
    pass


class NotFoundError(SubmissionRejected):
    pass


class ValidationError(SubmissionRejected):
    pass


class ConflictError(SubmissionRejected):
    """409 or conflict-style errors."""


class RateLimitError(SubmissionRejected):
    """429 throttling error."""


class ServerError(SubmissionRejected):
    """5xx server-side failures."""


class TransportFailure(ApiError):
    """Network/transport failure before an HTTP response was returned."""
