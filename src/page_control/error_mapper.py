from __future__ import annotations

from typing import Mapping

from .exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    SubmissionRejected,
    ValidationError,
)

GENERIC_REJECTION_MESSAGE = "Request failed"

_STATUS_TYPES: dict[int, type[SubmissionRejected]] = {
    400: ValidationError,
    401: AuthError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def authority_message(payload: Mapping[str, object] | None) -> str | None:
    """Message the panel API put in an error body; it uses either ``message`` or ``msg``."""
    if not payload:
        return None
    for key in ("message", "msg"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def map_error(
    status_code: int,
    payload: Mapping[str, object] | None,
    trace_id: str | None,
    *,
    reason: str | None = None,
) -> SubmissionRejected:
    payload = payload or {}
    code = str(payload.get("code") or f"HTTP_{status_code}")
    message = authority_message(payload) or (f"{status_code} {reason}" if reason else GENERIC_REJECTION_MESSAGE)
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped = _STATUS_TYPES.get(status_code)
    if mapped is None:
        mapped = ServerError if status_code >= 500 else SubmissionRejected
    return mapped(
        code=code,
        message=message,
        details=payload.get("details"),
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )
