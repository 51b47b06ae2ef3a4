from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .error_mapper import authority_message
from .exceptions import ApiError, InvalidSelectionError, SubmissionInProgressError

GENERIC_SUBMISSION_MESSAGE = "Unable to create page control. Please try again."


@dataclass(frozen=True)
class PresentedError:
    title: str
    message: str
    trace_id: str | None = None
    code: str | None = None

    def render(self) -> dict[str, Any]:
        return {"title": self.title, "message": self.message, "trace_id": self.trace_id, "code": self.code}


def submission_error_message(error: Exception) -> str:
    """Authority-provided text when there is one; rejections and transport failures read the same."""
    if isinstance(error, ApiError):
        raw = error.raw_payload if isinstance(error.raw_payload, dict) else None
        return authority_message(raw) or GENERIC_SUBMISSION_MESSAGE
    if isinstance(error, (InvalidSelectionError, SubmissionInProgressError)):
        return str(error)
    return GENERIC_SUBMISSION_MESSAGE


def present_error(error: Exception) -> PresentedError:
    if isinstance(error, ApiError):
        return PresentedError(
            title="Error",
            message=submission_error_message(error),
            trace_id=error.trace_id,
            code=error.code,
        )
    return PresentedError(title="Error", message=submission_error_message(error))
