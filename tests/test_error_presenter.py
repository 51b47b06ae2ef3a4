from __future__ import annotations

from page_control.error_mapper import map_error
from page_control.error_presenter import GENERIC_SUBMISSION_MESSAGE, present_error, submission_error_message
from page_control.exceptions import InvalidSelectionError, TransportFailure


def test_authority_message_is_shown_when_present() -> None:
    error = map_error(422, {"msg": "User ids are required", "code": "VALIDATION"}, "t-1")

    presented = present_error(error).render()

    assert presented == {"title": "Error", "message": "User ids are required", "trace_id": "t-1", "code": "VALIDATION"}


def test_rejection_without_message_and_transport_failure_read_the_same() -> None:
    rejected = map_error(500, {}, None, reason="Internal Server Error")
    transport = TransportFailure(
        code="TRANSPORT_ERROR", message="timed out", details=None, trace_id=None, status_code=0
    )

    assert submission_error_message(rejected) == GENERIC_SUBMISSION_MESSAGE
    assert submission_error_message(transport) == GENERIC_SUBMISSION_MESSAGE


def test_validation_errors_show_their_own_text() -> None:
    assert submission_error_message(InvalidSelectionError("No page selected for page control")) == (
        "No page selected for page control"
    )
