"""Validate node - checks the ticket before anything leaves the process."""

import uuid
from typing import Literal

from ..errors import ValidationError
from ..state import DispatchState, DispatchStatus


def validate_ticket(state: DispatchState) -> DispatchState:
    """Reject tickets without a usable uuid.

    Fails closed: no brief lookup and no network call happen for an
    invalid ticket.
    """
    raw_uuid = state.get("ticket", {}).get("uuid")

    if not raw_uuid:
        raise ValidationError("Validation failed", errors=["UUID is required"])

    try:
        ticket_uuid = uuid.UUID(str(raw_uuid))
    except ValueError:
        raise ValidationError("Validation failed", errors=["Invalid UUID format"])

    if ticket_uuid.int == 0:
        raise ValidationError("Validation failed", errors=["UUID is required"])

    return {
        **state,
        "ticket_uuid": str(ticket_uuid),
        "status": DispatchStatus.CREATED.value,
    }


def route_after_validate(
    state: DispatchState,
) -> Literal["load_briefs", "build_request"]:
    """Routing function - only tickets tied to a feature need briefs."""
    if state.get("ticket", {}).get("feature_uuid"):
        return "load_briefs"
    return "build_request"
