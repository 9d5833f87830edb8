"""State schema for the ticket dispatch workflow."""

from enum import Enum
from typing import List, Optional, TypedDict


class DispatchStatus(str, Enum):
    """Dispatch lifecycle.

    CREATED -> DISPATCHED -> AWAITING_REVIEW | DISPATCH_FAILED
    """

    CREATED = "created"
    DISPATCHED = "dispatched"
    AWAITING_REVIEW = "awaiting_review"
    DISPATCH_FAILED = "dispatch_failed"


class DispatchState(TypedDict, total=False):
    """State for the dispatch graph."""

    # Ticket body as submitted by the caller
    ticket: dict
    ticket_uuid: str

    # Context loaded for the builder
    product_brief: str
    feature_brief: str

    # Outbound request
    job_request: dict

    # Workflow state
    status: str

    # Builder response
    response_status: Optional[int]
    response_body: str
    message: str
    errors: List[str]
