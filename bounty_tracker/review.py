"""Review ingestion - applies the builder's result back onto a ticket.

The builder calls the review webhook some time after dispatch. Callbacks are
not sequenced: a replay or a late duplicate simply rewrites the description
again (last write wins).
"""

import json
import logging
import uuid
from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .models import Ticket, TicketReviewRequest
from .tickets import TicketService

logger = logging.getLogger(__name__)


def parse_review_request(
    payload: Union[bytes, str, Dict[str, Any]],
) -> TicketReviewRequest:
    """Decode and validate a review callback.

    Raises:
        ValidationError: malformed JSON, missing fields or a malformed ticket uuid
    """
    if isinstance(payload, (bytes, str)):
        try:
            payload = json.loads(payload)
        except ValueError:
            raise ValidationError("Error parsing request body")

    if not isinstance(payload, dict):
        raise ValidationError("Error parsing request body")

    try:
        request = TicketReviewRequest.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError("ticket_uuid and ticket_description are required")

    if not request.ticket_uuid:
        raise ValidationError("ticket UUID is required")
    if not request.ticket_description:
        raise ValidationError("ticket description is required")

    try:
        request.ticket_uuid = str(uuid.UUID(request.ticket_uuid))
    except ValueError:
        raise ValidationError("invalid ticket UUID format")

    return request


def process_ticket_review(
    store, payload: Union[bytes, str, Dict[str, Any]]
) -> Ticket:
    """Apply a review callback.

    Args:
        store: Store instance
        payload: Raw callback body or decoded JSON

    Returns:
        The updated ticket

    Raises:
        ValidationError: payload rejected before any lookup
        NotFoundError: no ticket with that uuid
    """
    request = parse_review_request(payload)

    ticket = TicketService(store).update_description(
        request.ticket_uuid, request.ticket_description
    )

    logger.info(f"Successfully updated ticket {request.ticket_uuid}")
    return ticket
