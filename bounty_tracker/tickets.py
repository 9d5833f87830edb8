"""Ticket validation and CRUD.

Statuses are parsed into ``TicketStatus`` once, here at the boundary, and the
typed value is carried everywhere else.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from .errors import BadRequestError, InvalidStatusError, NotFoundError, ValidationError
from .models import Ticket, TicketStatus, utcnow

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "feature_uuid, phase_uuid, and name are required"

# Body keys a client may set. uuid comes from the path; timestamps are ours.
EDITABLE_FIELDS = (
    "feature_uuid",
    "phase_uuid",
    "name",
    "sequence",
    "description",
    "status",
)


def parse_uuid(value: Any, label: str = "UUID") -> uuid.UUID:
    """Parse an externally supplied identifier.

    Raises:
        BadRequestError: value is not a well-formed UUID
    """
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise BadRequestError(f"invalid {label} format")


def parse_status(value: Optional[str]) -> Optional[TicketStatus]:
    """Parse a ticket status.

    Returns:
        The status, or None for an empty value (meaning "unchanged")

    Raises:
        InvalidStatusError: value is not an allowed status
    """
    if value is None or value == "":
        return None
    if isinstance(value, TicketStatus):
        return value
    try:
        return TicketStatus(value)
    except ValueError:
        raise InvalidStatusError()


def validate_required_fields(ticket: Ticket) -> None:
    """Raise ValidationError unless feature_uuid, phase_uuid and name are set."""
    if not ticket.feature_uuid or not ticket.phase_uuid or not ticket.name:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)


class TicketService:
    """Ticket operations over an injected store."""

    def __init__(self, store):
        self.store = store

    def get_ticket(self, ticket_uuid: str) -> Ticket:
        if not ticket_uuid:
            raise BadRequestError("UUID is required")
        ticket = self.store.get_ticket(str(parse_uuid(ticket_uuid)))
        if ticket is None:
            raise NotFoundError("Ticket not found")
        return ticket

    def create_or_edit(self, ticket_uuid: str, body: Dict[str, Any]) -> Ticket:
        """Create a ticket, or apply a full or partial body to an existing one.

        Keys missing from ``body`` keep their stored values. An empty status
        leaves the stored status alone; a new ticket without one is DRAFT.

        Args:
            ticket_uuid: Ticket identifier from the request path
            body: Decoded JSON body

        Returns:
            The stored ticket

        Raises:
            BadRequestError: malformed ticket, feature or phase uuid
            InvalidStatusError: unknown status
            ValidationError: feature_uuid, phase_uuid or name missing
        """
        if not ticket_uuid:
            raise BadRequestError("UUID is required")
        canonical_uuid = str(parse_uuid(ticket_uuid, "UUID"))

        changes = {
            key: body[key]
            for key in EDITABLE_FIELDS
            if body.get(key) is not None
        }

        status = parse_status(changes.pop("status", None))
        if status is not None:
            changes["status"] = status

        existing = self.store.get_ticket(canonical_uuid)
        now = utcnow()

        if existing is not None:
            merged = existing.model_dump()
            merged.update(changes)
            merged["updated_at"] = now
        else:
            merged = {
                "feature_uuid": "",
                "phase_uuid": "",
                "name": "",
                **changes,
                "uuid": canonical_uuid,
                "created_at": now,
                "updated_at": now,
            }

        try:
            ticket = Ticket.model_validate(merged)
        except ValueError as e:
            raise ValidationError(f"invalid ticket body: {e}")

        validate_required_fields(ticket)
        ticket.feature_uuid = str(parse_uuid(ticket.feature_uuid, "feature UUID"))
        ticket.phase_uuid = str(parse_uuid(ticket.phase_uuid, "phase UUID"))

        saved = self.store.save_ticket(ticket)
        logger.info(
            f"{'Updated' if existing else 'Created'} ticket {canonical_uuid}",
            extra={"status": saved.status.value, "phase_uuid": saved.phase_uuid},
        )
        return saved

    def delete_ticket(self, ticket_uuid: str) -> None:
        if not ticket_uuid:
            raise BadRequestError("UUID is required")
        if not self.store.delete_ticket(str(parse_uuid(ticket_uuid))):
            raise NotFoundError("Ticket not found")
        logger.info(f"Deleted ticket {ticket_uuid}")

    def list_by_phase(self, feature_uuid: str, phase_uuid: str) -> List[Ticket]:
        """Tickets of one feature phase, ordered by sequence.

        Raises:
            BadRequestError: malformed feature or phase uuid
            NotFoundError: unknown feature, or phase not part of it
        """
        feature_uuid = str(parse_uuid(feature_uuid, "feature UUID"))
        phase_uuid = str(parse_uuid(phase_uuid, "phase UUID"))

        if self.store.get_feature(feature_uuid) is None:
            raise NotFoundError("feature not found")
        if self.store.get_feature_phase(feature_uuid, phase_uuid) is None:
            raise NotFoundError("Phase not found")

        return self.store.list_tickets_by_phase(feature_uuid, phase_uuid)

    def update_description(self, ticket_uuid: str, description: str) -> Ticket:
        """Replace only the description and bump the update time.

        The store writes just those two columns, so a concurrent edit of any
        other field is kept. Reapplying the same description changes nothing
        but ``updated_at``.
        """
        ticket = self.store.update_ticket_description(
            ticket_uuid, description, utcnow()
        )
        if ticket is None:
            raise NotFoundError("Ticket not found")
        return ticket
