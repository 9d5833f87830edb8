"""Bounty Tracker - bounty status, connection codes and ticket dispatch.

Key components:
- classify_bounties: Status buckets for visible bounties
- issue_batch / dispense_one: Single-use connection codes
- increment_proof_count: Atomic proof-of-work counter
- TicketService: Ticket validation and CRUD
- Dispatcher: LangGraph workflow sending tickets to the builder service
- process_ticket_review: Builder callback ingestion
- get_store: Store factory (PostgreSQL or in-memory)
"""

from .connection_codes import issue_batch, dispense_one
from .dispatcher import Dispatcher, DispatchResult
from .proof import increment_proof_count
from .review import process_ticket_review
from .status import classify_bounties, get_filter_status_count
from .storage import Store, InMemoryStore, get_store
from .tickets import TicketService

__all__ = [
    "classify_bounties",
    "get_filter_status_count",
    "issue_batch",
    "dispense_one",
    "increment_proof_count",
    "TicketService",
    "Dispatcher",
    "DispatchResult",
    "process_ticket_review",
    "Store",
    "InMemoryStore",
    "get_store",
]
