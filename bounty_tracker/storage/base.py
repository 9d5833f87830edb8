"""Storage interface shared by the in-memory and PostgreSQL stores."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..models import (
    Bounty,
    BountyStatusCount,
    ConnectionCode,
    DispenseOrder,
    Feature,
    FeaturePhase,
    Ticket,
    Workspace,
)


class Store(ABC):
    """Persist and retrieve tracker entities by key.

    Implementations must make ``claim_connection_code`` and
    ``increment_proof_count`` atomic with respect to concurrent callers.
    """

    # ==========================================
    # Bounties
    # ==========================================

    @abstractmethod
    def add_bounty(self, bounty: Bounty) -> Bounty:
        ...

    @abstractmethod
    def get_bounty(self, bounty_id: int) -> Optional[Bounty]:
        ...

    @abstractmethod
    def count_bounty_statuses(self) -> BountyStatusCount:
        ...

    @abstractmethod
    def increment_proof_count(self, bounty_id: int, now: datetime) -> bool:
        """Add one to the proof-of-work count and stamp ``updated``.

        Returns:
            False if no bounty has that id
        """

    @abstractmethod
    def delete_all_bounties(self) -> None:
        ...

    # ==========================================
    # Connection codes
    # ==========================================

    @abstractmethod
    def insert_connection_codes(self, codes: List[ConnectionCode]) -> None:
        """Bulk insert. Every code must already carry a creation time."""

    @abstractmethod
    def claim_connection_code(self, order: DispenseOrder) -> Optional[ConnectionCode]:
        """Mark one unused code as used and return it, or None if none is left."""

    @abstractmethod
    def list_connection_codes(self) -> List[ConnectionCode]:
        ...

    # ==========================================
    # Tickets
    # ==========================================

    @abstractmethod
    def get_ticket(self, ticket_uuid: str) -> Optional[Ticket]:
        ...

    @abstractmethod
    def save_ticket(self, ticket: Ticket) -> Ticket:
        """Insert or replace a ticket keyed by uuid."""

    @abstractmethod
    def update_ticket_description(
        self, ticket_uuid: str, description: str, now: datetime
    ) -> Optional[Ticket]:
        """Set only ``description`` and ``updated_at`` in one atomic step.

        Returns:
            The updated ticket, or None if no ticket has that uuid
        """

    @abstractmethod
    def delete_ticket(self, ticket_uuid: str) -> bool:
        ...

    @abstractmethod
    def list_tickets_by_phase(self, feature_uuid: str, phase_uuid: str) -> List[Ticket]:
        ...

    # ==========================================
    # Workspaces, features and phases
    # ==========================================

    @abstractmethod
    def get_workspace(self, workspace_uuid: str) -> Optional[Workspace]:
        ...

    @abstractmethod
    def get_feature(self, feature_uuid: str) -> Optional[Feature]:
        ...

    @abstractmethod
    def get_feature_phase(
        self, feature_uuid: str, phase_uuid: str
    ) -> Optional[FeaturePhase]:
        ...

    def close(self) -> None:
        """Release held resources."""
