"""Thread-safe in-memory store for development and tests.

Data is lost when the process exits.
"""

import threading
from datetime import datetime
from typing import Dict, List, Optional

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
from ..status import classify_bounties
from .base import Store


class InMemoryStore(Store):
    """Dictionary-backed ``Store``. A single lock guards every mutation."""

    def __init__(self):
        self._lock = threading.Lock()
        self._bounties: Dict[int, Bounty] = {}
        # Insertion order is the tie-break for dispense
        self._codes: List[ConnectionCode] = []
        self._tickets: Dict[str, Ticket] = {}
        self._workspaces: Dict[str, Workspace] = {}
        self._features: Dict[str, Feature] = {}
        self._phases: Dict[str, FeaturePhase] = {}

    # Bounties

    def add_bounty(self, bounty: Bounty) -> Bounty:
        with self._lock:
            self._bounties[bounty.id] = bounty.model_copy()
        return bounty

    def get_bounty(self, bounty_id: int) -> Optional[Bounty]:
        bounty = self._bounties.get(bounty_id)
        return bounty.model_copy() if bounty else None

    def count_bounty_statuses(self) -> BountyStatusCount:
        with self._lock:
            bounties = list(self._bounties.values())
        return classify_bounties(bounties)

    def increment_proof_count(self, bounty_id: int, now: datetime) -> bool:
        with self._lock:
            bounty = self._bounties.get(bounty_id)
            if bounty is None:
                return False
            bounty.proof_of_work_count += 1
            bounty.updated = now
            return True

    def delete_all_bounties(self) -> None:
        with self._lock:
            self._bounties.clear()

    # Connection codes

    def insert_connection_codes(self, codes: List[ConnectionCode]) -> None:
        with self._lock:
            self._codes.extend(code.model_copy() for code in codes)

    def claim_connection_code(self, order: DispenseOrder) -> Optional[ConnectionCode]:
        with self._lock:
            unused = [(i, c) for i, c in enumerate(self._codes) if not c.is_used]
            if not unused:
                return None

            sign = -1 if order == DispenseOrder.NEWEST_FIRST else 1
            _, code = min(
                unused,
                key=lambda item: (sign * item[1].date_created.timestamp(), item[0]),
            )
            code.is_used = True
            return code.model_copy()

    def list_connection_codes(self) -> List[ConnectionCode]:
        with self._lock:
            return [code.model_copy() for code in self._codes]

    # Tickets

    def get_ticket(self, ticket_uuid: str) -> Optional[Ticket]:
        ticket = self._tickets.get(ticket_uuid)
        return ticket.model_copy() if ticket else None

    def save_ticket(self, ticket: Ticket) -> Ticket:
        with self._lock:
            self._tickets[ticket.uuid] = ticket.model_copy()
        return ticket

    def update_ticket_description(
        self, ticket_uuid: str, description: str, now: datetime
    ) -> Optional[Ticket]:
        with self._lock:
            ticket = self._tickets.get(ticket_uuid)
            if ticket is None:
                return None
            ticket.description = description
            ticket.updated_at = now
            return ticket.model_copy()

    def delete_ticket(self, ticket_uuid: str) -> bool:
        with self._lock:
            return self._tickets.pop(ticket_uuid, None) is not None

    def list_tickets_by_phase(self, feature_uuid: str, phase_uuid: str) -> List[Ticket]:
        with self._lock:
            tickets = [
                t.model_copy()
                for t in self._tickets.values()
                if t.feature_uuid == feature_uuid and t.phase_uuid == phase_uuid
            ]
        return sorted(tickets, key=lambda t: (t.sequence, t.created_at))

    # Workspaces, features and phases

    def add_workspace(self, workspace: Workspace) -> Workspace:
        with self._lock:
            self._workspaces[workspace.uuid] = workspace
        return workspace

    def add_feature(self, feature: Feature) -> Feature:
        with self._lock:
            self._features[feature.uuid] = feature
        return feature

    def add_feature_phase(self, phase: FeaturePhase) -> FeaturePhase:
        with self._lock:
            self._phases[phase.uuid] = phase
        return phase

    def get_workspace(self, workspace_uuid: str) -> Optional[Workspace]:
        return self._workspaces.get(workspace_uuid)

    def get_feature(self, feature_uuid: str) -> Optional[Feature]:
        return self._features.get(feature_uuid)

    def get_feature_phase(
        self, feature_uuid: str, phase_uuid: str
    ) -> Optional[FeaturePhase]:
        phase = self._phases.get(phase_uuid)
        if phase is None or phase.feature_uuid != feature_uuid:
            return None
        return phase
