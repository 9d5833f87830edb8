"""Domain models for bounties, connection codes and tickets."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


# ==========================================
# Bounties
# ==========================================


class Bounty(BaseModel):
    """A unit of paid work with independent tracking flags."""

    id: int
    show: bool = True
    assignee: str = ""
    completed: bool = False
    paid: bool = False
    payment_pending: bool = False
    payment_failed: bool = False
    proof_of_work_count: int = 0
    updated: Optional[datetime] = None


class BountyStatusCount(BaseModel):
    """Report buckets for visible bounties. Buckets overlap."""

    open: int = 0
    assigned: int = 0
    completed: int = 0
    paid: int = 0
    pending: int = 0
    failed: int = 0


# ==========================================
# Connection codes
# ==========================================


class ConnectionCode(BaseModel):
    """A single-use connection credential."""

    id: int = 0
    connection_string: str = ""
    date_created: Optional[datetime] = None
    is_used: bool = False


class ConnectionCodeShort(BaseModel):
    """Reduced view handed out on dispense. Empty when nothing was available."""

    connection_string: str = ""
    date_created: Optional[datetime] = None

    def is_empty(self) -> bool:
        return not self.connection_string and self.date_created is None


class DispenseOrder(str, Enum):
    """Which unused connection code is handed out first."""

    OLDEST_FIRST = "oldest_first"
    NEWEST_FIRST = "newest_first"


# ==========================================
# Tickets
# ==========================================


class TicketStatus(str, Enum):
    """Ticket lifecycle states."""

    DRAFT = "DRAFT"
    READY = "READY"
    IN_PROGRESS = "IN_PROGRESS"
    TEST = "TEST"
    DEPLOY = "DEPLOY"
    PAY = "PAY"
    COMPLETE = "COMPLETE"


class Ticket(BaseModel):
    """A unit of scoped work inside a feature phase."""

    uuid: str
    feature_uuid: str
    phase_uuid: str
    name: str
    sequence: int = 0
    description: str = ""
    status: TicketStatus = TicketStatus.DRAFT
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class TicketReviewRequest(BaseModel):
    """Callback payload sent by the builder service."""

    ticket_uuid: str
    ticket_description: str


class TicketResponse(BaseModel):
    """Result of a dispatch request."""

    success: bool
    ticket_id: Optional[str] = None
    message: str = ""
    errors: List[str] = Field(default_factory=list)


# ==========================================
# External reference records (read-only here)
# ==========================================


class Workspace(BaseModel):
    uuid: str
    mission: str = ""
    tactics: str = ""


class Feature(BaseModel):
    uuid: str
    workspace_uuid: str = ""
    name: str = ""
    brief: str = ""
    requirements: str = ""
    architecture: str = ""


class FeaturePhase(BaseModel):
    uuid: str
    feature_uuid: str
    name: str = ""
