"""Proof-of-work counter for bounties."""

import logging

from .errors import NotFoundError
from .models import utcnow

logger = logging.getLogger(__name__)


def increment_proof_count(store, bounty_id: int) -> None:
    """Add one proof of work to a bounty and stamp its update time.

    The store applies this as a single conditional update so concurrent
    increments on the same bounty are never lost. Negative counts are left
    as they are and simply move up by one.

    Args:
        store: Store instance
        bounty_id: Bounty identifier

    Raises:
        NotFoundError: No bounty has that id. Nothing is created.
    """
    if not store.increment_proof_count(bounty_id, utcnow()):
        raise NotFoundError(f"bounty {bounty_id} not found")

    logger.info(f"Incremented proof count for bounty {bounty_id}")
