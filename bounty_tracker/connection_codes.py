"""Single-use connection codes.

Codes are issued in batches and handed out one at a time. A code is marked
used in the same atomic step that selects it, so no two callers ever receive
the same code.
"""

import logging
from typing import List, Optional

from .errors import EmptyInputError
from .models import ConnectionCode, ConnectionCodeShort, DispenseOrder, utcnow

logger = logging.getLogger(__name__)


def issue_batch(store, codes: Optional[List[ConnectionCode]]) -> List[ConnectionCode]:
    """Bulk insert a batch of connection codes.

    Codes without a creation time are stamped with the current time. Duplicate
    ids are stored as given.

    Args:
        store: Store instance
        codes: Codes to insert

    Returns:
        The codes as persisted

    Raises:
        EmptyInputError: The batch is empty or None
    """
    if not codes:
        raise EmptyInputError("no connection codes to create")

    now = utcnow()
    prepared = [
        code.model_copy(
            update={"date_created": code.date_created or now, "is_used": False}
        )
        for code in codes
    ]

    store.insert_connection_codes(prepared)
    logger.info(f"Issued {len(prepared)} connection codes")
    return prepared


def dispense_one(
    store, order: DispenseOrder = DispenseOrder.OLDEST_FIRST
) -> ConnectionCodeShort:
    """Hand out one unused connection code and mark it used.

    Args:
        store: Store instance
        order: Whether the oldest or the newest unused code goes first.
            Codes created at the same time go out in insertion order.

    Returns:
        The code's string and creation time, or an empty result when every
        code has been used
    """
    code = store.claim_connection_code(order)
    if code is None:
        logger.info("No unused connection code available")
        return ConnectionCodeShort()

    return ConnectionCodeShort(
        connection_string=code.connection_string,
        date_created=code.date_created,
    )
