"""Bounty status classification for reporting surfaces."""

from typing import Iterable

from .models import Bounty, BountyStatusCount


def classify_bounties(bounties: Iterable[Bounty]) -> BountyStatusCount:
    """Count visible bounties into six independent buckets.

    Buckets overlap: an assigned, completed and paid bounty counts toward
    all three. Hidden bounties count toward none.
    """
    counts = BountyStatusCount()
    for bounty in bounties:
        if not bounty.show:
            continue
        if bounty.assignee:
            counts.assigned += 1
        else:
            counts.open += 1
        if bounty.completed:
            counts.completed += 1
        if bounty.paid:
            counts.paid += 1
        if bounty.payment_pending:
            counts.pending += 1
        if bounty.payment_failed:
            counts.failed += 1
    return counts


def get_filter_status_count(store) -> BountyStatusCount:
    """Status counts over the whole bounty table."""
    return store.count_bounty_statuses()
