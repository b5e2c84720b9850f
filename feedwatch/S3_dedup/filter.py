"""Novelty filter: decide which headlines of a refresh are new."""

from collections.abc import Collection, Sequence

from ..models import HeadlineRecord


def classify(
    records: Sequence[HeadlineRecord] | None,
    known_identities: Collection[str],
    cold_start: bool,
) -> tuple[list[HeadlineRecord], list[HeadlineRecord]]:
    """
    Split one refresh into new headlines and all headlines.

    Records are expected newest-first. The scan stops reporting anything as
    new once it meets a headline that is already known: feeds drop items from
    the middle, and an old item sliding into the tail must not show up as
    new. The cost is that a new item republished below a known one is missed.

    On cold start nothing is new; the whole batch becomes the baseline.

    Args:
        records: Headlines from current refresh, newest first
        known_identities: Identities seen on earlier refreshes
        cold_start: True for the first refresh of the feed's lifetime

    Returns:
        Tuple of (new_records, all_records)
        - new_records: Headlines not seen before, in feed order; an identity
          repeated within the batch is reported once
        - all_records: Every headline of the refresh, in feed order
    """
    if not records:
        return [], []

    new_records: list[HeadlineRecord] = []
    reported: set[str] = set()
    boundary_crossed = False

    for record in records:
        is_known = record.identity in known_identities
        if not (is_known or boundary_crossed or cold_start) and record.identity not in reported:
            new_records.append(record)
            reported.add(record.identity)
        if is_known:
            boundary_crossed = True

    return new_records, list(records)
