# path: wander/services/visits.py
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from wander.schemas.checkin import CheckInRecord, PlaceVisitSummary
from wander.services.checkin_rules import cooldown_remaining


def check_ins_for_place(check_ins: Iterable[CheckInRecord], place_id: str) -> list[CheckInRecord]:
    return [r for r in check_ins if r.place_id == place_id]


def summarize_visits(check_ins: Iterable[CheckInRecord], now: datetime) -> list[PlaceVisitSummary]:
    """One summary per visited place: level, last visit and whether the cooldown has passed.

    Sorted by level (highest first), then by most recent visit.
    """
    by_place: dict[str, list[CheckInRecord]] = defaultdict(list)
    for r in check_ins:
        by_place[r.place_id].append(r)

    summaries = []
    for place_id, records in by_place.items():
        last_at = max(r.timestamp for r in records)
        remaining = cooldown_remaining(last_at, now)
        summaries.append(PlaceVisitSummary(
            place_id=place_id,
            level=len(records),
            last_checked_in_at=last_at,
            can_check_in=remaining == timedelta(0),
            cooldown_remaining=remaining,
        ))

    summaries.sort(key=lambda s: (s.level, s.last_checked_in_at), reverse=True)
    return summaries


def top_place(check_ins: Sequence[CheckInRecord]) -> tuple[str, int] | None:
    """Most visited place and its level. On a tie the place seen first in the history wins."""
    counts = Counter(r.place_id for r in check_ins)
    if not counts:
        return None
    # most_common keeps first-seen order for equal counts
    place_id, level = counts.most_common(1)[0]
    return place_id, level
