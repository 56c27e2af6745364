# path: wander/services/checkin_rules.py
import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from wander.schemas.checkin import (
    CheckInDecision,
    CheckInRecord,
    Coordinate,
    Place,
    as_utc,
)

CHECK_IN_RADIUS_KM = 0.5   # must be within 500 m of the place
COOLDOWN_HOURS = 4         # per (user, place)
COOLDOWN_DURATION = timedelta(hours=COOLDOWN_HOURS)
CHECK_IN_POINTS = 50       # flat, independent of level and distance
EARTH_RADIUS_KM = 6371.0


def compute_distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle (haversine) distance between two WGS84 points, in km."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def latest_check_in(records: Iterable[CheckInRecord]) -> CheckInRecord | None:
    ordered = sorted(records, key=lambda r: r.timestamp, reverse=True)
    return ordered[0] if ordered else None


def cooldown_remaining(last_checked_in_at: datetime, now: datetime) -> timedelta:
    elapsed = as_utc(now) - as_utc(last_checked_in_at)
    return max(timedelta(0), COOLDOWN_DURATION - elapsed)


def evaluate_check_in(
    user_location: Coordinate,
    place: Place,
    prior_check_ins: Sequence[CheckInRecord],
    now: datetime,
) -> CheckInDecision:
    """Decide whether the user may check in to `place` at `now`.

    `prior_check_ins` is this user's full history for this place, in any order.
    Being too far away or on cooldown are ordinary outcomes reported through
    `eligible`; nothing is raised and nothing is persisted here.
    """
    distance_km = compute_distance_km(user_location, place.location)
    within_radius = distance_km <= CHECK_IN_RADIUS_KM
    level = len(prior_check_ins)

    last = latest_check_in(prior_check_ins)
    if last is not None:
        remaining = cooldown_remaining(last.timestamp, now)
    else:
        remaining = timedelta(0)
    on_cooldown = remaining > timedelta(0)

    eligible = within_radius and not on_cooldown

    return CheckInDecision(
        eligible=eligible,
        distance_km=distance_km,
        within_radius=within_radius,
        on_cooldown=on_cooldown,
        cooldown_remaining=remaining,
        current_level=level,
        projected_level=level + 1 if eligible else level,
        points_awarded=CHECK_IN_POINTS if eligible else 0,
    )
