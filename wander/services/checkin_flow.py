# path: wander/services/checkin_flow.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import httpx

from wander.repos import wander_repo
from wander.schemas.checkin import CheckInDecision, CheckInRecord, Coordinate, Place
from wander.services.checkin_rules import evaluate_check_in
from wander.services.visits import check_ins_for_place

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInOutcome:
    decision: CheckInDecision
    place: Place
    record: Optional[CheckInRecord] = None   # set only when the check-in was written
    points_total: Optional[int] = None
    points_credited: bool = True   # False when the record was written but the points write failed


async def perform_check_in(
    client: httpx.AsyncClient,
    *,
    user_id: str,
    place_id: str,
    user_location: Coordinate,
    now: datetime,
    photo_uri: str | None = None,
) -> CheckInOutcome:
    """Evaluate a check-in and, when eligible, persist it and award the points.

    Ineligible decisions write nothing. If the points write fails after the record
    was stored, the outcome still carries the record with `points_credited=False`.
    """
    place = await wander_repo.fetch_place(client, place_id)
    history = await wander_repo.fetch_user_check_ins(client, user_id)
    prior = check_ins_for_place(history, place.id)

    decision = evaluate_check_in(user_location, place, prior, now)
    if not decision.eligible:
        logger.info(
            "check-in rejected user=%s place=%s distance_km=%.3f on_cooldown=%s",
            user_id, place.id, decision.distance_km, decision.on_cooldown,
        )
        return CheckInOutcome(decision=decision, place=place)

    record = await wander_repo.create_check_in(client, CheckInRecord(
        place_id=place.id,
        user_id=user_id,
        timestamp=now,
        photo_uri=photo_uri,
        location=user_location,
    ))
    # the record is stored from here on; a failed points write must not hide it
    try:
        points_total = await wander_repo.add_user_points(client, user_id, decision.points_awarded)
    except wander_repo.WanderAPIError as e:
        logger.error(
            "check-in stored but points not credited user=%s place=%s points=%d: %s",
            user_id, place.id, decision.points_awarded, e,
        )
        return CheckInOutcome(decision=decision, place=place, record=record, points_credited=False)

    logger.info(
        "check-in accepted user=%s place=%s level=%d points=%d",
        user_id, place.id, decision.projected_level, decision.points_awarded,
    )
    return CheckInOutcome(decision=decision, place=place, record=record, points_total=points_total)
