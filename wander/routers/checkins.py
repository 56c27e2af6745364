# path: wander/routers/checkins.py
from datetime import datetime

import httpx
from fastapi import APIRouter, Depends

from wander.core.deps import get_api_client, get_now, upstream_http_error
from wander.repos.wander_repo import WanderAPIError
from wander.schemas.api import CheckInIn, CheckInOut, DecisionOut, EvaluateIn
from wander.schemas.checkin import Coordinate, as_utc
from wander.services.checkin_flow import perform_check_in
from wander.services.checkin_rules import evaluate_check_in

router = APIRouter(prefix="/checkins", tags=["checkins"])


@router.post("/evaluate", response_model=DecisionOut)
def checkin_evaluate(payload: EvaluateIn, now: datetime = Depends(get_now)):
    """Dry run: the caller supplies the place and the history, nothing is fetched or written."""
    at = as_utc(payload.now) if payload.now else now
    decision = evaluate_check_in(payload.user_location, payload.place, payload.prior_check_ins, at)
    return DecisionOut.from_decision(decision)


@router.post("", response_model=CheckInOut)
async def checkin_create(
    payload: CheckInIn,
    client: httpx.AsyncClient = Depends(get_api_client),
    now: datetime = Depends(get_now),
):
    try:
        outcome = await perform_check_in(
            client,
            user_id=payload.user_id,
            place_id=payload.place_id,
            user_location=Coordinate(lat=payload.lat, lng=payload.lng),
            now=now,
            photo_uri=payload.photo_uri,
        )
    except WanderAPIError as e:
        raise upstream_http_error(e, "place not found")

    return CheckInOut(
        place_id=outcome.place.id,
        place_name=outcome.place.name,
        decision=DecisionOut.from_decision(outcome.decision),
        record=outcome.record,
        points_total=outcome.points_total,
        points_credited=outcome.points_credited,
    )
