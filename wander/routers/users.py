# path: wander/routers/users.py
import logging
from datetime import datetime

import httpx
from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from wander.core.deps import get_api_client, get_now, upstream_http_error
from wander.repos.wander_repo import WanderAPIError, fetch_place, fetch_user_check_ins
from wander.schemas.api import TopPlaceOut, VisitRow
from wander.services.visits import summarize_visits, top_place

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/{user_id}/visits", response_model=list[VisitRow])
async def user_visits(
    user_id: str,
    client: httpx.AsyncClient = Depends(get_api_client),
    now: datetime = Depends(get_now),
):
    try:
        history = await fetch_user_check_ins(client, user_id)
    except WanderAPIError as e:
        raise upstream_http_error(e, "user not found")
    return [VisitRow.from_summary(s) for s in summarize_visits(history, now)]


@router.get("/{user_id}/top-place", response_model=TopPlaceOut)
async def user_top_place(user_id: str, client: httpx.AsyncClient = Depends(get_api_client)):
    """Most visited place with its details, plus the user's total check-in count."""
    try:
        history = await fetch_user_check_ins(client, user_id)
    except WanderAPIError as e:
        raise upstream_http_error(e, "user not found")

    top = top_place(history)
    if top is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="no checkins")
    place_id, level = top

    # the stats stand on their own; a missing place only drops the details
    try:
        place = await fetch_place(client, place_id)
    except WanderAPIError as e:
        logger.warning("top place details unavailable user=%s place=%s: %s", user_id, place_id, e)
        place = None

    return TopPlaceOut(place_id=place_id, level=level, check_in_count=len(history), place=place)
