# path: wander/repos/wander_repo.py
from __future__ import annotations
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from wander.schemas.checkin import BoundingBox, CheckInRecord, Coordinate, Place

logger = logging.getLogger(__name__)


class WanderAPIError(Exception):
    """The remote API failed or answered with something we cannot use."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFound(WanderAPIError):
    pass


def _raise_for_status(resp: httpx.Response, what: str) -> None:
    if resp.is_success:
        return
    logger.warning("wander api %s failed: %s %s", what, resp.status_code, resp.request.url)
    if resp.status_code == 404:
        raise NotFound(f"{what}: not found", status_code=404)
    raise WanderAPIError(f"Failed to {what}: {resp.status_code}", status_code=resp.status_code)


async def _request(client: httpx.AsyncClient, method: str, url: str, what: str, **kwargs) -> Any:
    try:
        resp = await client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        logger.error("wander api %s unreachable: %s", what, e)
        raise WanderAPIError(f"Failed to {what}: {e}") from e
    _raise_for_status(resp, what)
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as e:
        raise WanderAPIError(f"Failed to {what}: response is not JSON", status_code=resp.status_code) from e


# ---- JSON <-> domain ----
def place_from_json(data: dict) -> Place:
    try:
        return Place(
            id=str(data["id"]),
            name=data.get("name") or "",
            category=data.get("category") or "",
            city=data.get("city") or "",
            subcategory=data.get("subcategory"),
            description=data.get("description"),
            location=Coordinate(lat=data["lat"], lng=data["lon"]),
        )
    except (AttributeError, KeyError, TypeError, ValidationError) as e:
        raise WanderAPIError(f"malformed place: {e}") from e


def check_in_from_json(data: dict) -> CheckInRecord:
    try:
        location = None
        if data.get("latitude") is not None and data.get("longitude") is not None:
            location = Coordinate(lat=data["latitude"], lng=data["longitude"])
        return CheckInRecord(
            place_id=str(data["placeId"]),
            user_id=str(data["userId"]),
            timestamp=data["timestamp"],
            photo_uri=data.get("photoUri"),
            location=location,
        )
    except (AttributeError, KeyError, TypeError, ValidationError) as e:
        raise WanderAPIError(f"malformed check-in: {e}") from e


def check_in_to_json(record: CheckInRecord) -> dict:
    return {
        "placeId": record.place_id,
        "userId": record.user_id,
        "latitude": record.location.lat if record.location else None,
        "longitude": record.location.lng if record.location else None,
        "timestamp": record.timestamp.isoformat(),
        "photoUri": record.photo_uri,
    }


# ---- places ----
async def fetch_place(client: httpx.AsyncClient, place_id: str) -> Place:
    data = await _request(client, "GET", f"/places/{place_id}", "fetch place")
    return place_from_json(data)


async def fetch_nearby_places(client: httpx.AsyncClient, box: BoundingBox) -> list[Place]:
    params = {
        "minLat": box.min_lat,
        "maxLat": box.max_lat,
        "minLon": box.min_lng,
        "maxLon": box.max_lng,
    }
    data = await _request(client, "GET", "/places/nearby", "fetch nearby places", params=params)
    return [place_from_json(p) for p in data or []]


# ---- check-ins ----
async def fetch_user_check_ins(client: httpx.AsyncClient, user_id: str) -> list[CheckInRecord]:
    """Full check-in history of a user, across all places."""
    data = await _request(client, "GET", f"/checkins/user/{user_id}", "fetch check-ins")
    return [check_in_from_json(c) for c in data or []]


async def create_check_in(client: httpx.AsyncClient, record: CheckInRecord) -> CheckInRecord:
    data = await _request(client, "POST", "/checkins", "create check-in", json=check_in_to_json(record))
    # some deployments answer 201 with an empty body
    if not data:
        return record
    return check_in_from_json(data)


# ---- users ----
async def add_user_points(client: httpx.AsyncClient, user_id: str, points: int) -> int | None:
    """Add `points` to the user's total. Returns the new total when the API reports it."""
    data = await _request(
        client, "POST", f"/users/{user_id}/points", "add points", json={"points": points}
    )
    if isinstance(data, dict) and data.get("points") is not None:
        return int(data["points"])
    return None
