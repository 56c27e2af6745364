"""Shared fixtures: domain factories and an in-memory stand-in for the remote Wander API."""

import json
import math
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from wander.schemas.checkin import CheckInRecord, Coordinate, Place
from wander.services.checkin_rules import EARTH_RADIUS_KM

API_BASE = "https://wander.test/api"
SEATTLE = Coordinate(lat=47.6062, lng=-122.3321)
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def north_of(origin: Coordinate, km: float) -> Coordinate:
    """Point `km` due north; along a meridian the haversine distance is exactly R * dLat."""
    return Coordinate(lat=origin.lat + math.degrees(km / EARTH_RADIUS_KM), lng=origin.lng)


def make_place(place_id="pike-market", location=SEATTLE, name="Pike Place Market"):
    return Place(id=place_id, name=name, category="market", city="Seattle", location=location)


def make_record(place_id="pike-market", user_id="u1", ago=timedelta(hours=5), now=NOW):
    return CheckInRecord(place_id=place_id, user_id=user_id, timestamp=now - ago)


def place_json(place: Place) -> dict:
    return {
        "id": place.id,
        "name": place.name,
        "category": place.category,
        "subcategory": place.subcategory,
        "lat": place.location.lat,
        "lon": place.location.lng,
        "city": place.city,
        "description": place.description,
    }


def record_json(record: CheckInRecord) -> dict:
    return {
        "placeId": record.place_id,
        "userId": record.user_id,
        "latitude": None,
        "longitude": None,
        "timestamp": record.timestamp.isoformat(),
        "photoUri": record.photo_uri,
    }


class FakeWanderAPI:
    """Just enough of the Wander REST API for the repo, flow and route tests."""

    def __init__(self):
        self.places: dict[str, dict] = {}
        self.check_ins: list[dict] = []
        self.points: dict[str, int] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self.fail_paths: dict[str, int] = {}   # path (without /api) -> status

    def add_place(self, place: Place) -> None:
        self.places[place.id] = place_json(place)

    def add_record(self, record: CheckInRecord) -> None:
        self.check_ins.append(record_json(record))

    def writes(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"error": "boom"})

        path = request.url.path.removeprefix("/api")
        parts = path.strip("/").split("/")
        if path in self.fail_paths:
            return httpx.Response(self.fail_paths[path], json={"error": "boom"})

        if request.method == "GET" and path == "/places/nearby":
            q = {k: float(v) for k, v in request.url.params.items()}
            return httpx.Response(200, json=[
                p for p in self.places.values()
                if q["minLat"] <= p["lat"] <= q["maxLat"] and q["minLon"] <= p["lon"] <= q["maxLon"]
            ])
        if request.method == "GET" and parts[0] == "places" and len(parts) == 2:
            place = self.places.get(parts[1])
            if place is None:
                return httpx.Response(404, json={"error": "not found"})
            return httpx.Response(200, json=place)
        if request.method == "GET" and parts[:2] == ["checkins", "user"]:
            user_id = parts[2]
            return httpx.Response(200, json=[c for c in self.check_ins if c["userId"] == user_id])
        if request.method == "POST" and path == "/checkins":
            body = json.loads(request.content)
            self.check_ins.append(body)
            return httpx.Response(201, json=body)
        if request.method == "POST" and parts[0] == "users" and parts[2:] == ["points"]:
            user_id = parts[1]
            body = json.loads(request.content)
            self.points[user_id] = self.points.get(user_id, 0) + body["points"]
            return httpx.Response(200, json={"points": self.points[user_id]})
        return httpx.Response(404, json={"error": "no route"})


@pytest.fixture
def fake_api():
    return FakeWanderAPI()


@pytest_asyncio.fixture
async def api_client(fake_api):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(fake_api.handler), base_url=API_BASE
    ) as client:
        yield client
