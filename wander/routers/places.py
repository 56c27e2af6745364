# path: wander/routers/places.py
import httpx
from fastapi import APIRouter, Depends, Query

from wander.core.config import settings
from wander.core.deps import get_api_client, upstream_http_error
from wander.repos.wander_repo import WanderAPIError, fetch_nearby_places
from wander.schemas.checkin import Coordinate, PlaceWithDistance
from wander.services.places import bounding_boxes, rank_by_distance

router = APIRouter(prefix="/places", tags=["places"])


@router.get("/nearby", response_model=list[PlaceWithDistance])
async def places_nearby(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius_km: float | None = Query(None, gt=0, le=100),
    client: httpx.AsyncClient = Depends(get_api_client),
):
    origin = Coordinate(lat=lat, lng=lng)
    radius = radius_km or settings.NEARBY_RADIUS_KM
    places = {}
    try:
        for box in bounding_boxes(origin, radius):
            for p in await fetch_nearby_places(client, box):
                places.setdefault(p.id, p)
    except WanderAPIError as e:
        raise upstream_http_error(e)

    # the API filters by box; drop the corners outside the circle
    return [
        pd
        for pd in rank_by_distance(places.values(), origin)
        if pd.distance_km <= radius
    ]
