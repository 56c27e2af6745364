# path: wander/services/places.py
import math
from collections.abc import Iterable

from wander.schemas.checkin import BoundingBox, Coordinate, Place, PlaceWithDistance
from wander.services.checkin_rules import EARTH_RADIUS_KM, compute_distance_km


def _extent(center: Coordinate, radius_km: float) -> tuple[float, float, float, float]:
    # (min_lat, max_lat, min_lng, max_lng); longitudes may run past +-180
    angular = radius_km / EARTH_RADIUS_KM
    d_lat = math.degrees(angular)
    cos_lat = math.cos(math.radians(center.lat))
    reach = math.sin(angular) / cos_lat if cos_lat > 1e-12 else math.inf
    if reach >= 1 or abs(center.lat) + d_lat >= 90:
        # circle covers a pole, every longitude is within reach
        min_lng, max_lng = -180.0, 180.0
    else:
        d_lng = math.degrees(math.asin(reach))
        min_lng, max_lng = center.lng - d_lng, center.lng + d_lng
    return max(-90.0, center.lat - d_lat), min(90.0, center.lat + d_lat), min_lng, max_lng


def bounding_box(center: Coordinate, radius_km: float) -> BoundingBox:
    """Lat/lng box enclosing every point within `radius_km` of `center`.

    Longitude is clamped to [-180, 180], so a circle crossing the antimeridian
    loses the part on the far side; use `bounding_boxes` for queries.
    """
    min_lat, max_lat, min_lng, max_lng = _extent(center, radius_km)
    return BoundingBox(
        min_lat=min_lat,
        max_lat=max_lat,
        min_lng=max(-180.0, min_lng),
        max_lng=min(180.0, max_lng),
    )


def bounding_boxes(center: Coordinate, radius_km: float) -> list[BoundingBox]:
    """Boxes that together cover the circle, split in two where it crosses the antimeridian.

    Used for the API's /places/nearby query, which filters by box rather than distance.
    """
    min_lat, max_lat, min_lng, max_lng = _extent(center, radius_km)
    if min_lng < -180:
        spans = [(min_lng + 360, 180.0), (-180.0, max_lng)]
    elif max_lng > 180:
        spans = [(min_lng, 180.0), (-180.0, max_lng - 360)]
    else:
        spans = [(min_lng, max_lng)]
    return [
        BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=lo, max_lng=hi)
        for lo, hi in spans
    ]


def rank_by_distance(places: Iterable[Place], origin: Coordinate) -> list[PlaceWithDistance]:
    ranked = [
        PlaceWithDistance(place=p, distance_km=compute_distance_km(origin, p.location))
        for p in places
    ]
    ranked.sort(key=lambda pd: pd.distance_km)
    return ranked
