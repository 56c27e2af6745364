# path: wander/schemas/checkin.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, timedelta, timezone


def as_utc(dt: datetime) -> datetime:
    # naive datetimes from the API are UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Place(BaseModel):
    """A check-in target. Only `location` matters to the rules; the rest is passed through."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    category: str = ""
    city: str = ""
    location: Coordinate
    subcategory: Optional[str] = None
    description: Optional[str] = None


class CheckInRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    place_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    timestamp: datetime
    photo_uri: Optional[str] = None
    # where the user stood when checking in
    location: Optional[Coordinate] = None

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class CheckInDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    eligible: bool
    distance_km: float
    within_radius: bool
    on_cooldown: bool
    cooldown_remaining: timedelta
    current_level: int
    projected_level: int
    points_awarded: int


class PlaceVisitSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    place_id: str
    level: int
    last_checked_in_at: datetime
    # cooldown only; distance needs a live location fix
    can_check_in: bool
    cooldown_remaining: timedelta


class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


class PlaceWithDistance(BaseModel):
    model_config = ConfigDict(frozen=True)

    place: Place
    distance_km: float
