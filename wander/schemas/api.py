# path: wander/schemas/api.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from wander.schemas.checkin import (
    CheckInDecision,
    CheckInRecord,
    Coordinate,
    Place,
    PlaceVisitSummary,
)

# stateless evaluation
class EvaluateIn(BaseModel):
    user_location: Coordinate
    place: Place
    prior_check_ins: list[CheckInRecord] = []
    now: Optional[datetime] = None  # server time when omitted

class DecisionOut(BaseModel):
    eligible: bool
    distance_km: float
    within_radius: bool
    on_cooldown: bool
    cooldown_remaining_seconds: int
    current_level: int
    projected_level: int
    points_awarded: int

    @classmethod
    def from_decision(cls, d: CheckInDecision) -> "DecisionOut":
        return cls(
            eligible=d.eligible,
            distance_km=d.distance_km,
            within_radius=d.within_radius,
            on_cooldown=d.on_cooldown,
            cooldown_remaining_seconds=int(d.cooldown_remaining.total_seconds()),
            current_level=d.current_level,
            projected_level=d.projected_level,
            points_awarded=d.points_awarded,
        )

# check-in with write-back
class CheckInIn(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=64)
    place_id: str = Field(..., min_length=1, max_length=64)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    photo_uri: Optional[str] = Field(None, max_length=2048)

class CheckInOut(BaseModel):
    place_id: str
    place_name: str
    decision: DecisionOut
    record: Optional[CheckInRecord] = None
    points_total: Optional[int] = None
    points_credited: bool = True

# visits
class VisitRow(BaseModel):
    place_id: str
    level: int
    last_checked_in_at: datetime
    can_check_in: bool
    cooldown_remaining_seconds: int

    @classmethod
    def from_summary(cls, s: PlaceVisitSummary) -> "VisitRow":
        return cls(
            place_id=s.place_id,
            level=s.level,
            last_checked_in_at=s.last_checked_in_at,
            can_check_in=s.can_check_in,
            cooldown_remaining_seconds=int(s.cooldown_remaining.total_seconds()),
        )

class TopPlaceOut(BaseModel):
    place_id: str
    level: int
    check_in_count: int                 # all check-ins of the user, every place
    place: Optional[Place] = None       # None when the place lookup failed

