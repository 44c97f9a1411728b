# sentinel/models.py
# ------------------------------------------------------------
# Core domain models for the zone intrusion monitor
# ------------------------------------------------------------

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal, List
from datetime import datetime, timezone
import uuid


# -------------------------------
# Shared helpers & enums
# -------------------------------
RiskLevel = Literal["low", "medium", "high", "critical"]
AssetType = Literal["vehicle", "drone"]
AssetStatus = Literal["safe", "warning", "intruding"]


def uid(prefix: str) -> str:
    """
    Short, readable IDs for UI/debugging.
    Example: zon_a3f91c2b1e
    """
    return f"{prefix}_{uuid.uuid4().hex[:10]}"


def utcnow() -> datetime:
    """
    Always return timezone-aware UTC datetime.
    """
    return datetime.now(timezone.utc)


# -------------------------------
# Position
# -------------------------------
class Position(BaseModel):
    """
    A (lat, lng) pair in degrees. Immutable.
    """

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


# -------------------------------
# Asset
# -------------------------------
class Asset(BaseModel):
    """
    A tracked moving entity (vehicle or drone).
    """

    id: str = Field(default_factory=lambda: uid("ast"))

    label: str
    type: AssetType

    position: Position
    heading: float = Field(default=0.0, ge=0.0, lt=360.0)   # degrees
    speed: float = Field(default=0.0, ge=0.0)               # km/h

    # "warning" is never assigned by detection; reserved for proximity rules.
    status: AssetStatus = "safe"


# -------------------------------
# Restricted zone
# -------------------------------
class RestrictedZone(BaseModel):
    """
    Operator-drawn polygon with a risk level.
    The vertex list is implicitly closed (last point connects to the first).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uid("zon"))
    name: str

    points: List[Position]
    risk_level: RiskLevel
    color: str

    created_at: datetime = Field(default_factory=utcnow)


# -------------------------------
# Intrusion log
# -------------------------------
class IntrusionLog(BaseModel):
    """
    One record per new containment event (asset entered zone).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uid("itr"))

    asset_id: str
    asset_label: str

    zone_id: str
    zone_name: str
    risk_level: RiskLevel

    timestamp: datetime = Field(default_factory=utcnow)
    position: Position

    resolved: bool = False


# -------------------------------
# Request bodies
# -------------------------------
class ZoneCreateRequest(BaseModel):
    """
    Closed polygon delivered by the zone-drawing tool.
    """

    points: List[Position] = Field(min_length=3)
    name: Optional[str] = None


class AssetCreateRequest(BaseModel):
    """
    Dynamic asset addition. Omitted fields are filled in by the simulation.
    """

    label: Optional[str] = None
    type: Optional[AssetType] = None
    position: Optional[Position] = None
    heading: Optional[float] = Field(default=None, ge=0.0, lt=360.0)
    speed: Optional[float] = Field(default=None, ge=0.0)
