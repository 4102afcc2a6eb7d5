"""
Domain records for the feed engine.

Candidates arrive as camelCase dictionaries from the REST backend or the mock
data file; the from_dict constructors convert them into immutable records.
Decimal columns may arrive as strings ("1500.00").
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class Coordinate:
    """Point on the globe, in degrees."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class UserPreferences:
    """Service types a user wants to see first."""
    user_id: str
    preferred_service_types: FrozenSet[str] = frozenset()
    preferred_radius: int = 50

    @classmethod
    def empty(cls, user_id: str = "") -> "UserPreferences":
        return cls(user_id=user_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserPreferences":
        return cls(
            user_id=str(data.get('userId', '')),
            preferred_service_types=frozenset(
                _id_list(data.get('preferredServiceTypes'), 'preferredServiceTypes')
            ),
            preferred_radius=int(data.get('preferredRadius', 50)),
        )


@dataclass(frozen=True)
class JobCandidate:
    """
    Open demand for labour posted by a producer.

    Attributes:
        id: Job identifier
        service_type_id: Service requested (catalog id or backend uuid)
        offer_amount: Amount offered by the producer, always positive
        created_at: Creation timestamp (timezone aware)
        location: Job coordinates, None when the producer gave none
    """
    id: str
    service_type_id: str
    offer_amount: float
    created_at: datetime
    location: Optional[Coordinate] = None
    producer_id: Optional[str] = None
    status: str = "open"
    quantity: int = 1
    location_text: str = ""
    notes: Optional[str] = None

    def __post_init__(self):
        if not self.offer_amount > 0:
            raise ValueError(f"Job {self.id} has non-positive offer: {self.offer_amount}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobCandidate":
        """
        Build a job from a backend record.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field cannot be converted or the offer is not positive
        """
        return cls(
            id=str(data['id']),
            service_type_id=str(data['serviceTypeId']),
            offer_amount=float(data['offer']),
            created_at=parse_timestamp(data['createdAt']),
            location=parse_location(data),
            producer_id=data.get('producerId'),
            status=data.get('status') or 'open',
            quantity=int(data.get('quantity') or 1),
            location_text=data.get('locationText') or '',
            notes=data.get('notes'),
        )


@dataclass(frozen=True)
class OfferExtras:
    """Perks a worker includes in an offer."""
    provides_food: bool = False
    provides_accommodation: bool = False
    provides_transport: bool = False


@dataclass(frozen=True)
class OfferCandidate:
    """
    Standing offer of labour published by a worker.

    Only one of the prices is normally set; price_per_unit is kept for
    display and does not take part in ranking.
    """
    id: str
    worker_id: str
    service_type_ids: Tuple[str, ...]
    created_at: datetime
    price_per_day: Optional[float] = None
    price_per_hour: Optional[float] = None
    price_per_unit: Optional[float] = None
    location: Optional[Coordinate] = None
    extras: OfferExtras = field(default_factory=OfferExtras)
    visibility: str = "public"
    status: str = "active"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OfferCandidate":
        """
        Build an offer from a backend record.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field cannot be converted
        """
        return cls(
            id=str(data['id']),
            worker_id=str(data['workerId']),
            service_type_ids=tuple(_id_list(data.get('serviceTypeIds'), 'serviceTypeIds')),
            created_at=parse_timestamp(data['createdAt']),
            price_per_day=_optional_float(data.get('pricePerDay')),
            price_per_hour=_optional_float(data.get('pricePerHour')),
            price_per_unit=_optional_float(data.get('pricePerUnit')),
            location=parse_location(data),
            extras=OfferExtras(
                provides_food=_flag(data.get('providesFood'), 'providesFood'),
                provides_accommodation=_flag(data.get('providesAccommodation'), 'providesAccommodation'),
                provides_transport=_flag(data.get('providesTransport'), 'providesTransport'),
            ),
            visibility=data.get('visibility') or 'public',
            status=data.get('status') or 'active',
        )


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp. Naive values are taken as UTC.

    Raises:
        ValueError: If the value is not a valid timestamp
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_location(data: Dict[str, Any]) -> Optional[Coordinate]:
    """Coordinate from latitude/longitude keys, None unless both are present."""
    latitude = data.get('latitude')
    longitude = data.get('longitude')
    if latitude in (None, '') or longitude in (None, ''):
        return None
    return Coordinate(latitude=float(latitude), longitude=float(longitude))


def _optional_float(value: Any) -> Optional[float]:
    if value in (None, ''):
        return None
    return float(value)


def _id_list(value: Any, name: str) -> List[str]:
    """List of ids; a lone string counts as one id."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{name} must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _flag(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be a boolean, got {value!r}")
    return value
