from __future__ import annotations

from dataclasses import dataclass, field

ONE_WAY = "oneway"
ROUND_TRIP = "roundtrip"

UNKNOWN_AIRLINE = "Unknown Airline"


@dataclass(frozen=True)
class SearchContext:
    origin: str
    destination: str
    departure_date: str
    return_date: str | None = None
    trip_type: str = ONE_WAY
    adults: int = 1
    children: int = 0
    infants: int = 0
    cabin_class: str = "Economy"
    currency: str = "INR"
    direct_flight: bool = False
    preferred_airlines: tuple[str, ...] = ()

    @property
    def is_round_trip(self) -> bool:
        return self.trip_type == ROUND_TRIP


@dataclass(frozen=True)
class Airline:
    code: str = ""
    name: str = UNKNOWN_AIRLINE
    number: str = ""
    logo_url: str = ""


@dataclass(frozen=True)
class AirportInfo:
    code: str = ""
    city: str = ""
    airport: str = ""
    terminal: str = ""


@dataclass(frozen=True)
class Fare:
    base_fare: float = 0
    tax: float = 0
    total_fare: float = 0
    currency: str = "INR"
    refundable: bool = False


@dataclass(frozen=True)
class Amenities:
    wifi: bool = False
    meals: bool = False
    entertainment: bool = False


@dataclass(frozen=True)
class FlightOffer:
    """Canonical offer. Every field carries a value; provider gaps become defaults."""

    id: str
    airline: Airline
    origin: str
    origin_info: AirportInfo
    destination: str
    destination_info: AirportInfo
    departure_time: str = ""
    arrival_time: str = ""
    duration: str = ""
    duration_in_minutes: int = 0
    stops: int = 0
    aircraft_type: str = "N/A"
    fare: Fare = field(default_factory=Fare)
    cabin_class: str = "Economy"
    booking_class: str = ""
    fare_type: str = ""
    baggage: str = "Check Fare Rules"
    amenities: Amenities = field(default_factory=Amenities)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "airline": {
                "code": self.airline.code,
                "name": self.airline.name,
                "number": self.airline.number,
                "logoUrl": self.airline.logo_url,
            },
            "origin": self.origin,
            "originInfo": _airport_dict(self.origin_info),
            "destination": self.destination,
            "destinationInfo": _airport_dict(self.destination_info),
            "departureTime": self.departure_time,
            "arrivalTime": self.arrival_time,
            "duration": self.duration,
            "durationInMinutes": self.duration_in_minutes,
            "stops": self.stops,
            "aircraftType": self.aircraft_type,
            "fare": {
                "baseFare": self.fare.base_fare,
                "tax": self.fare.tax,
                "totalFare": self.fare.total_fare,
                "currency": self.fare.currency,
                "refundable": self.fare.refundable,
            },
            "cabinClass": self.cabin_class,
            "bookingClass": self.booking_class,
            "fareType": self.fare_type,
            "baggage": self.baggage,
            "amenities": {
                "wifi": self.amenities.wifi,
                "meals": self.amenities.meals,
                "entertainment": self.amenities.entertainment,
            },
        }


def _airport_dict(info: AirportInfo) -> dict:
    return {
        "code": info.code,
        "city": info.city,
        "airport": info.airport,
        "terminal": info.terminal,
    }


def empty_result(is_round_trip: bool):
    """One-way results are a flat list; round trips split into outbound/return."""
    if is_round_trip:
        return {"outbound": [], "return": []}
    return []


def serialize_result(result) -> list | dict:
    if isinstance(result, dict):
        return {
            "outbound": [offer.to_dict() for offer in result.get("outbound", [])],
            "return": [offer.to_dict() for offer in result.get("return", [])],
        }
    return [offer.to_dict() for offer in result]
