import logging
import re
import time
from collections.abc import Mapping
from dataclasses import asdict

from flights.domain import (
    UNKNOWN_AIRLINE,
    Airline,
    Amenities,
    AirportInfo,
    Fare,
    FlightOffer,
    SearchContext,
)
from flights.services.resolver import resolve
from flights.services.segments import endpoint_code

logger = logging.getLogger(__name__)

PRICE_RE = re.compile(r"[^0-9.\-]")

AIRLINE_LOGO_URL = "https://www.gstatic.com/flights/airline_logos/70px/{code}.png"

# Provider cabin codes, mirrored by CABIN_CLASS_CODES in the search module.
CABIN_CLASS_LABELS = {
    1: "All",
    2: "Economy",
    3: "Premium Economy",
    4: "Business",
    5: "Premium Business",
    6: "First",
}

# Every canonical field and the ordered places it may come from. Paths are
# rooted at a view of {"envelope": ..., "segment": ..., "context": ...}.
FIELD_PATHS = {
    "result_index": ("envelope.ResultIndex", "envelope.resultIndex"),
    "airline_code": ("segment.Airline.AirlineCode", "envelope.AirlineCode", "segment.AirlineCode"),
    "airline_name": ("segment.Airline.AirlineName", "envelope.AirlineName", "segment.AirlineName"),
    "flight_number": ("segment.Airline.FlightNumber", "segment.FlightNumber"),
    "departure_time": (
        "segment.Origin.DepTime",
        "segment.Origin.DepartureTime",
        "segment.Origin.DepartureDateTime",
    ),
    "arrival_time": (
        "segment.Destination.ArrTime",
        "segment.Destination.ArrivalTime",
        "segment.Destination.ArrivalDateTime",
    ),
    # Segment-side airport codes come from segments.endpoint_code; these are the fallbacks.
    "origin_code": ("context.origin",),
    "origin_city": ("segment.Origin.Airport.CityName", "segment.Origin.CityName"),
    "origin_airport": ("segment.Origin.Airport.AirportName", "segment.Origin.AirportName"),
    "origin_terminal": ("segment.Origin.Airport.Terminal", "segment.Origin.Terminal"),
    "destination_code": ("context.destination",),
    "destination_city": ("segment.Destination.Airport.CityName", "segment.Destination.CityName"),
    "destination_airport": ("segment.Destination.Airport.AirportName", "segment.Destination.AirportName"),
    "destination_terminal": ("segment.Destination.Airport.Terminal", "segment.Destination.Terminal"),
    "duration": ("segment.Duration",),
    "stops": ("segment.SegmentIndicator", "segment.StopQuantity"),
    "aircraft_type": ("segment.Craft", "segment.Equipment"),
    "base_fare": ("envelope.Fare.BaseFare", "envelope.Fare.baseFare"),
    "tax": ("envelope.Fare.Tax", "envelope.Fare.tax"),
    "total_fare": ("envelope.Fare.PublishedFare", "envelope.Fare.publishedFare", "envelope.Fare.totalFare"),
    "currency": ("envelope.Fare.Currency", "envelope.Fare.currency", "context.currency"),
    "refundable": ("envelope.IsRefundable", "envelope.Fare.refundable", "envelope.refundable"),
    "cabin_class": ("segment.CabinClass", "envelope.CabinClass", "context.cabin_class"),
    "booking_class": ("segment.SupplierFareClass", "segment.Airline.FareClass"),
    "fare_type": ("envelope.ResultFareType", "envelope.FareType"),
    "baggage": ("segment.Baggage", "envelope.Fare.ChargeableBaggage"),
    "wifi": ("segment.Amenities.Wifi", "segment.Amenities.wifi", "envelope.Amenities.Wifi", "envelope.Amenities.wifi"),
    "meals": ("segment.Amenities.Meals", "segment.Amenities.meals", "envelope.Amenities.Meals", "envelope.Amenities.meals"),
    "entertainment": (
        "segment.Amenities.Entertainment",
        "segment.Amenities.entertainment",
        "envelope.Amenities.Entertainment",
        "envelope.Amenities.entertainment",
    ),
}


def _field(view: dict, name: str, fallback=None):
    return resolve(view, FIELD_PATHS[name], fallback)


def _parse_amount(value) -> float:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        cleaned = PRICE_RE.sub("", value)
        try:
            return float(cleaned) if cleaned else 0
        except ValueError:
            return 0
    return 0


def _to_int(value, default: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y"}
    return bool(value)


def format_duration(minutes: int) -> str:
    if minutes <= 0:
        return ""
    return f"{minutes // 60}h {minutes % 60}m"


def _cabin_label(value) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return CABIN_CLASS_LABELS.get(int(value), "Economy")
    if isinstance(value, str) and value.isdigit():
        return CABIN_CLASS_LABELS.get(int(value), "Economy")
    return str(value)


def _describe(envelope, segment) -> dict:
    return {
        "result_index": resolve(envelope, ("ResultIndex", "resultIndex")),
        "flight_number": resolve(segment, ("Airline.FlightNumber", "FlightNumber")),
    }


def _airport(view: dict, prefix: str, code: str) -> AirportInfo:
    return AirportInfo(
        code=code,
        city=str(_field(view, f"{prefix}_city", "")),
        airport=str(_field(view, f"{prefix}_airport", "")),
        terminal=str(_field(view, f"{prefix}_terminal", "")),
    )


def _fare(view: dict) -> Fare:
    base_fare = _parse_amount(_field(view, "base_fare", 0))
    tax = _parse_amount(_field(view, "tax", 0))
    total_fare = _parse_amount(_field(view, "total_fare"))
    if total_fare <= 0 and (base_fare or tax):
        total_fare = base_fare + tax

    return Fare(
        base_fare=base_fare,
        tax=tax,
        total_fare=total_fare,
        currency=str(_field(view, "currency", "INR")),
        refundable=_to_bool(_field(view, "refundable", False)),
    )


def _build_offer(envelope: Mapping, segment: Mapping, context: SearchContext | None) -> FlightOffer | None:
    view = {
        "envelope": envelope,
        "segment": segment,
        "context": asdict(context) if context is not None else {},
    }

    origin = (endpoint_code(segment, "Origin") or str(_field(view, "origin_code", ""))).upper()
    destination = (endpoint_code(segment, "Destination") or str(_field(view, "destination_code", ""))).upper()
    departure_time = str(_field(view, "departure_time", ""))
    arrival_time = str(_field(view, "arrival_time", ""))

    if not origin and not destination:
        return None
    if not departure_time and not arrival_time:
        return None

    airline_code = str(_field(view, "airline_code", ""))
    result_index = _field(view, "result_index")
    offer_id = str(result_index) if result_index is not None else f"{airline_code}-{int(time.time() * 1000)}"

    minutes = max(_to_int(_field(view, "duration", 0)), 0)

    return FlightOffer(
        id=offer_id,
        airline=Airline(
            code=airline_code,
            name=str(_field(view, "airline_name", UNKNOWN_AIRLINE)),
            number=str(_field(view, "flight_number", "")),
            logo_url=AIRLINE_LOGO_URL.format(code=airline_code.lower()) if airline_code else "",
        ),
        origin=origin,
        origin_info=_airport(view, "origin", origin),
        destination=destination,
        destination_info=_airport(view, "destination", destination),
        departure_time=departure_time,
        arrival_time=arrival_time,
        duration=format_duration(minutes),
        duration_in_minutes=minutes,
        stops=_to_int(_field(view, "stops", 0)),
        aircraft_type=str(_field(view, "aircraft_type", "N/A")),
        fare=_fare(view),
        cabin_class=_cabin_label(_field(view, "cabin_class", "Economy")),
        booking_class=str(_field(view, "booking_class", "")),
        fare_type=str(_field(view, "fare_type", "")),
        baggage=str(_field(view, "baggage", "Check Fare Rules")),
        amenities=Amenities(
            wifi=_to_bool(_field(view, "wifi", False)),
            meals=_to_bool(_field(view, "meals", False)),
            entertainment=_to_bool(_field(view, "entertainment", False)),
        ),
    )


def format_offer(envelope, segment, context: SearchContext | None = None) -> FlightOffer | None:
    """
    Map one (envelope, segment) pair onto a canonical FlightOffer.

    Returns None instead of raising: a malformed record is dropped, the rest of
    the batch carries on. A context that is not a SearchContext raises TypeError.
    """
    if not isinstance(envelope, Mapping) or not envelope:
        return None
    if not isinstance(segment, Mapping) or not segment:
        return None
    if context is not None and not isinstance(context, SearchContext):
        raise TypeError(f"context must be a SearchContext, not {type(context).__name__}.")

    try:
        offer = _build_offer(envelope, segment, context)
    except Exception:
        logger.exception("Dropping segment that could not be formatted.", extra=_describe(envelope, segment))
        return None

    if offer is None:
        logger.warning(
            "Dropping segment without usable route or schedule data.",
            extra=_describe(envelope, segment),
        )
    return offer
