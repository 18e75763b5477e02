import logging
from collections.abc import Mapping

from flights.domain import ONE_WAY, ROUND_TRIP, SearchContext, empty_result
from flights.exceptions import NetworkError, ProcessingError, ServerError, ValidationError
from flights.offline import offline_search_response
from flights.services.extract import extract_results
from flights.services.normalize import format_offer
from flights.services.resolver import is_blank, resolve
from flights.services.segments import normalize_segments

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PATH = "/flights/search"

CABIN_CLASS_CODES = {
    "Economy": 2,
    "Premium Economy": 3,
    "Business": 4,
    "First": 6,
}
DEFAULT_CABIN_CODE = 2

JOURNEY_TYPES = {ONE_WAY: 1, ROUND_TRIP: 2}

TRIP_TYPE_ALIASES = {
    "oneway": ONE_WAY,
    "one_way": ONE_WAY,
    "one-way": ONE_WAY,
    "roundtrip": ROUND_TRIP,
    "round_trip": ROUND_TRIP,
    "round-trip": ROUND_TRIP,
    "return": ROUND_TRIP,
}

# Accept both the camelCase API names and snake_case Python names.
PARAM_ALIASES = {
    "origin": ("origin",),
    "destination": ("destination",),
    "departure_date": ("departureDate", "departure_date"),
    "return_date": ("returnDate", "return_date"),
    "trip_type": ("tripType", "trip_type"),
    "adults": ("adults",),
    "children": ("children",),
    "infants": ("infants",),
    "cabin_class": ("cabinClass", "cabin_class"),
    "currency": ("currency",),
    "direct_flight": ("directFlight", "direct_flight", "nonStop"),
    "preferred_airlines": ("preferredAirlines", "preferred_airlines"),
}

REQUIRED_PARAMS = ("origin", "destination", "departure_date")

SEGMENT_PATHS = ("Segments", "segments")


def _param(params: Mapping, name: str, fallback=None):
    return resolve(params, PARAM_ALIASES[name], fallback)


def _is_missing(value) -> bool:
    return is_blank(value) or not str(value).strip()


def _to_count(value, default: int) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return default
    return max(count, 0)


def _to_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    return bool(value)


def _to_airline_list(value) -> tuple[str, ...]:
    # Accept: ["6E","AI"] or "6E,AI" or "6E".
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(code).strip().upper() for code in value if str(code).strip())


def build_search_context(params, default_currency: str = "INR") -> SearchContext:
    """Validate caller parameters. Raises ValidationError before anything touches the network."""
    if isinstance(params, SearchContext):
        return params
    if not isinstance(params, Mapping):
        raise ValidationError("Search parameters must be a mapping.")

    missing = [name for name in REQUIRED_PARAMS if _is_missing(_param(params, name))]
    if missing:
        fields = [PARAM_ALIASES[name][0] for name in missing]
        raise ValidationError(
            f"Missing required search parameters: {', '.join(fields)}.",
            details={"missing": fields},
        )

    raw_trip_type = str(_param(params, "trip_type", ONE_WAY)).strip().lower()
    trip_type = TRIP_TYPE_ALIASES.get(raw_trip_type, ONE_WAY)
    return_date = _param(params, "return_date")

    return SearchContext(
        origin=str(_param(params, "origin")).strip().upper(),
        destination=str(_param(params, "destination")).strip().upper(),
        departure_date=str(_param(params, "departure_date")).strip(),
        return_date=str(return_date) if return_date is not None else None,
        trip_type=trip_type,
        adults=_to_count(_param(params, "adults"), 1) or 1,
        children=_to_count(_param(params, "children"), 0),
        infants=_to_count(_param(params, "infants"), 0),
        cabin_class=str(_param(params, "cabin_class", "Economy")),
        currency=str(_param(params, "currency", default_currency)).upper(),
        direct_flight=_to_flag(_param(params, "direct_flight", False)),
        preferred_airlines=_to_airline_list(_param(params, "preferred_airlines")),
    )


def build_provider_request(context: SearchContext) -> dict:
    request = {
        "origin": context.origin.upper(),
        "destination": context.destination.upper(),
        "departureDate": context.departure_date,
        "journeyType": JOURNEY_TYPES[context.trip_type],
        "cabinClass": CABIN_CLASS_CODES.get(context.cabin_class, DEFAULT_CABIN_CODE),
        "adults": context.adults,
        "children": context.children,
        "infants": context.infants,
        "currency": context.currency,
        "directFlight": context.direct_flight,
        "oneStopFlight": not context.direct_flight,
        "preferredAirlines": list(context.preferred_airlines),
    }
    if context.is_round_trip and context.return_date:
        request["returnDate"] = context.return_date
    return request


class SearchOrchestrator:
    """
    Runs one flight search: validate, request, extract, normalize, format.

    The transport is injected; it only needs a `post(path, body)` method that
    raises NetworkError / ServerError on failure.
    """

    def __init__(
        self,
        transport,
        *,
        fallback_enabled: bool = False,
        offline_response=offline_search_response,
        search_path: str = DEFAULT_SEARCH_PATH,
        default_currency: str = "INR",
    ):
        self.transport = transport
        self.fallback_enabled = fallback_enabled
        self.offline_response = offline_response
        self.search_path = search_path
        self.default_currency = default_currency

    def search(self, search_params):
        context = build_search_context(search_params, default_currency=self.default_currency)
        request_body = build_provider_request(context)

        raw_response = self._request(request_body, context)

        if not isinstance(raw_response, (Mapping, list)):
            raise ProcessingError(
                "Flight provider response could not be interpreted.",
                details={"type": type(raw_response).__name__},
            )

        try:
            return self._assemble(raw_response, context)
        except Exception as exc:
            logger.exception("Flight results could not be processed.")
            raise ProcessingError(
                "Flight provider response could not be processed.",
                details={"error": str(exc)},
            ) from exc

    def _request(self, request_body: dict, context: SearchContext):
        try:
            return self.transport.post(self.search_path, request_body)
        except (NetworkError, ServerError) as exc:
            if not self.fallback_enabled:
                raise
            logger.warning(
                "Flight provider unavailable, serving offline sample results.",
                extra={
                    "status_code": exc.status_code,
                    "error": exc.message,
                    "route": f"{context.origin}-{context.destination}",
                },
            )
            return self.offline_response()

    def _assemble(self, raw_response, context: SearchContext):
        result = empty_result(context.is_round_trip)

        results = extract_results(raw_response)
        if not results:
            return result

        for entry in results:
            envelopes = entry if isinstance(entry, list) else [entry]
            for envelope in envelopes:
                if not envelope:
                    continue
                try:
                    self._collect(envelope, context, result)
                except Exception:
                    logger.exception(
                        "Skipping flight result that could not be processed.",
                        extra={"result_index": resolve(envelope, ("ResultIndex", "resultIndex"))},
                    )

        return result

    def _collect(self, envelope, context: SearchContext, result) -> None:
        segments = normalize_segments(resolve(envelope, SEGMENT_PATHS), context.is_round_trip)

        if context.is_round_trip:
            for direction in ("outbound", "return"):
                result[direction].extend(self._format_all(envelope, segments[direction], context))
        else:
            result.extend(self._format_all(envelope, segments, context))

    @staticmethod
    def _format_all(envelope, segments: list, context: SearchContext) -> list:
        offers = []
        for segment in segments:
            offer = format_offer(envelope, segment, context)
            if offer is not None:
                offers.append(offer)
        return offers
