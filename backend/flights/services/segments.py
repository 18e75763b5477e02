from collections.abc import Mapping

from flights.services.resolver import resolve

ONE_WAY_DEPTH = 3
LEG_GROUP_DEPTH = 2

# Shapes in which a segment endpoint (Origin / Destination) can identify an airport.
LOCATION_CODE_PATHS = (
    "Airport.AirportCode",
    "AirportCode",
    "Airport.CityCode",
    "CityCode",
)


def _flatten(items: list, depth: int) -> list:
    flat = []
    for item in items:
        if isinstance(item, (list, tuple)) and depth > 0:
            flat.extend(_flatten(item, depth - 1))
        else:
            flat.append(item)
    return flat


def endpoint_code(segment: Mapping, key: str) -> str | None:
    """Airport code of a segment endpoint: a bare code string or one of LOCATION_CODE_PATHS."""
    value = segment.get(key)
    if isinstance(value, Mapping):
        value = resolve(value, LOCATION_CODE_PATHS)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def is_valid_segment(segment) -> bool:
    if not isinstance(segment, Mapping):
        return False
    return endpoint_code(segment, "Origin") is not None or endpoint_code(segment, "Destination") is not None


def _clean(items: list, depth: int) -> list:
    return [s for s in _flatten(items, depth) if is_valid_segment(s)]


def normalize_segments(raw_segments, is_round_trip: bool):
    """
    Flatten a provider segment collection into raw segment dicts.

    One-way: a single list, flattened up to three levels.
    Round trip: index 0 is the outbound leg-group and index 1 the return
    leg-group; each is flattened up to two levels. Input order is kept.
    """
    if not isinstance(raw_segments, (list, tuple)):
        return {"outbound": [], "return": []} if is_round_trip else []

    if not is_round_trip:
        return _clean(raw_segments, ONE_WAY_DEPTH)

    groups = []
    for group in raw_segments[:2]:
        groups.append(_clean(group if isinstance(group, (list, tuple)) else [group], LEG_GROUP_DEPTH))

    return {
        "outbound": groups[0] if groups else [],
        "return": groups[1] if len(groups) > 1 else [],
    }
