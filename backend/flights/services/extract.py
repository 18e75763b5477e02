import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultProbe:
    name: str
    matches: Callable[[Any], bool]
    extract: Callable[[Any], Any]


def _dig(*keys):
    def extract(payload):
        current = payload
        for key in keys:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        return current

    return extract


def _is_list(value) -> bool:
    return isinstance(value, list)


def _probe(name, *keys) -> ResultProbe:
    extract = _dig(*keys)
    return ResultProbe(name=name, matches=lambda payload: _is_list(extract(payload)), extract=extract)


# Envelope shapes seen from the provider, most specific first.
RESULT_PROBES = (
    _probe("data.data.results", "data", "data", "results"),
    _probe("data.results", "data", "results"),
    _probe("results", "results"),
    ResultProbe(name="root", matches=_is_list, extract=lambda payload: payload),
)


def _is_grouped(results: list) -> bool:
    """True for [[{...}, ...], [{...}]]: every item is a list and holds only objects."""
    if not results:
        return False
    return all(
        isinstance(group, list) and all(isinstance(item, Mapping) for item in group)
        for group in results
    )


def extract_results(raw_response) -> list:
    """
    Locate the results array inside a raw provider response.

    The first matching probe wins, even when its array is empty. Grouped
    results are flattened one level. No match means zero results.
    """
    for probe in RESULT_PROBES:
        if not probe.matches(raw_response):
            continue
        results = probe.extract(raw_response)
        logger.debug("Provider results located via %s probe (%d entries).", probe.name, len(results))
        if _is_grouped(results):
            return [item for group in results for item in group]
        return list(results)

    return []
