from django.conf import settings

from flights.exceptions import ProviderError
from flights.providers.offline import OfflineTransport
from flights.providers.tbo import DEFAULT_TIMEOUT_SECONDS, TBOTransport
from flights.services.search import DEFAULT_SEARCH_PATH, SearchOrchestrator


def get_flight_transport():
    """Return the configured transport instance."""

    raw_name = getattr(settings, "FLIGHTS_PROVIDER", None) or "tbo"
    provider_name = str(raw_name).strip().lower()

    aliases = {
        "tbo": "tbo",
        "tektravels": "tbo",
        "offline": "offline",
        "demo": "offline",
    }

    provider_name = aliases.get(provider_name, provider_name)

    if provider_name == "tbo":
        return TBOTransport(
            base_url=getattr(settings, "TBO_API_BASE_URL", None),
            token=getattr(settings, "TBO_API_TOKEN", None),
            timeout=getattr(settings, "TBO_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        )

    if provider_name == "offline":
        return OfflineTransport()

    raise ProviderError(f"Unknown flights provider: {provider_name}", status_code=500)


def get_flight_provider() -> SearchOrchestrator:
    """Return a search orchestrator wired to the configured transport."""

    return SearchOrchestrator(
        get_flight_transport(),
        fallback_enabled=bool(getattr(settings, "FLIGHTS_OFFLINE_FALLBACK", False)),
        search_path=getattr(settings, "TBO_SEARCH_PATH", DEFAULT_SEARCH_PATH),
        default_currency=getattr(settings, "DEFAULT_CURRENCY", "INR"),
    )
