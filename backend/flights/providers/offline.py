import logging

from flights.offline import offline_search_response
from flights.providers.base import FlightTransport

logger = logging.getLogger(__name__)


class OfflineTransport(FlightTransport):
    """Deterministic transport for local development: always answers with the offline sample."""

    def post(self, path, body):
        logger.info("Serving offline sample flight results for %s.", path)
        return offline_search_response()
