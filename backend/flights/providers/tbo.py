import logging
from collections.abc import Mapping

import requests
from requests.auth import AuthBase

from flights.exceptions import NetworkError, ProcessingError, ProviderError, ServerError
from flights.providers.base import FlightTransport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30

DEFAULT_ERROR_MESSAGE = "Flight provider returned an error."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."

# Used when the provider's error body carries no message of its own.
STATUS_MESSAGES = {
    400: "Invalid request parameters",
    401: "Authentication failed. Please try again.",
    404: "No flights found for the selected criteria",
}


class BearerTokenAuth(AuthBase):
    """Attach the provider bearer token to every outgoing request."""

    def __init__(self, token: str):
        self.token = token

    def __call__(self, request):
        request.headers["Authorization"] = f"Bearer {self.token}"
        return request


def _build_headers() -> dict:
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }


def _status_message(status_code: int) -> str:
    if status_code >= 500:
        return SERVER_ERROR_MESSAGE
    return STATUS_MESSAGES.get(status_code, DEFAULT_ERROR_MESSAGE)


def _error_message(details, default: str) -> str:
    if not isinstance(details, Mapping):
        return default
    error = details.get("error")
    if isinstance(error, Mapping) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return str(details.get("message") or default)


class TBOTransport(FlightTransport):
    """Posts search requests to the TBO flight backend over HTTP."""

    def __init__(self, base_url: str | None, token: str | None = None, timeout: int = DEFAULT_TIMEOUT_SECONDS):
        if not base_url:
            raise ProviderError("TBO API base URL is not configured.", status_code=500)
        self.base_url = base_url.rstrip("/")
        self.auth = BearerTokenAuth(token) if token else None
        self.timeout = timeout

    def post(self, path: str, body: dict):
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = requests.post(
                url,
                json=body,
                headers=_build_headers(),
                auth=self.auth,
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.warning("TBO request timed out after %ss.", self.timeout)
            raise NetworkError(
                "Request timeout. Please try again.",
                details={"error": str(exc), "timeout": self.timeout},
            ) from exc
        except requests.RequestException as exc:
            logger.exception("TBO request failed.")
            raise NetworkError(
                "No response from flight provider. Please check your connection.",
                details={"error": str(exc)},
            ) from exc

        if not 200 <= response.status_code < 300:
            message = _status_message(response.status_code)
            try:
                details = response.json()
                message = _error_message(details, message)
            except ValueError:
                details = {"error": response.text}
            logger.warning(
                "TBO error response",
                extra={"status_code": response.status_code, "details": details},
            )
            raise ServerError(
                message,
                status_code=response.status_code,
                details=details if isinstance(details, Mapping) else {"error": details},
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProcessingError("Flight provider response was not valid JSON.") from exc

        # The provider also reports failures in-band with a 200 status.
        if isinstance(payload, Mapping) and (payload.get("success") is False or payload.get("error")):
            logger.warning("TBO reported an error in the response body: %s", payload.get("error"))
            raise ServerError(
                _error_message(payload, DEFAULT_ERROR_MESSAGE),
                status_code=502,
                details={"error": payload.get("error")},
            )

        return payload
