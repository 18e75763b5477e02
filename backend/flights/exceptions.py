class ProviderError(Exception):
    def __init__(self, message, status_code=502, details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ValidationError(ProviderError):
    """The caller did not supply enough search parameters. Raised before any request."""

    def __init__(self, message, details=None):
        super().__init__(message, status_code=400, details=details)


class NetworkError(ProviderError):
    """The transport never received a response."""

    def __init__(self, message="No response received from flight provider.", details=None):
        super().__init__(message, status_code=503, details=details)


class ServerError(ProviderError):
    """The provider answered with a non-success response."""

    def __init__(self, message, status_code=502, details=None):
        super().__init__(message, status_code=status_code or 502, details=details)


class ProcessingError(ProviderError):
    """The response container could not be interpreted at all."""
