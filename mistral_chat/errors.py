class RelayError(Exception):
    """Base class for failures reported to the caller as ``{"error": ...}``."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(RelayError):
    http_status = 400


class ConfigurationError(RelayError):
    pass


class UpstreamError(RelayError):
    """The completion service answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Mistral API error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class UnknownError(RelayError):
    pass
