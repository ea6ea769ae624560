"""Custom exceptions for the opinion search proxy."""


class CaselawProxyError(Exception):
    """Base exception for the search proxy."""

    pass


class ValidationError(CaselawProxyError):
    """Exception raised when the incoming search request is unusable."""

    status_code = 400


class UpstreamError(CaselawProxyError):
    """Exception raised when CourtListener returns a non-success status."""

    def __init__(self, status_code: int, response_text: str = ""):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(f"CourtListener API error {status_code}")


class NetworkError(CaselawProxyError):
    """Exception raised for network/connection errors."""

    pass


class ConfigurationError(CaselawProxyError):
    """Exception raised for configuration errors."""

    pass
