"""Custom exception classes."""


class TrackerException(Exception):
    """Base exception for the tracker application."""

    pass


class ProxyError(TrackerException):
    """Raised when a proxy request is rejected or cannot be relayed.

    Carries the HTTP status code the error is reported with.
    """

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingTargetError(ProxyError):
    """Raised when the proxy target parameter is missing."""

    status_code = 400


class InvalidTargetError(ProxyError):
    """Raised when the proxy target is not an absolute URL."""

    status_code = 400


class OriginNotAllowedError(ProxyError):
    """Raised when the proxy target points outside the allowed origin."""

    status_code = 403


class MethodNotAllowedError(ProxyError):
    """Raised when the proxy is called with anything but GET."""

    status_code = 405


class UpstreamUnavailableError(ProxyError):
    """Raised when the proxy target cannot be reached."""

    status_code = 502


class UpstreamLookupError(TrackerException):
    """Tracking lookup against the upstream API failed."""

    pass


class AssetNotFoundError(TrackerException):
    """Raised when a static asset required by a route is missing."""

    pass
