"""Error hierarchy for tubecache.

Error layers:
- GatewayError: Base class for all tubecache errors
- DomainError: Lookup failures surfaced to clients
- InfrastructureError: Upstream provider and system failures

These errors are mapped to HTTP responses by the exception handlers in app.py.
"""


class GatewayError(Exception):
    """Base class for all tubecache errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(GatewayError):
    """Base class for domain errors."""


class VideoFetchError(DomainError):
    """A video lookup failed and the deployment surfaces failures as errors.

    Raised by the request orchestrator under the ``error`` failure policy.
    Never cached.
    """

    def __init__(
        self,
        video_id: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, code="VIDEO_FETCH_FAILED")
        self.video_id = video_id
        self.status_code = status_code


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(GatewayError):
    """Base class for infrastructure/system errors."""


class UpstreamError(InfrastructureError):
    """The video-metadata provider rejected or could not resolve a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, code="UPSTREAM_ERROR")
        self.status_code = status_code


class MalformedPayloadError(InfrastructureError):
    """The provider returned data that cannot be interpreted as a record at all."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="MALFORMED_PAYLOAD")
