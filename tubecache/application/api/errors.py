"""Centralized error transformation for API routes.

Maps gateway errors (domain and infrastructure) to HTTPException responses.
"""

from fastapi import HTTPException

from tubecache.domain.shared.error import GatewayError, InfrastructureError, VideoFetchError

FETCH_FAILED_MESSAGE = "Failed to fetch video data"


def _fetch_error_status(status_code: int | None) -> int:
    # Pass through upstream 4xx/5xx, anything else is reported as 500
    if status_code is not None and 400 <= status_code <= 599:
        return status_code
    return 500


def map_gateway_error(error: GatewayError) -> HTTPException:
    """Map a gateway error to an HTTPException.

    Args:
        error: The gateway error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    if isinstance(error, VideoFetchError):
        return HTTPException(
            status_code=_fetch_error_status(error.status_code),
            detail={
                "error": FETCH_FAILED_MESSAGE,
                "message": error.message,
                "videoId": error.video_id,
            },
        )

    detail = {"code": error.code, "message": error.message}
    status_code = 503 if isinstance(error, InfrastructureError) else 500
    return HTTPException(status_code=status_code, detail=detail)
