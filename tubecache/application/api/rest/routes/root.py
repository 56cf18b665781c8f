"""Liveness acknowledgement at the site root."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])

LIVENESS_MESSAGE = "tubecache caching server is running!"


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return LIVENESS_MESSAGE
