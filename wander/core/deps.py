# path: wander/core/deps.py
from collections.abc import AsyncIterator
from datetime import datetime, timezone

import httpx
from fastapi import HTTPException
from starlette import status

from wander.core.config import settings
from wander.repos.wander_repo import NotFound, WanderAPIError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# routers get the remote API client as a Dependency, one per request
async def get_api_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        base_url=settings.WANDER_API_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    ) as client:
        yield client


def get_now() -> datetime:
    """Request-time clock; overridden in tests to freeze time."""
    return utcnow()


def upstream_http_error(e: WanderAPIError, not_found_detail: str = "not found") -> HTTPException:
    """Map a remote API failure onto the response we give our own callers."""
    if isinstance(e, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found_detail)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="wander api unavailable")
