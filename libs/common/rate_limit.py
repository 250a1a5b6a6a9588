"""Rate limiting for the portal endpoints.

Uses slowapi. Storage defaults to in-process memory; point
``RATE_LIMIT_STORAGE_URI`` at Redis to share limits across instances.
"""

from functools import lru_cache
from typing import Callable

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from libs.common.config import get_settings


def _get_client_ip(request: Request) -> str:
    """
    Get client IP from request, handling proxies.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


def _get_identity_or_ip(request: Request) -> str:
    """
    Rate limit by identity cookie when present, otherwise by IP.
    """
    settings = get_settings()
    for name in (
        settings.CONSUMER_COOKIE,
        settings.PROVIDER_COOKIE,
        settings.MODERATOR_COOKIE,
    ):
        token = request.cookies.get(name)
        if token:
            return f"{name}:{token[-32:]}"
    return f"ip:{_get_client_ip(request)}"


@lru_cache
def get_limiter() -> Limiter:
    settings = get_settings()
    return Limiter(
        key_func=_get_identity_or_ip,
        default_limits=["100/minute"],
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        strategy="fixed-window",
        enabled=settings.RATE_LIMIT_ENABLED,
    )


limiter = get_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Returns a JSON response with a clear error message and retry-after header.
    """
    retry_after = exc.detail.split("per")[0].strip() if exc.detail else "1 minute"

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded. Try again in {retry_after}.",
            "code": "RATE_LIMIT_EXCEEDED",
        },
        headers={"Retry-After": str(getattr(exc, "retry_after", 60))},
    )


def claim_limit(func: Callable) -> Callable:
    """Membership claims (10/minute)."""
    return limiter.limit("10/minute")(func)


def lookup_limit(func: Callable) -> Callable:
    """Member lookups by unique id (20/minute)."""
    return limiter.limit("20/minute")(func)


def payment_limit(func: Callable) -> Callable:
    """Gateway order creation (5/minute)."""
    return limiter.limit("5/minute")(func)
