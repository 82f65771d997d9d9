# File: forum/core/limiter.py

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from forum.core.config import settings

# `get_remote_address` keys the limits on the client's IP address.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[settings.default_rate_limit],
)


async def custom_rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom exception handler for rate-limited requests to return a JSON response.
    """
    return JSONResponse(
        status_code=429,
        content={
            "detail": f"Too Many Requests: rate limit exceeded ({exc.detail})",
            "message": "You have made too many requests in a short period. Please try again later.",
        },
    )
