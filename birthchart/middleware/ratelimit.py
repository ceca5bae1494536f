import os
import time
from collections import defaultdict, deque
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

WINDOW_SECONDS = 60
_counters: dict[str, deque] = defaultdict(deque)


def _client_key(request: Request) -> str:
    key = getattr(request.state, "api_key", None)
    if key:
        return key
    return request.client.host if request.client else "anonymous"


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if os.getenv("RATE_LIMIT_ENABLED", "false").lower() != "true":
            return await call_next(request)

        limit = int(os.getenv("RATE_LIMIT_PER_MINUTE", "60"))
        now = time.time()
        window = _counters[_client_key(request)]
        while window and window[0] <= now - WINDOW_SECONDS:
            window.popleft()
        window.append(now)

        if len(window) > limit:
            retry = max(1, int(window[0] + WINDOW_SECONDS - now))
            return JSONResponse(
                {"detail": "Rate limit exceeded"},
                status_code=429,
                headers={"Retry-After": str(retry)},
            )

        return await call_next(request)
