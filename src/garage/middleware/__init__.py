"""HTTP middleware and exception handlers for the garage API."""

from fastapi import FastAPI

from garage.config import Settings
from garage.middleware.cors import setup_cors
from garage.middleware.error_handler import setup_error_handlers
from garage.middleware.logging import setup_logging
from garage.middleware.rate_limit import RateLimitMiddleware
from garage.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Wire logging, error handlers and the middleware stack.

    Request flow, outermost first: CORS, request id, rate limit. The last
    middleware added runs first, so CORS headers also land on 429 responses
    and rate-limit log lines carry the request id.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
