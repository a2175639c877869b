"""CORS for the lesson frontend and dashboard."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from garage.config import Settings

# Wallet identity travels in the request body, never in cookies
_ALLOWED_HEADERS = ["Content-Type", "X-Request-Id", "X-Admin-Token"]
_EXPOSED_HEADERS = ["X-Request-Id", "X-RateLimit-Limit", "X-RateLimit-Remaining", "Retry-After"]


def setup_cors(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=_ALLOWED_HEADERS,
        expose_headers=_EXPOSED_HEADERS,
        max_age=600,
    )
