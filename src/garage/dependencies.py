"""Shared FastAPI dependencies."""

from __future__ import annotations

import secrets

from fastapi import Header, HTTPException

from garage.config import get_settings
from garage.database import get_session as _get_session

get_db = _get_session


async def require_reviewer(x_admin_token: str | None = Header(None)) -> None:
    """
    Guard reviewer-only endpoints with the shared admin token.

    Raises 403 when no token is configured, 401 when the header is wrong.
    """
    expected = get_settings().admin_token
    if not expected:
        raise HTTPException(status_code=403, detail="Review endpoint is disabled")
    if x_admin_token is None or not secrets.compare_digest(x_admin_token.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Invalid admin token")
