# pyright: reportMissingTypeStubs=false
"""
Authorization dependencies for FastAPI.

Maintenance endpoints are not tied to a vault user: they are called by
operators and cron jobs holding the shared maintenance token.
"""

import logging
import secrets
from typing import Optional

from fastapi import Header, HTTPException, status

from core import config

logger = logging.getLogger(__name__)

MAINTENANCE_TOKEN_HEADER = "X-Maintenance-Token"


def require_maintenance_token(
    x_maintenance_token: Optional[str] = Header(default=None, alias=MAINTENANCE_TOKEN_HEADER),
) -> None:
    """
    Require the shared maintenance token.

    Raises:
        HTTPException 503: No token configured, maintenance endpoints disabled
        HTTPException 401: Missing or wrong token
    """
    expected = config.MAINTENANCE_API_TOKEN
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Maintenance API is disabled"
        )

    if not x_maintenance_token or not secrets.compare_digest(x_maintenance_token, expected):
        logger.warning("Rejected maintenance request with invalid token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid maintenance token"
        )
