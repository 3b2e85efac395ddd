"""
API endpoints for the signed-in identity

Endpoints:
1. GET /auth/me - current user information
2. GET /auth/status - check authentication status
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user, get_optional_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _timestamp(value: Optional[int]) -> Optional[str]:
    if not value:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


@router.get("/me")
async def get_me(current_user: Dict[str, Any] = Depends(get_current_user)):
    """
    Get current authenticated user information

    Requires: Bearer token in Authorization header
    """
    return {
        "user_id": current_user["user_id"],
        "email": current_user.get("email"),
        "name": current_user.get("name"),
        "role": current_user.get("role"),
        "token_issued_at": _timestamp(current_user.get("issued_at")),
        "token_expires_at": _timestamp(current_user.get("expires_at")),
    }


@router.get("/status")
async def auth_status(current_user: Optional[Dict[str, Any]] = Depends(get_optional_user)):
    """
    Check authentication status (optional)
    Returns user info if authenticated, otherwise null
    """
    if current_user:
        return {
            "authenticated": True,
            "user": {
                "user_id": current_user["user_id"],
                "email": current_user.get("email"),
                "expires_at": _timestamp(current_user.get("expires_at")),
            },
        }
    return {"authenticated": False, "user": None}
