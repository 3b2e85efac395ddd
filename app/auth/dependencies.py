"""
FastAPI dependencies for bearer-token authorization

Tokens are issued by the external identity provider and signed with a
shared secret. The dashboard only verifies them.

Core functions:
1. get_current_user - validates JWT token and returns user data
2. get_optional_user - optional authorization
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from app.core.config import settings

logger = logging.getLogger(__name__)


# Security scheme for Bearer tokens; missing headers are handled below
security = HTTPBearer(auto_error=False)


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class BackendJWTBearer:
    """Validates JWT tokens signed by the identity provider

    Checks:
    - signature (shared secret)
    - audience
    - expiration
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.audience = audience or settings.jwt_audience

    def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify and decode JWT token"""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={
                    "verify_signature": True,
                    "verify_aud": True,
                    "verify_exp": True,
                },
            )
        except ExpiredSignatureError:
            logger.warning("Expired token attempted")
            raise unauthorized("Token has expired")
        except JWTClaimsError as e:
            logger.warning(f"Invalid claims in token: {e}")
            raise unauthorized("Invalid token claims")
        except JWTError as e:
            logger.warning(f"JWT validation error: {e}")
            raise unauthorized("Invalid token")

        if not payload.get("sub"):
            logger.warning("Token without subject attempted")
            raise unauthorized("Invalid token")

        logger.debug(f"Token verified successfully for user: {payload.get('sub')}")
        return payload

    def get_user_info(self, token: str) -> Dict[str, Any]:
        """Extract user information from token"""
        payload = self.verify_token(token)
        metadata = payload.get("user_metadata") or {}

        return {
            "user_id": payload["sub"],
            "email": payload.get("email"),
            "name": metadata.get("full_name") or metadata.get("name"),
            "role": payload.get("role"),
            "expires_at": payload.get("exp"),
            "issued_at": payload.get("iat"),
        }


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """
    FastAPI dependency to get current user

    Usage:
    @app.get("/protected")
    async def protected_endpoint(user: dict = Depends(get_current_user)):
        return {"message": f"Hello, {user['email']}!"}
    """
    if not credentials:
        raise unauthorized("Authorization required")

    return BackendJWTBearer().get_user_info(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Dict[str, Any]]:
    """
    Optional authorization - returns user if a valid token exists,
    otherwise None
    """
    if not credentials:
        return None

    try:
        return BackendJWTBearer().get_user_info(credentials.credentials)
    except HTTPException:
        logger.debug("Optional authentication failed")
        return None
