"""
PMIS API Authentication
=======================

JWT-based authentication and authorization dependencies.

Usage:
    from pmis.api.auth import get_current_user, require_role

    @router.get("/protected")
    async def protected(user: CurrentUser = Depends(get_current_user)):
        return {"user_id": user.user_id}

    @router.post("/admin-only")
    async def admin_only(user: CurrentUser = Depends(require_role("admin"))):
        return {"msg": "admin action"}

Author: PMIS Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pmis.config import Settings
from pmis.logging import set_request_user

logger = logging.getLogger(__name__)


# =============================================================================
# Models
# =============================================================================


class UserRole(str, Enum):
    """User roles for RBAC."""
    ADMIN = "admin"       # Full access incl. government validation
    WARDEN = "warden"     # Block supervision, prisoner intake
    STAFF = "staff"       # Behavior logs and ratings
    VISITOR = "visitor"   # Own visits only


@dataclass
class CurrentUser:
    """Authenticated user context from a validated JWT."""
    user_id: str
    role: UserRole
    email: Optional[str] = None


# =============================================================================
# Token Utilities
# =============================================================================


def create_access_token(
    user_id: str,
    settings: Settings,
    role: str = UserRole.VISITOR.value,
    email: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        user_id: Unique user identifier
        settings: Settings holding the signing secret
        role: User role (admin, warden, staff, visitor)
        email: Optional email
        expires_minutes: Token TTL in minutes (defaults to settings)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    ttl = expires_minutes if expires_minutes is not None else settings.jwt_expire_minutes

    payload: Dict[str, Any] = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=ttl),
    }
    if email:
        payload["email"] = email

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Verify and decode a JWT token.

    Raises:
        HTTPException 401 if token is invalid or expired
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired token: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if "sub" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing subject",
        )
    return payload


# =============================================================================
# FastAPI Dependencies
# =============================================================================

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> CurrentUser:
    """
    FastAPI dependency that extracts and validates the current user from JWT.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    settings: Settings = request.app.state.container.settings
    payload = verify_token(credentials.credentials, settings)

    try:
        role = UserRole(payload.get("role", UserRole.VISITOR.value))
    except ValueError:
        role = UserRole.VISITOR

    set_request_user(payload["sub"])
    return CurrentUser(
        user_id=payload["sub"],
        role=role,
        email=payload.get("email"),
    )


def require_role(*allowed_roles: str):
    """
    FastAPI dependency factory for role-based access control.

    Usage:
        @router.post("/validate")
        async def validate(user = Depends(require_role("admin"))):
            ...
    """
    allowed = {UserRole(r) for r in allowed_roles}

    async def _check(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed:
            logger.warning(f"Denied {user.user_id} ({user.role.value}); requires {sorted(r.value for r in allowed)}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{user.role.value}' is not authorized. "
                       f"Required: {', '.join(sorted(r.value for r in allowed))}",
            )
        return user

    return _check
