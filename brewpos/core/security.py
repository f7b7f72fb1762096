"""
Security helpers
JWT issuing/decoding, password hashing and the FastAPI dependencies that
resolve the current Session and enforce roles.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .exceptions import AuthError, PermissionDeniedError
from .session import Session, SessionRegistry, get_session_registry
from ..config.settings import Settings, settings as default_settings
from ..models.user import Role

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 120_000


class SecurityManager:
    """Token and password operations"""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    def create_jwt_token(self, user_id: int, session_id: str, role: Role,
                         additional_claims: Optional[Dict[str, Any]] = None) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "sid": session_id,
            "role": Role(role).value,
            "iat": now,
            "exp": now + timedelta(hours=self.config.jwt_expire_hours),
        }
        if additional_claims:
            payload.update(additional_claims)
        return jwt.encode(payload, self.config.jwt_secret_key, algorithm=self.config.jwt_algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.config.jwt_secret_key,
                algorithms=[self.config.jwt_algorithm]
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Token has expired", "TOKEN_EXPIRED")
        except jwt.InvalidTokenError as e:
            raise AuthError(f"Invalid token: {e}", "TOKEN_INVALID")

    @staticmethod
    def hash_password(password: str, salt: Optional[str] = None) -> str:
        salt = salt or secrets.token_hex(16)
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS
        )
        return f"{PBKDF2_ALGORITHM}${PBKDF2_ITERATIONS}${salt}${digest.hex()}"

    @staticmethod
    def verify_password(password: str, stored: str) -> bool:
        try:
            algorithm, iterations, salt, expected = stored.split("$", 3)
        except (AttributeError, ValueError):
            return False
        if algorithm != PBKDF2_ALGORITHM:
            return False
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations)
        )
        return hmac.compare_digest(digest.hex(), expected)


security_manager = SecurityManager()

bearer_scheme = HTTPBearer(auto_error=False)


def get_security_manager(request: Request) -> SecurityManager:
    """FastAPI dependency: the manager built from the app's settings, else the global one"""
    return getattr(request.app.state, "security", None) or security_manager


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    registry: SessionRegistry = Depends(get_session_registry),
    security: SecurityManager = Depends(get_security_manager),
) -> Session:
    """Resolve the bearer token to a live Session"""
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing bearer token")

    payload = security.decode_jwt_token(credentials.credentials)
    session_id = payload.get("sid")
    if not session_id:
        raise AuthError("Token missing session id", "TOKEN_INVALID")

    session = registry.get(session_id)
    if session is None:
        # Signed out, deactivated, or the process restarted
        raise AuthError("Session is no longer active", "SESSION_EXPIRED")
    return session


def require_roles(*roles: Role) -> Callable:
    """Dependency factory: allow only the given roles"""
    allowed = {Role(r) for r in roles}

    async def checker(session: Session = Depends(get_current_session)) -> Session:
        if session.role not in allowed:
            raise PermissionDeniedError(
                f"Role '{session.role.value}' may not perform this action",
                details={"allowed_roles": sorted(r.value for r in allowed)}
            )
        return session

    return checker


require_admin = require_roles(Role.ADMIN)
require_staff = require_roles(Role.ADMIN, Role.STAFF)
