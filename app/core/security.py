"""
Security utilities for JWT tokens and password hashing.

Tokens are signed with HS256 using the process-wide SECRET_KEY.
Passwords are hashed using bcrypt.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional
from jose import jwt
from passlib.context import CryptContext
from app.core.config import settings

# Password hashing context (bcrypt)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_WORK_FACTOR,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    return pwd_context.verify(password_bytes, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


def create_token(
    user: Mapping[str, Any],
    secret_key: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token for a user.

    Args:
        user: Mapping with "username" and (optionally) "isAdmin"
        secret_key: Signing secret (default: settings.SECRET_KEY)
        expires_delta: Token lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT with claims {username, isAdmin, iat, exp}
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {
        "username": user["username"],
        # Some drivers hand booleans back as 0/1; the claim must be a real bool
        "isAdmin": bool(user.get("isAdmin", False)),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, secret_key or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str, secret_key: Optional[str] = None) -> Dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token to decode
        secret_key: Verification secret (default: settings.SECRET_KEY)

    Returns:
        Dictionary containing the token payload

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, secret_key or settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
