"""
Authentication and authorization rules.

authenticate() turns an Authorization header into an Identity, or None for
anonymous requests. A bad, expired or foreign-signed token is treated exactly
like a missing one: authentication never fails a request by itself. The
ensure_* gates below decide whether an (possibly anonymous) identity may go
on, and all of them fail with the same UnauthorizedError.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from jose import JWTError

from app.core.exceptions import UnauthorizedError
from app.core.security import decode_token

logger = logging.getLogger(__name__)

_BEARER = re.compile(r"^bearer\s+(?P<token>\S+)$", re.IGNORECASE)


@dataclass(frozen=True)
class Identity:
    """
    Claims of a verified access token.

    is_admin holds the claim exactly as it was signed; only the boolean True
    grants admin rights.
    """
    username: str
    is_admin: Any = False

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "Identity":
        return cls(username=claims.get("username"), is_admin=claims.get("isAdmin", False))

    @property
    def has_admin(self) -> bool:
        return self.is_admin is True


class InvalidCredentialsError(Exception):
    """A bearer token could not be verified."""


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from "Bearer <token>"; None if absent or malformed."""
    if not authorization:
        return None
    match = _BEARER.match(authorization.strip())
    return match.group("token") if match else None


def verify_identity(token: str, secret_key: str) -> Identity:
    """
    Verify a token and decode its claims.

    Raises:
        InvalidCredentialsError: Bad signature, expired, malformed, or no username claim
    """
    try:
        claims = decode_token(token, secret_key)
    except JWTError as e:
        raise InvalidCredentialsError(str(e)) from e

    if not isinstance(claims.get("username"), str) or not claims["username"]:
        raise InvalidCredentialsError("token has no username claim")

    return Identity.from_claims(claims)


def authenticate(authorization: Optional[str], secret_key: str) -> Optional[Identity]:
    """
    Resolve the identity for a request.

    Returns:
        Identity for a valid token, None for a missing or invalid one
    """
    token = parse_bearer(authorization)
    if token is None:
        return None

    try:
        return verify_identity(token, secret_key)
    except InvalidCredentialsError as e:
        logger.debug(f"Ignoring invalid bearer token: {e}")
        return None


def ensure_logged_in(identity: Optional[Identity]) -> Identity:
    """Pass if there is a logged-in user."""
    if identity is None or not identity.username:
        raise UnauthorizedError()
    return identity


def ensure_admin(identity: Optional[Identity]) -> Identity:
    """Pass only for admins (isAdmin claim is exactly True)."""
    if identity is None or not identity.has_admin:
        raise UnauthorizedError()
    return identity


def ensure_correct_user_or_admin(identity: Optional[Identity], username: str) -> Identity:
    """Pass if the identity is the user named in the route, or an admin."""
    if identity is None:
        raise UnauthorizedError()
    if identity.username != username and not identity.has_admin:
        raise UnauthorizedError()
    return identity
