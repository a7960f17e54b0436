"""
FastAPI dependencies for authentication and authorization.

The identity is resolved by AuthenticationMiddleware; these dependencies only
read it from request.state and apply the rules in app.core.auth. Declared as
route dependencies they run before the request body is validated, so an
unauthorized caller always gets 401, whatever the payload.
"""

from typing import Optional

from fastapi import Depends, Request

from app.core.auth import (
    Identity,
    ensure_admin,
    ensure_correct_user_or_admin,
    ensure_logged_in,
)


def get_identity(request: Request) -> Optional[Identity]:
    """
    Identity of the current request, or None when anonymous.
    """
    return getattr(request.state, "identity", None)


def require_logged_in(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    """
    Require any logged-in user.

    Raises:
        UnauthorizedError: If the request is anonymous
    """
    return ensure_logged_in(identity)


def require_admin(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    """
    Require an admin user.

    Raises:
        UnauthorizedError: If not logged in or not an admin
    """
    return ensure_admin(identity)


def require_correct_user_or_admin(
    username: str,
    identity: Optional[Identity] = Depends(get_identity),
) -> Identity:
    """
    Require the user named by the {username} path parameter, or an admin.

    Raises:
        UnauthorizedError: For anyone else
    """
    return ensure_correct_user_or_admin(identity, username)
