"""
Authentication middleware.

Decodes the bearer token (if any) and stores the resulting Identity, or None,
on request.state.identity. It never rejects a request; authorization
dependencies decide that.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.auth import authenticate


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Populate request.state.identity from the Authorization header.

    The signing secret is passed in when the middleware is registered so
    the gate never reads configuration on its own.
    """

    def __init__(self, app: ASGIApp, secret_key: str):
        super().__init__(app)
        self.secret_key = secret_key

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.identity = authenticate(
            request.headers.get("Authorization"), self.secret_key
        )
        return await call_next(request)
