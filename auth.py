"""Shared-secret bearer token gate for the MCP HTTP endpoint."""

import hmac
import logging
from typing import Mapping, Optional

from starlette.requests import Request
from starlette.responses import PlainTextResponse

from errors import AuthError, describe

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = describe(AuthError("Invalid bearer token"))


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the header value with a leading ``Bearer `` removed, if present."""
    if authorization is None:
        return None
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):]
    return authorization


def is_authorized(headers: Mapping[str, str], secret: str) -> bool:
    token = extract_bearer_token(headers.get("authorization"))
    if token is None:
        return False
    return hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


def authenticate(headers: Mapping[str, str], secret: str) -> None:
    """Raise AuthError unless ``headers`` carry the shared secret."""
    if not is_authorized(headers, secret):
        raise AuthError("Invalid bearer token")


def create_auth_middleware(secret: str):
    """
    Create Starlette middleware that rejects requests lacking the shared secret.

    Usage:
        app.add_middleware(BaseHTTPMiddleware, dispatch=create_auth_middleware(secret))
    """

    async def auth_middleware(request: Request, call_next):
        try:
            authenticate(request.headers, secret)
        except AuthError as e:
            logger.warning(f"Rejected unauthenticated request to {request.url.path}")
            return PlainTextResponse(describe(e), status_code=401)
        return await call_next(request)

    return auth_middleware
