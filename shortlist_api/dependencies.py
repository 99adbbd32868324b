"""
Authentication Dependencies for FastAPI Routes

``get_current_user`` is the capability gate for the /v1/users group. It is
attached once to that router (see routes/users.py), so every route in the
group resolves the caller before any handler code runs. Handlers that need
the User object declare the same dependency again; FastAPI caches it per
request, so the token is only checked once.
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shortlist_api.database import get_db
from shortlist_api.errors import AuthenticationError
from shortlist_api.models import User
from shortlist_api.services.auth import TokenError, verify_token

logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Dependency that requires an authenticated user.

    This function:
    1. Extracts the bearer token from the Authorization header
    2. Verifies the token signature and expiration
    3. Looks up the user in the database
    4. Returns the User object or raises AuthenticationError (401)

    Usage in routes:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"email": user.email}
    """
    header = request.headers.get("Authorization")
    if not header:
        raise AuthenticationError("Not authenticated")

    # Header format is "Bearer <jwt>" (RFC 6750)
    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Invalid authorization header")

    try:
        payload = verify_token(token)
    except TokenError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise AuthenticationError(str(exc)) from exc

    # "sub" holds the user id as a string
    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload") from None

    # Token is valid, but the account might have been deleted since
    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")

    return user
