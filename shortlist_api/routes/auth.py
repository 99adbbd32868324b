"""
Authentication Routes

Password-based registration and login. Both endpoints return a bearer
token (a signed JWT) that the client sends as
``Authorization: Bearer <token>`` on the /v1/users routes.

Both endpoints are rate limited per client IP because they accept
credentials without any prior authentication.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from shortlist_api.config import settings
from shortlist_api.database import get_db
from shortlist_api.errors import AuthenticationError, ConflictError
from shortlist_api.limiter import auth_rate_limit, limiter
from shortlist_api.models import User
from shortlist_api.schemas import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserOut,
)
from shortlist_api.services.audit import log_action
from shortlist_api.services.auth import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

# All routes defined here will be accessible at /v1/auth/...
router = APIRouter(prefix="/auth", tags=["auth"])


def issue_token(user: User) -> TokenResponse:
    """Create a bearer token for the user."""
    token = create_access_token({"sub": str(user.id)})
    return TokenResponse(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


async def email_taken(db: AsyncSession, email: str) -> bool:
    """Cheap pre-check; the unique index on users.email is the final word."""
    result = await db.execute(select(User.id).filter(User.email == email))
    return result.first() is not None


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
@limiter.limit(auth_rate_limit)
async def register(
    request: Request,
    credentials: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create an account and log it in.

    This endpoint:
    1. Rejects emails that are already registered (409)
    2. Hashes the password and stores the user
    3. Records a "user_registered" audit entry in the same transaction
    4. Returns the new user together with a bearer token

    Raises:
        ConflictError: If the email is already taken
    """
    if await email_taken(db, credentials.email):
        raise ConflictError("Email is already registered")

    # argon2 is deliberately slow; keep it off the event loop
    password_hash = await asyncio.to_thread(hash_password, credentials.password)

    user = User(
        name=credentials.name,
        email=credentials.email,
        password_hash=password_hash,
    )
    db.add(user)
    try:
        # Flush first so the generated id can go into the audit record
        await db.flush()
        await log_action(db, "user_registered", user.email, {"user_id": user.id})
        await db.commit()
    except IntegrityError:
        # A concurrent registration won the unique index on email
        await db.rollback()
        raise ConflictError("Email is already registered") from None

    logger.info("Registered user %s (%s)", user.id, user.email)

    return RegisterResponse(user=UserOut.model_validate(user), token=issue_token(user))


@router.post("/login", response_model=TokenResponse)
@limiter.limit(auth_rate_limit)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Exchange email and password for a bearer token.

    Unknown emails and wrong passwords get the same 401 so the response
    does not reveal which accounts exist.
    """
    result = await db.execute(select(User).filter(User.email == credentials.email))
    user = result.scalars().first()

    if user is None or not await asyncio.to_thread(
        verify_password, credentials.password, user.password_hash
    ):
        logger.info("Failed login for %s", credentials.email)
        raise AuthenticationError("Invalid email or password")

    await log_action(db, "user_logged_in", user.email)
    await db.commit()

    logger.info("User %s logged in", user.id)
    return issue_token(user)
