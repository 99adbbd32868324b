"""
Token and Password Service

This module handles:
- Creation and verification of JSON Web Tokens (JWTs) used as bearer tokens
- Hashing and verification of account passwords

Key concepts:
- Tokens are signed with HMAC-SHA256 using the secret key
- Tokens carry the user id in "sub" and expire after ACCESS_TOKEN_EXPIRE_MINUTES
- No database lookup is needed to check a token's signature (stateless)
- Passwords are hashed with argon2id; only the PHC hash string is stored
"""

from datetime import datetime, timedelta, timezone

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import ExpiredSignatureError, JWTError, jwt

from shortlist_api.config import settings


# Symmetric signing: the same key signs and verifies
ALGORITHM = "HS256"

# argon2-cffi defaults follow the RFC 9106 low-memory profile
password_hasher = PasswordHasher()


class TokenError(Exception):
    """Raised when a bearer token cannot be accepted."""


class TokenExpiredError(TokenError):
    pass


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT access token with the given payload data.

    Args:
        data: Payload to encode in the token (typically {"sub": "<user id>"})
        expires_delta: Optional custom lifetime; defaults to
                       ACCESS_TOKEN_EXPIRE_MINUTES from settings

    Returns:
        Encoded JWT string that can be sent to the client

    Example:
        token = create_access_token({"sub": "42"})
    """
    # Copy the data to avoid mutating the original dict
    to_encode = data.copy()

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    # "exp" and "iat" are standard claims; jose checks "exp" on decode
    to_encode.update({"exp": now + expires_delta, "iat": now})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> dict:
    """
    Verify and decode a JWT token.

    This checks:
    1. Signature is valid (token hasn't been tampered with)
    2. Token hasn't expired
    3. Token is well-formed

    Args:
        token: JWT string to verify

    Returns:
        Decoded payload dictionary

    Raises:
        TokenExpiredError: If the "exp" claim is in the past
        TokenError: For any other reason the token is unusable
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpiredError("Token has expired") from exc
    except JWTError as exc:
        # Don't expose the specific decode error to the client
        raise TokenError("Invalid token") from exc


def hash_password(password: str) -> str:
    """Hash a plaintext password, returning an argon2id PHC string."""
    return password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Returns False on mismatch and on a corrupt stored hash, so callers can
    treat every failure as "bad credentials".
    """
    try:
        return password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
