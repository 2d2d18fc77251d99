"""
Password hashing (argon2id) and bearer-token issuance/verification (JWT).

Tokens are stateless: a correctly signed, unexpired token is trusted as-is and
its claims are returned without looking the user up again.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt

from pitchscore.config import Settings
from pitchscore.exceptions import AuthError
from pitchscore.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

MISSING_TOKEN_MESSAGE = "Missing bearer token."
INVALID_TOKEN_MESSAGE = "Invalid or expired token."
MALFORMED_CLAIMS_MESSAGE = "Invalid token."


# ═══════════════════════════════════════════════════════════════
#  Passwords
# ═══════════════════════════════════════════════════════════════

def build_password_hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(
        time_cost=settings.ARGON2_TIME_COST,
        memory_cost=settings.ARGON2_MEMORY_COST,
        parallelism=settings.ARGON2_PARALLELISM,
    )


# argon2 is CPU and memory bound; run it in a worker thread so the event loop
# keeps serving other requests while a hash is computed.

async def hash_password(hasher: PasswordHasher, plain: str) -> str:
    """Hash a plain password. Returns an encoded argon2id hash string."""
    return await asyncio.to_thread(hasher.hash, plain)


async def verify_password(hasher: PasswordHasher, hashed: str, plain: str) -> bool:
    """Verify plain password against stored hash."""
    try:
        return await asyncio.to_thread(hasher.verify, hashed, plain)
    except (VerificationError, InvalidHashError):
        return False


# ═══════════════════════════════════════════════════════════════
#  Tokens
# ═══════════════════════════════════════════════════════════════

def create_access_token(settings: Settings, user_id: int, email: str) -> str:
    """Create a signed JWT carrying ``{id, email}`` with an expiry claim."""
    expire = datetime.now(timezone.utc) + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    to_encode = {"id": user_id, "email": email, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> TokenClaims:
    """
    Verify signature and expiry and return the embedded claims.
    Raises AuthError when the token cannot be trusted.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise AuthError(INVALID_TOKEN_MESSAGE) from e

    user_id = payload.get("id")
    email = payload.get("email")
    # bool is an int subclass; a token with id=true is not a user id
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
        logger.warning("Rejected bearer token: missing id/email claims")
        raise AuthError(MALFORMED_CLAIMS_MESSAGE)

    return TokenClaims(id=user_id, email=email)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the raw token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError(MISSING_TOKEN_MESSAGE)
    return authorization[len(BEARER_PREFIX):]
