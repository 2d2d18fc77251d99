"""
Service logic for accounts — registration, login and profile updates.

Passwords are hashed with argon2id; the raw hash never leaves this module
except inside the ``User`` row.
"""

import logging
from typing import Optional

from argon2 import PasswordHasher
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pitchscore.config import Settings
from pitchscore.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from pitchscore.models.user import User
from pitchscore.schemas.auth import AuthOut
from pitchscore.services.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

MISSING_CREDENTIALS = "Email and password are required."
PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
EMAIL_TAKEN = "Email is already registered."
EMAIL_IN_USE = "Email is already in use."
BAD_CREDENTIALS = "Invalid email or password."
NOTHING_TO_UPDATE = "Provide at least one value to update."
USER_NOT_FOUND = "User not found."


def _check_password_length(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(PASSWORD_TOO_SHORT)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


# ═══════════════════════════════════════════════════════════════
#  Register / login
# ═══════════════════════════════════════════════════════════════

async def register_user(
    db: AsyncSession,
    settings: Settings,
    hasher: PasswordHasher,
    email: Optional[str],
    password: Optional[str],
) -> AuthOut:
    """Create a user and return its id, email and a fresh token."""
    if not email or not password:
        raise ValidationError(MISSING_CREDENTIALS)
    _check_password_length(password)

    if await get_user_by_email(db, email):
        raise ConflictError(EMAIL_TAKEN)

    user = User(email=email, password_hash=await hash_password(hasher, password))
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # A concurrent registration won the race for this email
        await db.rollback()
        raise ConflictError(EMAIL_TAKEN) from e
    await db.refresh(user)

    logger.info(f"Registered user {user.id} <{user.email}>")
    token = create_access_token(settings, user.id, user.email)
    return AuthOut(id=user.id, email=user.email, token=token)


async def authenticate_user(
    db: AsyncSession,
    settings: Settings,
    hasher: PasswordHasher,
    email: Optional[str],
    password: Optional[str],
) -> AuthOut:
    """
    Check credentials and issue a token.
    Unknown email and wrong password produce the same AuthError.
    """
    if not email or not password:
        raise ValidationError(MISSING_CREDENTIALS)

    user = await get_user_by_email(db, email)
    if not user or not await verify_password(hasher, user.password_hash, password):
        logger.warning(f"Failed login for <{email}>")
        raise AuthError(BAD_CREDENTIALS)

    logger.info(f"User {user.id} logged in")
    token = create_access_token(settings, user.id, user.email)
    return AuthOut(id=user.id, email=user.email, token=token)


# ═══════════════════════════════════════════════════════════════
#  Profile
# ═══════════════════════════════════════════════════════════════

async def get_profile(db: AsyncSession, user_id: int) -> User:
    user = await get_user(db, user_id)
    if not user:
        raise NotFoundError(USER_NOT_FOUND)
    return user


async def update_profile(
    db: AsyncSession,
    hasher: PasswordHasher,
    user_id: int,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> User:
    """Update the supplied fields (re-hashing the password) and return the row."""
    if not email and not password:
        raise ValidationError(NOTHING_TO_UPDATE)

    user = await get_profile(db, user_id)

    # A taken email is reported before a too-short password
    if email:
        existing = await get_user_by_email(db, email)
        if existing and existing.id != user.id:
            raise ConflictError(EMAIL_IN_USE)

    if password:
        _check_password_length(password)

    if email:
        user.email = email
    if password:
        user.password_hash = await hash_password(hasher, password)

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(EMAIL_IN_USE) from e
    # updated_at is refreshed server-side
    await db.refresh(user)

    logger.info(f"Updated profile of user {user.id}")
    return user
