"""
Authentication router — e-mail/password accounts + bearer tokens.

Endpoints:
    POST /api/register → create an account, returns {id, email, token}
    POST /api/login    → exchange credentials for a token

Also home to the dependencies every protected route uses.
"""

from typing import Optional

from argon2 import PasswordHasher
from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from pitchscore.config import Settings
from pitchscore.database import get_db
from pitchscore.schemas.auth import AuthOut, Credentials, TokenClaims
from pitchscore.services import auth as auth_service
from pitchscore.services.security import decode_access_token, extract_bearer_token

router = APIRouter(prefix="/api", tags=["auth"])


# ═══════════════════════════════════════════════════════════════
#  Dependencies
# ═══════════════════════════════════════════════════════════════

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


async def get_current_claims(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> TokenClaims:
    """
    Gate for protected routes: require ``Authorization: Bearer <token>`` and
    return the verified claims. The store is not consulted.
    """
    token = extract_bearer_token(authorization)
    return decode_access_token(settings, token)


# ═══════════════════════════════════════════════════════════════
#  Routes
# ═══════════════════════════════════════════════════════════════

@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
async def register(
    body: Credentials,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Register a new account and log it in."""
    return await auth_service.register_user(db, settings, hasher, body.email, body.password)


@router.post("/login", response_model=AuthOut)
async def login(
    body: Credentials,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    return await auth_service.authenticate_user(db, settings, hasher, body.email, body.password)
