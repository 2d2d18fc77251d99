"""Users router – the authenticated user's own profile."""

from argon2 import PasswordHasher
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pitchscore.database import get_db
from pitchscore.routers.auth import get_current_claims, get_password_hasher
from pitchscore.schemas.auth import TokenClaims
from pitchscore.schemas.user import ProfileOut, ProfileUpdate, ProfileUpdatedOut
from pitchscore.services import auth as auth_service

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/me", response_model=ProfileOut)
async def read_me(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    """Return the authenticated user's profile."""
    return await auth_service.get_profile(db, claims.id)


@router.put("/me", response_model=ProfileUpdatedOut)
async def update_me(
    body: ProfileUpdate,
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Change e-mail and/or password."""
    return await auth_service.update_profile(
        db, hasher, claims.id, email=body.email, password=body.password
    )
