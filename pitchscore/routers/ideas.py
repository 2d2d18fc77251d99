"""Ideas router — submit a pitch, list your own pitches."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pitchscore.database import get_db
from pitchscore.routers.auth import get_current_claims
from pitchscore.schemas.auth import TokenClaims
from pitchscore.schemas.idea import IdeaCreate, IdeaCreatedOut, IdeaOut
from pitchscore.services import ideas as idea_service

router = APIRouter(prefix="/api/ideas", tags=["ideas"])


@router.post("", response_model=IdeaCreatedOut, status_code=status.HTTP_201_CREATED)
async def submit_idea(
    body: IdeaCreate,
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    """Store the idea and return it with its simulated analysis."""
    return await idea_service.create_idea(db, claims.id, body.title, body.content)


# Items without a readable analysis come back without the "analysis" key
@router.get("", response_model=List[IdeaOut], response_model_exclude_none=True)
async def get_ideas(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    """Return the current user's ideas, newest first."""
    return await idea_service.list_ideas(db, claims.id)
