"""Service logic for submitting and listing ideas."""

import logging
from typing import List, Optional

from pydantic import ValidationError as SchemaError
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from pitchscore.exceptions import NotFoundError, ValidationError
from pitchscore.models.idea import Idea
from pitchscore.services.analysis import generate_analysis
from pitchscore.services.auth import USER_NOT_FOUND, get_user
from pitchscore.schemas.idea import Analysis, IdeaCreatedOut, IdeaOut

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Title and content are required."


def _load_analysis(idea: Idea) -> Optional[Analysis]:
    """Deserialize the stored blob; a bad blob is logged and dropped, never raised."""
    if not idea.analysis_json:
        return None
    try:
        return Analysis.model_validate_json(idea.analysis_json)
    except SchemaError as e:
        logger.warning(f"Could not parse stored analysis of idea {idea.id}: {e}")
        return None


async def create_idea(
    db: AsyncSession,
    user_id: int,
    title: Optional[str],
    content: Optional[str],
) -> IdeaCreatedOut:
    """
    Store a new idea for ``user_id`` together with a freshly generated analysis.
    The analysis returned is the computed one, not re-read from the store.
    """
    if not title or not content:
        raise ValidationError(MISSING_FIELDS)

    # The token was valid, but the account may have gone since it was issued
    if not await get_user(db, user_id):
        raise NotFoundError(USER_NOT_FOUND)

    analysis = generate_analysis(title, content)
    idea = Idea(
        user_id=user_id,
        title=title,
        content=content,
        analysis_json=analysis.model_dump_json(),
    )
    db.add(idea)
    await db.commit()
    await db.refresh(idea)

    logger.info(f"User {user_id} submitted idea {idea.id} (score {analysis.score})")
    return IdeaCreatedOut(id=idea.id, title=idea.title, content=idea.content, analysis=analysis)


async def list_ideas(db: AsyncSession, user_id: int) -> List[IdeaOut]:
    """Return every idea owned by ``user_id``, newest first."""
    result = await db.execute(
        select(Idea)
        .where(Idea.user_id == user_id)
        .order_by(desc(Idea.created_at), desc(Idea.id))
    )
    ideas = result.scalars().all()

    return [
        IdeaOut(
            id=idea.id,
            title=idea.title,
            content=idea.content,
            created_at=idea.created_at,
            analysis=_load_analysis(idea),
        )
        for idea in ideas
    ]
