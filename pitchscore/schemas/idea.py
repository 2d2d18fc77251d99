"""Idea Pydantic schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class IdeaCreate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class Analysis(BaseModel):
    """Simulated assessment stored (as JSON) alongside an idea."""
    score: int
    strengths: List[str]
    weaknesses: List[str]
    summary: str


class IdeaCreatedOut(BaseModel):
    id: int
    title: str
    content: str
    analysis: Analysis


class IdeaOut(BaseModel):
    id: int
    title: str
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")
    analysis: Optional[Analysis] = None
