"""User Pydantic schemas — profile projection and profile update."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    """Body of PUT /api/me; at least one field must be non-empty."""
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileOut(BaseModel):
    """Public user representation returned by GET /api/me."""
    id: int
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = {"from_attributes": True}


class ProfileUpdatedOut(BaseModel):
    id: int
    email: str
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = {"from_attributes": True}
