"""Profile schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

USERNAME_PATTERN = r"^\w{3,30}$"


class ProfileUpsert(BaseModel):
    username: str = Field(..., pattern=USERNAME_PATTERN, description="Handle used for @mentions")
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)


class ProfileRef(BaseModel):
    """Public author info embedded in feed and search responses."""

    id: UUID
    username: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    is_admin: bool = False
    created_at: datetime
