"""Progress photo schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class PhotoRead(BaseModel):
    id: UUID
    user_id: UUID
    image_url: Optional[str] = None
    caption: Optional[str] = None
    week_number: int
    is_private: bool
    community_visible: bool
    created_at: datetime
