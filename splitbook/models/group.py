from datetime import datetime
from typing import List, Optional

from pydantic import Field

from splitbook.models.base import MongoModel, _utcnow


class Group(MongoModel):
    """A named collection of participants sharing expenses."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    created_by: str
    member_ids: List[str] = Field(default_factory=list)  # user ids with access
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
