from datetime import datetime
from typing import Optional

from pydantic import Field

from splitbook.models.base import MongoModel, _utcnow

NOTIFICATION_EXPENSE_ADDED = "expense_added"


class Message(MongoModel):
    """Group chat message."""
    group_id: str
    user_id: str
    user_name: str = "Unknown User"
    user_avatar: Optional[str] = None
    content: str = Field(..., min_length=1, max_length=2000)
    created_at: datetime = Field(default_factory=_utcnow)


class Notification(MongoModel):
    user_id: str
    group_id: str
    type: str
    title: str
    message: str
    read: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
