from typing import Optional

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    user_name: str = Field(default="Unknown User", max_length=100)
    user_avatar: Optional[str] = None
    content: str = Field(..., min_length=1, max_length=2000)
