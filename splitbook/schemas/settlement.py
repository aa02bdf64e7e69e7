from typing import Optional

from pydantic import BaseModel, Field

from splitbook.models.base import Money


class SettlementCreate(BaseModel):
    from_participant: str
    to_participant: str
    amount: Money = Field(..., gt=0)
    note: Optional[str] = Field(default=None, max_length=500)
