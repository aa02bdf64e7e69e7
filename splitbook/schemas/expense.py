from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from splitbook.models.base import CalendarDate, Money
from splitbook.models.ledger import Split


class ExpenseCreate(BaseModel):
    """
    Expense creation schema.

    Exactly one of:
    - splits: explicit amount per participant
    - split_among: participant ids to divide the amount equally between
    """
    title: str = Field(..., min_length=1, max_length=200)
    amount: Money = Field(..., gt=0)
    paid_by: str
    date: Optional[CalendarDate] = None
    splits: Optional[List[Split]] = None
    split_among: Optional[List[str]] = None

    @model_validator(mode="after")
    def check_split_mode(self):
        if (self.splits is None) == (self.split_among is None):
            raise ValueError("Provide either 'splits' or 'split_among'")
        return self


class ExpenseUpdate(ExpenseCreate):
    """Full replacement of an expense and its splits."""
    pass
