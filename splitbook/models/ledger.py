"""
Ledger models - the inputs of the balance engine.

Design principles:
- Every record belongs to exactly one group (group_id)
- Records reference participants by id only; display names are looked up separately
- Splits are embedded in their expense
- All amounts are Decimal with two places; never floats
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from splitbook.models.base import CalendarDate, MongoModel, Money, _utcnow


class Participant(MongoModel):
    """A person tracked in a group's ledger (not necessarily an account holder)."""
    group_id: str
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    created_at: datetime = Field(default_factory=_utcnow)


class Split(BaseModel):
    """One participant's share of an expense."""
    participant_id: str
    amount: Money = Field(..., ge=0)


class Expense(MongoModel):
    """
    A spend paid by one participant and divided into splits.

    Invariant (checked by LedgerService.build_expense on every create and
    update, not here): sum(split.amount) == amount within the split tolerance.
    Stored documents load unchecked.
    """
    group_id: str
    title: str = Field(..., min_length=1, max_length=200)
    amount: Money = Field(..., gt=0)
    paid_by: str
    date: CalendarDate = Field(default_factory=date.today)
    splits: List[Split] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class Settlement(MongoModel):
    """A direct payment from one participant to another."""
    group_id: str
    from_participant: str
    to_participant: str
    amount: Money = Field(..., gt=0)
    note: Optional[str] = Field(default=None, max_length=500)
    settled_at: datetime = Field(default_factory=_utcnow)
