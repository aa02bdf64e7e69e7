from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class SuggestionStrategy(str, Enum):
    GREEDY = "greedy"
    FIRST_CREDITOR = "first_creditor"


class BalanceResponse(BaseModel):
    """Balance of one participant with its display name resolved."""
    participant_id: str
    participant_name: str
    total_paid: Decimal
    total_owed: Decimal
    net_balance: Decimal
    status: str


class SuggestedPaymentResponse(BaseModel):
    from_participant: str
    from_name: str
    to_participant: str
    to_name: str
    amount: Decimal
