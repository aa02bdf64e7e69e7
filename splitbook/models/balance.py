from decimal import Decimal

from pydantic import BaseModel, ConfigDict

STATUS_GETS_BACK = "Gets back"
STATUS_OWES = "Owes"
STATUS_SETTLED = "Settled"


class Balance(BaseModel):
    """
    Derived position of one participant; never stored.

    net_balance > 0: the group owes the participant
    net_balance < 0: the participant owes the group
    """
    participant_id: str
    total_paid: Decimal = Decimal("0")
    total_owed: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")

    model_config = ConfigDict(frozen=True)

    @property
    def status(self) -> str:
        if self.net_balance > 0:
            return STATUS_GETS_BACK
        if self.net_balance < 0:
            return STATUS_OWES
        return STATUS_SETTLED


class SuggestedPayment(BaseModel):
    """A proposed settlement: from_participant pays to_participant."""
    from_participant: str
    to_participant: str
    amount: Decimal

    model_config = ConfigDict(frozen=True)
