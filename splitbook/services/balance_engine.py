"""
Balance engine - per-participant positions for one group.

Pure functions over caller-supplied snapshots: no I/O, no shared state.

For each participant P of the group:
    total_paid  = sum of expense amounts paid by P
    total_owed  = sum of split amounts assigned to P
    net_balance = total_paid - total_owed
                  + settlements paid by P - settlements received by P

Paying a settlement counts like paying an expense: it moves a debtor up
towards zero and the receiving creditor down towards zero.

Net balances of a group always sum to zero as long as every split and
settlement references a participant of the group. Records pointing at
unknown participants are ignored.
"""

import heapq
from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Sequence

from splitbook.models.balance import Balance, SuggestedPayment
from splitbook.models.ledger import Expense, Participant, Settlement

ZERO = Decimal("0")


def compute_balances(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    settlements: Sequence[Settlement],
    group_id: str,
) -> List[Balance]:
    """
    Compute one Balance per participant of group_id, in input order.

    Records of other groups are filtered out first.
    """
    paid: Dict[str, Decimal] = defaultdict(Decimal)
    owed: Dict[str, Decimal] = defaultdict(Decimal)
    received: Dict[str, Decimal] = defaultdict(Decimal)
    sent: Dict[str, Decimal] = defaultdict(Decimal)

    for expense in expenses:
        if expense.group_id != group_id:
            continue
        paid[expense.paid_by] += expense.amount
        for split in expense.splits:
            owed[split.participant_id] += split.amount

    for settlement in settlements:
        if settlement.group_id != group_id:
            continue
        received[settlement.to_participant] += settlement.amount
        sent[settlement.from_participant] += settlement.amount

    balances = []
    for participant in participants:
        if participant.group_id != group_id:
            continue
        pid = participant.id
        balances.append(
            Balance(
                participant_id=pid,
                total_paid=paid[pid],
                total_owed=owed[pid],
                net_balance=paid[pid] - owed[pid] + sent[pid] - received[pid],
            )
        )
    return balances


def quick_suggestions(balances: Sequence[Balance], limit: int = 3) -> List[SuggestedPayment]:
    """
    Pay-the-first-creditor heuristic.

    Each of the first `limit` debtors is told to pay the first creditor
    min(debt, credit). Other creditors are never matched and debts may
    not clear in one round.
    """
    debtors = [b for b in balances if b.net_balance < 0]
    creditors = [b for b in balances if b.net_balance > 0]
    if not creditors:
        return []

    creditor = creditors[0]
    return [
        SuggestedPayment(
            from_participant=debtor.participant_id,
            to_participant=creditor.participant_id,
            amount=min(-debtor.net_balance, creditor.net_balance),
        )
        for debtor in debtors[:limit]
    ]


def plan_settlements(balances: Sequence[Balance]) -> List[SuggestedPayment]:
    """
    Greedy minimal-transaction settlement plan.

    Repeatedly pairs the largest remaining debtor with the largest
    remaining creditor for the smaller of the two amounts. Ties keep
    input order. When the balances sum to zero, applying every payment
    brings all of them to zero.
    """
    # heap entries: (-remaining, input position, participant id)
    debtors = [
        (b.net_balance, i, b.participant_id)
        for i, b in enumerate(balances) if b.net_balance < 0
    ]
    creditors = [
        (-b.net_balance, i, b.participant_id)
        for i, b in enumerate(balances) if b.net_balance > 0
    ]
    heapq.heapify(debtors)
    heapq.heapify(creditors)

    plan = []
    while debtors and creditors:
        debt, d_pos, debtor_id = heapq.heappop(debtors)
        credit, c_pos, creditor_id = heapq.heappop(creditors)

        amount = min(-debt, -credit)
        plan.append(
            SuggestedPayment(
                from_participant=debtor_id,
                to_participant=creditor_id,
                amount=amount,
            )
        )

        if -debt - amount > ZERO:
            heapq.heappush(debtors, (debt + amount, d_pos, debtor_id))
        if -credit - amount > ZERO:
            heapq.heappush(creditors, (credit + amount, c_pos, creditor_id))

    return plan


def apply_payments(balances: Sequence[Balance], payments: Sequence[SuggestedPayment]) -> List[Balance]:
    """Project balances after the given payments are recorded as settlements."""
    delta: Dict[str, Decimal] = defaultdict(Decimal)
    for payment in payments:
        delta[payment.from_participant] += payment.amount
        delta[payment.to_participant] -= payment.amount

    return [
        balance.model_copy(update={"net_balance": balance.net_balance + delta[balance.participant_id]})
        for balance in balances
    ]
