import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.core.config import settings
from splitbook.models.balance import Balance, SuggestedPayment
from splitbook.models.group import Group
from splitbook.models.ledger import Expense, Participant, Settlement
from splitbook.repositories.expense_repo import ExpenseRepository
from splitbook.repositories.participant_repo import ParticipantRepository
from splitbook.repositories.settlement_repo import SettlementRepository
from splitbook.schemas.balance import BalanceResponse, SuggestedPaymentResponse, SuggestionStrategy
from splitbook.schemas.expense import ExpenseCreate
from splitbook.schemas.settlement import SettlementCreate
from splitbook.services import balance_engine
from splitbook.services.export_service import ExportDataType, build_csv_report
from splitbook.services.notification_service import NotificationService
from splitbook.utils.ledger_validation import (
    LedgerValidationError,
    ParticipantInUseError,
    ensure_group_members,
    split_equally,
    validate_settlement,
    validate_splits,
)

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"


@dataclass
class GroupLedger:
    """Snapshot of everything the balance engine needs for one group."""
    group_id: str
    participants: List[Participant] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    settlements: List[Settlement] = field(default_factory=list)

    def balances(self) -> List[Balance]:
        return balance_engine.compute_balances(
            self.participants, self.expenses, self.settlements, self.group_id
        )


def participant_names(participants: Sequence[Participant]) -> Dict[str, str]:
    """Id -> display name lookup for presenting engine output."""
    return {p.id: p.name for p in participants}


class LedgerService:
    """Validated writes and balance reads for a group's ledger."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.participants = ParticipantRepository(db)
        self.expenses = ExpenseRepository(db)
        self.settlements = SettlementRepository(db)
        self.notifications = NotificationService(db)

    async def load_ledger(self, group_id: str) -> GroupLedger:
        return GroupLedger(
            group_id=group_id,
            participants=await self.participants.list_participants(group_id),
            expenses=await self.expenses.list_expenses(group_id),
            settlements=await self.settlements.list_settlements(group_id),
        )

    # ===== EXPENSES =====

    def build_expense(
        self, group_id: str, expense_in: ExpenseCreate, participants: Sequence[Participant]
    ) -> Expense:
        """
        Turn a request into a validated Expense.

        Raises LedgerValidationError for unknown participants and
        SplitMismatchError when splits do not add up to the amount.
        """
        try:
            if expense_in.split_among is not None:
                splits = split_equally(expense_in.amount, expense_in.split_among)
            else:
                splits = list(expense_in.splits)

            ensure_group_members(
                [expense_in.paid_by] + [s.participant_id for s in splits], participants
            )
            validate_splits(expense_in.amount, splits)
        except LedgerValidationError as exc:
            logger.warning("Rejected expense for group %s: %s", group_id, exc)
            raise

        data = {
            "group_id": group_id,
            "title": expense_in.title,
            "amount": expense_in.amount,
            "paid_by": expense_in.paid_by,
            "splits": splits,
        }
        if expense_in.date is not None:
            data["date"] = expense_in.date
        return Expense(**data)

    async def add_expense(self, group: Group, expense_in: ExpenseCreate) -> Expense:
        participants = await self.participants.list_participants(group.id)
        expense = self.build_expense(group.id, expense_in, participants)
        expense = await self.expenses.create_expense(expense)
        logger.info(
            "Expense %s added to group %s: %s %s",
            expense.id, group.id, expense.title, expense.amount
        )

        await self.notifications.notify_expense_added(group, expense)
        return expense

    async def update_expense(self, group: Group, expense_id: str, expense_in: ExpenseCreate) -> Expense | None:
        """Replace an expense; an omitted date keeps the stored one."""
        participants = await self.participants.list_participants(group.id)
        expense = self.build_expense(group.id, expense_in, participants)

        existing = await self.expenses.get_expense(group.id, expense_id)
        if not existing:
            return None
        if expense_in.date is None:
            expense.date = existing.date

        updated = await self.expenses.replace_expense(expense_id, expense)
        if updated:
            logger.info("Expense %s updated in group %s", expense_id, group.id)
        return updated

    async def delete_expense(self, group_id: str, expense_id: str) -> bool:
        deleted = await self.expenses.delete_expense(group_id, expense_id)
        if deleted:
            logger.info("Expense %s deleted from group %s", expense_id, group_id)
        return deleted

    # ===== SETTLEMENTS =====

    async def record_settlement(self, group_id: str, settlement_in: SettlementCreate) -> Settlement:
        participants = await self.participants.list_participants(group_id)
        try:
            validate_settlement(settlement_in.from_participant, settlement_in.to_participant)
            ensure_group_members(
                [settlement_in.from_participant, settlement_in.to_participant], participants
            )
        except LedgerValidationError as exc:
            logger.warning("Rejected settlement for group %s: %s", group_id, exc)
            raise

        settlement = Settlement(group_id=group_id, **settlement_in.model_dump())
        settlement = await self.settlements.create_settlement(settlement)
        logger.info(
            "Settlement %s recorded in group %s: %s -> %s %s",
            settlement.id, group_id, settlement.from_participant,
            settlement.to_participant, settlement.amount
        )
        return settlement

    # ===== PARTICIPANTS =====

    async def delete_participant(self, group_id: str, participant_id: str) -> bool:
        """Delete a participant nobody's expenses or settlements reference."""
        references = await self.expenses.count_participant_references(group_id, participant_id)
        references += await self.settlements.count_participant_references(group_id, participant_id)
        if references:
            raise ParticipantInUseError(
                f"Participant is referenced by {references} expense(s) or settlement(s)"
            )
        return await self.participants.delete_participant(group_id, participant_id)

    # ===== BALANCES =====

    async def get_balances(self, group_id: str) -> List[BalanceResponse]:
        ledger = await self.load_ledger(group_id)
        names = participant_names(ledger.participants)
        return [
            BalanceResponse(
                participant_id=balance.participant_id,
                participant_name=names.get(balance.participant_id, UNKNOWN_NAME),
                total_paid=balance.total_paid,
                total_owed=balance.total_owed,
                net_balance=balance.net_balance,
                status=balance.status,
            )
            for balance in ledger.balances()
        ]

    async def suggest_settlements(
        self,
        group_id: str,
        strategy: SuggestionStrategy = SuggestionStrategy.GREEDY,
    ) -> List[SuggestedPaymentResponse]:
        ledger = await self.load_ledger(group_id)
        balances = ledger.balances()

        if strategy == SuggestionStrategy.FIRST_CREDITOR:
            payments = balance_engine.quick_suggestions(balances, limit=settings.SUGGESTION_LIMIT)
        else:
            payments = balance_engine.plan_settlements(balances)

        names = participant_names(ledger.participants)
        return [self._describe_payment(payment, names) for payment in payments]

    @staticmethod
    def _describe_payment(payment: SuggestedPayment, names: Dict[str, str]) -> SuggestedPaymentResponse:
        return SuggestedPaymentResponse(
            from_participant=payment.from_participant,
            from_name=names.get(payment.from_participant, UNKNOWN_NAME),
            to_participant=payment.to_participant,
            to_name=names.get(payment.to_participant, UNKNOWN_NAME),
            amount=payment.amount,
        )

    async def export_report(self, group: Group, data_type: ExportDataType = ExportDataType.ALL) -> str:
        ledger = await self.load_ledger(group.id)
        return build_csv_report(
            ledger.expenses,
            ledger.balances(),
            participant_names(ledger.participants),
            data_type,
        )
