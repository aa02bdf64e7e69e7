"""
ExpenseRepository - expenses with their splits embedded.

Documents look like:
{
    "_id": ObjectId,
    "group_id": str,
    "title": str,
    "amount": Decimal128,
    "paid_by": participant id,
    "date": datetime (midnight),
    "splits": [{"participant_id": str, "amount": Decimal128}],
    "created_at": datetime,
    "updated_at": datetime
}
"""

from datetime import datetime, timezone
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.base import to_object_id
from splitbook.models.ledger import Expense


class ExpenseRepository:
    """Repository for expenses."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["expenses"]

    async def create_expense(self, expense: Expense) -> Expense:
        result = await self.collection.insert_one(expense.to_document())
        expense.id = str(result.inserted_id)
        return expense

    async def list_expenses(self, group_id: str) -> List[Expense]:
        """Get a group's expenses, most recent date first."""
        cursor = self.collection.find({"group_id": group_id}).sort(
            [("date", -1), ("created_at", -1)]
        )
        docs = await cursor.to_list(None)
        return [Expense(**doc) for doc in docs]

    async def get_expense(self, group_id: str, expense_id: str) -> Expense | None:
        oid = to_object_id(expense_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid, "group_id": group_id})
        if doc:
            return Expense(**doc)
        return None

    async def replace_expense(self, expense_id: str, expense: Expense) -> Expense | None:
        """Overwrite title, amount, payer, date and splits of an expense."""
        oid = to_object_id(expense_id)
        if oid is None:
            return None

        updates = expense.to_document()
        updates.pop("created_at", None)
        updates["updated_at"] = datetime.now(timezone.utc)

        result = await self.collection.find_one_and_update(
            {"_id": oid, "group_id": expense.group_id},
            {"$set": updates},
            return_document=True
        )
        if result:
            return Expense(**result)
        return None

    async def delete_expense(self, group_id: str, expense_id: str) -> bool:
        oid = to_object_id(expense_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid, "group_id": group_id})
        return result.deleted_count > 0

    async def count_participant_references(self, group_id: str, participant_id: str) -> int:
        """Count expenses paid by or split with a participant."""
        return await self.collection.count_documents({
            "group_id": group_id,
            "$or": [
                {"paid_by": participant_id},
                {"splits.participant_id": participant_id}
            ]
        })
