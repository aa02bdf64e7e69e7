import logging
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.core.config import settings
from splitbook.models.chat import NOTIFICATION_EXPENSE_ADDED, Notification
from splitbook.models.group import Group
from splitbook.models.ledger import Expense
from splitbook.repositories.notification_repo import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.repo = NotificationRepository(db)

    async def notify_expense_added(self, group: Group, expense: Expense) -> List[Notification]:
        """Tell every member of the group that an expense was logged."""
        notifications = [
            Notification(
                user_id=member_id,
                group_id=group.id,
                type=NOTIFICATION_EXPENSE_ADDED,
                title="New Expense Added",
                message=f"{expense.title} - {settings.CURRENCY_SYMBOL}{expense.amount} added to {group.name}",
            )
            for member_id in group.member_ids
        ]
        inserted = await self.repo.insert_notifications(notifications)
        logger.debug("Sent %d expense notifications for group %s", len(inserted), group.id)
        return inserted

    async def list_for_user(self, user_id: str) -> List[Notification]:
        return await self.repo.list_notifications(user_id, limit=settings.NOTIFICATION_LIMIT)

    async def mark_read(self, notification_id: str) -> Notification | None:
        return await self.repo.mark_read(notification_id)

    async def dismiss(self, notification_id: str) -> bool:
        return await self.repo.dismiss(notification_id)
