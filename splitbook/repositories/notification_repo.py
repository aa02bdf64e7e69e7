from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.base import to_object_id
from splitbook.models.chat import Notification


class NotificationRepository:
    """Per-user notifications."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["notifications"]

    async def insert_notifications(self, notifications: List[Notification]) -> List[Notification]:
        if not notifications:
            return []
        result = await self.collection.insert_many([n.to_document() for n in notifications])
        for notification, inserted_id in zip(notifications, result.inserted_ids):
            notification.id = str(inserted_id)
        return notifications

    async def list_notifications(self, user_id: str, limit: int) -> List[Notification]:
        """Latest notifications for a user, newest first."""
        cursor = self.collection.find({"user_id": user_id}).sort("created_at", -1).limit(limit)
        docs = await cursor.to_list(None)
        return [Notification(**doc) for doc in docs]

    async def mark_read(self, notification_id: str) -> Notification | None:
        oid = to_object_id(notification_id)
        if oid is None:
            return None
        result = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"read": True}},
            return_document=True
        )
        if result:
            return Notification(**result)
        return None

    async def dismiss(self, notification_id: str) -> bool:
        oid = to_object_id(notification_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
