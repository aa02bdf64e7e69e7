from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.chat import Message
from splitbook.schemas.chat import MessageCreate


class MessageRepository:
    """Group chat messages."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["messages"]

    async def create_message(self, group_id: str, message_data: MessageCreate) -> Message:
        message = Message(group_id=group_id, **message_data.model_dump())
        result = await self.collection.insert_one(message.to_document())
        message.id = str(result.inserted_id)
        return message

    async def list_messages(self, group_id: str) -> List[Message]:
        """Oldest first, as a chat transcript reads."""
        cursor = self.collection.find({"group_id": group_id}).sort("created_at", 1)
        docs = await cursor.to_list(None)
        return [Message(**doc) for doc in docs]
