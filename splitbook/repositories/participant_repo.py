from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.base import to_object_id
from splitbook.models.ledger import Participant
from splitbook.schemas.group import ParticipantCreate, ParticipantUpdate


class ParticipantRepository:
    """Participant database operations, always scoped to a group."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["participants"]

    async def create_participant(self, group_id: str, participant_data: ParticipantCreate) -> Participant:
        participant = Participant(
            group_id=group_id,
            name=participant_data.name,
            email=participant_data.email,
        )
        result = await self.collection.insert_one(participant.to_document())
        participant.id = str(result.inserted_id)
        return participant

    async def list_participants(self, group_id: str) -> List[Participant]:
        """List a group's participants in the order they were added."""
        cursor = self.collection.find({"group_id": group_id}).sort("created_at", 1)
        docs = await cursor.to_list(None)
        return [Participant(**doc) for doc in docs]

    async def get_participant(self, group_id: str, participant_id: str) -> Participant | None:
        oid = to_object_id(participant_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid, "group_id": group_id})
        if doc:
            return Participant(**doc)
        return None

    async def update_participant(
        self, group_id: str, participant_id: str, update_data: ParticipantUpdate
    ) -> Participant | None:
        oid = to_object_id(participant_id)
        if oid is None:
            return None

        updates = update_data.model_dump(exclude_unset=True)
        if not updates:
            return await self.get_participant(group_id, participant_id)

        result = await self.collection.find_one_and_update(
            {"_id": oid, "group_id": group_id},
            {"$set": updates},
            return_document=True
        )
        if result:
            return Participant(**result)
        return None

    async def delete_participant(self, group_id: str, participant_id: str) -> bool:
        oid = to_object_id(participant_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid, "group_id": group_id})
        return result.deleted_count > 0
