from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.ledger import Settlement


class SettlementRepository:
    """Repository for recorded settlement payments."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["settlements"]

    async def create_settlement(self, settlement: Settlement) -> Settlement:
        result = await self.collection.insert_one(settlement.to_document())
        settlement.id = str(result.inserted_id)
        return settlement

    async def list_settlements(self, group_id: str) -> List[Settlement]:
        """Get a group's settlements, newest first."""
        cursor = self.collection.find({"group_id": group_id}).sort("settled_at", -1)
        docs = await cursor.to_list(None)
        return [Settlement(**doc) for doc in docs]

    async def count_participant_references(self, group_id: str, participant_id: str) -> int:
        return await self.collection.count_documents({
            "group_id": group_id,
            "$or": [
                {"from_participant": participant_id},
                {"to_participant": participant_id}
            ]
        })
