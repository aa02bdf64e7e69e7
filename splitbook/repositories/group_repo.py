from datetime import datetime, timezone
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from splitbook.models.base import to_object_id
from splitbook.models.group import Group
from splitbook.schemas.group import GroupCreate, GroupUpdate


class GroupRepository:
    """Group database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["groups"]

    async def create_group(self, group_data: GroupCreate) -> Group:
        """Create a group; the creator becomes its first member."""
        group = Group(
            name=group_data.name,
            description=group_data.description,
            created_by=group_data.created_by,
            member_ids=[group_data.created_by],
        )
        result = await self.collection.insert_one(group.to_document())
        group.id = str(result.inserted_id)
        return group

    async def get_group(self, group_id: str) -> Group | None:
        oid = to_object_id(group_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return Group(**doc)
        return None

    async def list_groups(self, user_id: str) -> List[Group]:
        """List groups a user belongs to, newest first."""
        cursor = self.collection.find({"member_ids": user_id}).sort("created_at", -1)
        docs = await cursor.to_list(None)
        return [Group(**doc) for doc in docs]

    async def update_group(self, group_id: str, update_data: GroupUpdate) -> Group | None:
        oid = to_object_id(group_id)
        if oid is None:
            return None

        updates = update_data.model_dump(exclude_unset=True)
        if not updates:
            return await self.get_group(group_id)

        updates["updated_at"] = datetime.now(timezone.utc)
        result = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": updates},
            return_document=True
        )
        if result:
            return Group(**result)
        return None

    async def add_member(self, group_id: str, user_id: str) -> Group | None:
        oid = to_object_id(group_id)
        if oid is None:
            return None

        result = await self.collection.find_one_and_update(
            {"_id": oid},
            {
                "$addToSet": {"member_ids": user_id},
                "$set": {"updated_at": datetime.now(timezone.utc)}
            },
            return_document=True
        )
        if result:
            return Group(**result)
        return None
