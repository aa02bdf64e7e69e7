import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from splitbook.core.config import settings

logger = logging.getLogger(__name__)


class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URL)
    mongodb.db = mongodb.client[settings.DATABASE_NAME]

    await create_indexes()
    logger.info("Connected to MongoDB: %s", settings.DATABASE_NAME)

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
    mongodb.client = None
    mongodb.db = None
    logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create database indexes."""
    # Groups are listed per member
    await mongodb.db["groups"].create_index("member_ids")

    # Ledger collections are always read per group
    await mongodb.db["participants"].create_index([("group_id", 1), ("created_at", 1)])
    await mongodb.db["expenses"].create_index([("group_id", 1), ("date", -1)])
    await mongodb.db["expenses"].create_index("splits.participant_id")
    await mongodb.db["settlements"].create_index([("group_id", 1), ("settled_at", -1)])

    # Chat and notifications
    await mongodb.db["messages"].create_index([("group_id", 1), ("created_at", 1)])
    await mongodb.db["notifications"].create_index([("user_id", 1), ("created_at", -1)])

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db
