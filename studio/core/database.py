import logging
from motor.motor_asyncio import AsyncIOMotorClient
from studio.core.config import MONGODB_URL, DATABASE_NAME

log = logging.getLogger(__name__)


class MongoDB:
    client: AsyncIOMotorClient = None
    db = None

mongodb = MongoDB()

async def connect_to_mongo():
    mongodb.client = AsyncIOMotorClient(MONGODB_URL)
    mongodb.db = mongodb.client[DATABASE_NAME]

    # Test connection
    await mongodb.client.admin.command("ping")
    log.info("MongoDB connected (%s)", DATABASE_NAME)

async def close_mongo_connection():
    if mongodb.client is not None:
        mongodb.client.close()
    log.info("MongoDB disconnected")
