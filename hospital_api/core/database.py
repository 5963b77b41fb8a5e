import logging

from motor.motor_asyncio import AsyncIOMotorClient
from hospital_api.core.config import MONGODB_URL, DATABASE_NAME

logger = logging.getLogger(__name__)


class MongoDB:
    client: AsyncIOMotorClient = None
    db = None

mongodb = MongoDB()

async def connect_to_mongo():
    mongodb.client = AsyncIOMotorClient(MONGODB_URL)
    mongodb.db = mongodb.client[DATABASE_NAME]

    await mongodb.client.admin.command("ping")
    await mongodb.db.users.create_index("email", unique=True)
    await mongodb.db.users.create_index("username", unique=True)
    logger.info("MongoDB connected (%s)", DATABASE_NAME)

async def close_mongo_connection():
    if mongodb.client is not None:
        mongodb.client.close()
    logger.info("MongoDB disconnected")
