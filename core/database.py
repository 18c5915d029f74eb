"""
MongoDB connection using Motor (async driver).
Includes detailed logging and comprehensive error handling.
"""

from typing import Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, DESCENDING

from core.config import Settings
from core.logger import logger

TASKS_COLLECTION = "tasks"
USERS_COLLECTION = "users"


def mask_mongodb_url(url: str) -> str:
    """Hide the password part of a MongoDB URL for logging."""
    if "@" not in url or "://" not in url:
        return url
    credentials, host = url.split("@", 1)
    protocol, user_info = credentials.split("://", 1)
    user = user_info.split(":")[0]
    return f"{protocol}://{user}:****@{host}"


class MongoDB:
    """MongoDB connection manager with async support."""

    def __init__(self, settings: Settings):
        """Initialize MongoDB connection manager."""
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        logger.debug("MongoDB connection manager initialized")

    async def connect(self) -> None:
        """
        Establish connection to MongoDB.

        Raises:
            Exception: If connection fails
        """
        url = self.settings.mongodb_connection_url
        try:
            logger.info(f"Connecting to MongoDB: {mask_mongodb_url(url)}")
            logger.debug(f"Database name: {self.settings.mongodb_database}")

            self.client = AsyncIOMotorClient(
                url,
                maxPoolSize=self.settings.mongodb_max_pool_size,
                minPoolSize=self.settings.mongodb_min_pool_size,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
                socketTimeoutMS=10000,
            )

            await self.client.admin.command("ping")
            self.db = self.client[self.settings.mongodb_database]

            logger.info(
                f"Connected to MongoDB database: {self.settings.mongodb_database}"
            )
            logger.debug(
                f"Connection pool: min={self.settings.mongodb_min_pool_size}, "
                f"max={self.settings.mongodb_max_pool_size}"
            )

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            logger.exception("MongoDB connection error details:")
            raise

    async def disconnect(self) -> None:
        """
        Close MongoDB connection.

        Safe to call even if not connected.
        """
        if self.client is None:
            logger.debug("MongoDB client not initialized, nothing to disconnect")
            return

        logger.info("Disconnecting from MongoDB...")
        self.client.close()
        self.client = None
        self.db = None
        logger.info("Disconnected from MongoDB")

    def get_collection(self, collection_name: str) -> AsyncIOMotorCollection:
        """
        Get a MongoDB collection.

        Raises:
            RuntimeError: If database is not connected
        """
        if self.db is None:
            error_msg = "Database not connected. Call connect() first."
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        return self.db[collection_name]

    async def health_check(self) -> bool:
        """
        Check if MongoDB connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """
        if self.client is None:
            logger.warning("MongoDB client not initialized")
            return False

        try:
            await self.client.admin.command("ping")
            logger.debug("MongoDB health check passed")
            return True
        except Exception as e:
            logger.error(f"MongoDB health check failed: {e}")
            return False

    async def create_indexes(self) -> None:
        """
        Create indexes backing the task and user queries.

        Index creation failures are logged, not raised.
        """
        try:
            logger.info("Creating MongoDB indexes...")

            tasks = self.get_collection(TASKS_COLLECTION)
            await tasks.create_index([("assignedUser", ASCENDING), ("createdAt", DESCENDING)])
            await tasks.create_index([("assignedUser", ASCENDING), ("status", ASCENDING)])
            await tasks.create_index("createdBy")
            await tasks.create_index("dueDate")
            logger.debug("Created indexes on tasks")

            users = self.get_collection(USERS_COLLECTION)
            await users.create_index("username", unique=True)
            await users.create_index("email", unique=True)
            logger.debug("Created unique indexes on users.username and users.email")

            logger.info("MongoDB indexes created successfully")

        except Exception as e:
            logger.error(f"Failed to create indexes: {e}")
            logger.exception("Index creation error details:")
