"""
Mongo User Repository Adapter.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError

from adapters.mongo.objectid_utils import objectid_to_str, parse_object_id
from core.logger import logger
from domain.entities import User, UserSummary
from domain.errors import ConflictError
from ports.repository import UserRepositoryPort

SUMMARY_PROJECTION = {"username": 1, "firstName": 1, "lastName": 1}


def to_entity(document: Dict[str, Any]) -> User:
    """Convert a stored Mongo document to a User entity."""
    return User(
        id=objectid_to_str(document["_id"]),
        email=document["email"],
        username=document["username"],
        first_name=document.get("firstName", ""),
        last_name=document.get("lastName", ""),
        password=document.get("password", ""),
        created_at=document["createdAt"],
        updated_at=document["updatedAt"],
    )


class MongoUserRepository(UserRepositoryPort):
    """MongoDB implementation of UserRepositoryPort."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def create(self, data: Dict[str, Any]) -> User:
        now = datetime.utcnow()
        document = {
            "email": data["email"],
            "username": data["username"],
            "password": data["password"],
            "firstName": data["first_name"],
            "lastName": data["last_name"],
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError:
            logger.warning(f"Duplicate user rejected by index: username={data['username']}")
            raise ConflictError("User with this email or username already exists")
        except Exception as e:
            logger.error(f"Failed to insert user {data['username']}: {e}")
            raise

        document["_id"] = result.inserted_id
        logger.debug(f"Inserted user: id={result.inserted_id}")
        return to_entity(document)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        oid = parse_object_id(user_id)
        if oid is None:
            return None

        document = await self.collection.find_one({"_id": oid})
        return to_entity(document) if document else None

    async def find_by_username(self, username: str) -> Optional[User]:
        document = await self.collection.find_one({"username": username})
        return to_entity(document) if document else None

    async def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        document = await self.collection.find_one(
            {"$or": [{"email": email}, {"username": username}]}
        )
        return to_entity(document) if document else None

    async def find_summaries(self, user_ids: Iterable[str]) -> Dict[str, UserSummary]:
        oids = [oid for oid in (parse_object_id(uid) for uid in set(user_ids)) if oid]
        if not oids:
            return {}

        summaries = {}
        cursor = self.collection.find({"_id": {"$in": oids}}, SUMMARY_PROJECTION)
        async for document in cursor:
            user_id = objectid_to_str(document["_id"])
            summaries[user_id] = UserSummary(
                id=user_id,
                username=document.get("username"),
                first_name=document.get("firstName"),
                last_name=document.get("lastName"),
            )
        return summaries

    async def list_all(self) -> List[User]:
        return [to_entity(document) async for document in self.collection.find({})]
