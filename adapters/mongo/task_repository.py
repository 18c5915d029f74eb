"""
Mongo Task Repository Adapter.
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument

from adapters.mongo.objectid_utils import objectid_to_str, parse_object_id
from core.logger import logger
from domain.entities import Task, TaskStatus
from domain.value_objects import TaskFilter
from ports.repository import TaskRepositoryPort

# Entity attribute -> document field
FIELD_NAMES = {
    "title": "title",
    "description": "description",
    "status": "status",
    "assigned_user": "assignedUser",
    "created_by": "createdBy",
    "due_date": "dueDate",
}


def _user_ref(user_id: str):
    # Malformed ids are kept as strings so they match nothing
    return parse_object_id(user_id) or user_id


def build_task_query(filters: TaskFilter) -> Dict[str, Any]:
    """
    Translate a TaskFilter into a MongoDB predicate.

    Args:
        filters: Typed filter, all fields optional

    Returns:
        Dict: Mongo query document
    """
    query: Dict[str, Any] = {}

    if filters.status is not None:
        query["status"] = filters.status.value

    if filters.assigned_user is not None:
        query["assignedUser"] = _user_ref(filters.assigned_user)

    if filters.has_due_range:
        due: Dict[str, datetime] = {}
        if filters.due_from is not None:
            due["$gte"] = filters.due_from
        if filters.due_to is not None:
            due["$lte"] = filters.due_to
        query["dueDate"] = due

    if filters.search is not None:
        pattern = re.escape(filters.search)
        query["$or"] = [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]

    return query


def to_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """Convert entity-keyed task fields to a Mongo document fragment."""
    document = {}
    for name, value in data.items():
        if name in ("assigned_user", "created_by"):
            value = _user_ref(value)
        elif isinstance(value, TaskStatus):
            value = value.value
        document[FIELD_NAMES[name]] = value
    return document


def to_entity(document: Dict[str, Any]) -> Task:
    """Convert a stored Mongo document to a Task entity."""
    return Task(
        id=objectid_to_str(document["_id"]),
        title=document["title"],
        description=document["description"],
        status=TaskStatus(document.get("status", TaskStatus.PENDING.value)),
        assigned_user=objectid_to_str(document["assignedUser"]),
        created_by=objectid_to_str(document["createdBy"]),
        due_date=document["dueDate"],
        created_at=document["createdAt"],
        updated_at=document["updatedAt"],
    )


class MongoTaskRepository(TaskRepositoryPort):
    """MongoDB implementation of TaskRepositoryPort."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def insert(self, data: Dict[str, Any]) -> Task:
        document = to_document(data)
        now = datetime.utcnow()
        document["createdAt"] = now
        document["updatedAt"] = now

        try:
            result = await self.collection.insert_one(document)
        except Exception as e:
            logger.error(f"Failed to insert task: {e}")
            raise

        document["_id"] = result.inserted_id
        logger.debug(f"Inserted task: id={result.inserted_id}")
        return to_entity(document)

    async def find_by_id(self, task_id: str) -> Optional[Task]:
        oid = parse_object_id(task_id)
        if oid is None:
            return None

        document = await self.collection.find_one({"_id": oid})
        return to_entity(document) if document else None

    async def find_one(self, task_id: str, assigned_user: str) -> Optional[Task]:
        oid = parse_object_id(task_id)
        if oid is None:
            return None

        document = await self.collection.find_one(
            {"_id": oid, "assignedUser": _user_ref(assigned_user)}
        )
        return to_entity(document) if document else None

    async def find_many(self, filters: TaskFilter) -> List[Task]:
        query = build_task_query(filters)
        logger.debug(f"Task query: {query}")

        cursor = self.collection.find(query).sort("createdAt", DESCENDING)
        return [to_entity(document) async for document in cursor]

    async def update_by_id(self, task_id: str, changes: Dict[str, Any]) -> Optional[Task]:
        oid = parse_object_id(task_id)
        if oid is None:
            return None

        update = to_document(changes)
        update["updatedAt"] = datetime.utcnow()

        try:
            document = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            logger.error(f"Failed to update task {task_id}: {e}")
            raise

        return to_entity(document) if document else None

    async def delete_by_id(self, task_id: str) -> bool:
        oid = parse_object_id(task_id)
        if oid is None:
            return False

        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def count_by_status(self, assigned_user: Optional[str] = None) -> Dict[str, int]:
        match = {"assignedUser": _user_ref(assigned_user)} if assigned_user else {}
        pipeline = [
            {"$match": match},
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
        ]

        counts: Dict[str, int] = {}
        async for group in self.collection.aggregate(pipeline):
            counts[group["_id"]] = group["count"]
        return counts
