"""Tutorial model bound to the `tutorials` collection."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReturnDocument

from common.database.registry import DEFAULT_DATABASE_NAME

logger = logging.getLogger(__name__)

COLLECTION_NAME = "tutorials"


def to_json(document: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a stored document to its API form: `_id` becomes `id`, `__v` is dropped."""
    data = {k: v for k, v in document.items() if k not in ("_id", "__v")}
    data["id"] = str(document["_id"])
    return data


def _object_id(tutorial_id: str) -> Optional[ObjectId]:
    if not ObjectId.is_valid(tutorial_id):
        return None
    return ObjectId(tutorial_id)


class TutorialModel:
    """CRUD accessor for tutorial documents."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        document = {
            "title": data.get("title"),
            "description": data.get("description"),
            "published": bool(data.get("published", False)),
            "createdAt": now,
            "updatedAt": now,
        }
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(f"Tutorial created: id={result.inserted_id}")
        return to_json(document)

    async def find_all(self, title: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        List tutorials.

        Args:
            title: Optional pattern, matched case-insensitively against titles

        Returns:
            List[Dict[str, Any]]: Serialized tutorials
        """
        query: Dict[str, Any] = {}
        if title:
            query["title"] = {"$regex": title, "$options": "i"}
        documents = await self.collection.find(query).to_list(length=None)
        return [to_json(d) for d in documents]

    async def find_published(self) -> List[Dict[str, Any]]:
        documents = await self.collection.find({"published": True}).to_list(length=None)
        return [to_json(d) for d in documents]

    async def find_by_id(self, tutorial_id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(tutorial_id)
        if oid is None:
            return None
        document = await self.collection.find_one({"_id": oid})
        return to_json(document) if document else None

    async def update_by_id(self, tutorial_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Set the given fields on a tutorial and bump `updatedAt`.

        Returns:
            Optional[Dict[str, Any]]: The updated tutorial, None if not found
        """
        oid = _object_id(tutorial_id)
        if oid is None:
            return None
        changes = dict(fields)
        changes["updatedAt"] = datetime.now(timezone.utc)
        document = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER
        )
        return to_json(document) if document else None

    async def delete_by_id(self, tutorial_id: str) -> bool:
        oid = _object_id(tutorial_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def delete_all(self) -> int:
        result = await self.collection.delete_many({})
        logger.info(f"Deleted {result.deleted_count} tutorials")
        return result.deleted_count


def create_tutorial_model(client: AsyncIOMotorClient) -> TutorialModel:
    """
    Model factory for tutorials.

    Uses the database named in the connection URL, or DEFAULT_DATABASE_NAME
    when the URL has none.
    """
    database = client.get_default_database(DEFAULT_DATABASE_NAME)
    return TutorialModel(database[COLLECTION_NAME])
