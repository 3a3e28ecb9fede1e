"""Reservation collection access"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import BulkWriteError

RESERVATIONS_COLLECTION = "reservations"
ARCHIVE_COLLECTION = "archives"
DUPLICATE_KEY_ERROR = 11000


class ReservationStore:
    """Queries against the reservations and archives collections.

    Documents are returned as stored: ``_id`` is an ObjectId and field
    names are the camelCase names used on the wire.
    """

    def __init__(self, db):
        self.db = db
        self.reservations = db[RESERVATIONS_COLLECTION]
        self.archives = db[ARCHIVE_COLLECTION]

    async def list(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """List reservations matching ``query``, newest first"""
        cursor = self.reservations.find(query or {}).sort("createdAt", DESCENDING)
        return await cursor.to_list(length=None)

    async def get(self, reservation_id: ObjectId) -> Optional[Dict[str, Any]]:
        return await self.reservations.find_one({"_id": reservation_id})

    async def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        document = dict(document)
        result = await self.reservations.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def update(self, reservation_id: ObjectId, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a partial update and return the updated document"""
        if not fields:
            return await self.get(reservation_id)
        return await self.reservations.find_one_and_update(
            {"_id": reservation_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, reservation_id: ObjectId) -> Optional[Dict[str, Any]]:
        return await self.reservations.find_one_and_delete({"_id": reservation_id})

    async def delete_created_before(self, cutoff: datetime, statuses: Iterable[str]) -> int:
        """Delete reservations in ``statuses`` created strictly before ``cutoff``"""
        result = await self.reservations.delete_many({
            "createdAt": {"$lt": cutoff},
            "status": {"$in": list(statuses)},
        })
        return result.deleted_count

    async def find_created_before(self, cutoff: datetime) -> List[Dict[str, Any]]:
        cursor = self.reservations.find({"createdAt": {"$lt": cutoff}})
        return await cursor.to_list(length=None)

    async def insert_archives(self, documents: List[Dict[str, Any]]) -> int:
        """Insert archive copies and return how many were new.

        Copies keep the reservation ``_id``; one already in the archive
        (left by a run that failed before deleting the originals) is
        skipped rather than treated as an error.
        """
        try:
            result = await self.archives.insert_many(documents, ordered=False)
        except BulkWriteError as e:
            errors = e.details.get("writeErrors", [])
            if not errors or any(error.get("code") != DUPLICATE_KEY_ERROR for error in errors):
                raise
            return e.details.get("nInserted", 0)
        return len(result.inserted_ids)

    async def delete_ids(self, ids: List[ObjectId]) -> int:
        result = await self.reservations.delete_many({"_id": {"$in": ids}})
        return result.deleted_count

    async def sample(self, limit: int = 1) -> List[Dict[str, Any]]:
        return await self.reservations.find().limit(limit).to_list(length=None)

    async def db_stats(self) -> Dict[str, Any]:
        """Raw ``dbStats`` output (byte counters, object and index counts)"""
        return await self.db.command("dbStats")
