# sahayata/repos/mongo.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import wraps
from typing import Dict, List

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from sahayata.core.config import Settings
from sahayata.core.errors import StorageError

logger = logging.getLogger(__name__)

# --------------------------------------------------
# Aggregation pipelines
# --------------------------------------------------
TOTAL_PIPELINE = [
    {"$group": {"_id": None, "totalAmount": {"$sum": "$amount"}}},
]

BY_CAUSE_PIPELINE = [
    {"$group": {"_id": "$cause", "totalAmount": {"$sum": "$amount"}, "count": {"$sum": 1}}},
    {"$project": {"_id": 0, "cause": "$_id", "totalAmount": 1, "count": 1}},
    {"$sort": {"totalAmount": -1}},
]


def _out(doc: Dict) -> Dict:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


def _wrap_errors(fn):
    @wraps(fn)
    async def inner(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except PyMongoError as exc:
            raise StorageError(f"{fn.__name__} failed: {exc}") from exc
    return inner


class MongoRepo:
    """Collections: donations, feedbacks, contactus."""

    def __init__(self, client: AsyncIOMotorClient, db: AsyncIOMotorDatabase):
        self._client = client
        self._db = db

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoRepo":
        client = AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)
        db = client.get_default_database(default=settings.mongo_db)
        logger.info("Using MongoDB database %r", db.name)
        return cls(client, db)

    @property
    def donations(self):
        return self._db["donations"]

    @property
    def feedbacks(self):
        return self._db["feedbacks"]

    @property
    def contacts(self):
        return self._db["contactus"]

    async def _insert(self, col, doc: Dict) -> Dict:
        doc = dict(doc)
        doc.setdefault("date", datetime.now(timezone.utc))
        res = await col.insert_one(doc)
        doc["_id"] = res.inserted_id
        return _out(doc)

    # ---- inserts
    @_wrap_errors
    async def insert_donation(self, doc: Dict) -> Dict:
        return await self._insert(self.donations, doc)

    @_wrap_errors
    async def insert_feedback(self, doc: Dict) -> Dict:
        return await self._insert(self.feedbacks, doc)

    @_wrap_errors
    async def insert_contact(self, doc: Dict) -> Dict:
        return await self._insert(self.contacts, doc)

    # ---- reports
    @_wrap_errors
    async def total_donated(self) -> float:
        rows = await self.donations.aggregate(TOTAL_PIPELINE).to_list(length=1)
        return rows[0]["totalAmount"] if rows else 0

    @_wrap_errors
    async def recent_donations(self, limit: int = 5) -> List[Dict]:
        cur = self.donations.find().sort("date", -1).limit(limit)
        return [_out(d) async for d in cur]

    @_wrap_errors
    async def donations_by_cause(self) -> List[Dict]:
        cur = self.donations.aggregate(BY_CAUSE_PIPELINE)
        return [row async for row in cur]

    @_wrap_errors
    async def list_donations(self) -> List[Dict]:
        cur = self.donations.find().sort("date", -1)
        return [_out(d) async for d in cur]

    # ---- lifecycle
    @_wrap_errors
    async def ping(self) -> None:
        await self._client.admin.command("ping")

    async def close(self) -> None:
        self._client.close()
