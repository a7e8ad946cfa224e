# sahayata/repos/inmemory.py
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List


def _id() -> str:
    return uuid.uuid4().hex


def _by_date_desc(docs) -> List[dict]:
    # sorted() is stable, so equal dates keep insertion order
    return sorted(docs, key=lambda d: d["date"], reverse=True)


class InMemoryRepo:
    """Process-local store with the same contract as MongoRepo."""

    def __init__(self):
        self.donations: Dict[str, dict] = {}
        self.feedbacks: Dict[str, dict] = {}
        self.contacts: Dict[str, dict] = {}

    def _insert(self, bucket: Dict[str, dict], doc: dict) -> dict:
        doc = dict(doc)
        doc.setdefault("date", datetime.now(timezone.utc))
        doc["id"] = _id()
        bucket[doc["id"]] = doc
        return dict(doc)

    # Inserts
    async def insert_donation(self, doc: dict) -> dict:
        return self._insert(self.donations, doc)

    async def insert_feedback(self, doc: dict) -> dict:
        return self._insert(self.feedbacks, doc)

    async def insert_contact(self, doc: dict) -> dict:
        return self._insert(self.contacts, doc)

    # Reports
    async def total_donated(self) -> float:
        return sum(d["amount"] for d in self.donations.values())

    async def recent_donations(self, limit: int = 5) -> List[dict]:
        return [dict(d) for d in _by_date_desc(self.donations.values())[:limit]]

    async def donations_by_cause(self) -> List[dict]:
        totals = defaultdict(float)
        counts = defaultdict(int)
        for d in self.donations.values():
            totals[d["cause"]] += d["amount"]
            counts[d["cause"]] += 1
        rows = [{"cause": c, "totalAmount": totals[c], "count": counts[c]} for c in totals]
        return sorted(rows, key=lambda r: r["totalAmount"], reverse=True)

    async def list_donations(self) -> List[dict]:
        return [dict(d) for d in _by_date_desc(self.donations.values())]

    # Lifecycle
    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        return None
