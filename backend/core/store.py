"""
Entity store: one Repository per MongoDB collection, keyed by the entity's id field.
"""
from datetime import datetime, timezone
from typing import Callable, Optional

from database import db

_NO_ID = {"_id": 0}


class Repository:
    """
    CRUD access to a collection. Reads never expose Mongo's `_id`.

    `update(..., expected=...)` is a compare-and-set: the write only lands if
    the stored document still matches `expected`. The lifecycle relies on it
    (guard on `status`) so two admins cannot both approve the same request.
    """

    def __init__(self, collection: str, id_field: str):
        self.collection = collection
        self.id_field = id_field

    @property
    def _coll(self):
        return db[self.collection]

    async def get(self, entity_id: str) -> Optional[dict]:
        return await self._coll.find_one({self.id_field: entity_id}, _NO_ID)

    async def find(
        self,
        query: Optional[dict] = None,
        predicate: Optional[Callable[[dict], bool]] = None,
        sort: Optional[list] = None,
    ) -> list:
        cursor = self._coll.find(query or {}, _NO_ID)
        if sort:
            cursor = cursor.sort(sort)
        docs = await cursor.to_list(length=None)
        if predicate is not None:
            docs = [d for d in docs if predicate(d)]
        return docs

    async def count(self, query: Optional[dict] = None) -> int:
        return await self._coll.count_documents(query or {})

    async def insert(self, doc: dict) -> dict:
        await self._coll.insert_one(doc)
        return {k: v for k, v in doc.items() if k != "_id"}

    async def insert_many(self, docs: list) -> list:
        if not docs:
            return []
        await self._coll.insert_many(docs)
        return [{k: v for k, v in d.items() if k != "_id"} for d in docs]

    async def replace(self, entity_id: str, doc: dict) -> bool:
        doc = {k: v for k, v in doc.items() if k != "_id"}
        doc[self.id_field] = entity_id
        doc["updated_at"] = datetime.now(timezone.utc)
        result = await self._coll.replace_one({self.id_field: entity_id}, doc)
        return result.matched_count == 1

    async def update(
        self,
        entity_id: str,
        fields: Optional[dict] = None,
        expected: Optional[dict] = None,
        inc: Optional[dict] = None,
    ) -> bool:
        """Returns False when no document matched (unknown id or `expected` guard failed)."""
        query = {self.id_field: entity_id, **(expected or {})}
        update: dict = {"$set": {**(fields or {}), "updated_at": datetime.now(timezone.utc)}}
        if inc:
            update["$inc"] = inc
        result = await self._coll.update_one(query, update)
        return result.matched_count == 1

    async def delete(self, entity_id: str) -> bool:
        result = await self._coll.delete_one({self.id_field: entity_id})
        return result.deleted_count == 1

    async def delete_many(self, query: Optional[dict] = None) -> int:
        result = await self._coll.delete_many(query or {})
        return result.deleted_count


# ── Collections ──────────────────────────────────────────────────────────────
beneficiaries         = Repository("beneficiaries", "beneficiary_id")
package_templates     = Repository("package_templates", "template_id")
couriers              = Repository("couriers", "courier_id")
organizations         = Repository("organizations", "organization_id")
families              = Repository("families", "family_id")
distribution_requests = Repository("distribution_requests", "request_id")
request_events        = Repository("request_events", "event_id")
tasks                 = Repository("tasks", "task_id")
alerts                = Repository("alerts", "alert_id")
