"""
Courier administration: roster, humanitarian approval, live position.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from core import store
from core.exceptions import conflict_exception, not_found_exception
from models.courier import CourierCreate, CourierUpdate, LocationUpdate
from services.task_service import ACTIVE_STATUSES

logger = logging.getLogger(__name__)


def _courier_id() -> str:
    return f"cou_{uuid.uuid4().hex[:12]}"


async def get_courier(courier_id: str) -> dict:
    courier = await store.couriers.get(courier_id)
    if not courier:
        raise not_found_exception("Courier")
    return courier


async def list_couriers(
    status: Optional[str] = None,
    approved_only: bool = False,
    search: Optional[str] = None,
) -> list:
    query: dict = {}
    if status and status != "all":
        query["status"] = getattr(status, "value", status)
    if approved_only:
        query["is_humanitarian_approved"] = True

    predicate = None
    if search and search.strip():
        term = search.strip().lower()

        def predicate(c: dict) -> bool:
            return term in c["name"].lower() or term in c["phone"]

    return await store.couriers.find(query, predicate=predicate, sort=[("courier_id", 1)])


async def create_courier(data: CourierCreate) -> dict:
    now = datetime.now(timezone.utc)
    courier_doc = {
        "courier_id":               _courier_id(),
        "name":                     data.name,
        "phone":                    data.phone,
        "email":                    data.email,
        "status":                   data.status.value,
        "is_humanitarian_approved": data.is_humanitarian_approved,
        "rating":                   0.0,
        "completed_tasks":          0,
        "current_location":         data.current_location.model_dump() if data.current_location else None,
        "service_areas":            data.service_areas,
        "created_at":               now,
        "updated_at":               now,
    }
    created = await store.couriers.insert(courier_doc)
    logger.info("Courier %s created", courier_doc["courier_id"])
    return created


async def update_courier(courier_id: str, data: CourierUpdate) -> dict:
    await get_courier(courier_id)
    fields = data.model_dump(exclude_unset=True, mode="json")
    if fields:
        await store.couriers.update(courier_id, fields)
    return await store.couriers.get(courier_id)


async def update_location(courier_id: str, location: LocationUpdate) -> dict:
    await get_courier(courier_id)
    await store.couriers.update(courier_id, {"current_location": {"lat": location.lat, "lng": location.lng}})
    return await store.couriers.get(courier_id)


async def delete_courier(courier_id: str) -> None:
    """Refused while the courier still holds assigned or in-progress tasks."""
    await get_courier(courier_id)
    active = await store.tasks.count({
        "courier_id": courier_id,
        "status":     {"$in": list(ACTIVE_STATUSES)},
    })
    if active:
        raise conflict_exception(f"Courier {courier_id} still has {active} active task(s)")
    await store.couriers.delete(courier_id)
    logger.info("Courier %s deleted", courier_id)
