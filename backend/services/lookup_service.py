"""
Lookup / query layer: pure, deterministic reads over the entity store.
"""
import logging
from typing import Optional

from config import settings
from core import store
from core.exceptions import not_found_exception
from core.geo import approx_distance_km
from models.common import CourierStatus, GeoPin, RequestType

logger = logging.getLogger(__name__)


def is_filter_set(value: Optional[str]) -> bool:
    return bool(value and value.strip() and value != "all")


# ── Beneficiaries ────────────────────────────────────────────────────────────

async def beneficiaries_by_area(
    governorate: Optional[str] = None,
    city: Optional[str] = None,
    district: Optional[str] = None,
) -> list:
    """Every provided filter must match; unset filters are wildcards. Sorted by beneficiary_id."""
    query = {}
    if is_filter_set(governorate):
        query["address.governorate"] = governorate
    if is_filter_set(city):
        query["address.city"] = city
    if is_filter_set(district):
        query["address.district"] = district
    return await store.beneficiaries.find(query, sort=[("beneficiary_id", 1)])


async def beneficiaries_by_family(family_id: str) -> list:
    return await store.beneficiaries.find({"family_id": family_id}, sort=[("beneficiary_id", 1)])


async def beneficiaries_by_organization(organization_id: str) -> list:
    return await store.beneficiaries.find(
        {"organization_id": organization_id}, sort=[("beneficiary_id", 1)]
    )


async def search_beneficiaries(
    search: Optional[str] = None,
    status: Optional[str] = None,
    identity_status: Optional[str] = None,
    organization_id: Optional[str] = None,
    family_id: Optional[str] = None,
) -> list:
    """Free text over name, national id and phone. "all" disables a filter."""
    query = {}
    if is_filter_set(status):
        query["status"] = getattr(status, "value", status)
    if is_filter_set(identity_status):
        query["identity_status"] = getattr(identity_status, "value", identity_status)
    if organization_id:
        query["organization_id"] = organization_id
    if family_id:
        query["family_id"] = family_id

    predicate = None
    if search and search.strip():
        term = search.strip()
        lowered = term.lower()

        def predicate(b: dict) -> bool:
            return (
                lowered in b.get("name", "").lower()
                or term in b.get("national_id", "")
                or term in b.get("phone", "")
            )

    return await store.beneficiaries.find(query, predicate=predicate, sort=[("beneficiary_id", 1)])


# ── Couriers ─────────────────────────────────────────────────────────────────

async def couriers_by_service_area(area: Optional[str] = None) -> list:
    """
    Active couriers serving `area`. Without an area every active courier is
    returned: small requests do not need area granularity.
    """
    query: dict = {"status": CourierStatus.ACTIVE.value}
    if is_filter_set(area):
        query["service_areas"] = area
    return await store.couriers.find(query, sort=[("courier_id", 1)])


async def eligible_couriers_for_request(request: dict) -> list:
    """Humanitarian-approved couriers allowed to take the request's tasks."""
    area = None
    if request["type"] == RequestType.BULK.value and is_filter_set(request.get("target_district")):
        area = request["target_district"]
    candidates = await couriers_by_service_area(area)
    return [c for c in candidates if c.get("is_humanitarian_approved")]


# ── Templates ────────────────────────────────────────────────────────────────

async def template_by_id(template_id: str) -> Optional[dict]:
    """None on a miss: this is a query, not an invariant check."""
    return await store.package_templates.get(template_id)


# ── Request targets ──────────────────────────────────────────────────────────

async def resolve_request_beneficiaries(request: dict) -> list:
    """
    Beneficiaries a request targets, in selection order: ascending
    beneficiary_id for a bulk area, requester order for explicit ids.
    Unknown ids are dropped.
    """
    if request["type"] == RequestType.BULK.value:
        return await beneficiaries_by_area(
            request.get("target_governorate"),
            request.get("target_city"),
            request.get("target_district"),
        )

    ids = list(dict.fromkeys(request.get("beneficiary_ids") or []))
    if not ids:
        return []
    found = await store.beneficiaries.find({"beneficiary_id": {"$in": ids}})
    by_id = {b["beneficiary_id"]: b for b in found}
    return [by_id[i] for i in ids if i in by_id]


# ── Courier proximity ────────────────────────────────────────────────────────

async def nearby_tasks(courier_id: str, radius_km: Optional[float] = None) -> list:
    """
    Tasks held by other couriers (or nobody) whose beneficiary is within
    `radius_km` of the courier's current position, nearest first.
    """
    radius_km = settings.NEARBY_TASK_RADIUS_KM if radius_km is None else radius_km

    courier = await store.couriers.get(courier_id)
    if not courier:
        raise not_found_exception("Courier")
    if not courier.get("current_location"):
        return []
    origin = GeoPin(**courier["current_location"])

    candidates = await store.tasks.find({"courier_id": {"$ne": courier_id}})
    if not candidates:
        return []
    beneficiary_ids = list({t["beneficiary_id"] for t in candidates})
    located = {
        b["beneficiary_id"]: b
        for b in await store.beneficiaries.find({"beneficiary_id": {"$in": beneficiary_ids}})
        if b.get("location")
    }

    result = []
    for task in candidates:
        beneficiary = located.get(task["beneficiary_id"])
        if not beneficiary:
            continue
        dist = approx_distance_km(origin, GeoPin(**beneficiary["location"]))
        if dist <= radius_km:
            result.append({**task, "distance_km": round(dist, 2)})
    result.sort(key=lambda t: t["distance_km"])
    return result
