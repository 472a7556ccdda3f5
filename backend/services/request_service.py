"""
Distribution request service: state machine, approval → task generation, event timeline.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from config import settings
from core import store
from core.exceptions import conflict_exception, not_found_exception, validation_exception
from models.common import Priority, RequestStatus, RequestType, TaskStatus, TemplateStatus
from models.distribution_request import DistributionRequestCreate
from services import lookup_service, task_service
from services.alert_service import derive_pending_requests_alert

logger = logging.getLogger(__name__)

# ── State machine ────────────────────────────────────────────────────────────
ALLOWED_TRANSITIONS: dict[RequestStatus, list[RequestStatus]] = {
    RequestStatus.PENDING: [
        RequestStatus.APPROVED,
        RequestStatus.REJECTED,
    ],
    RequestStatus.APPROVED: [
        RequestStatus.IN_PROGRESS,
        RequestStatus.COMPLETED,
    ],
    RequestStatus.IN_PROGRESS: [
        RequestStatus.COMPLETED,
    ],
    # Terminal states
    RequestStatus.REJECTED:  [],
    RequestStatus.COMPLETED: [],
}

# Fixed lookup by priority, not computed from load or distance
ESTIMATED_DELIVERY_TIME: dict[Priority, str] = {
    Priority.URGENT: "6-12 hours",
    Priority.HIGH:   "1-2 days",
    Priority.NORMAL: "2-3 days",
    Priority.LOW:    "3-5 days",
}

_FINISHED_TASK_STATUSES = {TaskStatus.DELIVERED.value, TaskStatus.FAILED.value}
_STARTED_TASK_STATUSES  = {TaskStatus.IN_PROGRESS.value, TaskStatus.DELIVERED.value}


def _request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def _event_id() -> str:
    return f"evt_{uuid.uuid4().hex[:12]}"


def _has_area(data: DistributionRequestCreate) -> bool:
    return any(
        lookup_service.is_filter_set(value)
        for value in (data.target_governorate, data.target_city, data.target_district)
    )


async def _record_event(
    request_id: str,
    event_type: str,
    actor_id: str,
    from_status: Optional[RequestStatus] = None,
    to_status: Optional[RequestStatus] = None,
    notes: Optional[str] = None,
    metadata: Optional[dict] = None,
) -> None:
    event = {
        "event_id":    _event_id(),
        "request_id":  request_id,
        "event_type":  event_type,
        "from_status": from_status.value if from_status else None,
        "to_status":   to_status.value if to_status else None,
        "actor_id":    actor_id,
        "notes":       notes,
        "metadata":    metadata or {},
        "created_at":  datetime.now(timezone.utc),
    }
    await store.request_events.insert(event)


async def _require_request(request_id: str) -> dict:
    request = await store.distribution_requests.get(request_id)
    if not request:
        raise not_found_exception("Distribution request")
    return request


def _require_pending(request: dict) -> None:
    if request["status"] != RequestStatus.PENDING.value:
        raise conflict_exception(
            f"Request not pending: {request['request_id']} is {request['status']}"
        )


async def _transition(
    request: dict,
    new_status: RequestStatus,
    actor_id: str,
    fields: Optional[dict] = None,
    notes: Optional[str] = None,
    metadata: Optional[dict] = None,
) -> dict:
    """
    Validates the transition and writes it guarded by the current status.
    A concurrent writer that got there first makes the guard miss and the
    call fails with a conflict instead of overwriting.
    """
    request_id = request["request_id"]
    current = RequestStatus(request["status"])
    if new_status not in ALLOWED_TRANSITIONS.get(current, []):
        raise conflict_exception(f"Forbidden transition: {current.value} → {new_status.value}")

    applied = await store.distribution_requests.update(
        request_id,
        {"status": new_status.value, **(fields or {})},
        expected={"status": current.value},
    )
    if not applied:
        raise conflict_exception(
            f"Request not {current.value}: {request_id} was updated concurrently"
        )

    await _record_event(
        request_id=request_id,
        event_type="STATUS_CHANGED",
        actor_id=actor_id,
        from_status=current,
        to_status=new_status,
        notes=notes,
        metadata=metadata,
    )
    logger.info("Request %s: %s → %s (by %s)", request_id, current.value, new_status.value, actor_id)
    return await store.distribution_requests.get(request_id)


async def _rollback_approval(request_id: str, admin_id: str) -> None:
    """Puts a request whose tasks could not be stored back to pending."""
    logger.error("Request %s: task insertion failed, reverting approval", request_id)
    await store.tasks.delete_many({"request_id": request_id})
    await store.distribution_requests.update(
        request_id,
        {
            "status":              RequestStatus.PENDING.value,
            "approved_quantity":   None,
            "assigned_courier_id": None,
            "admin_notes":         None,
            "approved_by":         None,
            "approval_date":       None,
            "generated_task_ids":  [],
        },
        expected={"status": RequestStatus.APPROVED.value},
    )
    await _record_event(
        request_id=request_id,
        event_type="APPROVAL_REVERTED",
        actor_id=admin_id,
        from_status=RequestStatus.APPROVED,
        to_status=RequestStatus.PENDING,
    )


# ── Create ───────────────────────────────────────────────────────────────────

async def create_request(data: DistributionRequestCreate) -> dict:
    if data.requested_quantity <= 0:
        raise validation_exception("Requested quantity must be greater than 0")

    template = await lookup_service.template_by_id(data.package_template_id)
    if not template:
        raise not_found_exception("Package template")
    if template["status"] != TemplateStatus.ACTIVE.value:
        raise validation_exception(f"Package template {data.package_template_id} is not active")

    beneficiary_ids: list = []
    if data.type == RequestType.BULK:
        if not _has_area(data):
            raise validation_exception("A bulk request needs a target governorate, city or district")
        in_area = await lookup_service.beneficiaries_by_area(
            data.target_governorate, data.target_city, data.target_district,
        )
        if not in_area:
            raise validation_exception("No beneficiaries in the target area")
        if data.requested_quantity > len(in_area):
            raise validation_exception(
                f"Requested quantity ({data.requested_quantity}) exceeds the "
                f"beneficiaries in the target area ({len(in_area)})"
            )
    else:
        beneficiary_ids = list(dict.fromkeys(data.beneficiary_ids))
        if not beneficiary_ids:
            raise validation_exception("Beneficiary ids are required for individual and family requests")
        found = await store.beneficiaries.find({"beneficiary_id": {"$in": beneficiary_ids}})
        found_ids = {b["beneficiary_id"] for b in found}
        unresolved = [i for i in beneficiary_ids if i not in found_ids]
        if unresolved:
            raise validation_exception(f"Unknown beneficiary ids: {', '.join(unresolved)}")
        if data.requested_quantity > len(beneficiary_ids):
            raise validation_exception(
                f"Requested quantity ({data.requested_quantity}) exceeds the "
                f"number of beneficiaries listed ({len(beneficiary_ids)})"
            )

    is_bulk = data.type == RequestType.BULK
    now = datetime.now(timezone.utc)
    request_doc = {
        "request_id":              _request_id(),
        "requester_id":            data.requester_id,
        "requester_type":          data.requester_type.value,
        "requester_name":          data.requester_name,
        "type":                    data.type.value,
        "priority":                data.priority.value,
        "package_template_id":     data.package_template_id,
        "beneficiary_ids":         beneficiary_ids,
        "target_governorate":      data.target_governorate if is_bulk else None,
        "target_city":             data.target_city if is_bulk else None,
        "target_district":         data.target_district if is_bulk else None,
        "requested_quantity":      data.requested_quantity,
        "approved_quantity":       None,
        "status":                  RequestStatus.PENDING.value,
        "request_date":            now,
        "notes":                   data.notes,
        "estimated_cost":          float(data.requested_quantity * template["estimated_cost"]),
        "estimated_delivery_time": ESTIMATED_DELIVERY_TIME[data.priority],
        "assigned_courier_id":     None,
        "admin_notes":             None,
        "approved_by":             None,
        "approval_date":           None,
        "rejection_reason":        None,
        "generated_task_ids":      [],
        "created_at":              now,
        "updated_at":              now,
    }
    created = await store.distribution_requests.insert(request_doc)
    await store.package_templates.update(data.package_template_id, inc={"usage_count": 1})

    await _record_event(
        request_id=request_doc["request_id"],
        event_type="REQUEST_CREATED",
        actor_id=data.requester_id,
        to_status=RequestStatus.PENDING,
    )
    logger.info(
        "Request %s created by %s (%s, %d × %s, %s)",
        request_doc["request_id"], data.requester_id, data.type.value,
        data.requested_quantity, data.package_template_id, data.priority.value,
    )

    await derive_pending_requests_alert()
    return created


# ── Approve / reject ─────────────────────────────────────────────────────────

async def approve_request(
    request_id: str,
    approved_quantity: int,
    courier_id: str,
    admin_id: str,
    admin_notes: Optional[str] = None,
) -> dict:
    """
    Approves a pending request and generates exactly `approved_quantity`
    assigned tasks. Every precondition is checked before anything is written.
    """
    request = await _require_request(request_id)
    _require_pending(request)

    if not 0 < approved_quantity <= request["requested_quantity"]:
        raise validation_exception(
            f"Quantity out of range: approved quantity must be between 1 and {request['requested_quantity']}"
        )

    courier = await store.couriers.get(courier_id)
    if not courier:
        raise not_found_exception("Courier")
    if not courier.get("is_humanitarian_approved"):
        raise validation_exception(
            f"Courier ineligible: {courier_id} is not approved for humanitarian deliveries"
        )
    eligible = await lookup_service.eligible_couriers_for_request(request)
    if courier_id not in {c["courier_id"] for c in eligible}:
        raise validation_exception(
            f"Courier ineligible: {courier_id} is not an active courier for this request's area"
        )

    targets = await lookup_service.resolve_request_beneficiaries(request)
    if len(targets) < approved_quantity:
        raise validation_exception(
            f"Quantity out of range: only {len(targets)} beneficiaries match the request target"
        )
    selected = [b["beneficiary_id"] for b in targets[:approved_quantity]]

    now = datetime.now(timezone.utc)
    new_tasks = task_service.build_tasks(request, selected, courier_id, now)

    approved = await _transition(
        request,
        RequestStatus.APPROVED,
        actor_id=admin_id,
        fields={
            "approved_quantity":   approved_quantity,
            "assigned_courier_id": courier_id,
            "admin_notes":         admin_notes,
            "approved_by":         admin_id,
            "approval_date":       now,
            "generated_task_ids":  [t["task_id"] for t in new_tasks],
        },
        notes=admin_notes,
        metadata={"approved_quantity": approved_quantity, "courier_id": courier_id},
    )
    try:
        await store.tasks.insert_many(new_tasks)
    except Exception:
        await _rollback_approval(request_id, admin_id)
        raise
    logger.info("Request %s: %d task(s) generated for courier %s", request_id, len(new_tasks), courier_id)

    await derive_pending_requests_alert()
    return approved


async def reject_request(request_id: str, rejection_reason: str, admin_id: str) -> dict:
    request = await _require_request(request_id)
    _require_pending(request)

    reason = (rejection_reason or "").strip()
    if not reason:
        raise validation_exception("A rejection reason is required")

    rejected = await _transition(
        request,
        RequestStatus.REJECTED,
        actor_id=admin_id,
        fields={
            "rejection_reason": reason,
            "approved_by":      admin_id,
            "approval_date":    datetime.now(timezone.utc),
        },
        notes=reason,
    )

    await derive_pending_requests_alert()
    return rejected


# ── Task-driven progress ─────────────────────────────────────────────────────

async def sync_request_progress(request_id: str) -> Optional[dict]:
    """
    approved → in_progress once a task has started, approved / in_progress →
    completed once every task is delivered or failed.
    """
    request = await store.distribution_requests.get(request_id)
    if not request:
        return None
    current = RequestStatus(request["status"])
    if current not in (RequestStatus.APPROVED, RequestStatus.IN_PROGRESS):
        return request

    statuses = {t["status"] for t in await store.tasks.find({"request_id": request_id})}
    if statuses and statuses <= _FINISHED_TASK_STATUSES:
        target = RequestStatus.COMPLETED
    elif current == RequestStatus.APPROVED and statuses & _STARTED_TASK_STATUSES:
        target = RequestStatus.IN_PROGRESS
    else:
        return request

    return await _transition(request, target, actor_id="system")


# ── Queries ──────────────────────────────────────────────────────────────────

async def get_request(request_id: str) -> dict:
    return await _require_request(request_id)


async def list_requests(
    status: Optional[str] = None,
    type: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
) -> list:
    """Newest first. Search matches requester name, request id or template name."""
    query = {}
    for field, value in (("status", status), ("type", type), ("priority", priority)):
        if value and value != "all":
            query[field] = getattr(value, "value", value)

    predicate = None
    if search and search.strip():
        term = search.strip().lower()
        templates = {
            t["template_id"]: t["name"].lower()
            for t in await store.package_templates.find()
        }

        def predicate(r: dict) -> bool:
            return (
                term in r["requester_name"].lower()
                or term in r["request_id"].lower()
                or term in templates.get(r["package_template_id"], "")
            )

    return await store.distribution_requests.find(
        query, predicate=predicate, sort=[("request_date", -1)]
    )


async def request_statistics() -> dict:
    requests = await store.distribution_requests.find()
    by_status   = {s.value: 0 for s in RequestStatus}
    by_priority = {p.value: 0 for p in Priority}
    urgent_pending = 0
    for r in requests:
        by_status[r["status"]] += 1
        by_priority[r["priority"]] += 1
        if r["status"] == RequestStatus.PENDING.value and r["priority"] == Priority.URGENT.value:
            urgent_pending += 1
    return {
        "total":          len(requests),
        "by_status":      by_status,
        "by_priority":    by_priority,
        "urgent_pending": urgent_pending,
        "estimated_cost": sum(r["estimated_cost"] for r in requests),
        "currency":       settings.CURRENCY,
    }


async def get_request_timeline(request_id: str) -> list:
    await _require_request(request_id)
    return await store.request_events.find(
        {"request_id": request_id}, sort=[("created_at", 1)]
    )
