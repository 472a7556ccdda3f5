"""
Delivery tasks: generation at approval, per-task state machine, courier assignment.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from core import store
from core.exceptions import conflict_exception, not_found_exception, validation_exception
from models.common import CourierStatus, TaskStatus

logger = logging.getLogger(__name__)

# ── State machine ────────────────────────────────────────────────────────────
ALLOWED_TRANSITIONS: dict[TaskStatus, list[TaskStatus]] = {
    TaskStatus.PENDING: [
        TaskStatus.ASSIGNED,
    ],
    TaskStatus.ASSIGNED: [
        TaskStatus.IN_PROGRESS,
        TaskStatus.RESCHEDULED,
        TaskStatus.FAILED,
    ],
    TaskStatus.IN_PROGRESS: [
        TaskStatus.DELIVERED,
        TaskStatus.FAILED,
        TaskStatus.RESCHEDULED,
    ],
    TaskStatus.RESCHEDULED: [
        TaskStatus.ASSIGNED,
        TaskStatus.IN_PROGRESS,
        TaskStatus.FAILED,
    ],
    # Terminal states
    TaskStatus.DELIVERED: [],
    TaskStatus.FAILED:    [],
}

ACTIVE_STATUSES = {TaskStatus.ASSIGNED.value, TaskStatus.IN_PROGRESS.value}


def _task_id() -> str:
    return f"tsk_{uuid.uuid4().hex[:12]}"


def build_tasks(request: dict, beneficiary_ids: list, courier_id: str, now: datetime) -> list:
    """
    One task per selected beneficiary, already assigned to `courier_id` and
    scheduled at approval time. Ids are allocated here so the parent request
    can record them in the same write that approves it.
    """
    return [
        {
            "task_id":             _task_id(),
            "request_id":          request["request_id"],
            "beneficiary_id":      beneficiary_id,
            "package_template_id": request["package_template_id"],
            "courier_id":          courier_id,
            "status":              TaskStatus.ASSIGNED.value,
            "notes":               None,
            "failure_reason":      None,
            "created_at":          now,
            "scheduled_at":        now,
            "delivered_at":        None,
            "updated_at":          now,
        }
        for beneficiary_id in beneficiary_ids
    ]


async def get_task(task_id: str) -> dict:
    task = await store.tasks.get(task_id)
    if not task:
        raise not_found_exception("Task")
    return task


async def list_tasks(
    courier_id: Optional[str] = None,
    request_id: Optional[str] = None,
    beneficiary_id: Optional[str] = None,
    status: Optional[str] = None,
) -> list:
    query = {}
    if courier_id:
        query["courier_id"] = courier_id
    if request_id:
        query["request_id"] = request_id
    if beneficiary_id:
        query["beneficiary_id"] = beneficiary_id
    if status and status != "all":
        query["status"] = getattr(status, "value", status)
    return await store.tasks.find(query, sort=[("created_at", 1), ("task_id", 1)])


async def update_task_status(
    task_id: str,
    new_status: TaskStatus,
    notes: Optional[str] = None,
    failure_reason: Optional[str] = None,
    scheduled_at: Optional[datetime] = None,
) -> dict:
    """
    Moves a task along its state machine, then lets the parent request
    follow (approved → in_progress → completed).
    """
    task = await get_task(task_id)
    current = TaskStatus(task["status"])
    if new_status not in ALLOWED_TRANSITIONS.get(current, []):
        raise conflict_exception(f"Forbidden transition: {current.value} → {new_status.value}")
    if new_status == TaskStatus.FAILED and not (failure_reason or "").strip():
        raise validation_exception("A failure reason is required to fail a task")
    if new_status == TaskStatus.ASSIGNED and not task.get("courier_id"):
        raise validation_exception("Task has no courier: assign one first")

    now = datetime.now(timezone.utc)
    fields: dict = {"status": new_status.value}
    if notes is not None:
        fields["notes"] = notes
    if new_status == TaskStatus.FAILED:
        fields["failure_reason"] = failure_reason.strip()
    elif new_status == TaskStatus.RESCHEDULED:
        fields["scheduled_at"] = scheduled_at or now
    elif new_status == TaskStatus.DELIVERED:
        fields["delivered_at"] = now

    applied = await store.tasks.update(task_id, fields, expected={"status": current.value})
    if not applied:
        raise conflict_exception(f"Task {task_id} changed concurrently, it is no longer {current.value}")
    logger.info("Task %s: %s → %s", task_id, current.value, new_status.value)

    if new_status == TaskStatus.DELIVERED:
        if task.get("courier_id"):
            await store.couriers.update(task["courier_id"], inc={"completed_tasks": 1})
        await store.beneficiaries.update(
            task["beneficiary_id"], {"last_received": now}, inc={"total_packages": 1}
        )

    from services.request_service import sync_request_progress
    await sync_request_progress(task["request_id"])

    return await store.tasks.get(task_id)


async def assign_task(task_id: str, courier_id: str) -> dict:
    """(Re)assigns a pending or rescheduled task to an eligible courier."""
    task = await get_task(task_id)
    current = TaskStatus(task["status"])
    if TaskStatus.ASSIGNED not in ALLOWED_TRANSITIONS.get(current, []):
        raise conflict_exception(f"Task cannot be assigned while {current.value}")

    courier = await store.couriers.get(courier_id)
    if not courier:
        raise not_found_exception("Courier")
    if courier["status"] != CourierStatus.ACTIVE.value or not courier.get("is_humanitarian_approved"):
        raise validation_exception(f"Courier ineligible: {courier_id} is not an active approved courier")

    applied = await store.tasks.update(
        task_id,
        {"courier_id": courier_id, "status": TaskStatus.ASSIGNED.value},
        expected={"status": current.value},
    )
    if not applied:
        raise conflict_exception(f"Task {task_id} changed concurrently, it is no longer {current.value}")
    logger.info("Task %s assigned to %s", task_id, courier_id)
    return await store.tasks.get(task_id)
