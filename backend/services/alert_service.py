"""
Alerts: derived "pending requests" notice plus the admin inbox operations.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from core import store
from core.exceptions import not_found_exception
from models.alert import AlertCreate
from models.common import AlertPriority, AlertType, Priority, RequestStatus

logger = logging.getLogger(__name__)

PENDING_REQUESTS_TITLE = "Pending distribution requests"


def _alert_id() -> str:
    return f"alr_{uuid.uuid4().hex[:12]}"


def _alert_doc(
    alert_type: AlertType,
    title: str,
    description: str,
    priority: AlertPriority,
    related_id: Optional[str] = None,
    related_type: Optional[str] = None,
) -> dict:
    return {
        "alert_id":     _alert_id(),
        "type":         alert_type.value,
        "title":        title,
        "description":  description,
        "related_id":   related_id,
        "related_type": related_type,
        "priority":     priority.value,
        "is_read":      False,
        "created_at":   datetime.now(timezone.utc),
    }


async def create_alert(data: AlertCreate) -> dict:
    doc = _alert_doc(
        data.type, data.title, data.description, data.priority,
        related_id=data.related_id, related_type=data.related_type,
    )
    created = await store.alerts.insert(doc)
    logger.info("Alert %s created (%s, %s)", doc["alert_id"], doc["type"], doc["priority"])
    return created


async def derive_pending_requests_alert() -> Optional[dict]:
    """
    Emits at most one unread pending_requests alert. Nothing is created when
    there are no pending requests or an unread one already exists; once the
    admin reads it, the next change may raise a fresh one. When the queue
    drains, the outstanding alert is marked read so a later request starts a
    new round.
    """
    pending = await store.distribution_requests.find({"status": RequestStatus.PENDING.value})
    if not pending:
        stale = await store.alerts.find({
            "type":    AlertType.PENDING_REQUESTS.value,
            "is_read": False,
        })
        for alert in stale:
            await store.alerts.update(alert["alert_id"], {"is_read": True})
        return None

    unread = await store.alerts.count({
        "type":    AlertType.PENDING_REQUESTS.value,
        "is_read": False,
    })
    if unread:
        return None

    has_urgent = any(r["priority"] == Priority.URGENT.value for r in pending)
    return await create_alert(AlertCreate(
        type=AlertType.PENDING_REQUESTS,
        title=PENDING_REQUESTS_TITLE,
        description=f"{len(pending)} distribution request(s) awaiting review",
        related_type="distribution_request",
        priority=AlertPriority.HIGH if has_urgent else AlertPriority.MEDIUM,
    ))


# ── Inbox ────────────────────────────────────────────────────────────────────

async def list_alerts(unread_only: bool = False, priority: Optional[str] = None) -> list:
    query: dict = {}
    if unread_only:
        query["is_read"] = False
    if priority and priority != "all":
        query["priority"] = getattr(priority, "value", priority)
    return await store.alerts.find(query, sort=[("created_at", -1)])


async def unread_alerts() -> list:
    return await list_alerts(unread_only=True)


async def critical_alerts() -> list:
    return await list_alerts(unread_only=True, priority=AlertPriority.CRITICAL.value)


async def mark_alert_read(alert_id: str) -> dict:
    if not await store.alerts.update(alert_id, {"is_read": True}):
        raise not_found_exception("Alert")
    return await store.alerts.get(alert_id)


async def remove_alert(alert_id: str) -> None:
    if not await store.alerts.delete(alert_id):
        raise not_found_exception("Alert")


async def clear_alerts() -> int:
    removed = await store.alerts.delete_many()
    logger.info("Cleared %d alert(s)", removed)
    return removed
