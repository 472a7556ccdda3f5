"""
Statistics: folds over the current store state. Nothing here is cached or
persisted, so every figure is consistent with the records at call time.
"""
import logging
from collections import Counter

from core import store
from models.common import AccountStatus, CourierStatus, IdentityStatus, TaskStatus
from services.request_service import request_statistics

logger = logging.getLogger(__name__)


def _rate(part: int, whole: int) -> float:
    """Percentage rounded to one decimal, 0.0 on an empty denominator."""
    return round(part / whole * 100, 1) if whole else 0.0


def _average(values: list) -> float:
    return round(sum(values) / len(values), 1) if values else 0.0


# ── Beneficiaries ────────────────────────────────────────────────────────────

async def beneficiary_statistics() -> dict:
    beneficiaries = await store.beneficiaries.find()
    identity = Counter(b["identity_status"] for b in beneficiaries)
    account  = Counter(b["status"] for b in beneficiaries)
    return {
        "total":     len(beneficiaries),
        "verified":  identity[IdentityStatus.VERIFIED.value],
        "pending":   identity[IdentityStatus.PENDING.value],
        "rejected":  identity[IdentityStatus.REJECTED.value],
        "active":    account[AccountStatus.ACTIVE.value],
        "suspended": account[AccountStatus.SUSPENDED.value],
    }


# ── Couriers ─────────────────────────────────────────────────────────────────

async def courier_statistics() -> dict:
    couriers = await store.couriers.find()
    by_status = Counter(c["status"] for c in couriers)
    return {
        "total":                 len(couriers),
        "active":                by_status[CourierStatus.ACTIVE.value],
        "busy":                  by_status[CourierStatus.BUSY.value],
        "offline":               by_status[CourierStatus.OFFLINE.value],
        "approved":              sum(1 for c in couriers if c.get("is_humanitarian_approved")),
        "average_rating":        _average([c.get("rating", 0.0) for c in couriers]),
        "total_completed_tasks": sum(c.get("completed_tasks", 0) for c in couriers),
    }


# ── Tasks ────────────────────────────────────────────────────────────────────

async def task_statistics() -> dict:
    tasks = await store.tasks.find()
    by_status = {s.value: 0 for s in TaskStatus}
    for t in tasks:
        by_status[t["status"]] += 1
    return {
        "total":        len(tasks),
        "by_status":    by_status,
        "success_rate": _rate(by_status[TaskStatus.DELIVERED.value], len(tasks)),
    }


# ── Requesters ───────────────────────────────────────────────────────────────

async def _requester_summary(requester: dict, id_field: str) -> dict:
    members = await store.beneficiaries.find({id_field: requester[id_field]})
    member_ids = [b["beneficiary_id"] for b in members]
    tasks = await store.tasks.find({"beneficiary_id": {"$in": member_ids}}) if member_ids else []
    delivered = sum(1 for t in tasks if t["status"] == TaskStatus.DELIVERED.value)
    return {
        **requester,
        "beneficiaries_count": len(members),
        "packages_count":      len(tasks),
        "delivered_count":     delivered,
        "completion_rate":     _rate(delivered, len(tasks)),
    }


async def organization_summary(organization: dict) -> dict:
    return await _requester_summary(organization, "organization_id")


async def family_summary(family: dict) -> dict:
    return await _requester_summary(family, "family_id")


# ── Report ───────────────────────────────────────────────────────────────────

async def comprehensive_report() -> dict:
    beneficiaries = await store.beneficiaries.find()
    beneficiary_stats = await beneficiary_statistics()
    by_governorate = Counter(b["address"]["governorate"] for b in beneficiaries)

    task_stats    = await task_statistics()
    courier_stats = await courier_statistics()

    organizations = await store.organizations.find()
    families      = await store.families.find()

    return {
        "beneficiaries": {
            **beneficiary_stats,
            "verification_rate": _rate(beneficiary_stats["verified"], beneficiary_stats["total"]),
            "by_governorate":    dict(sorted(by_governorate.items())),
        },
        "tasks": task_stats,
        "organizations": {
            "total":  len(organizations),
            "active": sum(1 for o in organizations if o["status"] == AccountStatus.ACTIVE.value),
        },
        "families": {
            "total":           len(families),
            "average_members": _average([f.get("members_count", 1) for f in families]),
        },
        "couriers": {
            "total":          courier_stats["total"],
            "active":         courier_stats["active"],
            "average_rating": courier_stats["average_rating"],
        },
        "requests": await request_statistics(),
    }
