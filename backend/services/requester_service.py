"""
Organizations and families: the parties that file distribution requests.
Reads always come back with derived counts (see statistics_service).
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from core import store
from core.exceptions import not_found_exception
from models.requester import FamilyCreate, FamilyUpdate, OrganizationCreate, OrganizationUpdate
from services.statistics_service import family_summary, organization_summary

logger = logging.getLogger(__name__)


def _organization_id() -> str:
    return f"org_{uuid.uuid4().hex[:12]}"


def _family_id() -> str:
    return f"fam_{uuid.uuid4().hex[:12]}"


def _matches(doc: dict, search: Optional[str], status: Optional[str]) -> bool:
    if status and status != "all" and doc["status"] != getattr(status, "value", status):
        return False
    if search and search.strip():
        return search.strip().lower() in doc["name"].lower()
    return True


# ── Organizations ────────────────────────────────────────────────────────────

async def create_organization(data: OrganizationCreate) -> dict:
    now = datetime.now(timezone.utc)
    organization_doc = {
        "organization_id": _organization_id(),
        "name":            data.name,
        "type":            data.type,
        "phone":           data.phone,
        "email":           data.email,
        "address":         data.address,
        "status":          data.status.value,
        "created_at":      now,
        "updated_at":      now,
    }
    created = await store.organizations.insert(organization_doc)
    logger.info("Organization %s created", organization_doc["organization_id"])
    return await organization_summary(created)


async def get_organization(organization_id: str) -> dict:
    organization = await store.organizations.get(organization_id)
    if not organization:
        raise not_found_exception("Organization")
    return await organization_summary(organization)


async def list_organizations(search: Optional[str] = None, status: Optional[str] = None) -> list:
    organizations = await store.organizations.find(
        predicate=lambda o: _matches(o, search, status), sort=[("name", 1)]
    )
    return [await organization_summary(o) for o in organizations]


async def update_organization(organization_id: str, data: OrganizationUpdate) -> dict:
    if not await store.organizations.get(organization_id):
        raise not_found_exception("Organization")
    fields = data.model_dump(exclude_unset=True, mode="json")
    if fields:
        await store.organizations.update(organization_id, fields)
    return await get_organization(organization_id)


# ── Families ─────────────────────────────────────────────────────────────────

async def create_family(data: FamilyCreate) -> dict:
    now = datetime.now(timezone.utc)
    family_doc = {
        "family_id":      _family_id(),
        "name":           data.name,
        "head_of_family": data.head_of_family,
        "phone":          data.phone,
        "members_count":  data.members_count,
        "status":         data.status.value,
        "created_at":     now,
        "updated_at":     now,
    }
    created = await store.families.insert(family_doc)
    logger.info("Family %s created", family_doc["family_id"])
    return await family_summary(created)


async def get_family(family_id: str) -> dict:
    family = await store.families.get(family_id)
    if not family:
        raise not_found_exception("Family")
    return await family_summary(family)


async def list_families(search: Optional[str] = None, status: Optional[str] = None) -> list:
    families = await store.families.find(
        predicate=lambda f: _matches(f, search, status), sort=[("name", 1)]
    )
    return [await family_summary(f) for f in families]


async def update_family(family_id: str, data: FamilyUpdate) -> dict:
    if not await store.families.get(family_id):
        raise not_found_exception("Family")
    fields = data.model_dump(exclude_unset=True, mode="json")
    if fields:
        await store.families.update(family_id, fields)
    return await get_family(family_id)
