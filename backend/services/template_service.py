"""
Package templates: the catalogue requests draw from.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from core import store
from core.exceptions import not_found_exception
from models.common import TemplateStatus
from models.package_template import PackageTemplateCreate

logger = logging.getLogger(__name__)


def _template_id() -> str:
    return f"tpl_{uuid.uuid4().hex[:12]}"


async def get_template(template_id: str) -> dict:
    template = await store.package_templates.get(template_id)
    if not template:
        raise not_found_exception("Package template")
    return template


async def list_templates(category: Optional[str] = None, status: Optional[str] = None) -> list:
    query = {}
    if category and category != "all":
        query["category"] = getattr(category, "value", category)
    if status and status != "all":
        query["status"] = getattr(status, "value", status)
    return await store.package_templates.find(query, sort=[("name", 1)])


async def create_template(data: PackageTemplateCreate) -> dict:
    contents = [item.model_dump() for item in data.contents]
    # Weight defaults to the sum of kilogram-denominated contents
    total_weight = data.total_weight
    if total_weight is None:
        total_weight = sum(item["quantity"] for item in contents if item["unit"] == "kg")

    now = datetime.now(timezone.utc)
    template_doc = {
        "template_id":    _template_id(),
        "name":           data.name,
        "category":       data.category.value,
        "contents":       contents,
        "total_weight":   float(total_weight),
        "estimated_cost": data.estimated_cost,
        "status":         TemplateStatus.ACTIVE.value,
        "usage_count":    0,
        "created_at":     now,
        "updated_at":     now,
    }
    created = await store.package_templates.insert(template_doc)
    logger.info("Package template %s created (%s)", template_doc["template_id"], data.name)
    return created


async def set_template_status(template_id: str, status: TemplateStatus) -> dict:
    await get_template(template_id)
    await store.package_templates.update(template_id, {"status": status.value})
    logger.info("Package template %s is now %s", template_id, status.value)
    return await store.package_templates.get(template_id)
